"""Fixtures communes — ajout de la racine du projet au path (exécution sans install)."""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
