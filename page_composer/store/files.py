"""
Stockage local des documents uploadés.
Fichiers écrits sous UPLOADS_DIR, servis sous {BASE_URL}/uploads/{nom}.
"""
import logging
import os
from pathlib import Path
from typing import Optional

from ..core.errors import PersistenceError
from .base import FileStorage

log = logging.getLogger(__name__)

_DEFAULT_UPLOADS = str(Path.cwd() / "dist" / "uploads")


def _uploads_dir() -> Path:
    return Path(os.getenv("UPLOADS_DIR", _DEFAULT_UPLOADS))


def _base_url() -> str:
    return os.getenv("BASE_URL", "http://localhost:8000").rstrip("/")


class LocalFileStorage(FileStorage):

    def __init__(self, root: Optional[Path] = None, base_url: Optional[str] = None):
        self.root = Path(root) if root else _uploads_dir()
        self.base_url = (base_url or _base_url()).rstrip("/")

    def put_file(self, data: bytes, suggested_name: str) -> str:
        """Sauvegarde le fichier, retourne l'URL publique."""
        filename = Path(suggested_name).name
        if not filename:
            raise PersistenceError(f"Nom de fichier invalide : {suggested_name!r}")
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            (self.root / filename).write_bytes(data)
        except OSError as e:
            raise PersistenceError(f"Écriture de {filename} impossible", e) from e
        log.info("Fichier stocké : %s (%d octets)", filename, len(data))
        return f"{self.base_url}/uploads/{filename}"
