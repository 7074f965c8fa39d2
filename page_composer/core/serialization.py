"""
Format de contenu sérialisé.

blocks → tableau JSON (colonne `content`)
config → objet JSON {layout, theme} (colonne `config`)

Un contenu illisible ou absent donne une liste vide, jamais une erreur.
"""
import json
import logging
from typing import Iterable, List, Optional

from pydantic import ValidationError

from .schemas import Block, PageConfig

log = logging.getLogger(__name__)


def dump_blocks(blocks: Iterable[Block]) -> str:
    return json.dumps(
        [b.model_dump(mode="json", by_alias=True, exclude_none=True) for b in blocks],
        ensure_ascii=False,
    )


def load_blocks(raw: Optional[str]) -> List[Block]:
    """
    Parse le tableau JSON des blocs. Contenu corrompu → [].
    Seules les entrées qui ne sont pas des objets sont ignorées : un bloc
    abîmé est gardé (champs ramenés aux défauts) pour ne pas décaler les index.
    """
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        log.warning("load_blocks : contenu JSON illisible, page vide")
        return []
    if not isinstance(data, list):
        log.warning("load_blocks : tableau attendu, reçu %s", type(data).__name__)
        return []

    blocks = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            log.warning("load_blocks : entrée %d ignorée (pas un objet)", i)
            continue
        try:
            blocks.append(Block.model_validate(item))
        except ValidationError as e:
            log.warning("load_blocks : entrée %d ignorée : %s", i, e.error_count())
    return blocks


def dump_config(config: PageConfig) -> str:
    return json.dumps(config.model_dump(), ensure_ascii=False)


def load_config(raw: Optional[str]) -> PageConfig:
    """Parse l'objet config. Champs manquants ou contenu corrompu → valeurs par défaut."""
    if not raw:
        return PageConfig()
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        log.warning("load_config : contenu JSON illisible, config par défaut")
        return PageConfig()
    if not isinstance(data, dict):
        return PageConfig()
    return PageConfig(
        layout=str(data.get("layout") or PageConfig().layout),
        theme=str(data.get("theme") or PageConfig().theme),
    )
