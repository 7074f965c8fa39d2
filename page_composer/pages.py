"""
Catalogue des pages personnalisées — création, liste, chargement, suppression.

Fonctions exposées :
  slugify(path) -> str
  new_page(title, path, layout, theme) -> Page (brouillon + gabarit de départ)
  create_page(store, draft) -> Page
  list_pages(store) -> list[Page]
  load_page(store, identifier) -> Page
  delete_page(store, page_id) -> bool
"""
import logging
import re
from typing import List

from .core.errors import PageNotFound
from .core.schemas import DEFAULT_LAYOUT, DEFAULT_THEME, Page
from .layout.templates import starter_blocks
from .store.base import PageStore

log = logging.getLogger(__name__)

_WS = re.compile(r"\s+")


def slugify(path: str) -> str:
    """Normalise un path : minuscules, espaces → tirets ("Mes Notes" → "mes-notes")."""
    return _WS.sub("-", path.strip().lower())


def new_page(
    title: str,
    path: str,
    layout: str = DEFAULT_LAYOUT,
    theme: str = DEFAULT_THEME,
) -> Page:
    """Brouillon non persisté, amorcé avec le gabarit du layout."""
    if not title or not path.strip():
        raise ValueError("Titre et path requis")
    return Page(
        title=title,
        path=slugify(path),
        layout=layout,
        theme=theme,
        blocks=starter_blocks(layout),
    )


def create_page(store: PageStore, draft: Page) -> Page:
    if draft.is_persisted:
        raise ValueError(f"Page {draft.id} déjà persistée")
    return store.create_page(draft)


def list_pages(store: PageStore) -> List[Page]:
    """Pages triées par titre."""
    return sorted(store.list_pages(), key=lambda p: p.title)


def load_page(store: PageStore, identifier: str) -> Page:
    """
    Charge une page par path (lien direct) ou par id (liste interne).

    Raises:
        PageNotFound: ni le path ni l'id ne correspondent
    """
    if not identifier:
        raise PageNotFound(identifier)
    return store.load_page(identifier)


def delete_page(store: PageStore, page_id: str) -> bool:
    deleted = store.delete_page(page_id)
    if not deleted:
        log.warning("delete_page : page %s absente", page_id)
    return deleted
