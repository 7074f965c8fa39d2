"""
Contrats des collaborateurs externes.

PageStore   : persistance des pages (chargement, écriture full-list, suppression)
FileStorage : stockage des fichiers attachés (URL publique en retour)

Les implémentations lèvent PersistenceError en cas d'échec I/O et
PageNotFound quand la page n'existe pas.
"""
from abc import ABC, abstractmethod
from typing import List, Sequence

from ..core.schemas import Block, Page, PageConfig


class PageStore(ABC):

    @abstractmethod
    def load_page(self, identifier: str) -> Page:
        """Charge une page par path, puis par id en repli."""

    @abstractmethod
    def save_page_blocks(self, page_id: str, blocks: Sequence[Block]) -> None:
        """Remplace la liste complète des blocs (pas de delta)."""

    @abstractmethod
    def save_page_config(self, page_id: str, config: PageConfig) -> None:
        ...

    @abstractmethod
    def create_page(self, page: Page) -> Page:
        """Persiste un brouillon, retourne la page avec son id."""

    @abstractmethod
    def list_pages(self) -> List[Page]:
        ...

    @abstractmethod
    def delete_page(self, page_id: str) -> bool:
        """Supprime la page (blocs + documents inclus). False si absente."""


class FileStorage(ABC):

    @abstractmethod
    def put_file(self, data: bytes, suggested_name: str) -> str:
        """Stocke le fichier, retourne son URL publique."""
