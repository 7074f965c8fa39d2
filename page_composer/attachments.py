"""
Attachment Manager — validation + ajout/suppression des documents d'un bloc.
Couche logique indépendante de l'UI et du stockage concret.

Validation (dans l'ordre, premier échec retenu) :
  1. taille > 50 Mo          → FileTooLarge
  2. type MIME non autorisé  → UnsupportedFileType

Ajout atomique : si le stockage échoue, `block.docs` n'est pas modifié.
"""
import logging
import time
from typing import Callable, Optional

from .core.errors import ComposerError, FileTooLarge, PersistenceError, UnsupportedFileType
from .core.schemas import Block, Document, UploadedFile
from .store.base import FileStorage

log = logging.getLogger(__name__)

MAX_FILE_BYTES = 52_428_800  # 50 Mo

ALLOWED_MIME_TYPES = frozenset({
    "application/pdf",
    "text/plain",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
})


def validate_file(file: UploadedFile) -> None:
    if file.size_bytes > MAX_FILE_BYTES:
        raise FileTooLarge(file.name, file.size_bytes, MAX_FILE_BYTES)
    if file.mime_type not in ALLOWED_MIME_TYPES:
        raise UnsupportedFileType(file.name, file.mime_type)


class AttachmentManager:
    """
    Gère les documents attachés aux blocs.

    Args:
        storage: Collaborateur de stockage (put_file → URL publique)
        clock:   Source du jeton d'unicité (défaut: time.time)
    """

    def __init__(self, storage: FileStorage, clock: Optional[Callable[[], float]] = None):
        self.storage = storage
        self.clock = clock or time.time

    def storage_name(self, file: UploadedFile) -> str:
        """Préfixe horodaté (ms) pour éviter les collisions côté stockage."""
        return f"{int(self.clock() * 1000)}_{file.name}"

    def upload(self, file: UploadedFile) -> Document:
        """Valide puis stocke le fichier, sans toucher au bloc."""
        validate_file(file)
        key = self.storage_name(file)
        try:
            url = self.storage.put_file(file.content, key)
        except ComposerError:
            raise
        except Exception as e:
            raise PersistenceError(f"Upload de {file.name} impossible", e) from e
        return Document(name=file.name, url=url)

    def add_document(self, block: Block, file: UploadedFile) -> Document:
        doc = self.upload(file)
        block.docs.append(doc)
        log.info("Document ajouté : %s (%s)", doc.name, doc.url)
        return doc

    def remove_document(self, block: Block, index: int) -> Document:
        if not 0 <= index < len(block.docs):
            raise IndexError(f"Document {index} inexistant (bloc {block.title!r})")
        doc = block.docs.pop(index)
        log.info("Document retiré : %s", doc.name)
        return doc
