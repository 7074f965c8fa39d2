"""
Page Composer v0.1 — moteur de composition des pages personnalisées.

Usage (lecture):
    >>> from page_composer import SqlPageStore, load_page, arrange
    >>> store = SqlPageStore("sqlite:///pages.db")
    >>> page = load_page(store, "club-news")
    >>> arrangement = arrange(page.layout, page.blocks)

Usage (édition):
    >>> from page_composer import PageEditSession, LocalFileStorage
    >>> with PageEditSession(page, store, LocalFileStorage()) as session:
    ...     session.add_block("card")
    ...     session.edit_block(0, "Welcome", "Hello class!")
"""

from .core.schemas import (
    LayoutId, ThemeId, PresentationType,
    Document, Block, PageConfig, Page, UploadedFile,
)
from .core.errors import (
    ComposerError, AttachmentValidationError, FileTooLarge, UnsupportedFileType,
    PersistenceError, PageNotFound,
)
from .core.serialization import dump_blocks, load_blocks, dump_config, load_config

from .layout import (
    resolve, resolve_all,
    Arrangement, Slot, SlotItem, arrange,
    STARTER_TEMPLATES, starter_blocks, new_block, change_layout,
)
from .attachments import AttachmentManager, validate_file, MAX_FILE_BYTES, ALLOWED_MIME_TYPES
from .session import PageEditSession, Feedback
from .pages import slugify, new_page, create_page, list_pages, load_page, delete_page
from .store import PageStore, FileStorage, SqlPageStore, LocalFileStorage

__version__ = "0.1.0"

__all__ = [
    # modèle
    "LayoutId", "ThemeId", "PresentationType",
    "Document", "Block", "PageConfig", "Page", "UploadedFile",
    # erreurs
    "ComposerError", "AttachmentValidationError", "FileTooLarge", "UnsupportedFileType",
    "PersistenceError", "PageNotFound",
    # format sérialisé
    "dump_blocks", "load_blocks", "dump_config", "load_config",
    # layout
    "resolve", "resolve_all", "Arrangement", "Slot", "SlotItem", "arrange",
    "STARTER_TEMPLATES", "starter_blocks", "new_block", "change_layout",
    # documents
    "AttachmentManager", "validate_file", "MAX_FILE_BYTES", "ALLOWED_MIME_TYPES",
    # édition
    "PageEditSession", "Feedback",
    # catalogue
    "slugify", "new_page", "create_page", "list_pages", "load_page", "delete_page",
    # collaborateurs
    "PageStore", "FileStorage", "SqlPageStore", "LocalFileStorage",
]
