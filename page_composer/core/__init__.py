"""Core module pour page_composer."""
from .schemas import (
    LayoutId,
    ThemeId,
    PresentationType,
    Document,
    Block,
    PageConfig,
    Page,
    UploadedFile,
    as_layout,
)
from .errors import (
    ComposerError,
    AttachmentValidationError,
    FileTooLarge,
    UnsupportedFileType,
    PersistenceError,
    PageNotFound,
)
from .serialization import dump_blocks, load_blocks, dump_config, load_config

__all__ = [
    "LayoutId",
    "ThemeId",
    "PresentationType",
    "Document",
    "Block",
    "PageConfig",
    "Page",
    "UploadedFile",
    "as_layout",
    "ComposerError",
    "AttachmentValidationError",
    "FileTooLarge",
    "UnsupportedFileType",
    "PersistenceError",
    "PageNotFound",
    "dump_blocks",
    "load_blocks",
    "dump_config",
    "load_config",
]
