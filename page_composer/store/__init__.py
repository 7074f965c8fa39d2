"""Store — contrats des collaborateurs + adaptateurs SQLAlchemy / fichiers locaux."""
from .base import PageStore, FileStorage
from .database import SqlPageStore
from .files import LocalFileStorage

__all__ = [
    "PageStore",
    "FileStorage",
    "SqlPageStore",
    "LocalFileStorage",
]
