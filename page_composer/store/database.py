"""SQLite — PageStore SQLAlchemy (init + session + CRUD custom_pages)"""
import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..core.errors import PageNotFound, PersistenceError
from ..core.schemas import Block, Page, PageConfig
from ..core.serialization import dump_blocks, dump_config, load_blocks, load_config
from .base import PageStore
from .models import Base, CustomPageDB

log = logging.getLogger(__name__)

DATA_DIR = Path(os.getenv("PAGE_COMPOSER_DATA_DIR", str(Path.cwd() / "data")))


def default_db_url() -> str:
    db_path = os.getenv("PAGE_COMPOSER_DB_PATH", str(DATA_DIR / "custom_pages.db"))
    return f"sqlite:///{db_path}"


def row_to_page(row: CustomPageDB) -> Page:
    config = load_config(row.config)
    return Page(
        id=row.id,
        title=row.title,
        path=row.path,
        layout=config.layout,
        theme=config.theme,
        blocks=load_blocks(row.content),
    )


class SqlPageStore(PageStore):
    """
    PageStore adossé à SQLAlchemy.

    Usage:
        >>> store = SqlPageStore("sqlite:///pages.db")
        >>> store.init_db()
        >>> page = store.load_page("welcome")
    """

    def __init__(self, url: Optional[str] = None):
        url = url or default_db_url()
        if url.startswith("sqlite:///"):
            Path(url[len("sqlite:///"):]).parent.mkdir(parents=True, exist_ok=True)
        self.engine = create_engine(url, connect_args={"check_same_thread": False}
                                    if url.startswith("sqlite") else {})
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def init_db(self):
        Base.metadata.create_all(bind=self.engine)

    # ── Lookup ──

    def _find(self, db: Session, identifier: str) -> Optional[CustomPageDB]:
        # path d'abord (lien direct), puis id (liste interne)
        row = db.query(CustomPageDB).filter_by(path=identifier).first()
        if row is None:
            row = db.get(CustomPageDB, identifier)
        return row

    def _get_or_404(self, db: Session, page_id: str) -> CustomPageDB:
        row = db.get(CustomPageDB, page_id)
        if row is None:
            raise PageNotFound(page_id)
        return row

    # ── PageStore ──

    def load_page(self, identifier: str) -> Page:
        try:
            with self.SessionLocal() as db:
                row = self._find(db, identifier)
                if row is None:
                    raise PageNotFound(identifier)
                return row_to_page(row)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Chargement de la page {identifier!r} impossible", e) from e

    def save_page_blocks(self, page_id: str, blocks: Sequence[Block]) -> None:
        try:
            with self.SessionLocal() as db:
                row = self._get_or_404(db, page_id)
                row.content = dump_blocks(blocks)
                db.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Sauvegarde des blocs de {page_id} impossible", e) from e
        log.info("Page %s : %d bloc(s) sauvegardé(s)", page_id, len(blocks))

    def save_page_config(self, page_id: str, config: PageConfig) -> None:
        try:
            with self.SessionLocal() as db:
                row = self._get_or_404(db, page_id)
                row.config = dump_config(config)
                db.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Sauvegarde de la config de {page_id} impossible", e) from e
        log.info("Page %s : config sauvegardée (%s/%s)", page_id, config.layout, config.theme)

    def create_page(self, page: Page) -> Page:
        row = CustomPageDB(
            title=page.title,
            path=page.path,
            content=dump_blocks(page.blocks),
            config=dump_config(page.config),
        )
        if page.id:
            row.id = page.id
        try:
            with self.SessionLocal() as db:
                db.add(row); db.commit(); db.refresh(row)
                created = row_to_page(row)
        except IntegrityError as e:
            raise PersistenceError(f"Path déjà utilisé : {page.path!r}", e) from e
        except SQLAlchemyError as e:
            raise PersistenceError(f"Création de la page {page.path!r} impossible", e) from e
        log.info("Page créée : %s (%s)", created.path, created.id)
        return created

    def list_pages(self) -> List[Page]:
        try:
            with self.SessionLocal() as db:
                rows = db.query(CustomPageDB).order_by(CustomPageDB.title).all()
                return [row_to_page(r) for r in rows]
        except SQLAlchemyError as e:
            raise PersistenceError("Liste des pages indisponible", e) from e

    def delete_page(self, page_id: str) -> bool:
        try:
            with self.SessionLocal() as db:
                row = db.get(CustomPageDB, page_id)
                if row is None:
                    return False
                db.delete(row); db.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Suppression de la page {page_id} impossible", e) from e
        log.info("Page supprimée : %s", page_id)
        return True
