"""
Page Edit Session — surface de mutation en mémoire d'une page + auto-save.

Opérations :
  add_block(type)                      → bloc "New <Type>" ajouté en fin
  edit_block(index, title, body)       → titre/corps remplacés (docs + type conservés)
  delete_block(index)
  add_document(block_index, file)      → validation synchrone, upload en arrière-plan
  remove_document(block_index, doc_index)
  change_layout(layout) / change_theme(theme)
  save()                               → sauvegarde manuelle (reprise après échec)

Chaque mutation planifie UNE écriture complète de la liste des blocs
(jamais de delta). Les écritures passent par un executor à un seul worker :
elles s'exécutent dans l'ordre d'émission, la dernière gagne. Aucun rollback
de l'état mémoire en cas d'échec : la page reste `dirty` jusqu'à la
prochaine écriture réussie.
"""
import logging
import os
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait as wait_futures
from typing import Callable, List, Literal, Optional

from pydantic import BaseModel

from .attachments import AttachmentManager, validate_file
from .core.errors import ComposerError, PersistenceError
from .core.schemas import Block, Document, Page, UploadedFile
from .layout.arrangement import Arrangement, arrange
from .layout.templates import change_layout, new_block
from .store.base import FileStorage, PageStore

log = logging.getLogger(__name__)

MESSAGE_TTL = float(os.getenv("MESSAGE_TTL", "3"))


class Feedback(BaseModel):
    """Message transitoire (succès/erreur), effacé après `message_ttl` secondes."""
    kind: Literal["success", "error"]
    text: str


class PageEditSession:
    """
    Session d'édition d'une page (un seul éditeur actif).

    Args:
        page:        Page chargée (ou brouillon, id=None)
        store:       Collaborateur de persistance
        storage:     Collaborateur de stockage des fichiers (requis pour add_document)
        executor:    Executor des écritures (défaut: ThreadPoolExecutor à 1 worker).
                     Un executor fourni doit avoir UN seul worker : l'ordre
                     d'émission des écritures n'est garanti qu'à cette condition.
        message_ttl: Durée d'affichage du feedback en secondes
        clock:       Horloge monotone (injectable pour les tests)
    """

    def __init__(
        self,
        page: Page,
        store: PageStore,
        storage: Optional[FileStorage] = None,
        executor: Optional[ThreadPoolExecutor] = None,
        message_ttl: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.page = page
        self.store = store
        self.attachments = AttachmentManager(storage) if storage is not None else None
        self.message_ttl = MESSAGE_TTL if message_ttl is None else message_ttl

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="page-save")
        self._clock = clock
        self._lock = threading.RLock()
        self._create_lock = threading.Lock()
        # vrai dès que la création du brouillon est planifiée
        self._create_issued = page.is_persisted
        self._futures = set()
        self._pending = 0
        self._failed = False
        self._message: Optional[Feedback] = None
        self._message_expires = 0.0

    # ── État observable ──────────────────────────────────────────────────────

    @property
    def blocks(self) -> List[Block]:
        return self.page.blocks

    @property
    def saving(self) -> bool:
        with self._lock:
            return self._pending > 0

    @property
    def dirty(self) -> bool:
        """Écriture en cours ou dernière écriture en échec."""
        with self._lock:
            return self._pending > 0 or self._failed

    @property
    def message(self) -> Optional[Feedback]:
        with self._lock:
            if self._message is not None and self._clock() >= self._message_expires:
                self._message = None
            return self._message

    def dismiss_message(self):
        with self._lock:
            self._message = None

    def arrangement(self) -> Arrangement:
        with self._lock:
            return arrange(self.page.layout, list(self.page.blocks))

    # ── Mutations ────────────────────────────────────────────────────────────

    def add_block(self, block_type) -> Future:
        block = new_block(block_type)
        with self._lock:
            self.page.blocks.append(block)
        log.info("Bloc ajouté (%s) : %s", block.explicit_type.value, block.title)
        return self._schedule_save()

    def edit_block(self, index: int, title: str, body: str) -> Future:
        with self._lock:
            block = self._block(index)
            block.title = title
            block.body = body
        return self._schedule_save()

    def delete_block(self, index: int) -> Future:
        with self._lock:
            self._block(index)
            removed = self.page.blocks.pop(index)
        log.info("Bloc supprimé : %s", removed.title)
        return self._schedule_save()

    def add_document(self, block_index: int, file: UploadedFile) -> Future:
        """
        Valide le fichier (synchrone, avant tout I/O) puis lance l'upload.

        Raises:
            FileTooLarge, UnsupportedFileType: fichier refusé, rien n'est modifié
            IndexError: bloc inexistant

        Returns:
            Future[Optional[Document]] — None si le bloc a été supprimé entre-temps
        """
        if self.attachments is None:
            raise ComposerError("Aucun stockage de fichiers configuré pour cette session")
        validate_file(file)
        with self._lock:
            block = self._block(block_index)
            self._pending += 1
        return self._submit(self._upload_task, block, file)

    def remove_document(self, block_index: int, doc_index: int) -> Future:
        with self._lock:
            block = self._block(block_index)
            if not 0 <= doc_index < len(block.docs):
                raise IndexError(f"Document {doc_index} inexistant (bloc {block_index})")
            doc = block.docs.pop(doc_index)
        log.info("Document retiré : %s", doc.name)
        return self._schedule_save()

    def change_layout(self, layout: str) -> Optional[Future]:
        """
        Brouillon jamais écrit → blocs réinitialisés (pas d'écriture).
        Page persistée, ou création déjà planifiée → blocs intacts, config sauvegardée.
        """
        with self._lock:
            if not self._create_issued:
                change_layout(self.page, layout)
                return None
            self.page.layout = layout
        return self._schedule_config_save()

    def change_theme(self, theme: str) -> Optional[Future]:
        with self._lock:
            self.page.theme = theme
            if not self._create_issued:
                return None
        return self._schedule_config_save()

    def save(self) -> Future:
        """Sauvegarde manuelle de la liste courante."""
        return self._schedule_save()

    def close(self, wait: bool = True):
        """
        Attend les écritures émises par la session (si `wait`), puis arrête
        l'executor s'il est interne. Un executor fourni reste ouvert.
        """
        if wait:
            with self._lock:
                outstanding = list(self._futures)
            wait_futures(outstanding)
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # ── Interne ──────────────────────────────────────────────────────────────

    def _block(self, index: int) -> Block:
        if not 0 <= index < len(self.page.blocks):
            raise IndexError(f"Bloc {index} inexistant ({len(self.page.blocks)} bloc(s))")
        return self.page.blocks[index]

    def _snapshot(self) -> List[Block]:
        return [b.model_copy(deep=True) for b in self.page.blocks]

    def _submit(self, fn, *args) -> Future:
        future = self._executor.submit(fn, *args)
        with self._lock:
            self._futures.add(future)
        future.add_done_callback(self._forget)
        return future

    def _forget(self, future: Future):
        with self._lock:
            self._futures.discard(future)

    def _schedule_save(self) -> Future:
        with self._lock:
            snapshot = self._snapshot()
            self._pending += 1
            self._create_issued = True
        return self._submit(self._save_task, snapshot)

    def _schedule_config_save(self) -> Future:
        with self._lock:
            config = self.page.config
            self._pending += 1
        return self._submit(self._config_task, config)

    def _write_blocks(self, snapshot: List[Block]):
        # une seule création par brouillon, même avec plusieurs workers
        with self._create_lock:
            with self._lock:
                page_id = self.page.id
                draft = None if page_id else self.page.model_copy(update={"blocks": snapshot})
            if draft is not None:
                created = self.store.create_page(draft)
                with self._lock:
                    self.page.id = created.id
                return
        self.store.save_page_blocks(page_id, snapshot)

    def _write_config(self, config):
        # id lu à l'exécution : la création du brouillon a pu le fixer entre-temps
        with self._create_lock:
            with self._lock:
                page_id = self.page.id
        if page_id is None:
            raise PersistenceError("Page not created yet, save the page first")
        self.store.save_page_config(page_id, config)

    def _save_task(self, snapshot: List[Block]):
        self._run_write(lambda: self._write_blocks(snapshot), "Page saved")

    def _config_task(self, config):
        self._run_write(lambda: self._write_config(config), "Layout saved")

    def _run_write(self, write: Callable[[], None], success_text: str):
        try:
            write()
        except ComposerError as e:
            log.error("Écriture de la page %s en échec : %s", self.page.path, e)
            self._finish(failed=True, feedback=Feedback(kind="error", text=str(e)))
            raise
        except Exception as e:
            log.error("Écriture de la page %s en échec : %s", self.page.path, e)
            err = PersistenceError(f"Save failed: {e}", e)
            self._finish(failed=True, feedback=Feedback(kind="error", text=str(err)))
            raise err from e
        self._finish(failed=False, feedback=Feedback(kind="success", text=success_text))

    def _upload_task(self, block: Block, file: UploadedFile) -> Optional[Document]:
        try:
            doc = self.attachments.upload(file)
        except ComposerError as e:
            log.error("Upload de %s en échec : %s", file.name, e)
            self._finish(feedback=Feedback(kind="error", text=f"Upload failed: {e}"))
            raise

        with self._lock:
            attached = any(b is block for b in self.page.blocks)
            if attached:
                block.docs.append(doc)
                snapshot = self._snapshot()
                self._pending += 1
                self._create_issued = True
        self._finish()

        if not attached:
            log.warning("Upload de %s terminé après suppression du bloc — ignoré", file.name)
            self._set_message(Feedback(kind="error", text="Block was removed before the upload completed"))
            return None

        log.info("Document ajouté : %s (%s)", doc.name, doc.url)
        try:
            self._save_task(snapshot)
        except ComposerError:
            # échec déjà journalisé et signalé ; le document reste attaché en mémoire
            pass
        return doc

    def _finish(self, failed: Optional[bool] = None, feedback: Optional[Feedback] = None):
        with self._lock:
            self._pending -= 1
            if failed is not None:
                self._failed = failed
            if feedback is not None:
                self._set_message(feedback)

    def _set_message(self, feedback: Feedback):
        with self._lock:
            self._message = feedback
            self._message_expires = self._clock() + self.message_ttl
