"""
Schémas Pydantic du moteur de composition de pages.
Structure : Page → Block → Document

Enums fermés : LayoutId, ThemeId, PresentationType.
Page.layout / Page.theme restent des str pour tolérer les valeurs inconnues
(repli sur le comportement "standard").
"""
import logging
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

log = logging.getLogger(__name__)


# ── ENUMS ──────────────────────────────────────────────────────────────

class LayoutId(str, Enum):
    STANDARD      = "standard"
    GRID          = "grid"
    LIST          = "list"
    COLUMNS_2     = "columns-2"
    COLUMNS_3     = "columns-3"
    LEFT_SIDEBAR  = "left-sidebar"
    RIGHT_SIDEBAR = "right-sidebar"
    HERO          = "hero"
    MASONRY       = "masonry"


class ThemeId(str, Enum):
    DEFAULT = "default"
    LIGHT   = "light"
    DARK    = "dark"
    OCEAN   = "ocean"
    FOREST  = "forest"
    SUNSET  = "sunset"


class PresentationType(str, Enum):
    """Traitement visuel d'un bloc : block (large), column (étroit), card (compact)."""
    BLOCK  = "block"
    COLUMN = "column"
    CARD   = "card"


DEFAULT_LAYOUT = LayoutId.STANDARD.value
DEFAULT_THEME  = ThemeId.DEFAULT.value


def as_layout(value) -> Optional[LayoutId]:
    """Convertit un identifiant libre en LayoutId, None si inconnu."""
    if isinstance(value, LayoutId):
        return value
    try:
        return LayoutId(value)
    except ValueError:
        return None


# ── MODÈLES ────────────────────────────────────────────────────────────

class Document(BaseModel):
    """Fichier attaché à un bloc."""
    name: str
    url:  str


class Block(BaseModel):
    """
    Unité de contenu : titre + corps + documents attachés.

    `explicit_type` (clé JSON "type") force la présentation du bloc,
    sinon elle est déduite du layout de la page.

    Validation tolérante : un contenu stocké abîmé reste éditable.
    Type inconnu → None, titre/corps non textuels → "", document illisible ignoré.
    """
    model_config = ConfigDict(populate_by_name=True)

    title:         str                        = ""
    body:          str                        = ""
    docs:          List[Document]             = Field(default_factory=list)
    explicit_type: Optional[PresentationType] = Field(default=None, alias="type")

    @field_validator("title", "body", mode="before")
    @classmethod
    def _text_or_empty(cls, v):
        return v if isinstance(v, str) else ""

    @field_validator("docs", mode="before")
    @classmethod
    def _readable_docs(cls, v):
        if not isinstance(v, list):
            return []
        docs = []
        for item in v:
            if isinstance(item, Document):
                docs.append(item)
                continue
            try:
                docs.append(Document.model_validate(item))
            except ValidationError:
                log.warning("Document illisible ignoré : %r", item)
        return docs

    @field_validator("explicit_type", mode="before")
    @classmethod
    def _known_type_or_none(cls, v):
        if v is None or isinstance(v, PresentationType):
            return v
        try:
            return PresentationType(v)
        except (ValueError, TypeError):
            log.warning("Type de bloc inconnu ignoré : %r", v)
            return None


class PageConfig(BaseModel):
    """Objet `config` persisté à côté de la page : {layout, theme}."""
    layout: str = DEFAULT_LAYOUT
    theme:  str = DEFAULT_THEME


class Page(BaseModel):
    """Page complète. `id is None` → brouillon jamais persisté."""
    model_config = ConfigDict(validate_assignment=True)

    id:     Optional[str] = None
    title:  str
    path:   str
    layout: str           = DEFAULT_LAYOUT
    theme:  str           = DEFAULT_THEME
    blocks: List[Block]   = Field(default_factory=list)

    @property
    def config(self) -> PageConfig:
        return PageConfig(layout=self.layout, theme=self.theme)

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


class UploadedFile(BaseModel):
    """Fichier candidat à l'upload (avant validation)."""
    name:       str
    size_bytes: int
    mime_type:  str
    content:    bytes = b""
