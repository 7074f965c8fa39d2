"""
Contenu de départ par layout + gabarit des blocs ajoutés.

Table de correspondance pure (layout → blocs de départ) : jamais modifiée,
chaque appel retourne des copies.
"""
from typing import Dict, List, Tuple

from ..core.schemas import Block, LayoutId, Page, PresentationType, as_layout

PLACEHOLDER_BODY = "Add your content here."


def _b(title: str, body: str) -> Block:
    return Block(title=title, body=body)


STARTER_TEMPLATES: Dict[LayoutId, Tuple[Block, ...]] = {
    LayoutId.STANDARD: (
        _b("Welcome", "Welcome to this page. Edit this block to get started."),
    ),
    LayoutId.GRID: (
        _b("Card 1", PLACEHOLDER_BODY),
        _b("Card 2", PLACEHOLDER_BODY),
        _b("Card 3", PLACEHOLDER_BODY),
    ),
    LayoutId.LIST: (
        _b("First Item", PLACEHOLDER_BODY),
        _b("Second Item", PLACEHOLDER_BODY),
        _b("Third Item", PLACEHOLDER_BODY),
    ),
    LayoutId.COLUMNS_2: (
        _b("Left Column", PLACEHOLDER_BODY),
        _b("Right Column", PLACEHOLDER_BODY),
    ),
    LayoutId.COLUMNS_3: (
        _b("Left Column", PLACEHOLDER_BODY),
        _b("Center Column", PLACEHOLDER_BODY),
        _b("Right Column", PLACEHOLDER_BODY),
    ),
    LayoutId.LEFT_SIDEBAR: (
        _b("Sidebar", "Links and quick information."),
        _b("Main Content", PLACEHOLDER_BODY),
    ),
    LayoutId.RIGHT_SIDEBAR: (
        _b("Main Content", PLACEHOLDER_BODY),
        _b("Sidebar", "Links and quick information."),
    ),
    LayoutId.HERO: (
        _b("Featured", "Highlight the most important information here."),
        _b("Content", PLACEHOLDER_BODY),
    ),
    LayoutId.MASONRY: (
        _b("Note 1", PLACEHOLDER_BODY),
        _b("Note 2", PLACEHOLDER_BODY),
        _b("Note 3", PLACEHOLDER_BODY),
        _b("Note 4", PLACEHOLDER_BODY),
    ),
}


def starter_blocks(layout) -> List[Block]:
    """Blocs de départ du layout (copies). Layout inconnu → gabarit standard."""
    lid = as_layout(layout) or LayoutId.STANDARD
    return [b.model_copy(deep=True) for b in STARTER_TEMPLATES[lid]]


def new_block(block_type) -> Block:
    """Bloc ajouté par l'admin : "New <Type>", corps générique, type explicite."""
    ptype = PresentationType(block_type)
    return Block(
        title=f"New {ptype.value.capitalize()}",
        body=PLACEHOLDER_BODY,
        explicit_type=ptype,
    )


def change_layout(page: Page, layout: str) -> Page:
    """
    Change le layout d'une page.
    Brouillon jamais persisté → blocs réinitialisés depuis le gabarit du
    nouveau layout (contenu précédent perdu). Page persistée → blocs intacts.
    """
    page.layout = layout
    if not page.is_persisted:
        page.blocks = starter_blocks(layout)
    return page
