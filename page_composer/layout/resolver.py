"""
Résolution du type de présentation d'un bloc.

resolve(layout, index, explicit_type, total_blocks) → block | column | card

1. explicit_type défini → retourné tel quel
2. sinon règle du layout (index global du bloc dans la page)
3. layout inconnu (dont "standard") → block

Fonction pure : même page → même rendu, quel que soit le process.
"""
from typing import List, Optional, Sequence

from ..core.schemas import Block, LayoutId, PresentationType, as_layout

BLOCK  = PresentationType.BLOCK
COLUMN = PresentationType.COLUMN
CARD   = PresentationType.CARD


def resolve(
    layout,
    index: int,
    explicit_type: Optional[str] = None,
    total_blocks: int = 0,
) -> PresentationType:
    if explicit_type:
        return PresentationType(explicit_type)

    lid = as_layout(layout)

    if lid is LayoutId.HERO:
        return BLOCK if index == 0 else CARD
    if lid in (LayoutId.COLUMNS_2, LayoutId.COLUMNS_3):
        return COLUMN
    if lid is LayoutId.LEFT_SIDEBAR:
        return COLUMN if index == 0 else BLOCK
    if lid is LayoutId.RIGHT_SIDEBAR:
        return COLUMN if index == 0 or index == total_blocks - 1 else BLOCK
    if lid is LayoutId.GRID:
        return CARD
    if lid is LayoutId.LIST:
        return BLOCK
    if lid is LayoutId.MASONRY:
        return COLUMN if index % 3 == 0 else CARD
    return BLOCK


def resolve_all(layout, blocks: Sequence[Block]) -> List[PresentationType]:
    """Types résolus de tous les blocs, dans l'ordre de la page."""
    total = len(blocks)
    return [resolve(layout, i, b.explicit_type, total) for i, b in enumerate(blocks)]
