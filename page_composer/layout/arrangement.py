"""
Stratégie d'arrangement — répartit les blocs d'une page en slots nommés.

left-sidebar  (≥2) : sidebar=[0]          main=[1..]
right-sidebar (≥2) : main=[0..n-2]        sidebar=[n-1]
hero          (≥1) : featured=[0]         grid=[1..]
masonry            : flow=[tous]          (colonnes équilibrées, pas de coupure)
autres             : main=[tous]          (style de conteneur selon le layout)

Le type de présentation de chaque item est résolu avec l'index ORIGINAL du
bloc, jamais avec sa position dans le slot (masonry dépend de la parité globale).
"""
from typing import Dict, List, Sequence

from pydantic import BaseModel, Field

from ..core.schemas import Block, LayoutId, PresentationType, as_layout
from .resolver import resolve

# Style du slot unique "main", par layout
_MAIN_STYLES: Dict[LayoutId, str] = {
    LayoutId.GRID:          "multi-column-grid",
    LayoutId.LIST:          "flex-column",
    LayoutId.COLUMNS_2:     "grid-2",
    LayoutId.COLUMNS_3:     "grid-3",
    LayoutId.LEFT_SIDEBAR:  "sidebar-grid",
    LayoutId.RIGHT_SIDEBAR: "sidebar-grid",
    LayoutId.HERO:          "flex-column",
}
_DEFAULT_STYLE = "vertical-stack"


class SlotItem(BaseModel):
    """Triplet (bloc, présentation résolue, index original)."""
    block:        Block
    presentation: PresentationType
    index:        int


class Slot(BaseModel):
    name:        str
    style:       str
    avoid_break: bool           = False
    items:       List[SlotItem] = Field(default_factory=list)

    @property
    def indices(self) -> List[int]:
        return [it.index for it in self.items]

    def __len__(self) -> int:
        return len(self.items)


class Arrangement(BaseModel):
    layout: str
    slots:  List[Slot] = Field(default_factory=list)

    def slot_names(self) -> List[str]:
        return [s.name for s in self.slots]

    def slot(self, name: str) -> Slot:
        for s in self.slots:
            if s.name == name:
                return s
        raise KeyError(name)

    def items(self) -> List[SlotItem]:
        """Tous les items, dans l'ordre original de la page."""
        return sorted((it for s in self.slots for it in s.items), key=lambda it: it.index)


def _items(layout, blocks: Sequence[Block], indices) -> List[SlotItem]:
    total = len(blocks)
    return [
        SlotItem(
            block=blocks[i],
            presentation=resolve(layout, i, blocks[i].explicit_type, total),
            index=i,
        )
        for i in indices
    ]


def arrange(layout, blocks: Sequence[Block]) -> Arrangement:
    """Construit l'arrangement d'une page (fonction pure)."""
    blocks = list(blocks)
    n = len(blocks)
    lid = as_layout(layout)
    layout_name = lid.value if lid else str(layout)

    def slot(name, style, indices, avoid_break=False):
        return Slot(name=name, style=style, avoid_break=avoid_break,
                    items=_items(layout, blocks, indices))

    if lid is LayoutId.LEFT_SIDEBAR and n >= 2:
        slots = [
            slot("sidebar", "sidebar", [0]),
            slot("main", "stack", range(1, n)),
        ]
    elif lid is LayoutId.RIGHT_SIDEBAR and n >= 2:
        slots = [
            slot("main", "stack", range(0, n - 1)),
            slot("sidebar", "sidebar", [n - 1]),
        ]
    elif lid is LayoutId.HERO and n >= 1:
        slots = [
            slot("featured", "featured", [0]),
            slot("grid", "responsive-grid", range(1, n)),
        ]
    elif lid is LayoutId.MASONRY:
        slots = [slot("flow", "balanced-columns", range(n), avoid_break=True)]
    else:
        slots = [slot("main", _MAIN_STYLES.get(lid, _DEFAULT_STYLE), range(n))]

    return Arrangement(layout=layout_name, slots=slots)
