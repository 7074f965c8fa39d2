"""Layout — résolution des présentations, arrangement en slots, gabarits."""
from .resolver import resolve, resolve_all
from .arrangement import Arrangement, Slot, SlotItem, arrange
from .templates import STARTER_TEMPLATES, starter_blocks, new_block, change_layout

__all__ = [
    "resolve",
    "resolve_all",
    "Arrangement",
    "Slot",
    "SlotItem",
    "arrange",
    "STARTER_TEMPLATES",
    "starter_blocks",
    "new_block",
    "change_layout",
]
