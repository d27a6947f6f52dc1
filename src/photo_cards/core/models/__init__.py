"""
Core Models Package

Immutable data models shared by layout, card operations and output.

All models are frozen dataclasses (or immutable value classes). Every
update returns a new value, so a render holding a reference always sees
a consistent state.
"""

from .bounds import Rect, SlotMetrics
from .images import PhotoImage
from .library import Library
from .cards import Card, Orientation, Slot, SLOT_COUNT, normalize_rotation

__all__ = [
    "Rect",
    "SlotMetrics",
    "PhotoImage",
    "Library",
    "Card",
    "Orientation",
    "Slot",
    "SLOT_COUNT",
    "normalize_rotation",
]
