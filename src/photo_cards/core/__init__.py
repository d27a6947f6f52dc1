"""
Photo Cards Core Package

Shared data models for layout, card operations and output.

Models are frozen dataclasses: any change produces a new instance, so the
card collection can be swapped atomically and read by renders without
locking.
"""

from .models import Card, Library, Orientation, PhotoImage, Rect, Slot, SlotMetrics

__all__ = [
    "Card",
    "Library",
    "Orientation",
    "PhotoImage",
    "Rect",
    "Slot",
    "SlotMetrics",
]
