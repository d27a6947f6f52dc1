"""
Module: layout.slots

Purpose:
    Geometry of the four fixed slots of a card. Slots sit in a 2x2 grid;
    each slot's inner rectangle is its outer cell inset by padding.

Key Functions:
    - slot_metrics(): Outer/inner rectangles and center for one slot
    - card_slot_metrics(): All four slots
    - cap_padding(): Limit padding so inner rectangles never collapse

Dependencies:
    - core.models: Rect, SlotMetrics

Used By:
    - layout.sheet: Upscale factor
    - cards.deck: Offset clamping
    - output.compositor: Rendering
"""

from __future__ import annotations

from typing import Tuple

from photo_cards.core.models import Rect, SlotMetrics
from photo_cards.core.models.cards import SLOT_COUNT, SLOTS_PER_ROW

# Inner rectangles never shrink below this size
MIN_INNER_PX = 1


def cap_padding(padding: float, outer_width: float, outer_height: float) -> float:
    """
    Clamp padding into [0, min(outer) / 2 - 1].

    Example:
        >>> cap_padding(80, 100, 60)
        29.0
    """
    limit = max(min(outer_width, outer_height) / 2 - 1, 0)
    return min(max(padding, 0), limit)


def slot_metrics(index: int, size: Tuple[int, int], padding: float) -> SlotMetrics:
    """
    Compute the rectangles of one card slot.

    Pure function of its inputs, so preview and export at different
    resolutions agree once padding is scaled with the sheet.

    Args:
        index: Slot index 0..3 (0,1 = top row; 2,3 = bottom row)
        size: Sheet (width, height) in pixels
        padding: Requested padding in pixels

    Returns:
        SlotMetrics with outer cell, padded inner rect and effective padding

    Raises:
        IndexError: If index is outside 0..3

    Example:
        >>> m = slot_metrics(3, (1772, 1181), 18)
        >>> m.outer.x, m.outer.y
        (886.0, 590.5)
    """
    if not 0 <= index < SLOT_COUNT:
        raise IndexError(f"slot index must be in 0..{SLOT_COUNT - 1}: {index}")

    width, height = size
    cols = SLOTS_PER_ROW
    rows = SLOT_COUNT // cols
    outer_w = width / cols
    outer_h = height / rows
    col = index % cols
    row = index // cols

    outer = Rect(col * outer_w, row * outer_h, outer_w, outer_h)
    effective = cap_padding(padding, outer_w, outer_h)
    inner = outer.inset(effective, minimum=MIN_INNER_PX)
    return SlotMetrics(index=index, outer=outer, inner=inner, padding=effective)


def card_slot_metrics(size: Tuple[int, int], padding: float) -> Tuple[SlotMetrics, ...]:
    """Metrics for all four slots in index order."""
    return tuple(slot_metrics(i, size, padding) for i in range(SLOT_COUNT))
