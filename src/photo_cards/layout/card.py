"""
Module: layout.card

Purpose:
    Full geometry of one card at a given render factor: resolved pixel
    size, scaled padding and corner radius, and per-slot rectangles with
    image placements. The compositor draws from this; an interactive
    preview can use it directly at any factor.

Key Functions:
    - layout_card(): Geometry for every slot of a card

Dependencies:
    - layout.sheet, layout.slots, layout.placement

Used By:
    - output.compositor: render_card()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from photo_cards.config import SheetConfig
from photo_cards.core.models import Card, Library, SlotMetrics

from .placement import Placement, place_image
from .sheet import card_scale_factor, scaled_size, sheet_size
from .slots import slot_metrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotLayout:
    """
    Geometry of one slot on a laid-out card.

    Attributes:
        metrics: Outer/inner rectangles at the card's render size
        image_id: Referenced image, None for empty slots
        placement: Cover-fit placement, None when nothing is drawn
    """

    metrics: SlotMetrics
    image_id: Optional[str] = None
    placement: Optional[Placement] = None

    @property
    def is_drawn(self) -> bool:
        return self.placement is not None


@dataclass(frozen=True)
class CardLayout:
    """
    Geometry of a card at one render factor.

    Attributes:
        card_id: Card identifier
        factor: Multiplier applied to base resolution
        size: (width, height) in pixels
        padding: Padding at this factor
        radius: Corner radius at this factor, before per-slot capping
        slots: Four SlotLayouts in index order
    """

    card_id: str
    factor: float
    size: Tuple[int, int]
    padding: float
    radius: float
    slots: Tuple[SlotLayout, ...]

    @property
    def drawn_count(self) -> int:
        return sum(1 for slot in self.slots if slot.is_drawn)


def layout_card(
    card: Card,
    library: Library,
    config: SheetConfig,
    *,
    factor: Optional[float] = None,
) -> CardLayout:
    """
    Lay out a card.

    Padding, corner radius and stored pan offsets (base pixels) are all
    multiplied by the factor, so proportions match at every resolution.

    Args:
        card: Card to lay out
        library: Library resolving slot image ids
        config: Sheet configuration
        factor: Render factor; defaults to the card's upscale factor

    Returns:
        CardLayout
    """
    if factor is None:
        factor = card_scale_factor(card, library, config)
    size = scaled_size(sheet_size(card.orientation, config), factor)
    padding = config.padding * factor
    radius = config.rounding * factor

    slots = []
    for index, slot in enumerate(card.slots):
        metrics = slot_metrics(index, size, padding)
        image = library.get(slot.image_id)
        if slot.image_id is not None and image is None:
            logger.warning(f"Card {card.id}: image {slot.image_id} not in library, slot left empty")
        placement = None
        if image is not None:
            placement = place_image(
                metrics.inner,
                image.width,
                image.height,
                offset_x=slot.offset_x * factor,
                offset_y=slot.offset_y * factor,
                rotation_deg=slot.rotation_deg,
            )
        slots.append(SlotLayout(metrics=metrics, image_id=slot.image_id, placement=placement))

    return CardLayout(
        card_id=card.id,
        factor=factor,
        size=size,
        padding=padding,
        radius=radius,
        slots=tuple(slots),
    )
