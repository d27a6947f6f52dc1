"""
Module: layout.sheet

Purpose:
    Resolve the physical sheet into pixels and decide how far a card is
    upscaled so high-resolution photos export near their native size.

    A card is rendered at base resolution unless one of its images is
    larger than the slot it sits in; then both sheet dimensions grow by
    the largest needed factor, capped at SheetConfig.max_scale. Cards
    are never rendered below base resolution.

Key Functions:
    - sheet_size(): Base pixel size for an orientation
    - card_scale_factor(): Per-card upscale factor
    - card_pixel_size(): Factor and resolved pixel size for a card
    - scaled_size(): Multiply a size by a factor, rounding to pixels

Dependencies:
    - photo_cards.config: SheetConfig
    - layout.slots, layout.placement

Used By:
    - output.compositor: Render resolution
"""

from __future__ import annotations

import logging
from typing import Tuple

from photo_cards.config import SheetConfig
from photo_cards.core.models import Card, Library, Orientation

from .placement import footprint
from .slots import slot_metrics

logger = logging.getLogger(__name__)


def sheet_size(orientation: Orientation | str, config: SheetConfig) -> Tuple[int, int]:
    """
    Pixel size of a sheet at base resolution.

    Example:
        >>> sheet_size(Orientation.PORTRAIT, SheetConfig())
        (1181, 1772)
    """
    width, height = config.base_size
    if Orientation(orientation) is Orientation.PORTRAIT:
        return height, width
    return width, height


def scaled_size(size: Tuple[int, int], factor: float) -> Tuple[int, int]:
    """Multiply (width, height) by factor, rounding to whole pixels."""
    return (round(size[0] * factor), round(size[1] * factor))


def card_scale_factor(card: Card, library: Library, config: SheetConfig) -> float:
    """
    Upscale factor needed to draw every placed image at native size.

    For each placed image, the needed factor is how much larger its
    (rotated) footprint is than the slot's inner rectangle at base
    resolution, taking the larger of the two axes. The card factor is
    the maximum over its images, clamped to [1, max_scale].

    Args:
        card: Card to inspect
        library: Library resolving slot image ids
        config: Sheet configuration

    Returns:
        Factor in [1, config.max_scale]
    """
    base = sheet_size(card.orientation, config)
    factor = 1.0
    for index, slot in enumerate(card.slots):
        image = library.get(slot.image_id)
        if image is None:
            continue
        inner = slot_metrics(index, base, config.padding).inner
        foot_w, foot_h = footprint(image.width, image.height, slot.rotation_deg)
        needed = max(foot_w / inner.width, foot_h / inner.height)
        factor = max(factor, needed)

    clamped = min(max(factor, 1.0), config.max_scale)
    if clamped != factor:
        logger.debug(f"Card {card.id}: upscale {factor:.2f} capped at {clamped:.2f}")
    return clamped


def card_pixel_size(
    card: Card,
    library: Library,
    config: SheetConfig,
) -> Tuple[float, Tuple[int, int]]:
    """
    Resolve a card's render factor and pixel size.

    Returns:
        (factor, (width, height))

    Example:
        >>> factor, size = card_pixel_size(Card(), Library(), SheetConfig())
        >>> factor, size
        (1.0, (1772, 1181))
    """
    factor = card_scale_factor(card, library, config)
    return factor, scaled_size(sheet_size(card.orientation, config), factor)
