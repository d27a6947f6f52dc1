"""
Module: cards.autofill

Purpose:
    Distribute library images that are not on any card into empty slots,
    creating new cards as needed.

Algorithm:
    1. Collect ids referenced by any slot
    2. Queue library images not referenced, in library order
    3. Walk cards in order, slots 0..3, filling empty slots from the queue
    4. While the queue is non-empty, append a fresh card and keep filling

    Existing placements are never moved. An image already placed (even
    more than once) is not queued again.

Key Functions:
    - auto_fill(): Main entry point
    - used_image_ids(): Ids referenced by any slot
    - unplaced_images(): Library images waiting for a slot

Dependencies:
    - core.models: Card, Library, PhotoImage
    - cards.deck: new_card

Used By:
    - cards.workspace
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, replace
from typing import Deque, FrozenSet, List, Optional, Tuple

from photo_cards.core.models import Card, Library, Orientation, PhotoImage

from .deck import Deck, new_card

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AutoFillResult:
    """
    Outcome of an auto-fill pass.

    Attributes:
        cards: Updated card collection
        assigned: (card_id, slot_id, image_id) for every new placement
        created_cards: Number of cards appended
    """

    cards: Deck
    assigned: Tuple[Tuple[str, str, str], ...] = ()
    created_cards: int = 0

    @property
    def assigned_count(self) -> int:
        return len(self.assigned)


def used_image_ids(cards: Deck) -> FrozenSet[str]:
    """Ids of all images referenced by any slot."""
    return frozenset(
        slot.image_id
        for card in cards
        for slot in card.slots
        if slot.image_id is not None
    )


def unplaced_images(library: Library, cards: Deck) -> Tuple[PhotoImage, ...]:
    """Library images not referenced by any slot, in library order."""
    used = used_image_ids(cards)
    return tuple(image for image in library if image.id not in used)


def _fill_card(
    card: Card,
    queue: Deque[PhotoImage],
    assigned: List[Tuple[str, str, str]],
) -> Card:
    slots = list(card.slots)
    for index, slot in enumerate(slots):
        if not queue:
            break
        if slot.is_empty:
            image = queue.popleft()
            slots[index] = slot.with_image(image.id)
            assigned.append((card.id, slot.id, image.id))
    return replace(card, slots=tuple(slots))


def auto_fill(
    library: Library,
    cards: Deck,
    *,
    orientation: Optional[Orientation | str] = None,
    background_color: Optional[str] = None,
) -> AutoFillResult:
    """
    Place every unplaced library image into the next empty slot.

    Args:
        library: Image library
        cards: Current card collection
        orientation: Orientation for new cards (default: last card's)
        background_color: Background for new cards (default: last card's)

    Returns:
        AutoFillResult. Cards grow by ceil(remaining / 4) once existing
        empty slots are used up.

    Example:
        >>> # one empty card, six unplaced images
        >>> result = auto_fill(library, (Card(),))
        >>> [card.filled_count for card in result.cards]
        [4, 2]
    """
    queue: Deque[PhotoImage] = deque(unplaced_images(library, cards))
    if not queue:
        logger.debug("Auto-fill: no unplaced images")
        return AutoFillResult(cards=tuple(cards))

    assigned: List[Tuple[str, str, str]] = []
    result = [_fill_card(card, queue, assigned) for card in cards]

    last = result[-1] if result else None
    if orientation is None:
        orientation = last.orientation if last else Orientation.LANDSCAPE
    if background_color is None and last is not None:
        background_color = last.background_color

    created = 0
    while queue:
        result.append(_fill_card(new_card(orientation, background_color), queue, assigned))
        created += 1

    logger.info(
        f"Auto-fill placed {len(assigned)} images "
        f"({created} new card{'s' if created != 1 else ''})"
    )
    return AutoFillResult(cards=tuple(result), assigned=tuple(assigned), created_cards=created)
