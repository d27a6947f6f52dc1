"""
Module: cards.deck

Purpose:
    Operations on the card collection ("deck"): an ordered tuple of
    Cards that is never empty. Every function returns a new tuple and
    leaves its input untouched.

    Growth of the deck is a separate post-condition (grow_if_full),
    applied by callers after a placement, so placement and growth can be
    tested independently.

Key Functions:
    - new_card(), new_deck(): Fresh empty cards
    - place_image(), clear_slot(), clear_image(): Slot assignment
    - grow_if_full(): Append an empty card when the last one is full
    - rotate_slot(), set_slot_offset(), center_card(): Slot adjustments
    - add_card(), remove_card(), set_card_style(): Card management
    - image_usage(): Where each image is placed

Dependencies:
    - core.models: Card, Slot, Library
    - layout: slot geometry and offset limits

Used By:
    - cards.workspace
    - cards.autofill
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Optional, Tuple

from photo_cards.config import SheetConfig
from photo_cards.core.models import Card, Library, Orientation, Slot
from photo_cards.layout.placement import clamp_offset, max_offsets
from photo_cards.layout.sheet import sheet_size
from photo_cards.layout.slots import slot_metrics

logger = logging.getLogger(__name__)

Deck = Tuple[Card, ...]


def new_card(
    orientation: Orientation | str = Orientation.LANDSCAPE,
    background_color: Optional[str] = None,
) -> Card:
    """Create a card with four empty slots."""
    if background_color is None:
        return Card(orientation=Orientation(orientation))
    return Card(orientation=Orientation(orientation), background_color=background_color)


def new_deck(
    orientation: Orientation | str = Orientation.LANDSCAPE,
    background_color: Optional[str] = None,
) -> Deck:
    """A deck holding a single empty card."""
    return (new_card(orientation, background_color),)


def find_card(cards: Deck, card_id: str) -> int:
    """
    Index of a card by id.

    Raises:
        KeyError: If no card has that id
    """
    for i, card in enumerate(cards):
        if card.id == card_id:
            return i
    raise KeyError(f"Card not found: {card_id}")


def _replace_card(cards: Deck, index: int, card: Card) -> Deck:
    return cards[:index] + (card,) + cards[index + 1:]


def _update_slot(cards: Deck, card_id: str, slot_id: str, update) -> Deck:
    card_index = find_card(cards, card_id)
    card = cards[card_index]
    slot_index = card.slot_index(slot_id)
    slot = update(card.slots[slot_index], slot_index, card)
    return _replace_card(cards, card_index, card.replace_slot(slot_index, slot))


# ─────────────────────────────────────────────────────────────────────────────
# Assignment
# ─────────────────────────────────────────────────────────────────────────────

def place_image(cards: Deck, card_id: str, slot_id: str, image_id: str) -> Deck:
    """
    Put an image into a slot, resetting its rotation and offset.

    The same image may be placed in several slots.

    Raises:
        KeyError: If the card or slot does not exist
    """
    return _update_slot(cards, card_id, slot_id, lambda slot, _i, _c: slot.with_image(image_id))


def grow_if_full(cards: Deck) -> Deck:
    """
    Append an empty card when the last card is full.

    The new card inherits the last card's orientation and background.
    """
    if not cards:
        return new_deck()
    last = cards[-1]
    if not last.is_full:
        return cards
    logger.debug(f"Card {last.id} is full, appending an empty card")
    return cards + (new_card(last.orientation, last.background_color),)


def clear_slot(cards: Deck, card_id: str, slot_id: str) -> Deck:
    """Empty one slot."""
    return _update_slot(cards, card_id, slot_id, lambda slot, _i, _c: slot.cleared())


def clear_image(cards: Deck, image_id: str) -> Deck:
    """
    Empty every slot that references `image_id`.

    Slots holding other images are untouched.
    """
    result = []
    for card in cards:
        if any(slot.image_id == image_id for slot in card.slots):
            slots = tuple(slot.cleared() if slot.image_id == image_id else slot for slot in card.slots)
            card = replace(card, slots=slots)
        result.append(card)
    return tuple(result)


# ─────────────────────────────────────────────────────────────────────────────
# Adjustment
# ─────────────────────────────────────────────────────────────────────────────

def rotate_slot(cards: Deck, card_id: str, slot_id: str, quarter_turns: int = 1) -> Deck:
    """Rotate a slot's image by quarter turns (positive = clockwise)."""
    return _update_slot(cards, card_id, slot_id, lambda slot, _i, _c: slot.rotated(quarter_turns))


def set_slot_offset(
    cards: Deck,
    library: Library,
    card_id: str,
    slot_id: str,
    offset_x: float,
    offset_y: float,
    config: SheetConfig,
) -> Deck:
    """
    Pan a slot's image, clamping to the image's overscan.

    Offsets are base-resolution pixels from the inner-rectangle center.
    An empty slot, or one whose image is missing from the library,
    stores a zero offset.

    Raises:
        KeyError: If the card or slot does not exist
    """
    def _pan(slot: Slot, index: int, card: Card) -> Slot:
        image = library.get(slot.image_id)
        if image is None:
            return slot.with_offset(0.0, 0.0)
        inner = slot_metrics(index, sheet_size(card.orientation, config), config.padding).inner
        max_x, max_y = max_offsets(inner, image.width, image.height, slot.rotation_deg)
        return slot.with_offset(clamp_offset(offset_x, max_x), clamp_offset(offset_y, max_y))

    return _update_slot(cards, card_id, slot_id, _pan)


def reset_slot_offset(cards: Deck, card_id: str, slot_id: str) -> Deck:
    """Re-center a slot's image, keeping its rotation."""
    return _update_slot(cards, card_id, slot_id, lambda slot, _i, _c: slot.with_offset(0.0, 0.0))


def center_card(cards: Deck, card_id: str) -> Deck:
    """Reset offset and rotation of every filled slot on a card."""
    index = find_card(cards, card_id)
    card = cards[index]
    slots = tuple(slot if slot.is_empty else slot.reset() for slot in card.slots)
    return _replace_card(cards, index, replace(card, slots=slots))


# ─────────────────────────────────────────────────────────────────────────────
# Card management
# ─────────────────────────────────────────────────────────────────────────────

def add_card(
    cards: Deck,
    orientation: Optional[Orientation | str] = None,
    background_color: Optional[str] = None,
) -> Deck:
    """Append an empty card, styled like the last card unless overridden."""
    last = cards[-1] if cards else None
    if orientation is None:
        orientation = last.orientation if last else Orientation.LANDSCAPE
    if background_color is None and last is not None:
        background_color = last.background_color
    return cards + (new_card(orientation, background_color),)


def remove_card(cards: Deck, card_id: str) -> Deck:
    """
    Remove a card. The last remaining card is never removed.

    Raises:
        KeyError: If the card does not exist
    """
    index = find_card(cards, card_id)
    if len(cards) <= 1:
        logger.debug(f"Keeping card {card_id}: a deck always has one card")
        return cards
    return cards[:index] + cards[index + 1:]


def set_card_style(
    cards: Deck,
    card_id: str,
    *,
    background_color: Optional[str] = None,
    orientation: Optional[Orientation | str] = None,
) -> Deck:
    """Change a card's background color and/or orientation."""
    index = find_card(cards, card_id)
    card = cards[index]
    if background_color is not None:
        card = replace(card, background_color=background_color)
    if orientation is not None:
        card = replace(card, orientation=Orientation(orientation))
    return _replace_card(cards, index, card)


def image_usage(cards: Deck) -> Dict[str, Tuple[str, str]]:
    """
    Map image id to the (card_id, slot_id) of its first placement.

    Example:
        >>> usage = image_usage(cards)
        >>> usage["beach.jpg-1a2b"]
        ('card-...', 'slot-...')
    """
    usage: Dict[str, Tuple[str, str]] = {}
    for card in cards:
        for slot in card.slots:
            if slot.image_id is not None and slot.image_id not in usage:
                usage[slot.image_id] = (card.id, slot.id)
    return usage
