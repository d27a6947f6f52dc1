"""
Module: cards

Purpose:
    Provides the Slot and Card dataclasses for fixed four-slot cards.
    A Slot references a library image by id (never by value) and carries
    the user's pan offset and quarter-turn rotation.

Key Classes:
    - Orientation: landscape | portrait
    - Slot: One placement region of a card
    - Card: Exactly four slots plus background and orientation

Key Functions:
    - normalize_rotation(): Snap degrees to a quarter turn in [0, 360)
    - new_id(): Random identifier with a readable prefix

Dependencies:
    - dataclasses (std)
    - enum (std)
    - uuid (std)

Used By:
    - cards.deck, cards.autofill, cards.workspace
    - layout.sheet, output.compositor
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from photo_cards.config import DEFAULT_BACKGROUND, parse_hex_color

SLOT_COUNT = 4
SLOTS_PER_ROW = 2


class Orientation(str, Enum):
    """Sheet orientation. Landscape is the base (wider) orientation."""

    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"


def new_id(prefix: str) -> str:
    """Return a random id like "card-3f9a1c0b2d"."""
    return f"{prefix}-{uuid.uuid4().hex[:10]}"


def normalize_rotation(degrees: float) -> int:
    """
    Snap an angle to the nearest quarter turn and wrap into [0, 360).

    Example:
        >>> normalize_rotation(-90)
        270
        >>> normalize_rotation(450)
        90
    """
    quarter_turns = round(degrees / 90)
    return (quarter_turns * 90) % 360


@dataclass(frozen=True)
class Slot:
    """
    One of the four placement regions of a card (immutable).

    Offsets are absolute pixels at base sheet resolution, measured from
    the center of the slot's inner rectangle. They are clamped to the
    image's overscan whenever geometry is known.

    Attributes:
        id: Slot identifier
        image_id: Referenced library image, or None when empty
        rotation_deg: 0, 90, 180 or 270
        offset_x: Horizontal pan in base pixels
        offset_y: Vertical pan in base pixels
    """

    id: str = field(default_factory=lambda: new_id("slot"))
    image_id: Optional[str] = None
    rotation_deg: int = 0
    offset_x: float = 0.0
    offset_y: float = 0.0

    def __post_init__(self) -> None:
        normalized = normalize_rotation(self.rotation_deg)
        if normalized != self.rotation_deg:
            object.__setattr__(self, "rotation_deg", normalized)

    @property
    def is_empty(self) -> bool:
        return self.image_id is None

    def with_image(self, image_id: str) -> Slot:
        """Assign an image, resetting rotation and offset."""
        return replace(self, image_id=image_id, rotation_deg=0, offset_x=0.0, offset_y=0.0)

    def cleared(self) -> Slot:
        """Remove the image and reset rotation and offset."""
        return replace(self, image_id=None, rotation_deg=0, offset_x=0.0, offset_y=0.0)

    def reset(self) -> Slot:
        """Keep the image, reset rotation and offset."""
        return replace(self, rotation_deg=0, offset_x=0.0, offset_y=0.0)

    def rotated(self, quarter_turns: int) -> Slot:
        """Rotate clockwise by `quarter_turns` (negative = counter-clockwise)."""
        return replace(self, rotation_deg=normalize_rotation(self.rotation_deg + 90 * quarter_turns))

    def with_offset(self, offset_x: float, offset_y: float) -> Slot:
        return replace(self, offset_x=offset_x, offset_y=offset_y)


def _empty_slots() -> Tuple[Slot, ...]:
    return tuple(Slot() for _ in range(SLOT_COUNT))


@dataclass(frozen=True)
class Card:
    """
    One printed sheet holding exactly four slots (immutable).

    Slot index i maps to row i // 2 and column i % 2.

    Attributes:
        id: Card identifier
        slots: Exactly four Slots
        background_color: Hex RGB fill behind the slots
        orientation: Sheet orientation

    Example:
        >>> card = Card()
        >>> card.is_empty, card.is_full
        (True, False)
    """

    id: str = field(default_factory=lambda: new_id("card"))
    slots: Tuple[Slot, ...] = field(default_factory=_empty_slots)
    background_color: str = DEFAULT_BACKGROUND
    orientation: Orientation = Orientation.LANDSCAPE

    def __post_init__(self) -> None:
        """Validate slot count on construction."""
        if not isinstance(self.slots, tuple):
            object.__setattr__(self, "slots", tuple(self.slots))
        if len(self.slots) != SLOT_COUNT:
            raise ValueError(f"Card must have exactly {SLOT_COUNT} slots: {len(self.slots)}")
        if not isinstance(self.orientation, Orientation):
            object.__setattr__(self, "orientation", Orientation(self.orientation))
        parse_hex_color(self.background_color)

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_full(self) -> bool:
        """All four slots hold an image."""
        return all(not slot.is_empty for slot in self.slots)

    @property
    def is_empty(self) -> bool:
        return all(slot.is_empty for slot in self.slots)

    @property
    def filled_count(self) -> int:
        return sum(1 for slot in self.slots if not slot.is_empty)

    @property
    def empty_slot_indices(self) -> Tuple[int, ...]:
        return tuple(i for i, slot in enumerate(self.slots) if slot.is_empty)

    # ─────────────────────────────────────────────────────────────────────────
    # Lookup / update
    # ─────────────────────────────────────────────────────────────────────────

    def slot_index(self, slot_id: str) -> int:
        """
        Index of a slot by id.

        Raises:
            KeyError: If the slot is not on this card
        """
        for i, slot in enumerate(self.slots):
            if slot.id == slot_id:
                return i
        raise KeyError(f"Slot {slot_id} not found on card {self.id}")

    def replace_slot(self, index: int, slot: Slot) -> Card:
        """Return a new Card with the slot at `index` replaced."""
        slots = list(self.slots)
        slots[index] = slot
        return replace(self, slots=tuple(slots))
