"""
Module: cards.workspace

Purpose:
    Single-writer holder of the editing state: the image Library and the
    card collection. State is an immutable WorkspaceState swapped under a
    lock, so a render always observes the state before or after a
    mutation, never a mix.

    Pixel sources are closed when their image leaves the library, unless
    an export started from an earlier snapshot still uses them; those are
    closed when the last such export finishes.

Key Classes:
    - WorkspaceState: Immutable (library, cards) snapshot
    - Workspace: Mutation API and resource bookkeeping

Dependencies:
    - threading (std)
    - cards.deck, cards.autofill

Used By:
    - controller: export_cards() takes a snapshot
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional

from photo_cards.config import SheetConfig
from photo_cards.core.models import Library, Orientation, PhotoImage

from . import deck
from .autofill import AutoFillResult, auto_fill
from .deck import Deck

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkspaceState:
    """
    Snapshot of the editing state (immutable).

    Attributes:
        library: Images available for placement
        cards: Card collection, never empty
    """

    library: Library = field(default_factory=Library)
    cards: Deck = field(default_factory=deck.new_deck)

    def __post_init__(self) -> None:
        if not self.cards:
            raise ValueError("cards must contain at least one card")


class Workspace:
    """
    Mutable façade over WorkspaceState.

    Every mutating method computes the next state from the current one and
    swaps it in under a lock. Readers call snapshot() and work on the
    returned value without holding the lock.

    Example:
        >>> ws = Workspace()
        >>> ws.add_images(report.images)
        >>> ws.auto_fill()
        >>> with ws.rendering() as state:
        ...     export_cards(state, Path("out"), ws.config)
    """

    def __init__(self, config: Optional[SheetConfig] = None) -> None:
        self.config = config or SheetConfig()
        self._lock = threading.Lock()
        self._state = WorkspaceState(
            cards=deck.new_deck(background_color=self.config.background_color)
        )
        self._in_flight: Counter[str] = Counter()
        self._retired: Dict[str, PhotoImage] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # Reading
    # ─────────────────────────────────────────────────────────────────────────

    def snapshot(self) -> WorkspaceState:
        """Current state. Safe to read while other threads mutate."""
        with self._lock:
            return self._state

    @property
    def library(self) -> Library:
        return self.snapshot().library

    @property
    def cards(self) -> Deck:
        return self.snapshot().cards

    @contextmanager
    def rendering(self) -> Iterator[WorkspaceState]:
        """
        Pin a snapshot for an export.

        Images in the pinned library stay open until the block exits,
        even if they are removed from the workspace meanwhile.
        """
        with self._lock:
            state = self._state
            pinned = state.library.ids
            self._in_flight.update(pinned)
        try:
            yield state
        finally:
            with self._lock:
                self._in_flight.subtract(pinned)
                released = [
                    self._retired.pop(image_id)
                    for image_id in pinned
                    if self._in_flight[image_id] <= 0 and image_id in self._retired
                ]
                self._in_flight += Counter()  # drop zero counts
            for image in released:
                self._close(image)

    # ─────────────────────────────────────────────────────────────────────────
    # Library
    # ─────────────────────────────────────────────────────────────────────────

    def add_images(self, images: Iterable[PhotoImage]) -> None:
        """Append decoded images to the library in the given order."""
        images = tuple(images)
        with self._lock:
            self._state = WorkspaceState(
                library=self._state.library.extend(images),
                cards=self._state.cards,
            )
        logger.info(f"Added {len(images)} images to library")

    def remove_image(self, image_id: str) -> None:
        """Remove an image from the library and clear every slot using it."""
        with self._lock:
            image = self._state.library.get(image_id)
            if image is None:
                return
            self._state = WorkspaceState(
                library=self._state.library.remove(image_id),
                cards=deck.clear_image(self._state.cards, image_id),
            )
            release = self._retire_locked(image)
        if release:
            self._close(image)

    def clear_all(self) -> None:
        """Empty the library and reset to a single empty card."""
        with self._lock:
            images = self._state.library.images
            self._state = WorkspaceState(
                cards=deck.new_deck(background_color=self.config.background_color)
            )
            release = [image for image in images if self._retire_locked(image)]
        for image in release:
            self._close(image)
        logger.info(f"Cleared workspace ({len(images)} images released)")

    # ─────────────────────────────────────────────────────────────────────────
    # Cards
    # ─────────────────────────────────────────────────────────────────────────

    def place_image(self, card_id: str, slot_id: str, image_id: str) -> None:
        """
        Place a library image into a slot; append a card if the last filled up.

        Raises:
            KeyError: If the image, card or slot does not exist
        """
        with self._lock:
            if image_id not in self._state.library:
                raise KeyError(f"Image not in library: {image_id}")
            cards = deck.place_image(self._state.cards, card_id, slot_id, image_id)
            self._set_cards_locked(deck.grow_if_full(cards))

    def clear_slot(self, card_id: str, slot_id: str) -> None:
        self._apply(deck.clear_slot, card_id, slot_id)

    def rotate_slot(self, card_id: str, slot_id: str, quarter_turns: int = 1) -> None:
        self._apply(deck.rotate_slot, card_id, slot_id, quarter_turns)

    def set_slot_offset(self, card_id: str, slot_id: str, offset_x: float, offset_y: float) -> None:
        """Pan a slot's image (base pixels), clamped to its overscan."""
        with self._lock:
            self._set_cards_locked(deck.set_slot_offset(
                self._state.cards,
                self._state.library,
                card_id,
                slot_id,
                offset_x,
                offset_y,
                self.config,
            ))

    def center_card(self, card_id: str) -> None:
        self._apply(deck.center_card, card_id)

    def add_card(self) -> None:
        self._apply(deck.add_card)

    def remove_card(self, card_id: str) -> None:
        self._apply(deck.remove_card, card_id)

    def set_card_style(
        self,
        card_id: str,
        *,
        background_color: Optional[str] = None,
        orientation: Optional[Orientation | str] = None,
    ) -> None:
        self._apply(
            deck.set_card_style,
            card_id,
            background_color=background_color,
            orientation=orientation,
        )

    def auto_fill(self) -> AutoFillResult:
        """Place every unplaced library image, adding cards as needed."""
        with self._lock:
            result = auto_fill(self._state.library, self._state.cards)
            self._set_cards_locked(result.cards)
        return result

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _apply(self, operation, *args, **kwargs) -> None:
        with self._lock:
            self._set_cards_locked(operation(self._state.cards, *args, **kwargs))

    def _set_cards_locked(self, cards: Deck) -> None:
        self._state = WorkspaceState(library=self._state.library, cards=cards)

    def _retire_locked(self, image: PhotoImage) -> bool:
        """Return True if the image can be closed now, else defer it."""
        if self._in_flight[image.id] > 0:
            self._retired[image.id] = image
            logger.debug(f"Deferring release of {image.id}: export in flight")
            return False
        return True

    @staticmethod
    def _close(image: PhotoImage) -> None:
        image.close()
        logger.debug(f"Released pixel source for {image.id}")
