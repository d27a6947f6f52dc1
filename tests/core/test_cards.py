"""
Unit Tests for Slot and Card Models

Tests for fixed four-slot cards and their slots.
"""

import pytest

from photo_cards.config import DEFAULT_BACKGROUND
from photo_cards.core.models.cards import (
    SLOT_COUNT,
    Card,
    Orientation,
    Slot,
    normalize_rotation,
)


class TestNormalizeRotation:
    """Tests for normalize_rotation()."""

    @pytest.mark.parametrize(
        "degrees, expected",
        [(0, 0), (90, 90), (360, 0), (450, 90), (-90, 270), (-180, 180), (100, 90), (260, 270)],
    )
    def test_normalize_rotation_when_angle_then_quarter_turn(self, degrees, expected):
        assert normalize_rotation(degrees) == expected


class TestSlot:
    """Tests for Slot dataclass."""

    def test_init_when_defaults_then_empty(self):
        slot = Slot()
        assert slot.is_empty
        assert slot.rotation_deg == 0
        assert (slot.offset_x, slot.offset_y) == (0.0, 0.0)
        assert slot.id.startswith("slot-")

    def test_init_when_rotation_outside_range_then_normalized(self):
        assert Slot(rotation_deg=-90).rotation_deg == 270

    def test_with_image_when_rotated_and_panned_then_resets(self):
        slot = Slot(image_id="a", rotation_deg=90, offset_x=5, offset_y=-3)
        updated = slot.with_image("b")

        assert updated.image_id == "b"
        assert updated.rotation_deg == 0
        assert (updated.offset_x, updated.offset_y) == (0.0, 0.0)
        assert updated.id == slot.id

    def test_cleared_when_filled_then_empty_and_reset(self):
        slot = Slot(image_id="a", rotation_deg=180, offset_x=7).cleared()
        assert slot.is_empty
        assert slot.rotation_deg == 0
        assert slot.offset_x == 0.0

    def test_reset_when_filled_then_keeps_image(self):
        slot = Slot(image_id="a", rotation_deg=180, offset_x=7).reset()
        assert slot.image_id == "a"
        assert slot.rotation_deg == 0
        assert slot.offset_x == 0.0

    def test_rotated_when_four_turns_then_back_to_start(self):
        slot = Slot(image_id="a")
        for _ in range(4):
            slot = slot.rotated(1)
        assert slot.rotation_deg == 0

    def test_rotated_when_negative_then_counter_clockwise(self):
        assert Slot().rotated(-1).rotation_deg == 270


class TestCard:
    """Tests for Card dataclass."""

    # ─────────────────────────────────────────────────────────────────────────
    # Constructor Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_init_when_defaults_then_four_empty_slots(self):
        card = Card()
        assert len(card.slots) == SLOT_COUNT
        assert card.is_empty
        assert not card.is_full
        assert card.background_color == DEFAULT_BACKGROUND
        assert card.orientation is Orientation.LANDSCAPE

    def test_init_when_slot_ids_then_unique(self):
        card = Card()
        assert len({slot.id for slot in card.slots}) == SLOT_COUNT

    def test_init_when_wrong_slot_count_then_raises_error(self):
        with pytest.raises(ValueError, match="exactly 4 slots"):
            Card(slots=(Slot(), Slot()))

    def test_init_when_slots_list_then_converted_to_tuple(self):
        card = Card(slots=[Slot() for _ in range(4)])
        assert isinstance(card.slots, tuple)

    def test_init_when_orientation_string_then_coerced(self):
        assert Card(orientation="portrait").orientation is Orientation.PORTRAIT

    def test_init_when_invalid_orientation_then_raises_error(self):
        with pytest.raises(ValueError):
            Card(orientation="square")

    def test_init_when_invalid_color_then_raises_error(self):
        with pytest.raises(ValueError, match="hex RGB"):
            Card(background_color="beige")

    # ─────────────────────────────────────────────────────────────────────────
    # Property Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_filled_count_when_partially_filled_then_counts_images(self):
        card = Card()
        card = card.replace_slot(1, card.slots[1].with_image("a"))
        card = card.replace_slot(3, card.slots[3].with_image("b"))

        assert card.filled_count == 2
        assert card.empty_slot_indices == (0, 2)
        assert not card.is_empty
        assert not card.is_full

    def test_is_full_when_all_slots_filled_then_true(self):
        card = Card(slots=tuple(Slot(image_id=f"img{i}") for i in range(4)))
        assert card.is_full
        assert card.empty_slot_indices == ()

    # ─────────────────────────────────────────────────────────────────────────
    # Lookup Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_slot_index_when_present_then_returns_index(self):
        card = Card()
        assert card.slot_index(card.slots[2].id) == 2

    def test_slot_index_when_missing_then_raises_key_error(self):
        with pytest.raises(KeyError):
            Card().slot_index("slot-nope")

    def test_replace_slot_when_called_then_original_unchanged(self):
        card = Card()
        updated = card.replace_slot(0, card.slots[0].with_image("a"))

        assert card.slots[0].is_empty
        assert updated.slots[0].image_id == "a"
        assert updated.id == card.id
