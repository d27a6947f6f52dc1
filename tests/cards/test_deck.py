"""
Tests for cards.deck

Test Coverage:
- place_image() / grow_if_full(): assignment and card growth
- clear_slot() / clear_image(): emptying slots
- rotate_slot() / set_slot_offset() / center_card(): slot adjustments
- add_card() / remove_card() / set_card_style(): card management
- image_usage(): first placement per image
"""

import pytest

from photo_cards.core.models import Card, Library, Orientation, PhotoImage, Slot
from photo_cards.cards import deck


def _full_card(prefix="img", **kwargs):
    return Card(slots=tuple(Slot(image_id=f"{prefix}{i}") for i in range(4)), **kwargs)


@pytest.fixture
def wide_library():
    return Library([PhotoImage(id="wide", name="wide.jpg", width=2000, height=500)])


class TestNewDeck:
    """Tests for new_card() / new_deck()."""

    def test_new_deck_when_created_then_single_empty_card(self):
        cards = deck.new_deck()
        assert len(cards) == 1
        assert cards[0].is_empty

    def test_new_card_when_style_given_then_applied(self):
        card = deck.new_card("portrait", "#ffffff")
        assert card.orientation is Orientation.PORTRAIT
        assert card.background_color == "#ffffff"


class TestAssignment:
    """Tests for place_image(), grow_if_full(), clear_slot(), clear_image()."""

    def test_place_image_when_slot_adjusted_then_resets_rotation_and_offset(self):
        card = Card(slots=(Slot(image_id="old", rotation_deg=90, offset_x=12), Slot(), Slot(), Slot()))
        cards = deck.place_image((card,), card.id, card.slots[0].id, "new")
        slot = cards[0].slots[0]

        assert slot.image_id == "new"
        assert slot.rotation_deg == 0
        assert slot.offset_x == 0.0

    def test_place_image_when_fills_last_card_then_no_growth(self):
        card = Card(slots=(Slot(image_id="a"), Slot(image_id="b"), Slot(image_id="c"), Slot()))
        cards = deck.place_image((card,), card.id, card.slots[3].id, "d")

        assert len(cards) == 1
        assert cards[0].is_full

    def test_place_image_when_same_image_twice_then_both_slots_hold_it(self):
        card = Card()
        cards = deck.place_image((card,), card.id, card.slots[0].id, "a")
        cards = deck.place_image(cards, card.id, card.slots[1].id, "a")

        assert [s.image_id for s in cards[0].slots[:2]] == ["a", "a"]

    def test_place_image_when_unknown_card_then_raises(self):
        with pytest.raises(KeyError):
            deck.place_image(deck.new_deck(), "card-nope", "slot-nope", "a")

    def test_place_image_when_unknown_slot_then_raises(self):
        cards = deck.new_deck()
        with pytest.raises(KeyError):
            deck.place_image(cards, cards[0].id, "slot-nope", "a")

    def test_place_image_when_called_then_input_unchanged(self):
        cards = deck.new_deck()
        deck.place_image(cards, cards[0].id, cards[0].slots[0].id, "a")
        assert cards[0].is_empty

    def test_grow_if_full_when_last_full_then_appends_styled_card(self):
        cards = (_full_card(orientation="portrait", background_color="#123456"),)
        grown = deck.grow_if_full(cards)

        assert len(grown) == 2
        assert grown[1].is_empty
        assert grown[1].orientation is Orientation.PORTRAIT
        assert grown[1].background_color == "#123456"

    def test_grow_if_full_when_last_not_full_then_unchanged(self):
        cards = (_full_card(), Card())
        assert deck.grow_if_full(cards) == cards

    def test_clear_slot_when_filled_then_empty(self):
        card = _full_card()
        cards = deck.clear_slot((card,), card.id, card.slots[2].id)
        assert cards[0].empty_slot_indices == (2,)

    def test_clear_image_when_used_on_many_cards_then_only_those_slots_cleared(self):
        first = Card(slots=(Slot(image_id="x"), Slot(image_id="y"), Slot(), Slot()))
        second = Card(slots=(Slot(image_id="z"), Slot(), Slot(image_id="x"), Slot()))
        cards = deck.clear_image((first, second), "x")

        assert [s.image_id for s in cards[0].slots] == [None, "y", None, None]
        assert [s.image_id for s in cards[1].slots] == ["z", None, None, None]

    def test_clear_image_when_unused_then_cards_equal(self):
        cards = (_full_card(),)
        assert deck.clear_image(cards, "nope") == cards


class TestAdjustment:
    """Tests for rotate_slot(), set_slot_offset(), center_card()."""

    def test_rotate_slot_when_four_quarter_turns_then_back_to_zero(self):
        card = _full_card()
        cards = (card,)
        for _ in range(4):
            cards = deck.rotate_slot(cards, card.id, card.slots[0].id)
        assert cards[0].slots[0].rotation_deg == 0

    def test_rotate_slot_when_counter_clockwise_then_wraps(self):
        card = _full_card()
        cards = deck.rotate_slot((card,), card.id, card.slots[0].id, -1)
        assert cards[0].slots[0].rotation_deg == 270

    def test_set_slot_offset_when_beyond_overscan_then_clamped(self, config, wide_library):
        card = Card(slots=(Slot(image_id="wide"), Slot(), Slot(), Slot()))
        cards = deck.set_slot_offset((card,), wide_library, card.id, card.slots[0].id, 1000, 50, config)
        slot = cards[0].slots[0]

        assert slot.offset_x == pytest.approx(684)
        assert slot.offset_y == 0

    def test_set_slot_offset_when_within_overscan_then_kept(self, config, wide_library):
        card = Card(slots=(Slot(image_id="wide"), Slot(), Slot(), Slot()))
        cards = deck.set_slot_offset((card,), wide_library, card.id, card.slots[0].id, -100, 0, config)
        assert cards[0].slots[0].offset_x == -100

    def test_set_slot_offset_when_rotated_then_clamped_on_rotated_axis(self, config, wide_library):
        card = Card(slots=(Slot(image_id="wide", rotation_deg=90), Slot(), Slot(), Slot()))
        cards = deck.set_slot_offset((card,), wide_library, card.id, card.slots[0].id, 1000, 5000, config)
        slot = cards[0].slots[0]

        # 500x2000 footprint covers 850 wide -> 3400 tall
        assert slot.offset_x == 0
        assert slot.offset_y == pytest.approx((3400 - 554.5) / 2)

    def test_set_slot_offset_when_rotated_within_overscan_then_kept(self, config, wide_library):
        card = Card(slots=(Slot(image_id="wide", rotation_deg=90), Slot(), Slot(), Slot()))
        cards = deck.set_slot_offset((card,), wide_library, card.id, card.slots[0].id, 0, -1000, config)

        assert cards[0].slots[0].offset_y == -1000

    def test_set_slot_offset_when_empty_slot_then_zero(self, config, wide_library):
        card = Card()
        cards = deck.set_slot_offset((card,), wide_library, card.id, card.slots[0].id, 40, 40, config)
        assert (cards[0].slots[0].offset_x, cards[0].slots[0].offset_y) == (0.0, 0.0)

    def test_reset_slot_offset_when_panned_then_zero_and_rotation_kept(self):
        card = Card(slots=(Slot(image_id="a", rotation_deg=180, offset_x=5, offset_y=6), Slot(), Slot(), Slot()))
        cards = deck.reset_slot_offset((card,), card.id, card.slots[0].id)
        slot = cards[0].slots[0]

        assert (slot.offset_x, slot.offset_y) == (0.0, 0.0)
        assert slot.rotation_deg == 180

    def test_center_card_when_adjusted_then_filled_slots_reset(self):
        card = Card(slots=(
            Slot(image_id="a", rotation_deg=90, offset_x=4),
            Slot(image_id="b", offset_y=-9),
            Slot(),
            Slot(),
        ))
        cards = deck.center_card((card,), card.id)

        for slot in cards[0].slots[:2]:
            assert (slot.rotation_deg, slot.offset_x, slot.offset_y) == (0, 0.0, 0.0)
        assert [s.image_id for s in cards[0].slots] == ["a", "b", None, None]


class TestCardManagement:
    """Tests for add_card(), remove_card(), set_card_style(), image_usage()."""

    def test_add_card_when_called_then_inherits_last_style(self):
        cards = (Card(orientation="portrait", background_color="#000000"),)
        cards = deck.add_card(cards)

        assert len(cards) == 2
        assert cards[1].orientation is Orientation.PORTRAIT
        assert cards[1].background_color == "#000000"

    def test_add_card_when_overrides_given_then_used(self):
        cards = deck.add_card(deck.new_deck(), orientation="portrait", background_color="#ffffff")
        assert cards[1].orientation is Orientation.PORTRAIT
        assert cards[1].background_color == "#ffffff"

    def test_remove_card_when_several_then_removed(self):
        cards = (Card(), Card(), Card())
        remaining = deck.remove_card(cards, cards[1].id)
        assert [c.id for c in remaining] == [cards[0].id, cards[2].id]

    def test_remove_card_when_last_card_then_kept(self):
        cards = deck.new_deck()
        assert deck.remove_card(cards, cards[0].id) == cards

    def test_remove_card_when_unknown_then_raises(self):
        with pytest.raises(KeyError, match="Card not found"):
            deck.remove_card((Card(), Card()), "card-nope")

    def test_set_card_style_when_orientation_string_then_updated(self):
        cards = deck.new_deck()
        cards = deck.set_card_style(cards, cards[0].id, orientation="portrait", background_color="#abcdef")

        assert cards[0].orientation is Orientation.PORTRAIT
        assert cards[0].background_color == "#abcdef"

    def test_set_card_style_when_invalid_color_then_raises(self):
        cards = deck.new_deck()
        with pytest.raises(ValueError):
            deck.set_card_style(cards, cards[0].id, background_color="#zzzzzz")

    def test_set_card_style_when_orientation_changes_then_slots_kept(self):
        card = _full_card()
        cards = deck.set_card_style((card,), card.id, orientation="portrait")
        assert cards[0].slots == card.slots

    def test_image_usage_when_image_repeated_then_first_placement(self):
        first = Card(slots=(Slot(), Slot(image_id="a"), Slot(), Slot()))
        second = Card(slots=(Slot(image_id="a"), Slot(image_id="b"), Slot(), Slot()))
        usage = deck.image_usage((first, second))

        assert usage == {
            "a": (first.id, first.slots[1].id),
            "b": (second.id, second.slots[1].id),
        }
