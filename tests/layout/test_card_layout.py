"""
Tests for layout.card

Test Coverage:
- layout_card(): factor resolution, scaled padding/radius/offsets,
  missing library images
"""

import logging

import pytest

from photo_cards.core.models import Card, Library, PhotoImage, Slot
from photo_cards.layout.card import layout_card


def _wide_card(offset_x=0.0):
    slots = (Slot(image_id="wide", offset_x=offset_x), Slot(), Slot(), Slot())
    return Card(slots=slots)


@pytest.fixture
def wide_library():
    return Library([PhotoImage(id="wide", name="wide.jpg", width=2000, height=500)])


class TestLayoutCard:
    """Tests for layout_card()."""

    def test_layout_card_when_empty_then_base_geometry(self, config):
        layout = layout_card(Card(), Library(), config)

        assert layout.factor == 1.0
        assert layout.size == (1772, 1181)
        assert layout.padding == 18
        assert layout.radius == 12
        assert layout.drawn_count == 0
        assert len(layout.slots) == 4

    def test_layout_card_when_no_factor_then_uses_card_scale(self, config, wide_library):
        layout = layout_card(_wide_card(), wide_library, config)

        assert layout.factor == pytest.approx(2000 / 850)
        assert layout.drawn_count == 1

    def test_layout_card_when_factor_given_then_everything_scaled(self, config, wide_library):
        layout = layout_card(_wide_card(offset_x=10), wide_library, config, factor=2.0)
        slot = layout.slots[0]

        assert layout.size == (3544, 2362)
        assert layout.padding == 36
        assert layout.radius == 24
        assert slot.metrics.inner.x == 36
        assert slot.placement.offset_x == pytest.approx(20)
        assert slot.placement.center_x == pytest.approx(906)

    def test_layout_card_when_offset_beyond_overscan_then_clamped(self, config, wide_library):
        layout = layout_card(_wide_card(offset_x=5000), wide_library, config, factor=1.0)
        placement = layout.slots[0].placement

        assert placement.offset_x == pytest.approx(684)
        assert placement.offset_x == pytest.approx(placement.max_offset_x)

    def test_layout_card_when_image_missing_then_slot_not_drawn(self, config, caplog):
        card = Card(slots=(Slot(image_id="gone"), Slot(), Slot(), Slot()))

        with caplog.at_level(logging.WARNING):
            layout = layout_card(card, Library(), config)

        assert layout.slots[0].image_id == "gone"
        assert not layout.slots[0].is_drawn
        assert "not in library" in caplog.text
