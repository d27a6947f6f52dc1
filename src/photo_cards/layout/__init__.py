"""
Module: layout

Purpose:
    Sheet geometry and image layout for cards and free-form sheets.
    Everything here is a pure function of its inputs.

Key Functions:
    - sheet_size(), card_pixel_size(): Sheet resolution and upscaling
    - pack_grid(): Grid search for the free-form sheet
    - slot_metrics(): Slot rectangles on a four-slot card
    - place_image(): Cover-fit with clamped pan

Used By:
    - output.compositor
    - cards.deck
"""

from .card import CardLayout, SlotLayout, layout_card
from .grid import GridLayout, pack_grid, grid_cells
from .placement import Placement, place_image, fit_contain, clamp_offset, max_offsets
from .sheet import sheet_size, card_scale_factor, card_pixel_size, scaled_size
from .slots import slot_metrics, card_slot_metrics

__all__ = [
    # Card
    "CardLayout",
    "SlotLayout",
    "layout_card",
    # Grid
    "GridLayout",
    "pack_grid",
    "grid_cells",
    # Placement
    "Placement",
    "place_image",
    "fit_contain",
    "clamp_offset",
    "max_offsets",
    # Sheet
    "sheet_size",
    "card_scale_factor",
    "card_pixel_size",
    "scaled_size",
    # Slots
    "slot_metrics",
    "card_slot_metrics",
]
