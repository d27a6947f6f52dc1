"""
Module: output

Purpose:
    Raster compositing and export for cards and sheets.
    Converts cards to PIL images, PNG files and a ZIP archive.

Key Functions:
    - render_card(): Composite a four-slot card
    - render_sheet(): Composite a free-form sheet
    - write_cards_zip(): Bundle PNGs into cards.zip

Dependencies:
    - PIL: Compositing, PNG encoding
    - layout: Geometry

Used By:
    - controller: Export pipeline
"""

from .compositor import render_card, render_sheet, rounded_mask
from .writer import card_filename, encode_png, sheet_filename, write_png
from .zip_writer import write_cards_zip

__all__ = [
    "render_card",
    "render_sheet",
    "rounded_mask",
    "card_filename",
    "encode_png",
    "sheet_filename",
    "write_png",
    "write_cards_zip",
]
