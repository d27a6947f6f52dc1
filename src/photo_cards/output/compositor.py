"""
Module: output.compositor

Purpose:
    Render cards and free-form sheets to PIL images.

    Card rendering, per card:
    1. Fill the sheet with the card's background color
    2. For each filled slot in index order: rotate the source by its
       quarter turn, crop and resize the visible part of the cover-fit
       image to the slot's inner rectangle, and paste it through a
       rounded-rectangle mask
    3. Stroke a faint edge marker around the sheet

    Output depends only on the card, library and config, so repeated
    renders are pixel-identical and cards can be rendered in parallel.

Key Functions:
    - render_card(): Composite one four-slot card
    - render_sheet(): Composite all images onto one free-form sheet
    - rounded_mask(): "L" mask with rounded corners

Dependencies:
    - PIL: Image, ImageDraw
    - layout: card geometry, grid packing, contain-fit

Used By:
    - controller: export_cards(), export_card(), export_sheet()
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from photo_cards.config import SheetConfig, parse_hex_color
from photo_cards.core.models import Card, Library, Orientation, PhotoImage, Rect
from photo_cards.layout.card import layout_card
from photo_cards.layout.grid import grid_cells, pack_grid
from photo_cards.layout.placement import Placement, fit_contain
from photo_cards.layout.sheet import sheet_size

logger = logging.getLogger(__name__)

RESAMPLE = Image.Resampling.LANCZOS

# Clockwise quarter turns; Pillow's ROTATE_* constants are counter-clockwise
_CLOCKWISE = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}


def rounded_mask(size: Tuple[int, int], radius: float) -> Image.Image:
    """
    Build an opaque rounded-rectangle mask.

    Args:
        size: (width, height) of the mask
        radius: Corner radius, capped at half the smaller dimension

    Returns:
        "L" image, 255 inside the rounded rectangle, 0 outside
    """
    width, height = size
    mask = Image.new("L", (max(width, 0), max(height, 0)), 0)
    if width <= 0 or height <= 0:
        return mask

    radius = int(round(min(max(radius, 0), width / 2, height / 2)))
    draw = ImageDraw.Draw(mask)
    if radius > 0:
        draw.rounded_rectangle((0, 0, width - 1, height - 1), radius=radius, fill=255)
    else:
        draw.rectangle((0, 0, width - 1, height - 1), fill=255)
    return mask


def _rotate_clockwise(source: Image.Image, rotation_deg: int) -> Image.Image:
    transpose = _CLOCKWISE.get(rotation_deg)
    return source.transpose(transpose) if transpose is not None else source


def _flatten(tile: Image.Image, background: Tuple[int, int, int]) -> Image.Image:
    """Composite a resized tile onto the background, dropping alpha."""
    if tile.mode == "RGB":
        return tile
    if "A" in tile.getbands():
        base = Image.new("RGB", tile.size, background)
        base.paste(tile, (0, 0), tile)
        return base
    return tile.convert("RGB")


def _draw_cover(
    canvas: Image.Image,
    source: Image.Image,
    placement: Placement,
    inner: Rect,
    radius: float,
    background: Tuple[int, int, int],
) -> None:
    """Draw the visible part of a cover-fit image into a masked slot."""
    left, top, right, bottom = inner.to_box()
    box_w, box_h = right - left, bottom - top
    if box_w <= 0 or box_h <= 0:
        return

    rotated = _rotate_clockwise(source, placement.rotation_deg)
    scale = placement.footprint_width / rotated.width
    foot_left, foot_top, _, _ = placement.footprint_box

    # Slot box mapped back into source pixels
    src_box = (
        min(max((left - foot_left) / scale, 0), rotated.width),
        min(max((top - foot_top) / scale, 0), rotated.height),
        min(max((right - foot_left) / scale, 0), rotated.width),
        min(max((bottom - foot_top) / scale, 0), rotated.height),
    )
    if src_box[2] <= src_box[0] or src_box[3] <= src_box[1]:
        return

    tile = rotated.resize((box_w, box_h), RESAMPLE, box=src_box)
    tile = _flatten(tile, background)
    canvas.paste(tile, (left, top), rounded_mask((box_w, box_h), radius))


def _draw_contain(
    canvas: Image.Image,
    source: Image.Image,
    placement: Placement,
    background: Tuple[int, int, int],
) -> None:
    """Draw a whole image at its contain-fit rectangle."""
    draw_w = round(placement.draw_width)
    draw_h = round(placement.draw_height)
    if draw_w <= 0 or draw_h <= 0:
        return
    left, top, _, _ = placement.draw_box
    tile = _flatten(source.resize((draw_w, draw_h), RESAMPLE), background)
    canvas.paste(tile, (round(left), round(top)))


def _stroke_border(canvas: Image.Image, config: SheetConfig, factor: float) -> None:
    """Faint edge marker around the sheet, drawn over everything."""
    if config.border_width <= 0:
        return
    width = max(1, round(config.border_width * factor))
    draw = ImageDraw.Draw(canvas, "RGBA")
    draw.rectangle(
        (0, 0, canvas.width - 1, canvas.height - 1),
        outline=tuple(config.border_rgba),
        width=width,
    )


def render_card(
    card: Card,
    library: Library,
    config: Optional[SheetConfig] = None,
    *,
    factor: Optional[float] = None,
) -> Image.Image:
    """
    Composite one card.

    Args:
        card: Card to render
        library: Library resolving slot image ids
        config: Sheet configuration (padding, rounding, border)
        factor: Render factor; defaults to the card's upscale factor

    Returns:
        RGB image at the card's resolved pixel size. A card without
        images renders as a plain background sheet.

    Example:
        >>> image = render_card(card, library, SheetConfig())
        >>> image.size
        (1772, 1181)
    """
    config = config or SheetConfig()
    layout = layout_card(card, library, config, factor=factor)
    background = parse_hex_color(card.background_color)
    canvas = Image.new("RGB", layout.size, background)

    for slot in layout.slots:
        if slot.placement is None:
            continue
        image = library.get(slot.image_id)
        _draw_cover(canvas, image.source, slot.placement, slot.metrics.inner, layout.radius, background)

    if layout.drawn_count == 0:
        logger.debug(f"Card {card.id} has no images, rendering background only")

    _stroke_border(canvas, config, layout.factor)
    logger.debug(
        f"Rendered card {card.id}: {layout.size[0]}x{layout.size[1]} "
        f"(x{layout.factor:.2f}, {layout.drawn_count} images)"
    )
    return canvas


def render_sheet(
    images: Sequence[PhotoImage],
    orientation: Orientation | str = Orientation.LANDSCAPE,
    config: Optional[SheetConfig] = None,
    *,
    background_color: Optional[str] = None,
) -> Image.Image:
    """
    Composite every image onto one free-form sheet.

    The grid comes from pack_grid(); each image is contain-fit and
    centered in its cell, so nothing is cropped.

    Args:
        images: Images in display order
        orientation: Sheet orientation
        config: Sheet configuration
        background_color: Fill color (default: config.background_color)

    Returns:
        RGB image at base resolution
    """
    config = config or SheetConfig()
    width, height = sheet_size(orientation, config)
    background = parse_hex_color(background_color or config.background_color)
    canvas = Image.new("RGB", (width, height), background)

    grid = pack_grid(len(images), width, height, config.padding)
    for cell, image in zip(grid_cells(grid, width, height, config.padding), images):
        if cell.inner.width <= 0 or cell.inner.height <= 0:
            continue
        placement = fit_contain(cell.inner, image.width, image.height)
        _draw_contain(canvas, image.source, placement, background)

    _stroke_border(canvas, config, 1.0)
    logger.debug(f"Rendered sheet with {len(images)} images as {grid.cols}x{grid.rows} grid")
    return canvas
