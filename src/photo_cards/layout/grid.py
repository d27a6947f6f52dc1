"""
Module: layout.grid

Purpose:
    Choose a columns x rows grid for the free-form sheet, where every
    library image is laid out on a single sheet.

Algorithm:
    For cols in 1..N, rows = ceil(N / cols). Each cell loses `padding`
    on every side. Configurations with a non-positive cell are rejected.
    Score = used area - empty cells * EMPTY_CELL_PENALTY, highest wins,
    ties go to the first (fewest columns).

    "Used area" is the area a photo of the nominal aspect ratio covers
    when contain-fit into the cell, which is how the free-form sheet
    draws images. Passing photo_aspect=None scores the raw cell area.

Key Functions:
    - pack_grid(): Pick the grid
    - grid_cells(): Cell rectangles for each item

Dependencies:
    - math (std)
    - core.models: Rect, SlotMetrics

Used By:
    - output.compositor: render_sheet()
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator, Optional

from photo_cards.core.models import Rect, SlotMetrics

logger = logging.getLogger(__name__)

# Trade-off between cell size and blank cells
EMPTY_CELL_PENALTY = 50

# Photos are assumed closer to 4:3 than anything else
DEFAULT_PHOTO_ASPECT = 4 / 3


@dataclass(frozen=True)
class GridLayout:
    """
    Result of grid packing (immutable).

    Attributes:
        cols: Number of columns
        rows: Number of rows
        cell_width: Cell width after padding
        cell_height: Cell height after padding
        count: Number of items laid out
        score: Score of the chosen configuration
        degenerate: True when no configuration had a positive cell and
            the single-column fallback was used
    """

    cols: int
    rows: int
    cell_width: float
    cell_height: float
    count: int = 0
    score: float = 0.0
    degenerate: bool = False

    @property
    def empty_cells(self) -> int:
        """Grid positions left without an item."""
        return max(self.cols * self.rows - self.count, 0)


def _used_area(cell_w: float, cell_h: float, photo_aspect: Optional[float]) -> float:
    if photo_aspect is None:
        return cell_w * cell_h
    if cell_w / cell_h > photo_aspect:
        # Height-limited
        return cell_h * photo_aspect * cell_h
    return cell_w * (cell_w / photo_aspect)


def pack_grid(
    count: int,
    width: float,
    height: float,
    padding: float,
    *,
    photo_aspect: Optional[float] = DEFAULT_PHOTO_ASPECT,
) -> GridLayout:
    """
    Pick the best grid for `count` items on a width x height canvas.

    photo_aspect=None scores the raw cell area (cellW * cellH).

    Args:
        count: Number of items (>= 0)
        width: Canvas width in pixels
        height: Canvas height in pixels
        padding: Padding applied on each side of every cell
        photo_aspect: Nominal photo aspect for scoring, None for raw area

    Returns:
        GridLayout. count == 0 yields one full-canvas cell.

    Raises:
        ValueError: If count is negative or photo_aspect not positive

    Example:
        >>> layout = pack_grid(3, 1772, 1181, 18)
        >>> (layout.cols, layout.rows, layout.empty_cells)
        (2, 2, 1)
    """
    if count < 0:
        raise ValueError(f"count must be >= 0: {count}")
    if photo_aspect is not None and photo_aspect <= 0:
        raise ValueError(f"photo_aspect must be positive: {photo_aspect}")

    if count == 0:
        return GridLayout(cols=1, rows=1, cell_width=width, cell_height=height)

    best: Optional[GridLayout] = None
    for cols in range(1, count + 1):
        rows = math.ceil(count / cols)
        cell_w = width / cols - padding * 2
        cell_h = height / rows - padding * 2
        if cell_w <= 0 or cell_h <= 0:
            continue

        empty_cells = rows * cols - count
        score = _used_area(cell_w, cell_h, photo_aspect) - empty_cells * EMPTY_CELL_PENALTY
        if best is None or score > best.score:
            best = GridLayout(cols, rows, cell_w, cell_h, count=count, score=score)

    if best is not None:
        return best

    logger.warning(
        f"No grid with positive cells for {count} items on {width}x{height} "
        f"(padding {padding}); falling back to a single column"
    )
    return GridLayout(
        cols=1,
        rows=count,
        cell_width=max(width - padding * 2, 0),
        cell_height=max(height / count - padding * 2, 0),
        count=count,
        score=float("-inf"),
        degenerate=True,
    )


def grid_cells(
    layout: GridLayout,
    width: float,
    height: float,
    padding: float,
) -> Iterator[SlotMetrics]:
    """
    Yield cell geometry for each item in row-major order.

    Args:
        layout: Result of pack_grid()
        width: Canvas width
        height: Canvas height
        padding: Cell padding

    Yields:
        SlotMetrics per item (outer cell, inner padded cell)
    """
    outer_w = width / layout.cols
    outer_h = height / layout.rows
    for index in range(layout.count):
        col = index % layout.cols
        row = index // layout.cols
        outer = Rect(col * outer_w, row * outer_h, outer_w, outer_h)
        yield SlotMetrics(
            index=index,
            outer=outer,
            inner=outer.inset(padding),
            padding=padding,
        )
