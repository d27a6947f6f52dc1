"""
Module: bounds

Purpose:
    Provides the Rect and SlotMetrics dataclasses - pixel regions on a
    sheet used by slot layout, placement and compositing.

Key Functions:
    - Rect.inset(amount): Shrink a region on all sides
    - Rect.to_box(): Integer (left, top, right, bottom) box for PIL
    - SlotMetrics.center_x / center_y: Center of the padded inner region

Dependencies:
    - dataclasses (std)

Used By:
    - layout.slots, layout.grid
    - layout.placement
    - output.compositor
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Rect:
    """
    Axis-aligned region in sheet pixels.

    Coordinates may be fractional; `to_box()` rounds to whole pixels
    for rasterization.

    Attributes:
        x: Left edge
        y: Top edge
        width: Width (>= 0)
        height: Height (>= 0)

    Example:
        >>> r = Rect(0, 0, 100, 50)
        >>> r.center
        (50.0, 25.0)
        >>> r.inset(10)
        Rect(x=10, y=10, width=80, height=30)
    """

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate size on construction."""
        if self.width < 0:
            raise ValueError(f"width must be >= 0: {self.width}")
        if self.height < 0:
            raise ValueError(f"height must be >= 0: {self.height}")

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Tuple[float, float]:
        """Center point (x, y)."""
        return (self.x + self.width / 2, self.y + self.height / 2)

    def inset(self, amount: float, *, minimum: float = 0) -> Rect:
        """
        Shrink the region by `amount` on every side.

        Args:
            amount: Inset in pixels
            minimum: Floor for the resulting width/height

        Returns:
            New Rect with the same top-left shifted by amount
        """
        return Rect(
            self.x + amount,
            self.y + amount,
            max(self.width - amount * 2, minimum),
            max(self.height - amount * 2, minimum),
        )

    def to_box(self) -> Tuple[int, int, int, int]:
        """Integer (left, top, right, bottom) box, edges rounded independently."""
        return (round(self.x), round(self.y), round(self.right), round(self.bottom))


@dataclass(frozen=True, slots=True)
class SlotMetrics:
    """
    Geometry of one slot (or grid cell) on a sheet.

    Attributes:
        index: Slot index in row-major order
        outer: Full cell region
        inner: Region inset by padding (image area / clip region)
        padding: Effective padding after capping
    """

    index: int
    outer: Rect
    inner: Rect
    padding: float

    @property
    def center_x(self) -> float:
        return self.inner.center[0]

    @property
    def center_y(self) -> float:
        return self.inner.center[1]
