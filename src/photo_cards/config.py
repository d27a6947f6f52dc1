"""
Module: photo_cards.config

Purpose:
    Configuration for sheet geometry, card styling and compositing.
    Immutable configuration with validation on construction.

Key Classes:
    - SheetConfig: Physical sheet size, resolution and card styling

Key Functions:
    - parse_hex_color(): Validate a hex RGB string into an (r, g, b) tuple

Dependencies:
    - dataclasses (std)
    - PIL.ImageColor: Color string parsing

Used By:
    - photo_cards.layout.sheet: Pixel size resolution
    - photo_cards.output.compositor: Rendering
    - photo_cards.cards.workspace: Default card styling
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from PIL import ImageColor

# 10 x 15 cm print at 300 DPI
DEFAULT_SHEET_WIDTH_CM = 15.0
DEFAULT_SHEET_HEIGHT_CM = 10.0
DEFAULT_DPI = 300
CM_PER_INCH = 2.54

DEFAULT_PADDING_PX = 18
DEFAULT_ROUNDING_PX = 12
DEFAULT_BACKGROUND = "#f4edde"

MAX_PADDING_PX = 80
MAX_ROUNDING_PX = 120
DEFAULT_MAX_SCALE = 4.0

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def parse_hex_color(value: str) -> Tuple[int, int, int]:
    """
    Parse a hex RGB color string.

    Args:
        value: Color like "#f4edde" or "#fff"

    Returns:
        (r, g, b) tuple of ints in 0..255

    Raises:
        ValueError: If value is not a hex RGB string

    Example:
        >>> parse_hex_color("#f4edde")
        (244, 237, 222)
    """
    if not isinstance(value, str) or not _HEX_COLOR.match(value):
        raise ValueError(f"background color must be a hex RGB string: {value!r}")
    return ImageColor.getrgb(value)[:3]


@dataclass(frozen=True)
class SheetConfig:
    """
    Configuration for sheets and card rendering (immutable).

    Attributes:
        sheet_width_cm: Physical width of the landscape sheet
        sheet_height_cm: Physical height of the landscape sheet
        dpi: Pixels per inch used to resolve the physical size
        padding: Padding around each slot in pixels (0..80)
        rounding: Corner radius of slot masks in pixels (0..120)
        background_color: Default card background (hex RGB)
        max_scale: Upper bound of the per-card upscale factor
        border_rgba: Color of the sheet edge marker
        border_width: Width of the sheet edge marker in pixels

    Example:
        >>> config = SheetConfig()
        >>> config.base_size
        (1772, 1181)
    """

    sheet_width_cm: float = DEFAULT_SHEET_WIDTH_CM
    sheet_height_cm: float = DEFAULT_SHEET_HEIGHT_CM
    dpi: int = DEFAULT_DPI

    # Card styling
    padding: int = DEFAULT_PADDING_PX
    rounding: int = DEFAULT_ROUNDING_PX
    background_color: str = DEFAULT_BACKGROUND

    # Upscaling
    max_scale: float = DEFAULT_MAX_SCALE

    # Edge marker, rgba(20, 20, 20, 0.08)
    border_rgba: Tuple[int, int, int, int] = (20, 20, 20, 20)
    border_width: int = 2

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.sheet_width_cm <= 0 or self.sheet_height_cm <= 0:
            raise ValueError(
                f"sheet size must be positive: {self.sheet_width_cm}x{self.sheet_height_cm}"
            )
        if self.dpi <= 0:
            raise ValueError(f"dpi must be positive: {self.dpi}")
        if not 0 <= self.padding <= MAX_PADDING_PX:
            raise ValueError(f"padding must be in 0..{MAX_PADDING_PX}: {self.padding}")
        if not 0 <= self.rounding <= MAX_ROUNDING_PX:
            raise ValueError(f"rounding must be in 0..{MAX_ROUNDING_PX}: {self.rounding}")
        if self.max_scale < 1:
            raise ValueError(f"max_scale must be >= 1: {self.max_scale}")
        if self.border_width < 0:
            raise ValueError(f"border_width must be non-negative: {self.border_width}")
        parse_hex_color(self.background_color)

    @property
    def base_size(self) -> Tuple[int, int]:
        """Landscape sheet size in pixels at base resolution."""
        width = round(self.sheet_width_cm / CM_PER_INCH * self.dpi)
        height = round(self.sheet_height_cm / CM_PER_INCH * self.dpi)
        return width, height

    @property
    def padding_mm(self) -> float:
        """Padding expressed as printed millimetres."""
        return self.padding / self.dpi * CM_PER_INCH * 10
