"""
Module: layout.placement

Purpose:
    Compute where an image is drawn inside a slot.

    Fixed-card mode uses cover-fit: the image is scaled so it covers the
    slot's inner rectangle completely and the overflow is cropped by the
    slot mask. The user's pan offset is clamped to the overflow, so
    panning never reveals the padding behind the image. Rotation is a
    quarter turn about the draw center; for 90/270 the rotated footprint
    (width and height swapped) is what must cover the slot.

    Free-form sheets use contain-fit: the whole image is visible and
    centered in its cell.

Key Functions:
    - place_image(): Cover-fit placement with clamped offset
    - fit_contain(): Contain-fit placement
    - clamp_offset(): Clamp one offset axis
    - max_offsets(): Allowed pan per axis
    - footprint(): Image size after a quarter-turn rotation

Dependencies:
    - core.models: Rect, normalize_rotation

Used By:
    - layout.sheet: Upscale factor
    - cards.deck: Clamping stored offsets
    - output.compositor: Rendering
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from photo_cards.core.models import Rect, normalize_rotation


@dataclass(frozen=True)
class Placement:
    """
    Draw geometry for one image (immutable).

    draw_width/draw_height are the scaled image size before rotation;
    the image is centered on (center_x, center_y) and rotated about it.

    Attributes:
        center_x: Draw center X (inner center + offset)
        center_y: Draw center Y (inner center + offset)
        draw_width: Scaled image width (unrotated)
        draw_height: Scaled image height (unrotated)
        rotation_deg: Quarter-turn rotation, clockwise
        offset_x: Offset actually applied (after clamping)
        offset_y: Offset actually applied (after clamping)
        max_offset_x: Allowed pan on X
        max_offset_y: Allowed pan on Y
    """

    center_x: float
    center_y: float
    draw_width: float
    draw_height: float
    rotation_deg: int = 0
    offset_x: float = 0.0
    offset_y: float = 0.0
    max_offset_x: float = 0.0
    max_offset_y: float = 0.0

    @property
    def is_quarter_turned(self) -> bool:
        return self.rotation_deg in (90, 270)

    @property
    def footprint_width(self) -> float:
        """Axis-aligned width after rotation."""
        return self.draw_height if self.is_quarter_turned else self.draw_width

    @property
    def footprint_height(self) -> float:
        """Axis-aligned height after rotation."""
        return self.draw_width if self.is_quarter_turned else self.draw_height

    @property
    def draw_box(self) -> Tuple[float, float, float, float]:
        """(left, top, width, height) of the unrotated draw rectangle."""
        return (
            self.center_x - self.draw_width / 2,
            self.center_y - self.draw_height / 2,
            self.draw_width,
            self.draw_height,
        )

    @property
    def footprint_box(self) -> Tuple[float, float, float, float]:
        """(left, top, width, height) of the rotated image on the sheet."""
        return (
            self.center_x - self.footprint_width / 2,
            self.center_y - self.footprint_height / 2,
            self.footprint_width,
            self.footprint_height,
        )


def footprint(width: float, height: float, rotation_deg: float) -> Tuple[float, float]:
    """Size of a width x height image after rotation (quarter turns)."""
    if normalize_rotation(rotation_deg) in (90, 270):
        return height, width
    return width, height


def clamp_offset(value: float, max_offset: float) -> float:
    """
    Clamp an offset into [-max_offset, +max_offset].

    Idempotent, and any request beyond the limit yields exactly the limit.

    Example:
        >>> clamp_offset(250, 120)
        120
        >>> clamp_offset(-30, 120)
        -30
    """
    limit = max(max_offset, 0)
    return min(max(value, -limit), limit)


def cover_scale(inner: Rect, width: float, height: float) -> float:
    """Scale at which a width x height footprint covers `inner`."""
    return max(inner.width / width, inner.height / height)


def max_offsets(
    inner: Rect,
    image_width: float,
    image_height: float,
    rotation_deg: float = 0,
) -> Tuple[float, float]:
    """
    Allowed pan on each axis for a cover-fit image.

    Returns:
        (max_x, max_y), each >= 0
    """
    foot_w, foot_h = footprint(image_width, image_height, rotation_deg)
    scale = cover_scale(inner, foot_w, foot_h)
    return (
        max(0.0, (foot_w * scale - inner.width) / 2),
        max(0.0, (foot_h * scale - inner.height) / 2),
    )


def place_image(
    inner: Rect,
    image_width: float,
    image_height: float,
    *,
    offset_x: float = 0.0,
    offset_y: float = 0.0,
    rotation_deg: float = 0,
) -> Placement:
    """
    Cover-fit an image into a slot's inner rectangle.

    Args:
        inner: Slot inner rectangle (clip region)
        image_width: Natural image width
        image_height: Natural image height
        offset_x: Requested pan on X (pixels, same scale as inner)
        offset_y: Requested pan on Y
        rotation_deg: Rotation, snapped to a quarter turn

    Returns:
        Placement whose footprint always covers `inner`

    Raises:
        ValueError: If image dimensions are not positive

    Example:
        >>> p = place_image(Rect(0, 0, 100, 100), 400, 200, offset_x=500)
        >>> (p.draw_width, p.draw_height, p.offset_x)
        (200.0, 100.0, 50.0)
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"image dimensions must be positive: {image_width}x{image_height}")

    rotation = normalize_rotation(rotation_deg)
    foot_w, foot_h = footprint(image_width, image_height, rotation)
    scale = cover_scale(inner, foot_w, foot_h)

    max_x = max(0.0, (foot_w * scale - inner.width) / 2)
    max_y = max(0.0, (foot_h * scale - inner.height) / 2)
    applied_x = clamp_offset(offset_x, max_x)
    applied_y = clamp_offset(offset_y, max_y)

    center_x, center_y = inner.center
    return Placement(
        center_x=center_x + applied_x,
        center_y=center_y + applied_y,
        draw_width=image_width * scale,
        draw_height=image_height * scale,
        rotation_deg=rotation,
        offset_x=applied_x,
        offset_y=applied_y,
        max_offset_x=max_x,
        max_offset_y=max_y,
    )


def fit_contain(inner: Rect, image_width: float, image_height: float) -> Placement:
    """
    Contain-fit an image, centered in `inner`, no pan or rotation.

    Raises:
        ValueError: If image dimensions are not positive
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"image dimensions must be positive: {image_width}x{image_height}")

    scale = min(inner.width / image_width, inner.height / image_height)
    center_x, center_y = inner.center
    return Placement(
        center_x=center_x,
        center_y=center_y,
        draw_width=image_width * scale,
        draw_height=image_height * scale,
    )
