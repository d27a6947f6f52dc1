"""
Module: images

Purpose:
    Provides the PhotoImage dataclass - a decoded photo with known pixel
    dimensions. Owned by the Library and referenced from slots by id.

Dependencies:
    - dataclasses (std)
    - PIL.Image (TYPE_CHECKING only)

Used By:
    - core.models.library
    - images.loader: Produces PhotoImages
    - output.compositor: Draws PhotoImage.source
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from PIL import Image


@dataclass(frozen=True)
class PhotoImage:
    """
    Decoded photo (immutable).

    The pixel source is shared read-only between renders and is not part
    of equality or repr.

    Attributes:
        id: Unique identifier within a Library
        name: Original file name
        width: Natural width in pixels
        height: Natural height in pixels
        source: Decoded PIL image

    Invariants:
        - width > 0 and height > 0
    """

    id: str
    name: str
    width: int
    height: int
    source: "Image.Image | Any" = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("id must be non-empty")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"image dimensions must be positive: {self.width}x{self.height}"
            )

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def close(self) -> None:
        """Release the underlying pixel source."""
        if self.source is not None:
            self.source.close()
