"""
Module: output.writer

Purpose:
    PNG encoding and deterministic export file names.

Key Functions:
    - card_filename(): "card-<ordinal>-<orientation>.png"
    - sheet_filename(): "layout-<orientation>-<count|empty>.png"
    - encode_png(): Image to PNG bytes
    - write_png(): Atomic PNG write to disk

Dependencies:
    - PIL: PNG encoding
    - tempfile (std): Atomic writes

Used By:
    - output.zip_writer
    - controller
"""

from __future__ import annotations

import logging
import tempfile
from io import BytesIO
from pathlib import Path

from PIL import Image

from photo_cards.core.models import Orientation

logger = logging.getLogger(__name__)

DEFAULT_COMPRESS_LEVEL = 6


def card_filename(ordinal: int, orientation: Orientation | str) -> str:
    """
    File name for the card at a 1-based position.

    Example:
        >>> card_filename(2, Orientation.PORTRAIT)
        'card-2-portrait.png'
    """
    return f"card-{ordinal}-{Orientation(orientation).value}.png"


def sheet_filename(orientation: Orientation | str, count: int) -> str:
    """
    File name for a free-form sheet.

    Example:
        >>> sheet_filename("landscape", 0)
        'layout-landscape-empty.png'
    """
    return f"layout-{Orientation(orientation).value}-{count or 'empty'}.png"


def encode_png(image: Image.Image, compress_level: int = DEFAULT_COMPRESS_LEVEL) -> bytes:
    """Encode an image as PNG bytes."""
    buffer = BytesIO()
    image.save(buffer, format="PNG", compress_level=compress_level)
    return buffer.getvalue()


def write_png(
    image: Image.Image,
    path: Path,
    compress_level: int = DEFAULT_COMPRESS_LEVEL,
) -> Path:
    """
    Write an image as PNG, atomically replacing any existing file.

    Args:
        image: Image to write
        path: Target path (parents are created)
        compress_level: PNG compression (1=fast, 9=small)

    Returns:
        The written path
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="wb",
        suffix=".png",
        dir=path.parent,
        delete=False,
    ) as f:
        image.save(f, format="PNG", compress_level=compress_level)
        temp_path = Path(f.name)

    temp_path.replace(path)
    logger.debug(f"Wrote {path}")
    return path
