"""
Module: images.loader

Purpose:
    Decode uploaded files into PhotoImages for the library.
    Only inputs whose media type starts with "image/" are accepted.
    Each input decodes independently on a thread pool; a failure drops
    that input only. Results are returned in submission order regardless
    of which decode finishes first.

Key Functions:
    - load_images(): Decode a batch
    - decode_image(): Decode a single input

Key Classes:
    - ImageInput: Name, bytes or path, optional media type
    - LoadReport: Decoded images plus per-item failures
    - DecodeFailure: Exception describing one failed input

Dependencies:
    - PIL: Decoding, EXIF orientation
    - concurrent.futures: Thread pool
    - mimetypes (std): Media type from file name

Used By:
    - cards.workspace: Workspace.add_images(report.images)
"""

from __future__ import annotations

import logging
import mimetypes
import uuid
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from PIL import Image, ImageOps

from photo_cards.core.models import PhotoImage

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


class DecodeFailure(Exception):
    """An input could not be decoded as an image."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Failed to load image {name!r}: {reason}")
        self.name = name
        self.reason = reason


@dataclass(frozen=True)
class ImageInput:
    """
    One uploaded file.

    Attributes:
        name: File name (used for the image id and media type guess)
        data: Raw bytes or a path to read
        media_type: Declared media type, guessed from name when None

    Example:
        >>> ImageInput.from_path(Path("beach.jpg")).resolved_media_type
        'image/jpeg'
    """

    name: str
    data: Union[bytes, Path]
    media_type: Optional[str] = None

    @classmethod
    def from_path(cls, path: Path, media_type: Optional[str] = None) -> ImageInput:
        return cls(name=path.name, data=path, media_type=media_type)

    @property
    def resolved_media_type(self) -> str:
        if self.media_type:
            return self.media_type
        guessed, _ = mimetypes.guess_type(self.name)
        return guessed or "application/octet-stream"

    @property
    def is_image(self) -> bool:
        return self.resolved_media_type.startswith("image/")

    def read_bytes(self) -> bytes:
        if isinstance(self.data, (bytes, bytearray)):
            return bytes(self.data)
        return Path(self.data).read_bytes()


@dataclass(frozen=True)
class LoadReport:
    """
    Result of decoding a batch.

    Attributes:
        images: Decoded images in submission order
        failures: One DecodeFailure per input that could not be decoded
        skipped: Names of inputs rejected for a non-image media type
    """

    images: Tuple[PhotoImage, ...] = ()
    failures: Tuple[DecodeFailure, ...] = ()
    skipped: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures


def _build_id(name: str) -> str:
    return f"{name}-{uuid.uuid4().hex[:10]}"


def decode_image(item: ImageInput) -> PhotoImage:
    """
    Decode one input fully into memory.

    EXIF orientation is applied, so width/height are the displayed size.
    Palette and other modes are converted to RGB (RGBA if transparent).

    Raises:
        DecodeFailure: If the input cannot be read or decoded
    """
    try:
        raw = item.read_bytes()
        with Image.open(BytesIO(raw)) as opened:
            image = ImageOps.exif_transpose(opened)
            if image.mode not in ("RGB", "RGBA"):
                has_alpha = "A" in image.getbands() or "transparency" in image.info
                image = image.convert("RGBA" if has_alpha else "RGB")
            image.load()
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise DecodeFailure(item.name, str(e)) from e

    return PhotoImage(
        id=_build_id(item.name),
        name=item.name,
        width=image.width,
        height=image.height,
        source=image,
    )


def load_images(
    inputs: Iterable[ImageInput],
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> LoadReport:
    """
    Decode a batch of inputs concurrently.

    Args:
        inputs: Uploaded files
        max_workers: Decode threads

    Returns:
        LoadReport with images in submission order and per-item failures

    Example:
        >>> report = load_images([ImageInput.from_path(p) for p in paths])
        >>> workspace.add_images(report.images)
    """
    items = list(inputs)
    accepted = [item for item in items if item.is_image]
    skipped = tuple(item.name for item in items if not item.is_image)
    for name in skipped:
        logger.debug(f"Skipping non-image input: {name}")

    if not accepted:
        return LoadReport(skipped=skipped)

    decoded: Dict[int, PhotoImage] = {}
    failed: Dict[int, DecodeFailure] = {}

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(decode_image, item): index
            for index, item in enumerate(accepted)
        }
        for future in as_completed(futures):
            index = futures[future]
            try:
                decoded[index] = future.result()
            except DecodeFailure as e:
                logger.warning(str(e))
                failed[index] = e

    images: List[PhotoImage] = [decoded[i] for i in sorted(decoded)]
    failures = tuple(failed[i] for i in sorted(failed))
    logger.info(
        f"Loaded {len(images)} of {len(accepted)} images"
        + (f" ({len(failures)} failed)" if failures else "")
    )
    return LoadReport(images=tuple(images), failures=failures, skipped=skipped)
