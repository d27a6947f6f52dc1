import itertools
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import photo_cards
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from photo_cards.config import SheetConfig  # noqa: E402
from photo_cards.core.models import PhotoImage  # noqa: E402


# Common test fixtures
@pytest.fixture
def config():
    """Default sheet configuration (1772x1181, padding 18, rounding 12)."""
    return SheetConfig()


@pytest.fixture
def make_photo():
    """Factory for PhotoImages backed by a solid-color PIL image."""
    counter = itertools.count(1)

    def _create(width=400, height=300, color="red", *, image_id=None, name=None, mode="RGB"):
        n = next(counter)
        name = name or f"photo{n}.png"
        source = Image.new(mode, (width, height), color)
        return PhotoImage(
            id=image_id or f"{name}-{n}",
            name=name,
            width=width,
            height=height,
            source=source,
        )

    return _create


@pytest.fixture
def split_photo():
    """200x100 photo, left half red and right half blue."""
    source = Image.new("RGB", (200, 100), (0, 0, 255))
    source.paste((255, 0, 0), (0, 0, 100, 100))
    return PhotoImage(id="split", name="split.png", width=200, height=100, source=source)
