"""
Module: output.zip_writer

Purpose:
    Bundle rendered card PNGs into a single ZIP archive.

    Structure:
        cards.zip
        ├── card-1-landscape.png
        ├── card-2-landscape.png
        └── card-3-portrait.png

Key Functions:
    - write_cards_zip(): Write (filename, PNG bytes) entries to an archive

Dependencies:
    - zipfile (std)

Used By:
    - controller: export_cards()
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Iterable, List, Tuple

logger = logging.getLogger(__name__)

ARCHIVE_NAME = "cards.zip"


def write_cards_zip(
    entries: Iterable[Tuple[str, bytes]],
    output_path: Path,
) -> Tuple[Path, List[str]]:
    """
    Write PNG entries to a ZIP archive.

    Entries are written in the order given; PNG data is already
    compressed, so members are stored rather than deflated.

    Args:
        entries: (filename, png_bytes) pairs
        output_path: Path for the archive (".zip" is appended if missing)

    Returns:
        (archive path, member names in order)

    Raises:
        OSError: If the archive cannot be written
    """
    if output_path.suffix != ".zip":
        output_path = output_path.with_suffix(".zip")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Creating ZIP export at {output_path}")

    names: List[str] = []
    with zipfile.ZipFile(output_path, "w", zipfile.ZIP_STORED) as zf:
        for name, data in entries:
            zf.writestr(name, data)
            names.append(name)

    logger.info(f"Wrote {len(names)} cards to {output_path}")
    return output_path, names
