"""
Module: photo_cards.controller

Purpose:
    Orchestrate exports.
    Snapshot → Render cards (thread pool) → Encode PNG → Write cards.zip

Key Functions:
    - export_cards(): Every card into cards.zip
    - export_card(): One card as a PNG file
    - export_sheet(): Free-form sheet as a PNG file
    - render_cards(): Ordered (filename, PNG bytes) for a snapshot

Key Classes:
    - ExportResult: Paths and counts of an export
    - ExportError: Exception for export failures

Dependencies:
    - concurrent.futures: Parallel card rendering
    - output.compositor, output.writer, output.zip_writer

Used By:
    - Callers holding a Workspace, typically inside Workspace.rendering()
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from photo_cards.cards.deck import find_card
from photo_cards.cards.workspace import WorkspaceState
from photo_cards.config import SheetConfig
from photo_cards.core.models import Card, Library, Orientation, PhotoImage

from .output.compositor import render_card, render_sheet
from .output.writer import card_filename, encode_png, sheet_filename, write_png
from .output.zip_writer import ARCHIVE_NAME, write_cards_zip

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


class ExportError(Exception):
    """Error writing export output."""
    pass


@dataclass(frozen=True)
class ExportResult:
    """
    Outcome of a multi-card export (immutable).

    Attributes:
        archive_path: Written archive, None if no card was rendered
        filenames: Archive members in card order
        card_count: Cards in the exported snapshot
        cancelled: True if the export stopped before the last card
        elapsed: Wall time in seconds

    Example:
        >>> result = export_cards(state, Path("out"))
        >>> result.filenames
        ('card-1-landscape.png', 'card-2-landscape.png')
    """

    archive_path: Optional[Path]
    filenames: Tuple[str, ...]
    card_count: int
    cancelled: bool = False
    elapsed: float = 0.0

    @property
    def exported_count(self) -> int:
        return len(self.filenames)


def _render_entry(
    ordinal: int,
    card: Card,
    library: Library,
    config: SheetConfig,
    cancel_event: Optional[threading.Event],
) -> Optional[Tuple[str, bytes]]:
    if cancel_event is not None and cancel_event.is_set():
        return None
    image = render_card(card, library, config)
    return card_filename(ordinal, card.orientation), encode_png(image)


def render_cards(
    state: WorkspaceState,
    config: Optional[SheetConfig] = None,
    *,
    cancel_event: Optional[threading.Event] = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> List[Tuple[str, bytes]]:
    """
    Render every card of a snapshot to named PNG bytes.

    Cards are independent, so they render concurrently. When the cancel
    event is set, cards not yet started are skipped and the contiguous
    prefix of finished cards is returned.

    Args:
        state: Snapshot to render
        config: Sheet configuration
        cancel_event: Optional event checked before each card
        max_workers: Render threads

    Returns:
        (filename, png_bytes) in card order
    """
    config = config or SheetConfig()
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(_render_entry, ordinal, card, state.library, config, cancel_event)
            for ordinal, card in enumerate(state.cards, start=1)
        ]
        results = [future.result() for future in futures]

    entries: List[Tuple[str, bytes]] = []
    for entry in results:
        if entry is None:
            break
        entries.append(entry)
    return entries


def export_cards(
    state: WorkspaceState,
    output_dir: Path,
    config: Optional[SheetConfig] = None,
    *,
    cancel_event: Optional[threading.Event] = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
    archive_name: str = ARCHIVE_NAME,
) -> ExportResult:
    """
    Export every card of a snapshot into one archive.

    Pipeline:
    1. Render cards in parallel (each at its own upscale factor)
    2. Encode to PNG named card-<n>-<orientation>.png
    3. Write the archive to output_dir / archive_name

    A cancelled export still writes the cards finished before
    cancellation.

    Args:
        state: Snapshot to export
        output_dir: Destination directory
        config: Sheet configuration
        cancel_event: Optional cancellation signal
        max_workers: Render threads
        archive_name: Archive file name

    Returns:
        ExportResult

    Raises:
        ExportError: If the archive cannot be written
    """
    start_time = time.perf_counter()
    logger.info(f"Exporting {len(state.cards)} cards to {output_dir}")

    entries = render_cards(state, config, cancel_event=cancel_event, max_workers=max_workers)
    cancelled = len(entries) < len(state.cards)
    if cancelled:
        logger.warning(f"Export cancelled after {len(entries)} of {len(state.cards)} cards")

    archive_path: Optional[Path] = None
    names: List[str] = []
    if entries:
        try:
            archive_path, names = write_cards_zip(entries, output_dir / archive_name)
        except OSError as e:
            raise ExportError(f"Failed to write archive: {e}") from e

    elapsed = time.perf_counter() - start_time
    logger.info(f"Export completed in {elapsed:.2f}s")

    return ExportResult(
        archive_path=archive_path,
        filenames=tuple(names),
        card_count=len(state.cards),
        cancelled=cancelled,
        elapsed=elapsed,
    )


def export_card(
    state: WorkspaceState,
    card_id: str,
    output_dir: Path,
    config: Optional[SheetConfig] = None,
) -> Path:
    """
    Export one card as a PNG file.

    Raises:
        KeyError: If the card does not exist
        ExportError: If the file cannot be written
    """
    index = find_card(state.cards, card_id)
    card = state.cards[index]
    image = render_card(card, state.library, config)
    path = output_dir / card_filename(index + 1, card.orientation)
    try:
        return write_png(image, path)
    except OSError as e:
        raise ExportError(f"Failed to write {path}: {e}") from e


def export_sheet(
    images: Sequence[PhotoImage],
    orientation: Orientation | str,
    output_dir: Path,
    config: Optional[SheetConfig] = None,
    *,
    background_color: Optional[str] = None,
) -> Path:
    """
    Export the free-form sheet as a PNG file.

    Raises:
        ExportError: If the file cannot be written
    """
    image = render_sheet(images, orientation, config, background_color=background_color)
    path = output_dir / sheet_filename(orientation, len(images))
    try:
        return write_png(image, path)
    except OSError as e:
        raise ExportError(f"Failed to write {path}: {e}") from e
