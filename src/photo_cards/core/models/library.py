"""
Module: library

Purpose:
    Provides the Library - an insertion-ordered, id-indexed collection of
    PhotoImages. Slots refer to library entries by id only, so removal
    from the library is the single source of truth for existence.

Key Functions:
    - Library.add(image): Append an image (returns new Library)
    - Library.extend(images): Append many images
    - Library.remove(image_id): Drop an image (returns new Library)
    - Library.get(image_id): Lookup by id

Dependencies:
    - core.models.images: PhotoImage

Used By:
    - cards.autofill, cards.workspace
    - layout.sheet: Upscale factor
    - output.compositor
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Optional, Tuple

from .images import PhotoImage


class Library:
    """
    Ordered, immutable collection of PhotoImages unique by id.

    Mutating methods return a new Library, leaving the original untouched,
    so a reader holding a Library never sees a partial update.

    Example:
        >>> lib = Library().add(img_a).add(img_b)
        >>> lib.ids
        ('a', 'b')
        >>> lib.remove("a").ids
        ('b',)
    """

    __slots__ = ("_images",)

    def __init__(self, images: Iterable[PhotoImage] = ()) -> None:
        entries: Dict[str, PhotoImage] = {}
        for image in images:
            if image.id in entries:
                raise ValueError(f"Duplicate image id: {image.id}")
            entries[image.id] = image
        self._images = entries

    def add(self, image: PhotoImage) -> Library:
        """Return a new Library with `image` appended."""
        return self.extend((image,))

    def extend(self, images: Iterable[PhotoImage]) -> Library:
        """Return a new Library with `images` appended in order."""
        return Library((*self._images.values(), *images))

    def remove(self, image_id: str) -> Library:
        """Return a new Library without `image_id` (no-op if absent)."""
        if image_id not in self._images:
            return self
        return Library(img for img in self._images.values() if img.id != image_id)

    def get(self, image_id: Optional[str]) -> Optional[PhotoImage]:
        if image_id is None:
            return None
        return self._images.get(image_id)

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(self._images)

    @property
    def images(self) -> Tuple[PhotoImage, ...]:
        return tuple(self._images.values())

    def __len__(self) -> int:
        return len(self._images)

    def __contains__(self, image_id: object) -> bool:
        return image_id in self._images

    def __iter__(self) -> Iterator[PhotoImage]:
        return iter(tuple(self._images.values()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Library):
            return NotImplemented
        return self.images == other.images

    def __repr__(self) -> str:
        return f"Library({len(self)} images)"
