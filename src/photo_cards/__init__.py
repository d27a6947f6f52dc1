"""Top-level package for Photo Cards.

Provides subpackages:
- photo_cards.core – immutable data models (images, library, cards, geometry)
- photo_cards.layout – sheet geometry, grid packing, slot layout, placement
- photo_cards.cards – card collection operations, auto-fill, workspace state
- photo_cards.images – decoding of uploaded files into library images
- photo_cards.output – compositing and PNG/ZIP export
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        from importlib.metadata import version as pkg_version
        return pkg_version("photo-cards")
    except Exception:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
