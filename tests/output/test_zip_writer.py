"""
Tests for output.zip_writer
"""

import zipfile

from photo_cards.output.zip_writer import ARCHIVE_NAME, write_cards_zip


class TestWriteCardsZip:
    """Tests for write_cards_zip()."""

    def test_write_cards_zip_when_entries_then_members_in_order(self, tmp_path):
        entries = [("card-2-portrait.png", b"two"), ("card-1-landscape.png", b"one")]

        path, names = write_cards_zip(entries, tmp_path / ARCHIVE_NAME)

        assert path == tmp_path / "cards.zip"
        assert names == ["card-2-portrait.png", "card-1-landscape.png"]
        with zipfile.ZipFile(path) as zf:
            assert zf.namelist() == names
            assert zf.read("card-1-landscape.png") == b"one"

    def test_write_cards_zip_when_members_then_stored_uncompressed(self, tmp_path):
        path, _ = write_cards_zip([("a.png", b"x" * 100)], tmp_path / "cards.zip")

        with zipfile.ZipFile(path) as zf:
            assert zf.getinfo("a.png").compress_type == zipfile.ZIP_STORED

    def test_write_cards_zip_when_suffix_missing_then_appended(self, tmp_path):
        path, _ = write_cards_zip([("a.png", b"x")], tmp_path / "export")
        assert path.name == "export.zip"
        assert path.exists()

    def test_write_cards_zip_when_no_entries_then_empty_archive(self, tmp_path):
        path, names = write_cards_zip([], tmp_path / "out" / "cards.zip")

        assert names == []
        with zipfile.ZipFile(path) as zf:
            assert zf.namelist() == []
