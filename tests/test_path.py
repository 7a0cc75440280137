"""
Tests for panels_dl/utils/path.py

Covers:
- Query string stripping and extension derivation
- Output file naming
- Single-level directory creation and the non-directory edge case
"""

import tempfile
import unittest
from pathlib import Path

from panels_dl.exceptions import DirectoryError
from panels_dl.utils.path import (
    build_output_filename,
    ensure_directory,
    get_file_extension,
    strip_query_string,
)


class TestExtension(unittest.TestCase):
    """Tests for strip_query_string and get_file_extension."""

    def test_strip_query_string(self):
        self.assertEqual(
            strip_query_string("https://x/y/img.png?w=100&h=5"), "https://x/y/img.png"
        )
        self.assertEqual(strip_query_string("https://x/y/img.png"), "https://x/y/img.png")

    def test_only_first_question_mark_matters(self):
        self.assertEqual(strip_query_string("https://x/a.jpg?b=c?d"), "https://x/a.jpg")

    def test_extension_ignores_query(self):
        self.assertEqual(get_file_extension("https://x/y/img.png?w=100"), ".png")

    def test_extension_from_last_component(self):
        self.assertEqual(get_file_extension("https://x/dir.v2/photo.jpeg"), ".jpeg")
        self.assertEqual(get_file_extension("https://x/archive.tar.gz"), ".gz")

    def test_no_extension(self):
        self.assertEqual(get_file_extension("https://x/dir.v2/photo"), "")
        self.assertEqual(get_file_extension("https://x/images/"), "")
        self.assertEqual(get_file_extension("https://x/photo?fmt=a.jpg"), "")


class TestBuildOutputFilename(unittest.TestCase):
    """Tests for build_output_filename."""

    def test_index_and_extension(self):
        self.assertEqual(build_output_filename(7, ".jpg"), "7.jpg")

    def test_index_only(self):
        self.assertEqual(build_output_filename(7, ""), "7")

    def test_unsafe_characters_removed(self):
        name = build_output_filename(3, '.jp<g>"')
        self.assertTrue(name.startswith("3.jp"))
        for ch in '<>"':
            self.assertNotIn(ch, name)


class TestEnsureDirectory(unittest.TestCase):
    """Tests for ensure_directory."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_creates_missing_directory(self):
        target = self.root / "downloads"
        self.assertTrue(ensure_directory(target))
        self.assertTrue(target.is_dir())

    def test_existing_directory_reused(self):
        target = self.root / "downloads"
        target.mkdir()
        (target / "old.jpg").write_bytes(b"keep")

        self.assertFalse(ensure_directory(target))
        self.assertEqual((target / "old.jpg").read_bytes(), b"keep")

    def test_regular_file_in_the_way(self):
        target = self.root / "downloads"
        target.write_text("not a directory")

        with self.assertRaises(DirectoryError):
            ensure_directory(target)

    def test_missing_parent_not_created(self):
        target = self.root / "missing" / "downloads"

        with self.assertRaises(DirectoryError):
            ensure_directory(target)
        self.assertFalse((self.root / "missing").exists())


if __name__ == "__main__":
    unittest.main()
