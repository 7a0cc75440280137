"""
Tests for panels_dl/storage/config_manager.py and panels_dl/models/config.py

Covers:
- Defaults when no config file exists
- INI values and CLI overrides
- Migration of missing keys
- Validation errors surfacing as ConfigurationError
"""

import configparser
import tempfile
import unittest
from pathlib import Path

from panels_dl.exceptions import ConfigurationError
from panels_dl.models.config import DEFAULT_OUTPUT_DIR, DEFAULT_SOURCE_URL, FetchConfig
from panels_dl.storage.config_manager import ConfigManager


class TestConfigManager(unittest.TestCase):
    """Tests for ConfigManager."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.config_file = Path(self._tmp.name) / "panels-dl" / "config.ini"

    def tearDown(self):
        self._tmp.cleanup()

    def write_ini(self, text: str) -> None:
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(text, encoding="utf-8")

    def test_defaults_without_file(self):
        config = ConfigManager(self.config_file).load_config()

        self.assertEqual(config.source_url, DEFAULT_SOURCE_URL)
        self.assertEqual(config.output_dir, DEFAULT_OUTPUT_DIR)
        self.assertFalse(config.sort_entries)
        self.assertEqual(config.timeout, 60)
        self.assertFalse(self.config_file.exists())

    def test_reads_ini_values(self):
        self.write_ini(
            "[DEFAULT]\n"
            "source_url = https://example.com/manifest.json\n"
            "output_dir = wallpapers\n"
            "sort_entries = true\n"
            "timeout = 30\n"
        )

        config = ConfigManager(self.config_file).load_config()

        self.assertEqual(config.source_url, "https://example.com/manifest.json")
        self.assertEqual(config.output_dir, "wallpapers")
        self.assertTrue(config.sort_entries)
        self.assertEqual(config.timeout, 30)

    def test_cli_options_override_file(self):
        self.write_ini(
            "[DEFAULT]\n"
            "source_url = https://example.com/manifest.json\n"
            "output_dir = wallpapers\n"
            "sort_entries = false\n"
            "timeout = 30\n"
        )

        config = ConfigManager(self.config_file).load_config(
            {"output_dir": "elsewhere", "dry_run": True}
        )

        self.assertEqual(config.output_dir, "elsewhere")
        self.assertEqual(config.source_url, "https://example.com/manifest.json")
        self.assertTrue(config.dry_run)

    def test_missing_keys_are_migrated(self):
        self.write_ini("[DEFAULT]\noutput_dir = wallpapers\n")

        config = ConfigManager(self.config_file).load_config()

        self.assertEqual(config.output_dir, "wallpapers")
        parser = configparser.ConfigParser(interpolation=None)
        parser.read(self.config_file, encoding="utf-8")
        self.assertEqual(parser["DEFAULT"]["source_url"], DEFAULT_SOURCE_URL)
        self.assertEqual(parser["DEFAULT"]["sort_entries"], "false")
        self.assertEqual(parser["DEFAULT"]["timeout"], "60")

    def test_invalid_url_raises(self):
        with self.assertRaises(ConfigurationError):
            ConfigManager(self.config_file).load_config(
                {"source_url": "ftp://example.com/manifest"}
            )

    def test_invalid_timeout_in_file_raises(self):
        self.write_ini("[DEFAULT]\ntimeout = soon\n")

        with self.assertRaises(ConfigurationError):
            ConfigManager(self.config_file).load_config()

    def test_out_of_range_timeout_raises(self):
        with self.assertRaises(ConfigurationError):
            ConfigManager(self.config_file).load_config({"timeout": 0})

    def test_unparseable_file_raises(self):
        self.write_ini("this is not an ini file\n")

        with self.assertRaises(ConfigurationError):
            ConfigManager(self.config_file).load_config()

    def test_save_new_config_round_trip(self):
        manager = ConfigManager(self.config_file)
        manager.save_new_config({"output_dir": "wallpapers"})

        config = ConfigManager(self.config_file).load_config()

        self.assertEqual(config.output_dir, "wallpapers")
        self.assertEqual(config.source_url, DEFAULT_SOURCE_URL)


class TestFetchConfig(unittest.TestCase):
    """Tests for FetchConfig validation."""

    def test_ini_keys_exclude_internal_fields(self):
        self.assertEqual(
            FetchConfig.get_ini_keys(),
            {"source_url", "output_dir", "sort_entries", "timeout"},
        )

    def test_empty_output_dir_rejected(self):
        with self.assertRaises(ValueError):
            FetchConfig(output_dir="  ")


if __name__ == "__main__":
    unittest.main()
