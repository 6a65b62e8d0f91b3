"""
Unit tests for config.py

Tests settings validation, JSON persistence and environment overrides.
"""

import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from lumina.api.config import LuminaSettings, get_settings_path, load_settings, save_settings
from lumina.api.core.exceptions import ConfigurationError, InvalidConfigurationError


class TestLuminaSettings(unittest.TestCase):
    """Test suite for LuminaSettings validation"""

    def test_defaults(self):
        """Test default values"""
        settings = LuminaSettings()
        self.assertEqual(settings.lock_threshold, 5.0)
        self.assertEqual(settings.slow_interval, 1.0)
        self.assertEqual(settings.fast_interval, 0.05)
        self.assertEqual(settings.top_margin, 20.0)
        self.assertEqual(settings.ephemeris, "de421.bsp")
        self.assertIs(settings.validate(), settings)

    def test_invalid_values(self):
        """Test each out-of-range value is rejected"""
        invalid = [
            LuminaSettings(lock_threshold=0),
            LuminaSettings(lock_threshold=200),
            LuminaSettings(slow_interval=0),
            LuminaSettings(fast_interval=-1),
            LuminaSettings(slow_interval=0.5, fast_interval=1.0),
            LuminaSettings(top_margin=-1),
            LuminaSettings(ephemeris=""),
        ]
        for settings in invalid:
            with self.subTest(settings=settings), self.assertRaises(InvalidConfigurationError):
                settings.validate()


class TestLoadSaveSettings(unittest.TestCase):
    """Test suite for load_settings and save_settings"""

    def setUp(self):
        """Set up temporary directory"""
        self.temp_dir = tempfile.mkdtemp()
        self.path = Path(self.temp_dir) / "settings.json"

    def tearDown(self):
        """Clean up temporary directory"""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_missing_file_gives_defaults(self):
        """Test defaults are used when no file exists"""
        self.assertEqual(load_settings(self.path, use_env=False), LuminaSettings())

    def test_round_trip(self):
        """Test saved settings load back"""
        settings = LuminaSettings(lock_threshold=3.0, fast_interval=0.1)
        written = save_settings(settings, self.path)
        self.assertEqual(written, self.path)
        self.assertEqual(load_settings(self.path, use_env=False), settings)

    def test_save_rejects_invalid(self):
        """Test invalid settings are not written"""
        with self.assertRaises(InvalidConfigurationError):
            save_settings(LuminaSettings(lock_threshold=-1), self.path)
        self.assertFalse(self.path.exists())

    def test_partial_file(self):
        """Test missing keys keep their defaults"""
        self.path.write_text(json.dumps({"lock_threshold": 2}))
        settings = load_settings(self.path, use_env=False)
        self.assertEqual(settings.lock_threshold, 2.0)
        self.assertEqual(settings.slow_interval, 1.0)

    def test_unknown_keys_ignored(self):
        """Test unknown keys are ignored with a warning"""
        self.path.write_text(json.dumps({"lock_threshold": 4, "colour": "red"}))
        with self.assertLogs("lumina.api.config", level="WARNING") as logs:
            settings = load_settings(self.path, use_env=False)
        self.assertEqual(settings.lock_threshold, 4.0)
        self.assertIn("colour", logs.output[0])

    def test_invalid_json(self):
        """Test unparseable files raise ConfigurationError"""
        self.path.write_text("{not json")
        with self.assertRaises(ConfigurationError):
            load_settings(self.path, use_env=False)

    def test_non_object(self):
        """Test a JSON list is rejected"""
        self.path.write_text("[1, 2]")
        with self.assertRaises(ConfigurationError):
            load_settings(self.path, use_env=False)

    def test_non_numeric_value(self):
        """Test non-numeric values raise InvalidConfigurationError"""
        self.path.write_text(json.dumps({"slow_interval": "soon"}))
        with self.assertRaises(InvalidConfigurationError):
            load_settings(self.path, use_env=False)

    def test_out_of_range_value(self):
        """Test out-of-range values from the file are rejected"""
        self.path.write_text(json.dumps({"lock_threshold": 0}))
        with self.assertRaises(InvalidConfigurationError):
            load_settings(self.path, use_env=False)


class TestEnvironmentOverrides(unittest.TestCase):
    """Test suite for LUMINA_* environment overrides"""

    def setUp(self):
        """Set up temporary directory"""
        self.temp_dir = tempfile.mkdtemp()
        self.path = Path(self.temp_dir) / "settings.json"

    def tearDown(self):
        """Clean up temporary directory"""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    @patch.dict(os.environ, {"LUMINA_LOCK_THRESHOLD": "2.5", "LUMINA_EPHEMERIS": "de440s.bsp"})
    def test_env_overrides_file(self):
        """Test environment values win over the file"""
        save_settings(LuminaSettings(lock_threshold=7.0), self.path)
        settings = load_settings(self.path)
        self.assertEqual(settings.lock_threshold, 2.5)
        self.assertEqual(settings.ephemeris, "de440s.bsp")

    @patch.dict(os.environ, {"LUMINA_LOCK_THRESHOLD": "2.5"})
    def test_env_ignored_when_disabled(self):
        """Test use_env=False reads the file only"""
        save_settings(LuminaSettings(lock_threshold=7.0), self.path)
        self.assertEqual(load_settings(self.path, use_env=False).lock_threshold, 7.0)

    @patch.dict(os.environ, {"LUMINA_FAST_INTERVAL": "fast"})
    def test_invalid_env_value(self):
        """Test unparseable environment values are rejected"""
        with self.assertRaises(InvalidConfigurationError):
            load_settings(self.path)


class TestSettingsPath(unittest.TestCase):
    """Test suite for get_settings_path function"""

    def test_settings_path(self):
        """Test the settings file lives in the lumina config directory"""
        temp_home = tempfile.mkdtemp()
        try:
            with patch("pathlib.Path.home", return_value=Path(temp_home)):
                path = get_settings_path()
            self.assertEqual(path, Path(temp_home) / ".config" / "lumina" / "settings.json")
            self.assertTrue(path.parent.is_dir())
        finally:
            shutil.rmtree(temp_home, ignore_errors=True)


if __name__ == "__main__":
    unittest.main()
