"""
Unit tests for the CLI

Tests the moon, track, location and settings commands with a fake provider
and temporary config files.
"""

import json
import math
import re
import shutil
import tempfile
import unittest
from datetime import UTC, datetime, timedelta
from pathlib import Path
from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from lumina.api.astronomy.provider import MoonIllumination, MoonPosition, MoonTimes
from lumina.api.config import LuminaSettings, load_settings
from lumina.api.core.exceptions import CelestialProviderError, InvalidLocationError
from lumina.api.location.observer import ObserverLocation
from lumina.api.session import NullPresenter, TelemetrySession
from lumina.api.sensors import SweepHeadingSource
from lumina.cli.commands.track import run_tracking
from lumina.cli.main import app
from lumina.cli.utils.state import resolve_position


NEW_YORK = ObserverLocation(latitude=40.7128, longitude=-74.0060, name="New York")


class FakeProvider:
    """Provider with the Moon at 103° azimuth, 35° altitude, full."""

    def __init__(self, *args, **kwargs):
        now = datetime.now(UTC)
        self.rise = now - timedelta(hours=4)
        self.set = now + timedelta(hours=4)

    def position(self, when, latitude, longitude):
        return MoonPosition(math.radians(103.0 - 180.0), math.radians(35.0), 384400.0)

    def illumination(self, when):
        return MoonIllumination(fraction=0.99, phase=0.5)

    def times(self, when, latitude, longitude):
        return MoonTimes(rise=self.rise, set=self.set)


class BrokenProvider(FakeProvider):
    """Provider that cannot compute anything."""

    def position(self, when, latitude, longitude):
        raise CelestialProviderError("no ephemeris")


class CliTestCase(unittest.TestCase):
    """Base class isolating CLI tests from the user's config"""

    def setUp(self):
        """Set up runner and temporary config files"""
        self.runner = CliRunner()
        self.temp_dir = tempfile.mkdtemp()
        self.settings_path = Path(self.temp_dir) / "settings.json"
        self.location_path = Path(self.temp_dir) / "observer_location.json"

        patchers = [
            patch("lumina.api.config.get_settings_path", return_value=self.settings_path),
            patch("lumina.cli.commands.settings.get_settings_path", return_value=self.settings_path),
            patch("lumina.api.location.observer.get_location_path", return_value=self.location_path),
            patch("lumina.cli.commands.location.get_location_path", return_value=self.location_path),
            patch("lumina.api.location.observer._current_location", None),
        ]
        for patcher in patchers:
            patcher.start()
            self.addCleanup(patcher.stop)

    def tearDown(self):
        """Clean up temporary directory"""
        shutil.rmtree(self.temp_dir, ignore_errors=True)


class TestMainApp(CliTestCase):
    """Test suite for top-level commands"""

    def test_version(self):
        """Test version output"""
        result = self.runner.invoke(app, ["version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("0.1.0", result.output)

    def test_help_lists_commands(self):
        """Test help lists every command group"""
        result = self.runner.invoke(app, ["--help"])
        self.assertEqual(result.exit_code, 0)
        for name in ("location", "moon", "settings", "track"):
            self.assertIn(name, result.output)


class TestMoonCommand(CliTestCase):
    """Test suite for the moon command"""

    @patch("lumina.cli.commands.moon.SkyfieldMoonProvider", FakeProvider)
    def test_moon_json(self):
        """Test JSON report"""
        result = self.runner.invoke(app, ["moon", "--lat", "40.7128", "--lon=-74.0060", "--json"])
        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(result.output)
        self.assertEqual(data["phase_name"], "Full Moon")
        self.assertAlmostEqual(data["azimuth_deg"], 103.0)
        self.assertAlmostEqual(data["progress"], 0.5, places=2)
        self.assertIsNotNone(data["zenith_time"])

    @patch("lumina.cli.commands.moon.SkyfieldMoonProvider", FakeProvider)
    def test_moon_table(self):
        """Test human-readable report"""
        result = self.runner.invoke(app, ["moon", "--lat", "40.7128", "--lon=-74.0060"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Look ESE", result.output)
        self.assertIn("Full Moon", result.output)
        self.assertIn("99%", result.output)

    @patch("lumina.cli.commands.moon.SkyfieldMoonProvider", FakeProvider)
    def test_moon_uses_saved_location(self):
        """Test the saved location is used when no coordinates are given"""
        with patch("lumina.cli.utils.state.get_observer_location", return_value=NEW_YORK):
            result = self.runner.invoke(app, ["moon", "--json"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output)["latitude"], 40.7128)

    def test_moon_without_location(self):
        """Test a helpful error when no location is known"""
        with patch("lumina.cli.utils.state.get_observer_location", return_value=None):
            result = self.runner.invoke(app, ["moon"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("No location set", result.output)

    def test_moon_half_coordinates(self):
        """Test --lat without --lon is rejected"""
        result = self.runner.invoke(app, ["moon", "--lat", "40.7128"])
        self.assertEqual(result.exit_code, 1)

    def test_moon_out_of_range_latitude(self):
        """Test an out-of-range latitude exits with an error"""
        result = self.runner.invoke(app, ["moon", "--lat", "100", "--lon", "0"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Latitude must be between -90 and +90 degrees", result.output)

    def test_moon_out_of_range_longitude(self):
        """Test an out-of-range longitude exits with an error"""
        result = self.runner.invoke(app, ["moon", "--lat", "0", "--lon", "200"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Longitude must be between -180 and +180 degrees", result.output)

    @patch("lumina.cli.commands.moon.SkyfieldMoonProvider", BrokenProvider)
    def test_moon_provider_failure(self):
        """Test provider failures exit with an error"""
        result = self.runner.invoke(app, ["moon", "--lat", "0", "--lon", "0"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Could not compute Moon data", result.output)


class TestTrackCommand(CliTestCase):
    """Test suite for the track command"""

    def test_track_without_location(self):
        """Test tracking needs a location"""
        with patch("lumina.cli.utils.state.get_observer_location", return_value=None):
            result = self.runner.invoke(app, ["track", "--duration", "0.1"])
        self.assertEqual(result.exit_code, 1)

    def test_track_out_of_range_latitude(self):
        """Test tracking rejects an out-of-range latitude"""
        result = self.runner.invoke(app, ["track", "--lat", "-91", "--lon", "0", "-d", "0.1"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Latitude must be between -90 and +90 degrees", result.output)

    @patch("lumina.cli.commands.track.SkyfieldMoonProvider", FakeProvider)
    def test_track_runs_for_duration(self):
        """Test a short tracking run completes"""
        result = self.runner.invoke(
            app, ["track", "--lat", "40.7128", "--lon=-74.0060", "--heading", "100", "--sweep", "0", "-d", "0.2"]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("TARGET LOCKED", result.output)

    @patch("lumina.cli.commands.track.SkyfieldMoonProvider", BrokenProvider)
    def test_track_provider_failure(self):
        """Test a run without Moon data exits with an error"""
        result = self.runner.invoke(app, ["track", "--lat", "0", "--lon", "0", "-d", "0.1"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("No Moon data", result.output)


class TestResolvePosition(CliTestCase):
    """Test suite for resolve_position function"""

    def test_explicit_coordinates(self):
        """Test given coordinates are used as-is"""
        position = resolve_position(40.7128, -74.0060)
        self.assertEqual(position.latitude, 40.7128)
        self.assertEqual(position.longitude, -74.0060)

    def test_range_limits_accepted(self):
        """Test the poles and the antimeridian are valid"""
        self.assertEqual(resolve_position(90.0, 180.0).latitude, 90.0)
        self.assertEqual(resolve_position(-90.0, -180.0).longitude, -180.0)

    def test_out_of_range(self):
        """Test out-of-range coordinates raise InvalidLocationError"""
        for lat, lon in ((100.0, 0.0), (-90.5, 0.0), (0.0, 180.5), (0.0, -200.0)):
            with self.subTest(lat=lat, lon=lon), self.assertRaises(InvalidLocationError):
                resolve_position(lat, lon)

    def test_saved_location(self):
        """Test the saved location is used without coordinates"""
        with patch("lumina.cli.utils.state.get_observer_location", return_value=NEW_YORK):
            self.assertEqual(resolve_position(None, None).latitude, 40.7128)


class TestRunTracking(unittest.IsolatedAsyncioTestCase):
    """Test suite for run_tracking coroutine"""

    async def test_sweep_engages_lock(self):
        """Test a sweeping heading passes through the Moon and locks"""
        settings = LuminaSettings(slow_interval=0.1, fast_interval=0.01)
        session = TelemetrySession(FakeProvider(), presenter=NullPresenter(), settings=settings)
        effects = []
        session.tracker.add_listener(effects.append)
        source = SweepHeadingSource(start=90.0, degrees_per_second=100.0)

        await run_tracking(session, source, 40.7128, -74.0060, duration=0.3)

        self.assertIsNotNone(session.snapshot)
        self.assertEqual(session.position.latitude, 40.7128)
        self.assertIn("engage", effects)
        self.assertGreater(session.heading, 90.0)


class TestLocationCommands(CliTestCase):
    """Test suite for location commands"""

    def test_set_and_show(self):
        """Test saving and showing a location"""
        result = self.runner.invoke(app, ["location", "set", "--lat", "40.7128", "--lon=-74.0060", "--name", "NYC"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(self.location_path.exists())

        result = self.runner.invoke(app, ["location", "show", "--json"])
        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(result.output)
        self.assertEqual(data["name"], "NYC")
        self.assertEqual(data["longitude"], -74.006)

    def test_set_invalid_latitude(self):
        """Test out-of-range latitude is rejected"""
        result = self.runner.invoke(app, ["location", "set", "--lat", "95", "--lon", "0"])
        self.assertEqual(result.exit_code, 1)
        self.assertFalse(self.location_path.exists())

    def test_help_sorted(self):
        """Test location subcommands are listed alphabetically"""
        result = self.runner.invoke(app, ["location", "--help"])
        self.assertEqual(result.exit_code, 0, result.output)
        positions = [re.search(rf"\b{name}\b", result.output).start() for name in ("clear", "search", "set", "show")]
        self.assertEqual(positions, sorted(positions))

    def test_show_without_location(self):
        """Test showing when nothing is saved"""
        result = self.runner.invoke(app, ["location", "show"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("No location saved", result.output)

    def test_clear(self):
        """Test clearing removes the saved file"""
        self.runner.invoke(app, ["location", "set", "--lat", "1", "--lon", "2"])
        result = self.runner.invoke(app, ["location", "clear"])
        self.assertEqual(result.exit_code, 0)
        self.assertFalse(self.location_path.exists())

    @patch("lumina.cli.commands.location.geocode_location", new_callable=AsyncMock)
    def test_search_saves(self, mock_geocode):
        """Test a search result is saved"""
        mock_geocode.return_value = NEW_YORK
        result = self.runner.invoke(app, ["location", "search", "New York"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("New York", result.output)
        self.assertTrue(self.location_path.exists())

    @patch("lumina.cli.commands.location.geocode_location", new_callable=AsyncMock)
    def test_search_no_save(self, mock_geocode):
        """Test --no-save leaves the config untouched"""
        mock_geocode.return_value = NEW_YORK
        result = self.runner.invoke(app, ["location", "search", "New York", "--no-save"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertFalse(self.location_path.exists())


class TestSettingsCommands(CliTestCase):
    """Test suite for settings commands"""

    def test_show_json(self):
        """Test showing default settings"""
        result = self.runner.invoke(app, ["settings", "show", "--json"])
        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(result.output)
        self.assertEqual(data["lock_threshold"], 5.0)
        self.assertEqual(data["config_file"], str(self.settings_path))

    def test_set(self):
        """Test changing a setting"""
        result = self.runner.invoke(app, ["settings", "set", "--lock-threshold", "3"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(load_settings(self.settings_path, use_env=False).lock_threshold, 3.0)

    def test_set_nothing(self):
        """Test set without options is an error"""
        result = self.runner.invoke(app, ["settings", "set"])
        self.assertEqual(result.exit_code, 1)

    def test_set_invalid(self):
        """Test invalid combinations are rejected"""
        result = self.runner.invoke(app, ["settings", "set", "--fast-interval", "5"])
        self.assertEqual(result.exit_code, 1)
        self.assertFalse(self.settings_path.exists())

    def test_reset(self):
        """Test reset writes defaults"""
        self.runner.invoke(app, ["settings", "set", "--lock-threshold", "3"])
        result = self.runner.invoke(app, ["settings", "reset"])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(load_settings(self.settings_path, use_env=False), LuminaSettings())


if __name__ == "__main__":
    unittest.main()
