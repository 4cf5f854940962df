# tests/test_config.py

import os

import pytest

from weedtrack.tracking.object_tracker import ObjectTracker
from weedtrack.utils.config import detector_config, load_config, tracker_config

CONFIG_DIR = os.path.join(os.path.dirname(__file__), '..', 'config')


class TestConfig:
    """Test configuration loading."""

    def test_load_shipped_config(self):
        """Test the bundled configuration builds a tracker."""
        config = load_config(os.path.join(CONFIG_DIR, 'tracking_config.yaml'))

        tracker = ObjectTracker(tracker_config(config))

        assert tracker.distance_tolerance == 7.0
        assert tracker.max_disappeared == 10
        assert tracker.min_valid_framecount == 3

    def test_load_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)) == {}

    def test_load_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_config(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_legacy_keys(self):
        """Test flat detector node keys are mapped."""
        config = {
            'filter_distance_tolerance_cm': 7,
            'min_weed_size_cm': 1,
            'max_weed_size_cm': 100,
            'show_img_window': False,
        }

        assert tracker_config(config) == {'distance_tolerance': 7}
        assert detector_config(config) == {'min_size': 1, 'max_size': 100}

    def test_section_wins_over_legacy(self):
        config = {
            'filter_distance_tolerance_cm': 7,
            'tracking': {'enabled': True, 'distance_tolerance': 3.5, 'ordering': 'y'},
        }

        assert tracker_config(config) == {'distance_tolerance': 3.5, 'ordering': 'y'}

    def test_no_tracking_section(self):
        assert tracker_config({}) == {}
        assert tracker_config({'tracking': None}) == {}
