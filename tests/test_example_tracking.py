# tests/test_example_tracking.py

import os
import sys

import matplotlib
matplotlib.use('Agg')

from example_tracking import create_tracking_pipeline, main, run_on_recording

CONFIG_DIR = os.path.join(os.path.dirname(__file__), '..', 'config')
RECORDING = os.path.join(CONFIG_DIR, 'sample_recording.yaml')


class TestExampleTracking:
    """Test the recording replay driver."""

    def test_run_on_recording(self, tmp_path):
        """Test both plants are selected once, largest first."""
        pipeline = create_tracking_pipeline({'tracking': {'min_valid_framecount': 2}})
        plot_path = tmp_path / "final.png"

        targets = run_on_recording(pipeline, RECORDING, plot_path=str(plot_path))

        assert [t.track_id for t in targets] == [0, 1]
        assert targets[0].size > targets[1].size
        assert pipeline.frame_id == 6
        assert pipeline.tracker.object_count() == 2
        assert plot_path.exists()

    def test_track_only(self):
        pipeline = create_tracking_pipeline({})
        assert run_on_recording(pipeline, RECORDING, select_targets=False) == []

    def test_main(self, monkeypatch):
        monkeypatch.setattr(sys, 'argv', [
            'weedtrack',
            '--config', os.path.join(CONFIG_DIR, 'tracking_config.yaml'),
            '--recording', RECORDING
        ])
        assert main() == 0

    def test_main_bad_config(self, monkeypatch, tmp_path):
        monkeypatch.setattr(sys, 'argv', [
            'weedtrack',
            '--config', str(tmp_path / 'missing.yaml'),
            '--recording', RECORDING
        ])
        assert main() == 1
