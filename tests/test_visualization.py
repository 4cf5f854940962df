# tests/test_visualization.py

import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt

from weedtrack.tracking.objects import DetectedObject, TrackedObject
from weedtrack.utils.visualization import TrackerVisualizer


def track(track_id, x, y, size=2.0, uprooted=False):
    return TrackedObject(track_id=track_id, detection=DetectedObject(x, y, 0.0, size), uprooted=uprooted)


class TestTrackerVisualizer:
    """Test the tracker plots."""

    def setup_method(self):
        self.visualizer = TrackerVisualizer()

    def teardown_method(self):
        plt.close('all')

    def test_plot_tracks(self):
        """Test one marker set per track plus the head ring."""
        tracks = [track(0, 1, 1), track(1, 5, 5, uprooted=True)]

        fig = self.visualizer.plot_tracks(tracks, title="Frame 1")
        ax = fig.axes[0]

        assert len(ax.collections) == 3
        assert ax.get_title() == "Frame 1"
        assert [t.get_text() for t in ax.texts] == ['0', '1']

    def test_plot_empty(self):
        fig = self.visualizer.plot_tracks([])
        assert len(fig.axes[0].collections) == 0

    def test_plot_into_axes(self):
        fig, ax = plt.subplots()
        assert self.visualizer.plot_tracks([track(0, 0, 0)], ax=ax) is fig

    def test_history(self):
        """Test history is kept per live track and trimmed."""
        visualizer = TrackerVisualizer({'track_history_length': 3})

        for i in range(5):
            visualizer.update_history([track(0, i, 0), track(1, 0, i)])
        assert visualizer.track_history[0] == [(2, 0), (3, 0), (4, 0)]

        visualizer.update_history([track(1, 0, 5)])
        assert 0 not in visualizer.track_history

        fig = visualizer.plot_tracks([track(1, 0, 5)])
        assert len(fig.axes[0].lines) == 1

    def test_save(self, tmp_path):
        fig = self.visualizer.plot_tracks([track(0, 0, 0)])
        output = tmp_path / "tracks.png"

        self.visualizer.save(fig, str(output))

        assert output.exists()

    def test_color_by_id(self):
        """Test colors are stable and valid."""
        c1 = self.visualizer.get_color_by_id(3)
        assert c1 == self.visualizer.get_color_by_id(3)
        assert all(0.0 <= c <= 1.0 for c in c1)
        assert c1 != self.visualizer.get_color_by_id(4)

    def test_clear_history(self):
        self.visualizer.update_history([track(0, 0, 0)])
        self.visualizer.clear_track_history()
        assert self.visualizer.track_history == {}
