# weedtrack/utils/visualization.py

import colorsys
import logging
from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt

from weedtrack.tracking.objects import TrackedObject

logger = logging.getLogger(__name__)


class TrackerVisualizer:
    """
    Top-down plots of the tracker state.

    Each tracked plant is drawn at its (x, y) position with a marker
    area proportional to its size. Plants already handed out as targets
    are drawn hollow, and the head of the priority list is ringed.
    """

    def __init__(self, config: Dict = None):
        """
        Initialize the visualizer.

        Args:
            config: Configuration dictionary with visualization parameters
        """
        self.config = {
            'track_history_length': 20,  # Number of past positions to draw per track
            'size_scale': 20.0,  # Marker area per unit of object size
            'min_marker_size': 10.0,
            'figsize': (6, 6),
            'show_ids': True,
            **(config or {})
        }

        # track_id -> list of (x, y)
        self.track_history: Dict[int, List[Tuple[float, float]]] = {}

    def update_history(self, tracks: List[TrackedObject]) -> None:
        """
        Append the current positions to the per-track history.

        History of tracks that are no longer present is dropped.
        """
        live = {t.track_id for t in tracks}
        for track_id in list(self.track_history):
            if track_id not in live:
                del self.track_history[track_id]

        history_length = self.config['track_history_length']
        for track in tracks:
            points = self.track_history.setdefault(track.track_id, [])
            points.append((track.x, track.y))
            if len(points) > history_length:
                self.track_history[track.track_id] = points[-history_length:]

    def plot_tracks(self,
                    tracks: List[TrackedObject],
                    ax: Optional[plt.Axes] = None,
                    title: Optional[str] = None) -> plt.Figure:
        """
        Plot tracked objects in priority order.

        Args:
            tracks: Tracked objects, head of the priority list first
            ax: Axes to draw into (a new figure is created if None)
            title: Optional plot title

        Returns:
            The matplotlib figure
        """
        if ax is None:
            fig, ax = plt.subplots(figsize=self.config['figsize'])
        else:
            fig = ax.figure

        for rank, track in enumerate(tracks):
            color = self.get_color_by_id(track.track_id)
            area = max(self.config['min_marker_size'], track.size * self.config['size_scale'])

            history = self.track_history.get(track.track_id, [])
            if len(history) > 1:
                xs, ys = zip(*history)
                ax.plot(xs, ys, color=color, linewidth=1, alpha=0.6)

            ax.scatter(
                [track.x], [track.y],
                s=area,
                facecolors='none' if track.uprooted else [color],
                edgecolors=[color],
                linewidths=1.5
            )

            if rank == 0:
                ax.scatter([track.x], [track.y], s=area * 2.0, facecolors='none',
                           edgecolors='black', linewidths=1.0)

            if self.config['show_ids']:
                ax.annotate(str(track.track_id), (track.x, track.y),
                            textcoords='offset points', xytext=(5, 5), fontsize=8)

        ax.set_xlabel('x')
        ax.set_ylabel('y')
        ax.set_aspect('equal', adjustable='datalim')
        if title:
            ax.set_title(title)

        return fig

    def save(self, fig: plt.Figure, output_path: str) -> None:
        """Write a figure to disk and release it."""
        fig.savefig(output_path, bbox_inches='tight')
        plt.close(fig)
        logger.info(f"Saved tracker plot to {output_path}")

    def get_color_by_id(self, id_value: int) -> Tuple[float, float, float]:
        """
        Generate a consistent color based on an ID.

        Args:
            id_value: Numeric ID

        Returns:
            RGB color tuple in [0, 1]
        """
        # Use golden ratio to create well-distributed colors
        golden_ratio = 0.618033988749895
        h = (id_value * golden_ratio) % 1.0
        return colorsys.hsv_to_rgb(h, 0.8, 0.9)

    def clear_track_history(self):
        """Clear the track history."""
        self.track_history = {}
