#!/usr/bin/env python3
# example_tracking.py

import argparse
import logging
import time

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

from weedtrack.tracking.object_tracker import ObjectTracker
from weedtrack.utils.config import load_config, tracker_config
from weedtrack.utils.visualization import TrackerVisualizer
from pipeline.data_sources import RecordedDetectionSource
from pipeline.tracking_pipeline import TrackingPipeline


def create_tracking_pipeline(config):
    """Create tracking pipeline from configuration."""
    tracker = ObjectTracker(config=tracker_config(config))

    return TrackingPipeline(
        tracker=tracker,
        config=config.get("pipeline", {})
    )


def run_on_recording(pipeline, recording_path, select_targets=True, plot_path=None):
    """
    Replay a detection recording through the pipeline.

    Returns:
        List of selected targets
    """
    visualizer = TrackerVisualizer() if plot_path else None
    targets = []
    start_time = time.time()
    frame_idx = 0

    with RecordedDetectionSource(recording_path) as source:
        for detections, timestamp in source:
            result = pipeline.process_detections(detections, timestamp)

            if visualizer:
                visualizer.update_history(result.tracks)

            if select_targets:
                target = pipeline.next_target()
                if target is not None:
                    targets.append(target)

            frame_idx += 1

    elapsed = time.time() - start_time
    logger.info(f"Processed {frame_idx} frames in {elapsed:.2f} seconds")
    logger.info(f"Selected {len(targets)} targets, {pipeline.tracker.object_count()} objects still tracked")
    logger.info(f"Performance: {pipeline.report_performance()}")

    if visualizer:
        fig = visualizer.plot_tracks(pipeline.tracker.tracks(), title=f"Frame {frame_idx}")
        visualizer.save(fig, plot_path)

    return targets


def main():
    """Main function."""

    parser = argparse.ArgumentParser(description="Plant Tracking Example")
    parser.add_argument("--config", type=str, default="config/tracking_config.yaml",
                        help="Path to configuration file")
    parser.add_argument("--recording", type=str, required=True,
                        help="Path to a YAML detection recording")
    parser.add_argument("--plot", type=str, default=None,
                        help="Save a plot of the final tracker state to this path")
    parser.add_argument("--no-select", action="store_true",
                        help="Track only, do not select targets")
    parser.add_argument("--debug", action="store_true",
                        help="Enable debug logging")

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # Load configuration
    try:
        config = load_config(args.config)
        pipeline = create_tracking_pipeline(config)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load configuration: {e}")
        return 1

    try:
        run_on_recording(pipeline, args.recording, not args.no_select, args.plot)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to replay {args.recording}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
