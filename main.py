import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from config import ConfigManager, TrackerConfig
from engine import Detection, TrafficTracker, collect_violations

# Configure Logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("traffic_tracker")

DEFAULT_FPS = 10.0


def load_frames(path: str) -> List[Dict[str, Any]]:
    """
    Load recorded frames from JSON.

    Accepts a list of frames or {"frames": [...]}. A frame is either
    {"timestamp": ms, "detections": [...]} or a bare list of detections.
    """
    with open(path, "r") as f:
        data = json.load(f)

    frames = data.get("frames", []) if isinstance(data, dict) else data
    if not isinstance(frames, list):
        raise ValueError("Expected a list of frames")

    loaded = []
    for index, frame in enumerate(frames):
        if isinstance(frame, list):
            frame = {"detections": frame}
        elif not isinstance(frame, dict):
            raise ValueError(f"Frame {index} is not an object or a list of detections")

        if not isinstance(frame.get("detections", []), list):
            raise ValueError(f"Frame {index} detections must be a list")
        timestamp = frame.get("timestamp")
        if timestamp is not None and (isinstance(timestamp, bool) or not isinstance(timestamp, (int, float))):
            raise ValueError(f"Frame {index} timestamp must be a number")
        loaded.append(frame)

    return loaded


def replay(
    frames: List[Dict[str, Any]],
    tracker: TrafficTracker,
    fps: float = DEFAULT_FPS,
) -> List[Dict[str, Any]]:
    """
    Run recorded frames through the tracker in order.

    Frames without a timestamp get one synthesized from their index,
    as for offline video: index * 1000 / fps milliseconds.
    """
    tracker.reset()
    results = []

    for index, frame in enumerate(frames):
        timestamp = frame.get("timestamp")
        if timestamp is None:
            timestamp = index * 1000.0 / fps

        detections = [Detection.from_dict(d) for d in frame.get("detections", []) if isinstance(d, dict)]
        tracked = tracker.update(detections, float(timestamp))
        violations = collect_violations(tracked)

        for v in violations:
            logger.info(f"Frame {index}: {v.description}")

        results.append({
            "timestamp": timestamp,
            "detections": [d.to_dict() for d in tracked],
            "violations": [v.to_dict() for v in violations],
        })

    logger.info(f"Replayed {len(frames)} frames, {tracker.next_id - 1} tracks created")
    return results


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Replay recorded detections through the traffic tracker")
    parser.add_argument("frames", help="JSON file with recorded frames")
    parser.add_argument("--config", help="JSON file with tracker settings")
    parser.add_argument("--fps", type=float, default=DEFAULT_FPS, help="Frame rate for frames without timestamps")
    parser.add_argument("--output", help="Write annotated frames here instead of stdout")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.fps <= 0:
        logger.error("--fps must be positive")
        return 1

    config = ConfigManager(args.config).config if args.config else TrackerConfig()

    try:
        frames = load_frames(args.frames)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read frames from {args.frames}: {e}")
        return 1

    results = replay(frames, TrafficTracker(config), fps=args.fps)

    if args.output:
        with open(args.output, "w") as f:
            json.dump(results, f, indent=2)
        logger.info(f"Wrote annotated frames to {args.output}")
    else:
        json.dump(results, sys.stdout, indent=2)
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
