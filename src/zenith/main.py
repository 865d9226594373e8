#!/usr/bin/env python3
"""
Zenith - bar entry point
"""

import argparse
import logging
import signal
import sys
from typing import List, Optional

from zenith.controller import BarController
from zenith.utils.errors import SurfaceError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def setup_logging(level: str) -> None:
    """Log to stderr so the console surface owns stdout."""
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT, stream=sys.stderr)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Zenith - status bar")
    parser.add_argument("--config", help="Path to YAML configuration file")
    parser.add_argument("--surface", help="Rendering surface (console, memory)")
    parser.add_argument("--log-level", default="INFO", choices=LOG_LEVELS, help="Logging level")
    return parser


def run(config_path: Optional[str] = None, surface: Optional[str] = None) -> int:
    """Run the bar until interrupted. Returns the process exit code."""
    logger = logging.getLogger(__name__)

    controller = BarController(config_path)

    def signal_handler(signum, frame):
        """Handle shutdown signals gracefully"""
        logger.info(f"Received signal {signum}, shutting down gracefully...")
        controller.running = False
        # Raise KeyboardInterrupt to trigger the normal shutdown flow
        raise KeyboardInterrupt()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    try:
        return controller.run(surface)
    except SurfaceError as e:
        logger.error(f"Cannot start without a rendering surface: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point"""
    args = create_parser().parse_args(argv)
    setup_logging(args.log_level)
    sys.exit(run(args.config, args.surface))


if __name__ == "__main__":
    main()
