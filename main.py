"""Entry point for the Conformal Map Explorer.

Shows a sample point set in the z-plane next to its image under
w = i * ((i*z) / (i*z + 1)) ** (1/4), with a live probe that asks the
mapping service for the image of the point under the cursor.
"""

import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication

from app_window import AppWindow
from conformal.network import DEFAULT_BASE_URL
from conformal.point_set import DEFAULT_POINT_COUNT, parse_point_count


def build_parser():
    parser = argparse.ArgumentParser(
        description="Interactive z-plane / w-plane explorer for a conformal map.",
    )
    parser.add_argument(
        "--server",
        type=str,
        default=DEFAULT_BASE_URL,
        help=f"Base URL of the mapping service (default: {DEFAULT_BASE_URL})",
    )
    parser.add_argument(
        "--count",
        type=str,
        default=str(DEFAULT_POINT_COUNT),
        help=f"Initial number of sample points (default: {DEFAULT_POINT_COUNT})",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--no-initial-fetch",
        action="store_true",
        help="Do not request a point set at startup",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    app = QApplication(sys.argv[:1])
    window = AppWindow(args.server, parse_point_count(args.count))
    window.start(initial_fetch=not args.no_initial_fetch)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
