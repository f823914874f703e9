from __future__ import annotations

import argparse


def add_view_args(parser: argparse.ArgumentParser) -> None:
    """Register CLI flags used by view mode."""

    parser.add_argument(
        "--show-files",
        dest="show_files",
        action="store_true",
        help="(view mode) Print the before/after artifact filenames next to each pass.",
    )
