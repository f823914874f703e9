from __future__ import annotations

import argparse

from passdump.config import GRAMMAR_PRESETS


def add_split_args(parser: argparse.ArgumentParser) -> None:
    """Register CLI flags used by split mode."""

    parser.add_argument(
        "-i",
        "--input",
        dest="input",
        default=None,
        help="(split mode) Read the log from this file instead of stdin.",
    )
    parser.add_argument(
        "-n",
        "--no-compress",
        dest="no_compress",
        action="store_true",
        help="(split mode) Disable compressing artifacts with zstd.",
    )
    parser.add_argument(
        "-z",
        "--zstd-compression-level",
        dest="zstd_compression_level",
        type=int,
        default=None,
        help="(split mode) zstd compression level to use (default: 6).",
    )
    parser.add_argument(
        "-t",
        "--threads",
        type=int,
        default=None,
        help=(
            "(split mode) Number of threads zstd should use during compression. "
            "Defaults to 1 (separate I/O and compression thread)."
        ),
    )
    parser.add_argument(
        "-d",
        "--delete",
        action="store_true",
        help="(split mode) Delete the output directory first if it is not empty.",
    )
    parser.add_argument(
        "--grammar",
        choices=sorted(GRAMMAR_PRESETS),
        default=None,
        help="(split mode) Marker line format of the compiler that produced the log (default: mlir).",
    )
    parser.add_argument(
        "--no-progress",
        dest="no_progress",
        action="store_true",
        help="(split mode) Do not show the progress counter.",
    )
