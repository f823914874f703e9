from __future__ import annotations

import argparse


def add_base_args(parser: argparse.ArgumentParser) -> None:
    """Register CLI flags that are shared across both modes.

    This includes:
    - mode selection
    - the dump directory (output of split, input of view)
    - config file and verbosity
    """

    parser.add_argument(
        "--mode",
        choices=["split", "view"],
        help=(
            "split = read a pass pipeline log and write one file per IR dump, "
            "view = infer the pass nesting from a dump directory. "
            "If omitted: split when stdin is piped, otherwise ask."
        ),
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="Dump directory: where split writes the IR files, and what view reads (default: dump).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML config file (default: passdump.yaml in the working directory, if present).",
    )
    parser.add_argument(
        "--extension",
        default=None,
        help="Extension of dump artifacts, without the dot (default: mlir).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
