#!/usr/bin/env python3
"""
CLI for compiler pass pipeline dumps.

Modes:
  1) split - read a log produced with IR printing before/after every pass and
             write one file per dump into a directory
  2) view  - infer which passes ran inside which from a dump directory and
             print the pipeline as a tree

Usage:
  mlir-opt --mlir-print-ir-before-all --mlir-print-ir-after-all ... 2>&1 | python passdump_cli.py
  python passdump_cli.py --mode split --input opt.log --delete dumps/opt
  python passdump_cli.py --mode split --grammar llvm --no-compress < opt.log
  python passdump_cli.py --mode view dumps/opt
  python passdump_cli.py --mode view --show-files dumps/opt
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import zstandard

from cli.args.base import add_base_args
from cli.args.split import add_split_args
from cli.args.view import add_view_args
from cli.common import settings_from_args
from cli.dispatch import dispatch
from cli.ui import configure_logging
from dumpflow.wiring import build_tool, resolve_settings
from passdump.errors import PassDumpError

logger = logging.getLogger("passdump")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Split compiler pass pipeline logs and view the inferred pass nesting."
    )
    add_base_args(parser)
    add_split_args(parser)
    add_view_args(parser)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(verbose=bool(args.verbose))

    try:
        settings = settings_from_args(args, resolve_settings(args.config))
    except (ValueError, FileNotFoundError) as e:
        logger.error("invalid configuration: %s", e)
        return 2

    tool = build_tool()
    try:
        return dispatch(args, tool, settings=settings)
    except (PassDumpError, OSError, zstandard.ZstdError) as e:
        logger.debug("fatal error", exc_info=True)
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        logger.error("interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
