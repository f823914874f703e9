from __future__ import annotations

import argparse
import sys

from cli.commands.split import run_split_mode
from cli.commands.view import run_view_mode
from cli.ui import choose_from_menu
from dumpflow.facade import PassDumpTool
from passdump.config import Settings


def resolve_mode(args: argparse.Namespace) -> str:
    """Pick the mode: explicit --mode, else split for piped stdin or --input, else ask."""
    if args.mode:
        return str(args.mode)
    if getattr(args, "input", None) or not sys.stdin.isatty():
        return "split"
    return choose_from_menu(
        "Choose an action:",
        {
            "split": "Split a pass pipeline log into IR dump files",
            "view": "Show the pass pipeline of an existing dump directory",
        },
    )


def dispatch(args: argparse.Namespace, tool: PassDumpTool, *, settings: Settings) -> int:
    mode = resolve_mode(args)

    if mode == "view":
        return int(run_view_mode(args, tool, settings=settings))

    # default: split
    return int(run_split_mode(args, tool, settings=settings))
