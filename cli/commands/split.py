from __future__ import annotations

import sys
from pathlib import Path

from tqdm.contrib.logging import logging_redirect_tqdm

from cli.ui import TqdmSplitProgress
from dumpflow.facade import PassDumpTool
from dumpflow.orchestrator import SplitRequest
from passdump.config import Settings


def run_split_mode(args, tool: PassDumpTool, *, settings: Settings) -> int:
    input_path = Path(args.input) if getattr(args, "input", None) else None

    message = "Waiting for input on stdin..." if input_path is None else f"Reading {input_path}..."
    show_progress = not getattr(args, "no_progress", False) and sys.stderr.isatty()
    progress = TqdmSplitProgress(enabled=show_progress, message=message)

    req = SplitRequest(settings=settings, input_path=input_path)
    with logging_redirect_tqdm():
        tool.split(req, progress=progress)
    return 0
