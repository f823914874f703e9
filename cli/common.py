"""cli.common

Small shared helpers for CLI command modules.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from passdump.config import Settings


def settings_from_args(args: argparse.Namespace, settings: Settings) -> Settings:
    """Apply CLI flags on top of config/env settings.

    Flags the user did not pass are None (or False for store_true flags) and
    leave the resolved setting alone.
    """
    if getattr(args, "grammar", None):
        settings = settings.with_grammar(args.grammar)

    directory = getattr(args, "directory", None)
    return settings.with_overrides(
        output_directory=Path(directory) if directory else None,
        compress=False if getattr(args, "no_compress", False) else None,
        zstd_level=getattr(args, "zstd_compression_level", None),
        threads=getattr(args, "threads", None),
        delete=True if getattr(args, "delete", False) else None,
        dump_extension=getattr(args, "extension", None),
    )
