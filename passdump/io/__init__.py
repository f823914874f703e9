"""passdump.io

Filesystem contracts and IO helpers.

Design principle
----------------
The dump directory layout is a public contract between ``split`` and ``view``.
Both sides format and parse artifact names through this package so the two
can never disagree about what a filename means.
"""

from __future__ import annotations

from .layout import (
    PRELUDE_NAME,
    ZSTD_SUFFIX,
    DumpDirectory,
    artifact_filename,
    descriptive_name,
    format_artifact_filename,
    has_extension,
    is_empty_dir,
    is_prelude_filename,
    parse_artifact_filename,
    prelude_filename,
    prepare_output_dir,
    sanitize_pass_name,
)
from .sinks import SinkFactory, open_artifact_text, open_zstd_writer

__all__ = [
    "PRELUDE_NAME",
    "ZSTD_SUFFIX",
    "DumpDirectory",
    "SinkFactory",
    "artifact_filename",
    "descriptive_name",
    "format_artifact_filename",
    "has_extension",
    "is_empty_dir",
    "is_prelude_filename",
    "open_artifact_text",
    "open_zstd_writer",
    "parse_artifact_filename",
    "prelude_filename",
    "prepare_output_dir",
    "sanitize_pass_name",
]
