"""dumpflow.orchestrator

High-level entrypoints for the two modes.

- ``run_split``: log stream in, directory of artifacts out
- ``run_view``: directory in, inferred pipeline (and its rendering) out

Design principles
-----------------
- Keep the CLI thin: parse args + resolve settings + call these functions.
- Keep filename and directory rules in :mod:`passdump.io`.
- Presentation (progress bars, colors) is injected; nothing here prints.

Both functions raise on fatal errors (:class:`passdump.errors.PassDumpError`
or ``OSError``) and report recoverable conditions through ``warn``.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, List, Optional, Protocol

from passdump.config import Settings
from passdump.domain.markers import MarkerInfo
from passdump.domain.passes import Pipeline
from passdump.io.layout import PRELUDE_NAME, descriptive_name, prepare_output_dir
from passdump.io.sinks import SinkFactory

from .grammar import WarnFn, log_warning
from .inference import infer_from_directory
from .namer import ArtifactNamer
from .render import render_pipeline
from .splitter import ArtifactSink, SplitStats, split_stream

logger = logging.getLogger(__name__)


class SplitProgress(Protocol):
    """Progress hooks for a split run."""

    def advanced(self, sequence: int, info: MarkerInfo) -> None: ...

    def finished(self, passes: int) -> None: ...


@dataclass(frozen=True)
class SplitRequest:
    settings: Settings
    # None reads stdin
    input_path: Optional[Path] = None


@dataclass(frozen=True)
class SplitResult:
    output_dir: Path
    passes: int
    stats: SplitStats
    artifacts: List[Path] = field(default_factory=list)


@dataclass(frozen=True)
class ViewRequest:
    dump_directory: Path
    settings: Settings
    show_files: bool = False


@dataclass(frozen=True)
class ViewResult:
    pipeline: Pipeline
    rendered: str


def split_into(
    inp,
    settings: Settings,
    output_dir: Path,
    *,
    progress: Optional[SplitProgress] = None,
    warn: WarnFn = log_warning,
) -> SplitResult:
    """Split an already-open line stream into *output_dir* (which must exist)."""
    factory = SinkFactory(
        output_dir,
        compress=settings.compress,
        level=settings.zstd_level,
        threads=settings.threads,
    )
    namer = ArtifactNamer()

    def advance(info: MarkerInfo) -> ArtifactSink:
        decision = namer.advance(info)
        if progress is not None:
            progress.advanced(decision.sequence, info)
        return factory(decision.sequence, descriptive_name(decision.name), settings.dump_extension)

    prelude = factory(0, PRELUDE_NAME, settings.prelude_extension)
    stats = split_stream(
        inp,
        advance,
        prelude,
        grammar=settings.marker_grammar(),
        warn=warn,
    )
    logger.debug(
        "split %d lines (%d bytes): %d markers, %d malformed",
        stats.lines,
        stats.bytes_read,
        stats.markers,
        stats.malformed,
    )

    if progress is not None:
        progress.finished(namer.allocations)

    return SplitResult(
        output_dir=output_dir,
        passes=namer.allocations,
        stats=stats,
        artifacts=list(factory.created),
    )


def run_split(
    req: SplitRequest,
    *,
    stdin: Optional[BinaryIO] = None,
    progress: Optional[SplitProgress] = None,
    warn: WarnFn = log_warning,
) -> SplitResult:
    settings = req.settings
    output_dir = prepare_output_dir(settings.output_directory, delete=settings.delete)

    if req.input_path is not None:
        with open(req.input_path, "rb") as inp:
            return split_into(inp, settings, output_dir, progress=progress, warn=warn)

    inp = stdin if stdin is not None else sys.stdin.buffer
    return split_into(inp, settings, output_dir, progress=progress, warn=warn)


def run_view(req: ViewRequest, *, warn: WarnFn = log_warning) -> ViewResult:
    settings = req.settings
    pipeline = infer_from_directory(
        req.dump_directory,
        dump_extension=settings.dump_extension,
        prelude_extension=settings.prelude_extension,
        warn=warn,
    )
    return ViewResult(pipeline=pipeline, rendered=render_pipeline(pipeline, show_files=req.show_files))
