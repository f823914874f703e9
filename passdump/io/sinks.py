"""passdump.io.sinks

Artifact sinks: where the splitter writes each dump.

A sink is any binary writable with ``write(bytes)`` and ``close()``. Closing
is the finalize step and must happen before the sink is dropped: for zstd
sinks it flushes the encoder, writes the frame trailer and closes the file.
An artifact whose sink was never closed is truncated and unreadable.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, BinaryIO, List

import zstandard

from .layout import artifact_filename

logger = logging.getLogger(__name__)


@dataclass
class SinkFactory:
    """Create one artifact sink per ``(sequence, descriptive_name, extension)``.

    compress:
        Write ``.zst`` artifacts through a zstd stream encoder.
    level:
        zstd compression level.
    threads:
        zstd worker threads. ``1`` runs compression on one worker next to the
        writing thread; ``0`` compresses inline.
    """

    output_dir: Path
    compress: bool = True
    level: int = 6
    threads: int = 1
    created: List[Path] = field(default_factory=list)

    def path_for(self, sequence: int, descriptive_name: str, extension: str) -> Path:
        return Path(self.output_dir) / artifact_filename(
            sequence, descriptive_name, extension, compressed=self.compress
        )

    def __call__(self, sequence: int, descriptive_name: str, extension: str) -> BinaryIO:
        path = self.path_for(sequence, descriptive_name, extension)
        if self.compress:
            sink = open_zstd_writer(path, level=self.level, threads=self.threads)
        else:
            sink = open(path, "wb")
        logger.debug("opened artifact %s", path.name)
        self.created.append(path)
        return sink


def open_zstd_writer(path: Path, *, level: int = 6, threads: int = 1) -> BinaryIO:
    cctx = zstandard.ZstdCompressor(level=level, threads=threads)
    return zstandard.open(path, "wb", cctx=cctx)


def open_artifact_text(path: Path, *, compressed: bool, encoding: str = "utf-8") -> IO[str]:
    """Open an artifact as text. Each call returns a new, caller-owned handle."""
    if compressed:
        return zstandard.open(path, "rt", encoding=encoding, errors="replace", newline="")
    return io.open(path, "r", encoding=encoding, errors="replace", newline="")
