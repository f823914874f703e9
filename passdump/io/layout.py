"""passdump.io.layout

Canonical filesystem layout for a dump directory.

This module centralizes:

* the artifact filename format (both directions: format and parse)
* the prelude artifact name
* the output directory policy for ``split`` (refuse non-empty, optional clear)

Artifact filenames look like::

  0000-prelude.txt.zst
  0001-0b-Canonicalizer.mlir.zst
  0001-1a-Canonicalizer.mlir.zst
  0002-0b-Inliner.mlir.zst

i.e. ``<sequence:04d>-<kind-tag>-<pass_name>.<ext>[.zst]``. Kind tags sort in
kind order, so a plain lexicographic sort of a directory listing reproduces the
order the dumps were written in (for sequences below 10000; the parsed
``sort_key`` stays correct beyond that).
"""

from __future__ import annotations

import logging
import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from passdump.domain.artifacts import ArtifactName, ArtifactRef
from passdump.domain.markers import MarkerKind
from passdump.errors import OutputDirectoryError

logger = logging.getLogger(__name__)

ZSTD_SUFFIX = ".zst"
PRELUDE_NAME = "prelude"
SEQUENCE_WIDTH = 4

_ARTIFACT_RE = re.compile(r"^(?P<seq>\d+)-(?P<tag>\d[a-z])-(?P<name>.+)$")

# Characters that cannot appear in a filename component.
_UNSAFE_NAME_CHARS = re.compile(r"[/\\\x00]")


def sanitize_pass_name(name: str) -> str:
    """Make a pass name safe to embed in a filename.

    Pass names never contain spaces (the marker grammar splits on them), but
    C++-style names like ``mlir::detail::OpToOpPassAdaptor`` are common and a
    few compilers print path-like names, so separators are replaced.
    """
    v = _UNSAFE_NAME_CHARS.sub("_", name or "")
    return v or "unnamed"


def artifact_filename(
    sequence: int,
    descriptive_name: str,
    extension: str,
    *,
    compressed: bool,
) -> str:
    ext = extension.lstrip(".")
    suffix = ZSTD_SUFFIX if compressed else ""
    return f"{sequence:0{SEQUENCE_WIDTH}d}-{descriptive_name}.{ext}{suffix}"


def descriptive_name(name: ArtifactName) -> str:
    """The ``<kind-tag>-<pass_name>`` middle part of an artifact filename."""
    return f"{name.kind.tag}-{sanitize_pass_name(name.pass_name)}"


def format_artifact_filename(name: ArtifactName, extension: str, *, compressed: bool) -> str:
    """Serialize an :class:`ArtifactName` into its filename."""
    return artifact_filename(name.sequence, descriptive_name(name), extension, compressed=compressed)


def prelude_filename(extension: str, *, compressed: bool) -> str:
    return artifact_filename(0, PRELUDE_NAME, extension, compressed=compressed)


def has_extension(filename: str, extension: str) -> bool:
    """True for ``*.<ext>`` and ``*.<ext>.zst``."""
    ext = "." + extension.lstrip(".")
    return filename.endswith(ext) or filename.endswith(ext + ZSTD_SUFFIX)


def is_prelude_filename(filename: str, extension: str) -> bool:
    ext = extension.lstrip(".")
    return filename in {
        prelude_filename(ext, compressed=False),
        prelude_filename(ext, compressed=True),
    }


def parse_artifact_filename(filename: str, *, extension: str) -> Optional[ArtifactRef]:
    """Parse a dump artifact filename back into an :class:`ArtifactRef`.

    Returns None when *filename* does not carry the dump extension or does not
    follow ``<seq>-<tag>-<pass_name>``. The returned ref's path is the bare
    filename; callers anchor it in their directory.
    """
    ext = "." + extension.lstrip(".")
    compressed = filename.endswith(ext + ZSTD_SUFFIX)
    if compressed:
        stem = filename[: -len(ext + ZSTD_SUFFIX)]
    elif filename.endswith(ext):
        stem = filename[: -len(ext)]
    else:
        return None

    m = _ARTIFACT_RE.match(stem)
    if not m:
        return None
    kind = MarkerKind.from_tag(m.group("tag"))
    if kind is None:
        return None

    name = ArtifactName(sequence=int(m.group("seq")), kind=kind, pass_name=m.group("name"))
    return ArtifactRef(name=name, path=Path(filename), compressed=compressed)


@dataclass(frozen=True)
class DumpDirectory:
    """A dump directory plus the extensions its artifacts use."""

    root: Path
    dump_extension: str = "mlir"
    prelude_extension: str = "txt"

    def artifact_path(self, name: ArtifactName, *, compressed: bool) -> Path:
        return self.root / format_artifact_filename(name, self.dump_extension, compressed=compressed)

    def prelude_path(self, *, compressed: bool) -> Path:
        return self.root / prelude_filename(self.prelude_extension, compressed=compressed)

    def list_files(self) -> List[Path]:
        """Regular files directly under the directory, sorted by name."""
        return sorted((p for p in self.root.iterdir() if p.is_file()), key=lambda p: p.name)


def is_empty_dir(path: Path) -> bool:
    """True if *path* does not exist or is a directory with no entries."""
    if not path.exists():
        return True
    if not path.is_dir():
        return False
    return next(path.iterdir(), None) is None


def prepare_output_dir(output_dir: Union[str, Path], *, delete: bool = False) -> Path:
    """Make sure *output_dir* exists and is empty.

    A non-empty location is refused unless *delete* is set, in which case it is
    removed first. There is no rollback: a run that dies halfway leaves the
    artifacts it already wrote.
    """
    out = Path(output_dir)

    if not is_empty_dir(out):
        if not delete:
            raise OutputDirectoryError(
                f"output directory `{out}` is not empty (pass --delete to clear it)"
            )
        logger.warning("output directory `%s` is not empty, clearing...", out)
        try:
            if out.is_dir() and not out.is_symlink():
                shutil.rmtree(out)
            else:
                out.unlink()
        except OSError as e:
            raise OutputDirectoryError(f"Unable to clear output directory `{out}`: {e}") from e

    try:
        out.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirectoryError(f"Unable to create output directory `{out}`: {e}") from e
    return out
