"""passdump.domain.artifacts

Identity of one persisted dump.

``ArtifactName`` is what the namer allocates and what the inferencer reads back
out of a directory listing. ``ArtifactRef`` pins a name to the file it was
parsed from; inferred passes hold refs, never open file handles, so content is
only read when somebody asks for it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import IO, Tuple

from .markers import MarkerKind


@dataclass(frozen=True)
class ArtifactName:
    """Sequence number + kind + pass name of one before/after dump."""

    sequence: int
    kind: MarkerKind
    pass_name: str

    def sort_key(self) -> Tuple[int, int, str]:
        return (self.sequence, self.kind.order, self.pass_name)


@dataclass(frozen=True)
class ArtifactRef:
    """An artifact name bound to a file on disk."""

    name: ArtifactName
    path: Path
    compressed: bool = False

    @property
    def kind(self) -> MarkerKind:
        return self.name.kind

    @property
    def pass_name(self) -> str:
        return self.name.pass_name

    @property
    def filename(self) -> str:
        return self.path.name

    def sort_key(self) -> Tuple[int, int, str]:
        return self.name.sort_key()

    def open_text(self, *, encoding: str = "utf-8") -> IO[str]:
        """Open the dump for reading, decompressing zstd artifacts on the fly.

        Each call returns a new handle owned by the caller.
        """
        from passdump.io.sinks import open_artifact_text

        return open_artifact_text(self.path, compressed=self.compressed, encoding=encoding)

    def read_text(self, *, encoding: str = "utf-8") -> str:
        with self.open_text(encoding=encoding) as f:
            return f.read()
