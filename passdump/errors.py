"""passdump.errors

Fatal error types.

Everything here aborts the run: the CLI turns these into ``error: ...`` on
stderr and a non-zero exit status. Recoverable conditions (unknown marker
kinds, malformed marker lines, stray files in a dump directory) are warnings
and never raise.

I/O failures are not wrapped; they propagate as ``OSError``.
"""

from __future__ import annotations

from typing import Optional

from passdump.domain.artifacts import ArtifactRef


class PassDumpError(Exception):
    """Base class for fatal pass-dump errors."""


class OutputDirectoryError(PassDumpError):
    """The split output location is unusable (not empty, or cannot be created)."""


class InferenceError(PassDumpError):
    """The artifact set cannot be reconstructed into a pass tree."""


class ExhaustedInputError(InferenceError):
    def __init__(self, expected: str) -> None:
        self.expected = expected
        super().__init__(f"exhausted input expecting After `{expected}`")


class MismatchedAfterError(InferenceError):
    def __init__(self, expected: str, actual: str, artifact: Optional[ArtifactRef] = None) -> None:
        self.expected = expected
        self.actual = actual
        self.artifact = artifact
        where = f" ({artifact.filename})" if artifact is not None else ""
        super().__init__(f"mismatched after: expected `{expected}`, got `{actual}`{where}")


class UnknownArtifactKindError(InferenceError):
    def __init__(self, artifact: ArtifactRef) -> None:
        self.artifact = artifact
        super().__init__(
            f"artifact `{artifact.filename}` has unknown kind (pass `{artifact.pass_name}`)"
        )


class UnexpectedAfterError(InferenceError):
    """An ``After`` artifact that no ``Before`` is waiting for."""

    def __init__(self, artifact: ArtifactRef) -> None:
        self.artifact = artifact
        super().__init__(
            f"unexpected After `{artifact.pass_name}` with no open Before ({artifact.filename})"
        )


class DumpDirectoryError(PassDumpError):
    """A dump directory cannot be listed."""
