"""dumpflow.inference

Rebuild the pass tree from artifact names alone.

The sorted artifact list reads like a bracket sequence: ``Before`` opens a
pass, ``After`` closes the innermost open one, and everything in between is
that pass's nested pipeline. Matching is done with an explicit stack, so deep
nesting never hits the interpreter's recursion limit. The result is the same
as a recursive descent with one token of lookahead:

* ``read_pipeline``: collect passes until an ``After`` or the end of input
* ``read_pass``: read the nested pipeline, then require the ``After`` of the
  same pass name

Any inconsistency is fatal. There is no best-effort tree.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Union

from passdump.domain.artifacts import ArtifactRef
from passdump.domain.markers import MarkerKind
from passdump.domain.passes import NestedPass, Pass, Pipeline, SinglePass
from passdump.errors import (
    DumpDirectoryError,
    ExhaustedInputError,
    MismatchedAfterError,
    UnexpectedAfterError,
    UnknownArtifactKindError,
)
from passdump.io.layout import DumpDirectory, has_extension, is_prelude_filename, parse_artifact_filename

from .grammar import WarnFn, log_warning

logger = logging.getLogger(__name__)


@dataclass
class _OpenPass:
    before: ArtifactRef
    children: List[Pass] = field(default_factory=list)

    @property
    def expected(self) -> str:
        return self.before.pass_name


def _close(frame: _OpenPass, after: ArtifactRef) -> Pass:
    if after.pass_name != frame.expected:
        raise MismatchedAfterError(frame.expected, after.pass_name, after)
    if not frame.children:
        return SinglePass(name=frame.expected, before=frame.before, after=after)
    return NestedPass(
        name=frame.expected,
        before=frame.before,
        after=after,
        pipeline=Pipeline(tuple(frame.children)),
    )


def infer_pipeline(artifacts: Iterable[ArtifactRef]) -> Pipeline:
    """Match before/after artifacts into a :class:`Pipeline`.

    *artifacts* must already be in sorted order (see :func:`sort_artifacts`);
    they are consumed exactly in the order given.
    """
    root: List[Pass] = []
    stack: List[_OpenPass] = []

    for art in artifacts:
        if art.kind is MarkerKind.BEFORE:
            stack.append(_OpenPass(before=art))
        elif art.kind is MarkerKind.AFTER:
            if not stack:
                raise UnexpectedAfterError(art)
            done = _close(stack.pop(), art)
            (stack[-1].children if stack else root).append(done)
        else:
            raise UnknownArtifactKindError(art)

    if stack:
        raise ExhaustedInputError(stack[-1].expected)

    return Pipeline(tuple(root))


def sort_artifacts(artifacts: Iterable[ArtifactRef]) -> List[ArtifactRef]:
    """Sort by sequence, then kind order, then pass name."""
    return sorted(artifacts, key=lambda a: a.sort_key())


def collect_artifacts(
    directory: Union[str, Path],
    *,
    dump_extension: str = "mlir",
    prelude_extension: str = "txt",
    warn: WarnFn = log_warning,
) -> List[ArtifactRef]:
    """List the dump artifacts of *directory*, sorted for :func:`infer_pipeline`.

    The prelude is left out. Files without the dump extension, or with it but
    without a parseable artifact name, are skipped with a warning.
    """
    dump_dir = DumpDirectory(Path(directory), dump_extension, prelude_extension)
    try:
        files = dump_dir.list_files()
    except OSError as e:
        raise DumpDirectoryError(f"Unable to read dump directory `{directory}`: {e}") from e

    refs: List[ArtifactRef] = []
    for path in files:
        fname = path.name
        if is_prelude_filename(fname, prelude_extension):
            logger.debug("skipping prelude %s", fname)
            continue
        if not has_extension(fname, dump_extension):
            warn(f"skipping file `{fname}`")
            continue
        ref = parse_artifact_filename(fname, extension=dump_extension)
        if ref is None:
            warn(f"skipping file `{fname}`: not an artifact name")
            continue
        refs.append(dataclasses.replace(ref, path=path))

    return sort_artifacts(refs)


def infer_from_directory(
    directory: Union[str, Path],
    *,
    dump_extension: str = "mlir",
    prelude_extension: str = "txt",
    warn: WarnFn = log_warning,
) -> Pipeline:
    refs = collect_artifacts(
        directory,
        dump_extension=dump_extension,
        prelude_extension=prelude_extension,
        warn=warn,
    )
    logger.debug("inferring pipeline from %d artifacts in %s", len(refs), directory)
    return infer_pipeline(refs)
