"""passdump.domain.passes

Inferred pass tree.

A ``Pass`` is one execution of a compiler pass, identified by its before/after
artifacts. Passes that ran other passes inside them are ``NestedPass``; all
others are ``SinglePass``. A ``Pipeline`` is an ordered list of sibling passes.

These objects are built once per inference run and are not mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Tuple, Union

from .artifacts import ArtifactRef


@dataclass(frozen=True)
class SinglePass:
    """A pass with no nested passes."""

    name: str
    before: ArtifactRef
    after: ArtifactRef

    @property
    def children(self) -> "Pipeline":
        return Pipeline()


@dataclass(frozen=True)
class NestedPass:
    """A pass whose before/after span contains other passes."""

    name: str
    before: ArtifactRef
    after: ArtifactRef
    pipeline: "Pipeline"

    def __post_init__(self) -> None:
        if not self.pipeline.passes:
            raise ValueError(f"NestedPass {self.name!r} needs at least one child pass")

    @property
    def children(self) -> "Pipeline":
        return self.pipeline


Pass = Union[SinglePass, NestedPass]


@dataclass(frozen=True)
class Pipeline:
    """Sibling passes at one nesting level, in execution order."""

    passes: Tuple[Pass, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.passes)

    def __iter__(self) -> Iterator[Pass]:
        return iter(self.passes)

    def __bool__(self) -> bool:
        return bool(self.passes)

    def walk(self) -> Iterator[Tuple[int, Pass]]:
        """Depth-first pre-order over all passes, yielding ``(depth, pass)``."""
        stack: List[Tuple[int, Pass]] = [(0, p) for p in reversed(self.passes)]
        while stack:
            depth, p = stack.pop()
            yield depth, p
            stack.extend((depth + 1, c) for c in reversed(p.children.passes))

    def pass_count(self) -> int:
        return sum(1 for _ in self.walk())

    def max_depth(self) -> int:
        """Number of nesting levels (0 for an empty pipeline)."""
        return max((d + 1 for d, _ in self.walk()), default=0)

    def names(self) -> List[str]:
        return [p.name for _, p in self.walk()]
