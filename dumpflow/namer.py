"""dumpflow.namer

Sequence-number allocation for artifacts.

Sequence 0 is the prelude. Every marker allocates the next number, except an
``After`` that immediately follows the ``Before`` of the same pass invocation
(same name and extras): that pair shares one number.

Only *adjacent* pairs are collapsed. A pass with nested passes gets its
``Before`` and ``After`` under different numbers, because the nested markers
in between consume numbers of their own::

  0001-0b-Outer   0002-0b-Inner   0002-1a-Inner   0003-1a-Outer

Consumers of artifact names must rely on sort order, never on the numbers
matching up.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from passdump.domain.artifacts import ArtifactName
from passdump.domain.markers import MarkerInfo


@dataclass(frozen=True)
class NamingDecision:
    """Result of one :meth:`ArtifactNamer.advance` call."""

    name: ArtifactName
    fresh: bool

    @property
    def sequence(self) -> int:
        return self.name.sequence


class ArtifactNamer:
    """Stateful allocator: one ``advance`` per recognized marker."""

    def __init__(self) -> None:
        self._last: Optional[MarkerInfo] = None
        self._counter = 0

    @property
    def counter(self) -> int:
        return self._counter

    @property
    def allocations(self) -> int:
        """Sequence numbers handed out so far, not counting the prelude."""
        return self._counter

    @property
    def last(self) -> Optional[MarkerInfo]:
        return self._last

    def should_reuse(self, info: MarkerInfo) -> bool:
        return self._last is not None and info.closes(self._last)

    def advance(self, info: MarkerInfo) -> NamingDecision:
        fresh = not self.should_reuse(info)
        if fresh:
            self._counter += 1
        self._last = info

        name = ArtifactName(sequence=self._counter, kind=info.kind, pass_name=info.pass_name)
        return NamingDecision(name=name, fresh=fresh)
