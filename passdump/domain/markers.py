"""passdump.domain.markers

Marker vocabulary shared by the splitter and the inferencer.

A marker line announces the start of one IR dump, e.g.::

  // -----// IR Dump After Canonicalizer (canonicalize) //----- //

and carries three things: the kind (``Before``/``After``), the pass name and
whatever else the compiler printed after it ("extras").
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class MarkerKind(enum.Enum):
    """Kind of a dump marker.

    The declaration order is the sort order: ``BEFORE < AFTER < UNKNOWN``.
    ``UNKNOWN`` only exists so the splitter can keep going on unrecognized kind
    tokens; it must never reach the inferencer.
    """

    BEFORE = "Before"
    AFTER = "After"
    UNKNOWN = "Unknown"

    @property
    def order(self) -> int:
        return _ORDER[self]

    @property
    def tag(self) -> str:
        """Short tag used in artifact filenames.

        Tags sort lexicographically in the same order as the kinds.
        """
        return _TAGS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, MarkerKind):
            return NotImplemented
        return self.order < other.order

    @classmethod
    def from_token(cls, token: str) -> "MarkerKind":
        """Map a marker kind token; anything unrecognized is ``UNKNOWN``."""
        if token == "Before":
            return cls.BEFORE
        if token == "After":
            return cls.AFTER
        return cls.UNKNOWN

    @classmethod
    def from_tag(cls, tag: str) -> Optional["MarkerKind"]:
        return _KINDS_BY_TAG.get(tag)


_ORDER = {MarkerKind.BEFORE: 0, MarkerKind.AFTER: 1, MarkerKind.UNKNOWN: 2}
_TAGS = {MarkerKind.BEFORE: "0b", MarkerKind.AFTER: "1a", MarkerKind.UNKNOWN: "2u"}
_KINDS_BY_TAG = {tag: kind for kind, tag in _TAGS.items()}


@dataclass(frozen=True)
class MarkerInfo:
    """One recognized marker line."""

    pass_name: str
    extras: str
    kind: MarkerKind

    def closes(self, before: "MarkerInfo") -> bool:
        """True when this marker is the ``After`` of *before* (same invocation)."""
        return (
            before.kind is MarkerKind.BEFORE
            and self.kind is MarkerKind.AFTER
            and before.pass_name == self.pass_name
            and before.extras == self.extras
        )
