"""passdump.domain

Domain objects that form the *contract* between the split and view runs.

Key idea
--------
The splitter never writes structure to disk; it only writes artifact names.
Everything the viewer needs to rebuild the pass tree is encoded in those names,
so the types here are the whole vocabulary both sides share.
"""

from __future__ import annotations

from .artifacts import ArtifactName, ArtifactRef
from .markers import MarkerInfo, MarkerKind
from .passes import NestedPass, Pass, Pipeline, SinglePass

__all__ = [
    "ArtifactName",
    "ArtifactRef",
    "MarkerInfo",
    "MarkerKind",
    "NestedPass",
    "Pass",
    "Pipeline",
    "SinglePass",
]
