"""dumpflow.splitter

Streaming split of one log into per-dump sinks.

The splitter reads one line at a time and keeps exactly one active sink. When
a marker line is recognized it asks ``advance`` for the next sink, finalizes
the previous one, and writes the marker line as the *first* line of the new
sink. Every other line, malformed marker-looking lines included, is written
verbatim to whatever sink is active.

Lines are handled as bytes and written back unchanged; decoding is only used
to recognize markers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Protocol, Union

from passdump.config import MLIR_GRAMMAR, MarkerGrammar
from passdump.domain.markers import MarkerInfo

from .grammar import WarnFn, log_warning, match_marker_payload, parse_marker_payload


class ArtifactSink(Protocol):
    def write(self, data: bytes) -> int: ...

    def close(self) -> None: ...


AdvanceFn = Callable[[MarkerInfo], ArtifactSink]


@dataclass
class SplitStats:
    lines: int = 0
    bytes_read: int = 0
    markers: int = 0
    malformed: int = 0


def split_stream(
    inp: Iterable[Union[bytes, str]],
    advance: AdvanceFn,
    initial_sink: ArtifactSink,
    *,
    grammar: MarkerGrammar = MLIR_GRAMMAR,
    warn: WarnFn = log_warning,
) -> SplitStats:
    """Route every line of *inp* to exactly one sink.

    The sink that is active when the input ends is finalized before returning.
    Any I/O error propagates immediately; there is no recovery of the artifact
    being written.
    """
    stats = SplitStats()
    output = initial_sink
    try:
        for raw in inp:
            if isinstance(raw, str):
                line = raw
                data = raw.encode("utf-8", "surrogateescape")
            else:
                line = raw.decode("utf-8", "surrogateescape")
                data = raw
            stats.lines += 1
            stats.bytes_read += len(data)

            payload = match_marker_payload(line, grammar)
            if payload is not None:
                info = parse_marker_payload(payload, line, warn=warn)
                if info is None:
                    stats.malformed += 1
                else:
                    previous, output = output, advance(info)
                    previous.close()
                    stats.markers += 1

            output.write(data)
    finally:
        output.close()

    return stats
