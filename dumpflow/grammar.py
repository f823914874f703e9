"""dumpflow.grammar

Marker line recognition.

A line is a marker iff it starts with the grammar's prefix and ends with its
suffix (newline included). The payload in between, trimmed, is
``<Kind> <PassName> <Extras...>``: split once on the first space, then once
more on the next one. Both splits must succeed, so a marker always has a
non-empty extras part; for MLIR that is the ``(pass-argument)`` in
parentheses.

Two things are recoverable and only produce a warning:

* an unrecognized kind token: still a marker, with kind ``UNKNOWN``
* a marker-shaped line whose payload does not split in three: not a marker,
  the caller treats it as ordinary content
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from passdump.config import MLIR_GRAMMAR, MarkerGrammar
from passdump.domain.markers import MarkerInfo, MarkerKind

logger = logging.getLogger(__name__)

WarnFn = Callable[[str], None]


def log_warning(message: str) -> None:
    logger.warning("%s", message)


def match_marker_payload(line: str, grammar: MarkerGrammar = MLIR_GRAMMAR) -> Optional[str]:
    """Return the text between prefix and suffix, or None if *line* is not marker-shaped."""
    if not line.startswith(grammar.prefix):
        return None
    rest = line[len(grammar.prefix):]
    if not rest.endswith(grammar.suffix):
        return None
    return rest[: len(rest) - len(grammar.suffix)]


def split_marker_payload(payload: str) -> Optional[Tuple[str, str, str]]:
    """Split a payload into ``(kind_token, pass_name, extras)``."""
    kind, sep, rest = payload.strip().partition(" ")
    if not sep:
        return None
    pass_name, sep, extras = rest.partition(" ")
    if not sep:
        return None
    return kind, pass_name, extras


def parse_kind(token: str, *, warn: WarnFn = log_warning) -> MarkerKind:
    kind = MarkerKind.from_token(token)
    if kind is MarkerKind.UNKNOWN:
        warn(f"unknown kind `{token}`")
    return kind


def parse_marker_payload(payload: str, line: str, *, warn: WarnFn = log_warning) -> Optional[MarkerInfo]:
    """Turn the payload of marker-shaped *line* into a :class:`MarkerInfo`.

    Returns None (after a warning) when the payload does not split in three.
    """
    parts = split_marker_payload(payload)
    if parts is None:
        warn(f"unable to parse line: `{line.rstrip()}`")
        return None

    kind_token, pass_name, extras = parts
    return MarkerInfo(pass_name=pass_name, extras=extras, kind=parse_kind(kind_token, warn=warn))


def parse_marker_line(
    line: str,
    grammar: MarkerGrammar = MLIR_GRAMMAR,
    *,
    warn: WarnFn = log_warning,
) -> Optional[MarkerInfo]:
    """Recognize *line* as a marker.

    Returns None for ordinary content, including marker-shaped lines that fail
    the payload split (those are reported through *warn*).
    """
    payload = match_marker_payload(line, grammar)
    if payload is None:
        return None
    return parse_marker_payload(payload, line, warn=warn)
