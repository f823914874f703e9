from __future__ import annotations

import logging
import sys
from typing import Dict, Optional, TextIO

from termcolor import colored
from tqdm import tqdm

from passdump.domain.markers import MarkerInfo

_LEVEL_STYLES = {
    logging.DEBUG: ("debug", "cyan"),
    logging.INFO: ("info", "green"),
    logging.WARNING: ("warning", "yellow"),
    logging.ERROR: ("error", "red"),
    logging.CRITICAL: ("error", "red"),
}


class ColorFormatter(logging.Formatter):
    """``warning: <message>`` with a bold colored label."""

    def __init__(self, *, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        label, color = _LEVEL_STYLES.get(record.levelno, (record.levelname.lower(), "white"))
        if self.use_color:
            label = colored(label, color, attrs=["bold"])
        msg = record.getMessage()
        if record.exc_info and record.levelno <= logging.DEBUG:
            msg = f"{msg}\n{self.formatException(record.exc_info)}"
        return f"{label}: {msg}"


_handler: Optional[logging.Handler] = None


def configure_logging(*, verbose: bool = False, stream: Optional[TextIO] = None) -> logging.Handler:
    """Route library logging to stderr with colored level labels."""
    global _handler

    stream = stream or sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColorFormatter(use_color=_isatty(stream)))

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    _handler = handler
    return handler


def _isatty(stream: TextIO) -> bool:
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError):
        return False


class TqdmSplitProgress:
    """Spinner-style counter shown while splitting.

    Position is the current sequence number; the description is the pass whose
    dump is being written.
    """

    def __init__(
        self,
        *,
        enabled: bool = True,
        message: str = "Waiting for input on stdin...",
        stream: Optional[TextIO] = None,
    ) -> None:
        self._stream = stream or sys.stderr
        self._bar = tqdm(
            total=None,
            desc=message,
            bar_format="{desc} {n_fmt} [{elapsed}]",
            file=self._stream,
            disable=not enabled,
            leave=False,
        )

    def advanced(self, sequence: int, info: MarkerInfo) -> None:
        self._bar.n = sequence
        self._bar.set_description_str(info.pass_name, refresh=False)
        self._bar.refresh()

    def finished(self, passes: int) -> None:
        self._bar.close()
        count = colored(str(passes), attrs=["bold"]) if _isatty(self._stream) else str(passes)
        print(f"Processed output from {count} passes.", file=self._stream)


def choose_from_menu(title: str, options: Dict[str, object]) -> str:
    """Show a 1..N menu of keys in 'options' and return the chosen key."""
    keys = list(options.keys())
    print("\n" + title)
    for idx, key in enumerate(keys, start=1):
        print(f"[{idx}] {options[key]} ({key})")

    while True:
        choice = input(f"Enter number (1-{len(keys)}) or Z to exit: ").strip()
        if not choice:
            print("Please enter a number or Z to exit.")
            continue
        if choice.upper() == "Z":
            print("Exiting (Z selected).")
            raise SystemExit(0)
        if choice.isdigit():
            n = int(choice)
            if 1 <= n <= len(keys):
                return keys[n - 1]
        print(f"Invalid choice. Please enter 1-{len(keys)} or Z.")
