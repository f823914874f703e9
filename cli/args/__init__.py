"""CLI argument builder modules.

The top-level :mod:`passdump_cli` is intentionally kept thin. Groups of flags
are registered via small "arg builder" functions housed here.

Each module exposes a single public function:

- :func:`cli.args.base.add_base_args`
- :func:`cli.args.split.add_split_args`
- :func:`cli.args.view.add_view_args`
"""

from __future__ import annotations

__all__ = [
    "base",
    "split",
    "view",
]
