"""dumpflow.facade

A *single, high-level* object for this repo's two capabilities.

Callers (CLI, scripts, notebooks, CI jobs) should use :class:`PassDumpTool`
built via :func:`dumpflow.wiring.build_tool` instead of importing the splitter
and inferencer directly. The facade only delegates; the implementations are
injectable so tests can swap them out.
"""

from __future__ import annotations

from collections.abc import Callable

from .orchestrator import SplitRequest, SplitResult, ViewRequest, ViewResult, run_split, run_view


class PassDumpTool:
    """High-level facade over split/view."""

    def __init__(
        self,
        *,
        split_fn: Callable[..., SplitResult] = run_split,
        view_fn: Callable[..., ViewResult] = run_view,
    ) -> None:
        self._split_fn = split_fn
        self._view_fn = view_fn

    def split(self, req: SplitRequest, **kwargs) -> SplitResult:
        """Split a log stream into a directory of artifacts."""
        return self._split_fn(req, **kwargs)

    def view(self, req: ViewRequest, **kwargs) -> ViewResult:
        """Infer (and render) the pass pipeline of a dump directory."""
        return self._view_fn(req, **kwargs)
