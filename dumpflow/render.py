"""dumpflow.render

Line-art rendering of an inferred pipeline::

  ├─ Canonicalizer
  ├─ Inliner
  │  ├─ Canonicalizer
  │  └─ CSE
  └─ SymbolDCE
"""

from __future__ import annotations

from typing import List, Tuple

from passdump.domain.passes import Pass, Pipeline

MARGIN = "  "
BRANCH = "├─ "
LAST_BRANCH = "└─ "
CONTINUE = "│  "
BLANK = "   "


def _label(p: Pass, show_files: bool) -> str:
    if show_files:
        return f"{p.name} ({p.before.filename}, {p.after.filename})"
    return p.name


def render_lines(pipeline: Pipeline, *, show_files: bool = False) -> List[str]:
    out: List[str] = []
    # (indent for this pass's children, pass, last sibling at its level)
    stack: List[Tuple[str, Pass, bool]] = []

    def push_level(indent: str, level: Pipeline) -> None:
        n = len(level.passes)
        for idx in reversed(range(n)):
            stack.append((indent, level.passes[idx], idx == n - 1))

    push_level(MARGIN, pipeline)
    while stack:
        indent, p, last = stack.pop()
        out.append(f"{indent}{LAST_BRANCH if last else BRANCH}{_label(p, show_files)}")
        push_level(indent + (BLANK if last else CONTINUE), p.children)
    return out


def render_pipeline(pipeline: Pipeline, *, show_files: bool = False) -> str:
    lines = render_lines(pipeline, show_files=show_files)
    return "".join(f"{line}\n" for line in lines)
