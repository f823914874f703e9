from __future__ import annotations

from dumpflow.facade import PassDumpTool
from dumpflow.orchestrator import ViewRequest
from passdump.config import Settings


def run_view_mode(args, tool: PassDumpTool, *, settings: Settings) -> int:
    req = ViewRequest(
        dump_directory=settings.output_directory,
        settings=settings,
        show_files=bool(getattr(args, "show_files", False)),
    )
    result = tool.view(req)

    print("Pipeline:")
    print(result.rendered, end="")
    return 0
