"""dumpflow.wiring

This module is the **composition root**.

It is the single place where a running tool is assembled from its parts:

- load ``.env`` into the environment (python-dotenv, never overriding)
- resolve :class:`passdump.config.Settings` from config file + environment
- build the :class:`~dumpflow.facade.PassDumpTool` facade

Entrypoints (CLI, scripts) call in here instead of repeating that setup.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from passdump.config import Settings, load_settings

from .facade import PassDumpTool

ENV_FILENAME = ".env"


def load_env(cwd: Optional[Path] = None) -> bool:
    """Load ``<cwd>/.env`` if present. Returns True when a file was loaded."""
    env_path = (cwd or Path.cwd()) / ENV_FILENAME
    if not env_path.exists():
        return False
    return bool(load_dotenv(env_path, override=False))


def resolve_settings(
    config_path: Optional[Union[str, Path]] = None,
    *,
    cwd: Optional[Path] = None,
    use_dotenv: bool = True,
) -> Settings:
    if use_dotenv:
        load_env(cwd)
    return load_settings(config_path, cwd=cwd)


def build_tool() -> PassDumpTool:
    return PassDumpTool()
