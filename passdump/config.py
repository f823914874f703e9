"""passdump.config

Settings for split/view runs and the marker grammar presets.

Precedence (lowest to highest)
------------------------------
1. built-in defaults (the dataclass field defaults below)
2. YAML config file (``passdump.yaml`` in the working directory, or an explicit path)
3. environment variables (``PASSDUMP_*``; a ``.env`` file is loaded by the
   composition root before settings are resolved)
4. CLI flags (applied by the CLI through :meth:`Settings.with_overrides`)

Example ``passdump.yaml``::

  output_directory: dumps/canonicalize-bug
  compress: true
  zstd_level: 9
  threads: 2
  grammar: llvm

A custom grammar can be given instead of a preset::

  marker_prefix: "// ===== IR Dump "
  marker_suffix: " =====\\n"
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

DEFAULT_CONFIG_FILENAME = "passdump.yaml"


@dataclass(frozen=True)
class MarkerGrammar:
    """Literal prefix/suffix bracketing a marker line's payload.

    The suffix includes the terminating newline; matching is exact and
    whitespace sensitive.
    """

    prefix: str
    suffix: str


# i.e. "// -----// IR Dump After LinalgNamedOpConversion (linalg-named-op-conversion) //----- //"
MLIR_GRAMMAR = MarkerGrammar(prefix="// -----// IR Dump ", suffix=" //----- //\n")
# i.e. "*** IR Dump After InstCombinePass on foo ***"
LLVM_GRAMMAR = MarkerGrammar(prefix="*** IR Dump ", suffix=" ***\n")
# i.e. "; *** IR Dump Before SROAPass on main ***"
LLVM_COMMENTED_GRAMMAR = MarkerGrammar(prefix="; *** IR Dump ", suffix=" ***\n")

GRAMMAR_PRESETS: Dict[str, MarkerGrammar] = {
    "mlir": MLIR_GRAMMAR,
    "llvm": LLVM_GRAMMAR,
    "llvm-commented": LLVM_COMMENTED_GRAMMAR,
}


def _as_bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    s = str(v).strip().lower()
    if s in {"1", "true", "yes", "on"}:
        return True
    if s in {"0", "false", "no", "off", ""}:
        return False
    raise ValueError(f"Not a boolean: {v!r}")


@dataclass(frozen=True)
class Settings:
    output_directory: Path = Path("dump")
    compress: bool = True
    zstd_level: int = 6
    threads: int = 1
    delete: bool = False

    grammar: str = "mlir"
    marker_prefix: Optional[str] = None
    marker_suffix: Optional[str] = None

    dump_extension: str = "mlir"
    prelude_extension: str = "txt"

    def __post_init__(self) -> None:
        if (self.marker_prefix is None) != (self.marker_suffix is None):
            raise ValueError("marker_prefix and marker_suffix must be given together")
        if self.marker_prefix is None and self.grammar not in GRAMMAR_PRESETS:
            known = ", ".join(sorted(GRAMMAR_PRESETS))
            raise ValueError(f"Unknown grammar preset {self.grammar!r} (known: {known})")
        if self.threads < 0:
            raise ValueError(f"threads must be >= 0, got {self.threads}")

    def marker_grammar(self) -> MarkerGrammar:
        if self.marker_prefix is not None and self.marker_suffix is not None:
            return MarkerGrammar(prefix=self.marker_prefix, suffix=self.marker_suffix)
        return GRAMMAR_PRESETS[self.grammar]

    def with_grammar(self, preset: str) -> "Settings":
        """Switch to a grammar preset, dropping any custom prefix/suffix."""
        return dataclasses.replace(self, grammar=preset, marker_prefix=None, marker_suffix=None)

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "output_directory" in changes:
            changes["output_directory"] = Path(changes["output_directory"])
        return dataclasses.replace(self, **changes) if changes else self

    @classmethod
    def from_dict(cls, d: Mapping[str, Any], *, base: Optional["Settings"] = None) -> "Settings":
        """Build settings from a config mapping (YAML file contents).

        Unknown keys are rejected so typos do not silently fall back to defaults.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        for k, v in d.items():
            if v is None:
                continue
            if k in {"compress", "delete"}:
                values[k] = _as_bool(v)
            elif k in {"zstd_level", "threads"}:
                values[k] = int(v)
            elif k == "output_directory":
                values[k] = Path(str(v)).expanduser()
            else:
                values[k] = str(v)
        return (base or cls()).with_overrides(**values)

    def to_dict(self) -> Dict[str, Any]:
        d = dataclasses.asdict(self)
        d["output_directory"] = str(self.output_directory)
        return {k: v for k, v in d.items() if v is not None}


_ENV_KEYS = {
    "PASSDUMP_OUTPUT_DIR": "output_directory",
    "PASSDUMP_ZSTD_LEVEL": "zstd_level",
    "PASSDUMP_THREADS": "threads",
    "PASSDUMP_GRAMMAR": "grammar",
    "PASSDUMP_DUMP_EXTENSION": "dump_extension",
}


def settings_from_env(env: Mapping[str, str], *, base: Optional[Settings] = None) -> Settings:
    """Overlay ``PASSDUMP_*`` environment variables on *base*."""
    raw: Dict[str, Any] = {}
    for var, key in _ENV_KEYS.items():
        val = env.get(var)
        if val is not None and val.strip():
            raw[key] = val.strip()
    no_compress = env.get("PASSDUMP_NO_COMPRESS")
    if no_compress is not None and no_compress.strip():
        raw["compress"] = not _as_bool(no_compress)
    return Settings.from_dict(raw, base=base)


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML config file; the top level must be a mapping."""
    import yaml

    p = Path(path).expanduser().resolve()
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Config file is not valid YAML: {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"Config YAML must be a mapping/object at top level: {p}")
    return raw


def load_settings(
    config_path: Optional[Union[str, Path]] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> Settings:
    """Resolve settings from defaults, config file and environment.

    Without an explicit *config_path*, ``passdump.yaml`` in *cwd* is used when
    present.
    """
    settings = Settings()

    if config_path is None:
        candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_FILENAME
        if candidate.exists():
            config_path = candidate
    if config_path is not None:
        settings = Settings.from_dict(load_config_file(config_path), base=settings)

    return settings_from_env(os.environ if env is None else env, base=settings)
