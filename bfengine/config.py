"""Engine configuration: dataclass defaults, YAML files and environment."""

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

import yaml

from bfengine.tape import DEFAULT_CAPACITY

BRACKET_STRATEGIES = ("index", "scan")

# Environment variable -> config field
ENV_VARS = {
    "BF_STEP_LIMIT": "max_steps",
    "BF_DELAY_MS": "delay_ms",
    "BF_TAPE_CAPACITY": "tape_capacity",
    "BF_MAX_TAPE_LENGTH": "max_tape_length",
}


@dataclass(frozen=True)
class EngineConfig:
    """Configuration parameters for a run."""
    max_steps: Optional[int] = None      # None: run until the program ends
    delay_ms: int = 0                    # Pause after each step
    tape_capacity: int = DEFAULT_CAPACITY  # Initial cells, and growth block size
    max_tape_length: Optional[int] = None  # None: unbounded growth
    bracket_strategy: str = "index"
    comment_marker: str = "//"
    preview: bool = False
    color: bool = True

    def __post_init__(self):
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError("max_steps must be >= 0")
        if self.delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        if self.tape_capacity <= 0:
            raise ValueError("tape_capacity must be positive")
        if self.max_tape_length is not None and self.max_tape_length <= 0:
            raise ValueError("max_tape_length must be positive")
        if self.bracket_strategy not in BRACKET_STRATEGIES:
            raise ValueError(f"bracket_strategy must be one of {BRACKET_STRATEGIES}, "
                             f"got {self.bracket_strategy!r}")

    def merged(self, **overrides) -> "EngineConfig":
        """Copy with every override that is not None applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


_FIELD_TYPES = {
    "max_steps": int,
    "delay_ms": int,
    "tape_capacity": int,
    "max_tape_length": int,
    "bracket_strategy": str,
    "comment_marker": str,
    "preview": bool,
    "color": bool,
}


def _coerce(data: Mapping[str, Any], source: str) -> Dict[str, Any]:
    known = {f.name for f in fields(EngineConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {source}: {', '.join(unknown)}")
    for name, value in data.items():
        expected = _FIELD_TYPES[name]
        if value is None or (isinstance(value, expected) and not
                             (expected is int and isinstance(value, bool))):
            continue
        raise ValueError(f"{name} in {source} must be {expected.__name__}, got {value!r}")
    return dict(data)


def load_config(path: str, base: Optional[EngineConfig] = None) -> EngineConfig:
    """Load an EngineConfig from a YAML file.

    Supported layouts:
      1) a flat mapping of field names, e.g. ``max_steps: 1000``
      2) the same mapping nested under a top-level ``engine:`` key
    """
    with open(path, "r") as f:
        text = f.read()

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse config file {path}: {e}") from e

    if data is None:
        data = {}
    if isinstance(data, dict) and isinstance(data.get("engine"), dict):
        data = data["engine"]
    if not isinstance(data, dict):
        raise ValueError(f"Unsupported config structure in {path}; expected a mapping")

    return (base or EngineConfig()).merged(**_coerce(data, path))


def config_from_env(base: Optional[EngineConfig] = None,
                    environ: Optional[Mapping[str, str]] = None) -> EngineConfig:
    """Apply BF_* environment variables on top of ``base``."""
    environ = os.environ if environ is None else environ
    overrides = {}
    for var, name in ENV_VARS.items():
        raw = environ.get(var)
        if raw is None or raw.strip() == "":
            continue
        try:
            overrides[name] = int(raw)
        except ValueError:
            raise ValueError(f"{var} must be an integer, got {raw!r}") from None
    return (base or EngineConfig()).merged(**overrides)
