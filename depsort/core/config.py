"""YAML configuration loader with validation."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Any

import yaml

OUTPUT_FORMATS = ("text", "json")


@dataclass
class Config:
    """depsort configuration."""
    roots: List[str] = field(default_factory=list)
    output: str = "text"
    json_logs: bool = False
    verbosity: int = 0

    def __post_init__(self):
        if self.output not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format {self.output!r}, expected one of {', '.join(OUTPUT_FORMATS)}"
            )

    def resolve_roots(self) -> Optional[List[str]]:
        """Roots to pass to the resolver; None means all keys."""
        return list(self.roots) if self.roots else None


def load_config(path: Optional[str] = None) -> Config:
    """Load config from YAML file or return defaults.

    Args:
        path: Path to YAML config file. If None, returns default config.

    Returns:
        Config instance

    Raises:
        FileNotFoundError: If specified path doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If a setting has an invalid value
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return _parse_config(data)


def _parse_config(data: Any) -> Config:
    """Parse config dict into Config dataclass."""
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping, got {type(data).__name__}")

    roots = data.get("roots") or []
    if isinstance(roots, str):
        roots = [roots]
    if not isinstance(roots, list) or not all(isinstance(r, str) for r in roots):
        raise ValueError(f"roots must be a list of names, got {roots!r}")

    # bool is an int subclass; `verbosity: true` is a typo, not a level
    verbosity = data.get("verbosity", 0)
    if isinstance(verbosity, bool) or not isinstance(verbosity, int) or verbosity < 0:
        raise ValueError(f"verbosity must be a non-negative integer, got {verbosity!r}")

    json_logs = data.get("json_logs", False)
    if not isinstance(json_logs, bool):
        raise ValueError(f"json_logs must be true or false, got {json_logs!r}")

    output = data.get("output", "text")
    if not isinstance(output, str):
        raise ValueError(f"output must be a string, got {output!r}")

    return Config(
        roots=list(roots),
        output=output,
        json_logs=json_logs,
        verbosity=verbosity,
    )
