"""Output path helpers.

Scripts write figures and metrics under `results/` and intermediate panels
under `data/`. These helpers resolve the configured locations against the
project root and create the directories on demand.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from covid_eda.config import get_project_root


def resolve_path(relative: str | Path, root: Path | None = None) -> Path:
    """Resolve `relative` against the project root (absolute paths pass through)."""
    path = Path(relative)
    if path.is_absolute():
        return path
    return (root or get_project_root()) / path


def output_dir(cfg: Dict[str, Any], key: str, root: Path | None = None) -> Path:
    """Return the configured `output.<key>` directory, creating it if needed.

    Raises KeyError when the config has no such output entry.
    """
    outputs = cfg.get("output", {})
    if key not in outputs:
        raise KeyError(f"Missing output.{key} in config.")
    path = resolve_path(outputs[key], root=root)
    path.mkdir(parents=True, exist_ok=True)
    return path
