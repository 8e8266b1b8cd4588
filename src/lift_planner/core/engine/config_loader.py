"""
YAML → engine settings loader.

Loads tunable engine settings from engine.yaml (bundled with the package)
and optionally merges user overrides from ~/.lift-planner/engine.yaml.

Usage:
    from lift_planner.core.engine.config_loader import load_engine_config
    cfg = load_engine_config()
    rotation = focus_rotation_from(cfg)

The bundled file must parse; a broken user override file produces a
warning and is ignored.
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from ..config import FOCUS_ROTATION, USER_CONFIG_DIRNAME

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML mapping; raise ValueError if it is not one."""
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    return data


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_yaml_path() -> Path:
    """Return the path to the bundled engine.yaml."""
    # config_loader.py lives at src/lift_planner/core/engine/
    return Path(__file__).parent.parent.parent / "engine.yaml"


def get_user_yaml_path() -> Path | None:
    """Return ~/.lift-planner/engine.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / USER_CONFIG_DIRNAME / "engine.yaml"
    return p if p.exists() else None


def load_engine_config(user_path: Path | None = None) -> dict[str, Any]:
    """
    Load and merge engine configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/lift_planner/engine.yaml
    2. User override (``user_path`` or ~/.lift-planner/engine.yaml)

    Returns:
        Merged dict of config sections.
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled.exists():
        config = _deep_merge(config, _load_yaml_file(bundled))

    user = user_path if user_path is not None else get_user_yaml_path()
    if user is not None and user.exists():
        try:
            user_cfg = _load_yaml_file(user)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            warnings.warn(
                f"lift-planner: ignoring user config {user} ({exc})",
                stacklevel=2,
            )
            user_cfg = {}
        if user_cfg:
            config = _deep_merge(config, user_cfg)

    return config


def focus_rotation_from(config: dict[str, Any]) -> tuple[str, ...]:
    """
    Return the configured focus rotation, or the built-in default.

    A value that is not a non-empty list of non-empty strings produces a
    warning and falls back to FOCUS_ROTATION.
    """
    rotation = config.get("focus_rotation")
    if rotation is None:
        return FOCUS_ROTATION
    if (
        not isinstance(rotation, list)
        or not rotation
        or not all(isinstance(f, str) and f.strip() for f in rotation)
    ):
        warnings.warn(
            f"lift-planner: ignoring invalid focus_rotation {rotation!r}",
            stacklevel=2,
        )
        return FOCUS_ROTATION
    return tuple(f.strip() for f in rotation)
