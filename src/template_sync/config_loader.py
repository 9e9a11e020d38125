"""
Reading the YAML configuration of a project.

Two files are read, lowest precedence first:

1. ``~/.config/template_sync/config.yml`` -- user defaults.
2. ``<project>/.template_sync/config.yml`` -- project settings.

Sections are merged key by key, so a project file that only sets
``engine.context_lines`` keeps the user's ``engine.artifacts_dir``.
Missing files are skipped; with neither present the result is ``{}``.

Usage:
    from template_sync.config_loader import load_project_config

    raw = load_project_config(Path("/path/to/project"))
"""

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

PROJECT_CONFIG_DIR = ".template_sync"
CONFIG_FILENAME = "config.yml"


def user_config_path() -> Path:
    """Path of the user-wide config file (it may not exist)."""
    return Path.home() / ".config" / "template_sync" / CONFIG_FILENAME


def project_config_path(project_root: Path) -> Path:
    """Path of the project config file (it may not exist)."""
    return project_root / PROJECT_CONFIG_DIR / CONFIG_FILENAME


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse one config file.

    An empty file yields ``{}``.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the document is not a mapping.
    """
    with open(path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Config file {path} must contain a mapping, "
            f"got {type(data).__name__}"
        )
    return data


def _merge_sections(
    base: dict[str, Any], override: dict[str, Any]
) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


def load_project_config(project_root: Path) -> dict[str, Any]:
    """Merge the user and project config files for *project_root*.

    Returns:
        The merged raw dict, ready for ``build_config``.
    """
    merged: dict[str, Any] = {}
    for path in (user_config_path(), project_config_path(project_root)):
        if not path.is_file():
            continue
        logger.debug("Loading config: %s", path)
        merged = _merge_sections(merged, read_config_file(path))
    return merged
