"""Effective configuration for a project.

Settings come from the YAML files found by ``config_loader``; keyword
overrides passed by the caller win over them.  Nothing is read from the
environment: the orchestrating tool owns that surface and passes what it
needs as overrides.

Precedence (highest to lowest):
    explicit overrides > project config > user config > defaults
"""

import logging
from pathlib import Path
from typing import Any

from .config_loader import load_project_config
from .config_schema import UnifiedConfig, build_config

logger = logging.getLogger(__name__)


def load_config(project_root: Path, **engine_overrides: Any) -> UnifiedConfig:
    """Load the effective configuration for *project_root*.

    Args:
        project_root: Absolute path to the project root.
        **engine_overrides: Engine fields that win over the config files
            (``artifacts_dir``, ``small_file_threshold``, ``context_lines``,
            ``custom_file_extension``).  ``None`` values are ignored.

    Returns:
        Validated ``UnifiedConfig``.

    Raises:
        ValueError: If a config file is not a mapping.
        yaml.YAMLError: If a config file is not valid YAML.
        pydantic.ValidationError: If a value is out of range.
    """
    raw = dict(load_project_config(project_root))
    engine = dict(raw.get("engine") or {})
    engine.update(
        {k: v for k, v in engine_overrides.items() if v is not None}
    )
    raw["engine"] = engine

    config = build_config(raw)
    logger.debug("Effective engine config: %s", config.engine)
    return config
