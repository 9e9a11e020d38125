"""Unified configuration schema for template_sync.

Defines Pydantic models for the unified config structure with dedicated
sections for the decision engine and logging.

Usage:
    from template_sync.config_schema import UnifiedConfig, build_config

    raw = load_project_config(project_root)
    unified = build_config(raw)
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_ARTIFACTS_DIR = ".template_sync/conflicts"
DEFAULT_SMALL_FILE_THRESHOLD = 100
DEFAULT_CONTEXT_LINES = 3


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class EngineConfig(BaseModel):
    """Decision engine settings.

    The decision table itself is not configurable; these only tune how
    conflicts are presented and where review documents go.
    """

    artifacts_dir: str = Field(
        default=DEFAULT_ARTIFACTS_DIR,
        description="Review document directory, relative to the project root",
    )
    small_file_threshold: int = Field(
        default=DEFAULT_SMALL_FILE_THRESHOLD,
        ge=1,
        description="Largest line count that gets inline conflict markers",
    )
    context_lines: int = Field(
        default=DEFAULT_CONTEXT_LINES,
        ge=0,
        le=50,
        description="Context lines around each review section (0-50)",
    )
    custom_file_extension: str = Field(
        default=".md",
        description="Suffix of files considered when scanning for user-added files",
    )

    model_config = {"frozen": True}

    @field_validator("custom_file_extension")
    @classmethod
    def _leading_dot(cls, value: str) -> str:
        if not value.startswith("."):
            raise ValueError(
                f"custom_file_extension must start with '.': '{value}'"
            )
        return value


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file: Optional log file path.
    """

    level: str = Field(default="INFO", description="Log level")
    file: str | None = Field(default=None, description="Log file path")

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Top-level unified config
# ---------------------------------------------------------------------------


class UnifiedConfig(BaseModel):
    """Top-level unified configuration.

    Every section has sensible defaults, so ``UnifiedConfig()``
    (zero-config) is always valid.
    """

    engine: EngineConfig = Field(default_factory=EngineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}


def build_config(raw_data: dict) -> UnifiedConfig:
    """Construct a ``UnifiedConfig`` from the raw dict returned by
    ``load_project_config()``.

    Unknown top-level sections are ignored with a warning.

    Args:
        raw_data: Merged configuration dictionary.

    Returns:
        Validated ``UnifiedConfig`` instance.
    """
    if not raw_data:
        return UnifiedConfig()

    known = set(UnifiedConfig.model_fields)
    for key in sorted(set(raw_data) - known):
        logger.warning("Ignoring unknown config section '%s'", key)

    return UnifiedConfig(
        **{k: v for k, v in raw_data.items() if k in known}
    )
