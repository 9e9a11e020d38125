"""Detection of user-added files in tracked directories."""

from __future__ import annotations

from collections.abc import Collection
from pathlib import Path

from template_sync.config_schema import EngineConfig


def find_custom_files(
    directory: Path,
    official_names: Collection[str],
    extension: str = ".md",
) -> list[str]:
    """List files in *directory* that do not ship with the template.

    Only regular files directly under *directory* whose suffix equals
    *extension* are considered.  Names are compared to *official_names*
    by exact string match; whether two names that differ only in case can
    coexist depends on the host filesystem.

    Args:
        directory: Directory to scan (not recursive).
        official_names: File names tracked as official template files.
        extension: File suffix to consider, including the dot.

    Returns:
        Sorted file names of user-added files.  Empty if *directory*
        does not exist.
    """
    if not directory.is_dir():
        return []

    official = set(official_names)
    return sorted(
        path.name
        for path in directory.iterdir()
        if path.is_file()
        and path.suffix == extension
        and path.name not in official
    )


def find_configured_custom_files(
    directory: Path,
    official_names: Collection[str],
    config: EngineConfig,
) -> list[str]:
    """``find_custom_files`` with the extension from the engine config."""
    return find_custom_files(
        directory, official_names, extension=config.custom_file_extension
    )
