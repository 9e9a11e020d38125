"""Removal of generated review documents at the end of a run.

Cleanup is housekeeping: it is safe to call any number of times, and a
failure (typically a document still open in an editor) is logged and
never propagated.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from template_sync.config_schema import DEFAULT_ARTIFACTS_DIR
from template_sync.sync.errors import CleanupError

logger = logging.getLogger(__name__)


def _remove_tree(target: Path) -> None:
    try:
        shutil.rmtree(target)
    except FileNotFoundError:
        pass
    except OSError as exc:
        raise CleanupError(target, exc.strerror or str(exc)) from exc


def cleanup_artifacts(
    project_root: Path, artifacts_dir: str = DEFAULT_ARTIFACTS_DIR
) -> bool:
    """Delete the artifacts directory tree under *project_root*.

    Args:
        project_root: Absolute path to the project root.
        artifacts_dir: Artifacts directory, relative to *project_root*.

    Returns:
        ``True`` if the directory is gone afterwards, ``False`` if removal
        failed.  Never raises.
    """
    target = project_root / artifacts_dir
    if not target.exists():
        logger.debug("No artifacts to clean up at %s", target)
        return True

    try:
        _remove_tree(target)
    except CleanupError as exc:
        logger.warning("Could not clean up conflict artifacts: %s", exc)
        return False

    logger.info("Removed conflict artifacts at %s", target)
    return True
