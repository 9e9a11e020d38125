"""Exception types raised by the decision engine.

Only ``HashingIOError`` ever reaches callers.  ``DiffComputationError`` is
converted into the conflict-marker fallback by the presenter, and
``CleanupError`` is logged and discarded by the artifact janitor.
"""

from __future__ import annotations

from pathlib import Path


class TemplateSyncError(Exception):
    """Base class for all template-sync errors."""


class HashingIOError(TemplateSyncError):
    """A tracked file could not be read while computing its fingerprint.

    Attributes:
        path: The file that could not be read.
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Cannot fingerprint {self.path}: {reason}")


class DiffComputationError(TemplateSyncError):
    """Building a section comparison failed."""


class CleanupError(TemplateSyncError):
    """Generated review documents could not be removed.

    Attributes:
        path: The artifacts directory that could not be removed.
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Cannot remove {self.path}: {reason}")
