"""Pydantic models for the template sync decision engine.

Defines the core data contracts used across all sync modules:

- ``FileAction``: Closed enum of per-file decisions.
- ``TrackedFileRecord``: Manifest view of one tracked file.
- ``FileState``: Classification result for one file.
- ``LineRange``, ``DiffSection``, ``ComparisonResult``: Section diff output.
- ``ConflictResolution``, ``ConflictArtifact``: Conflict presentation output.
- ``ClassificationReport``: Aggregate results for a full classification run.

All models are frozen (immutable) for safety.
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath

from pydantic import BaseModel, field_validator


class FileAction(str, Enum):
    """Possible decisions for a tracked file."""

    ADD = "add"
    REMOVE = "remove"
    UPDATE = "update"
    PRESERVE = "preserve"
    MERGE = "merge"
    SKIP = "skip"


class TrackedFileRecord(BaseModel):
    """A file tracked by the manifest.

    Attributes:
        path: Path relative to the project root (POSIX separators).
        baseline_hash: Fingerprint recorded when the file last matched
            upstream exactly, or ``None`` if never recorded.
        is_official: True if the file ships with the upstream template.
        customized_override: Out-of-band customization flag.  ``None``
            means unset; ``True``/``False`` take precedence over hash
            comparison.
    """

    path: str
    baseline_hash: str | None = None
    is_official: bool = True
    customized_override: bool | None = None

    model_config = {"frozen": True}

    @field_validator("path")
    @classmethod
    def _check_relative(cls, value: str) -> str:
        value = value.replace("\\", "/")
        p = PurePosixPath(value)
        if not value or p.is_absolute():
            raise ValueError(f"Tracked path must be relative: '{value}'")
        if ".." in p.parts:
            raise ValueError(f"Tracked path cannot contain '..': '{value}'")
        return value


class FileState(BaseModel):
    """Classification of one file against its baseline and upstream.

    Attributes:
        path: Path relative to the project root.
        current_hash: Fingerprint of the local file, ``None`` if absent.
        baseline_hash: Recorded baseline fingerprint, if any.
        upstream_hash: Fingerprint of the upstream file, ``None`` if absent.
        is_customized: True if the local file was edited by the user.
        has_upstream_changes: True if upstream moved since the baseline.
        is_conflict: True when both sides changed (action is MERGE).
        is_official: Copied from the tracked record.
        action: The decided action.
    """

    path: str
    current_hash: str | None = None
    baseline_hash: str | None = None
    upstream_hash: str | None = None
    is_customized: bool
    has_upstream_changes: bool
    is_conflict: bool
    is_official: bool
    action: FileAction

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Section diff
# ---------------------------------------------------------------------------


class ChangeType(str, Enum):
    """Which sides of a diff section carry lines."""

    MODIFIED = "modified"
    ADDED = "added"
    REMOVED = "removed"


class LineRange(BaseModel):
    """Inclusive, 1-based range of lines."""

    start: int
    end: int

    model_config = {"frozen": True}

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def __str__(self) -> str:
        if self.start == self.end:
            return str(self.start)
        return f"{self.start}-{self.end}"


class DiffSection(BaseModel):
    """A contiguous, context-padded block of changed lines.

    Line numbers are 1-based and inclusive.  A side that has no lines in
    the section ends before it: it reports its own last line (``0`` for an
    empty text) as both start and end, with an empty content string.
    """

    section_number: int
    current_start_line: int
    current_end_line: int
    incoming_start_line: int
    incoming_end_line: int
    current_content: str
    incoming_content: str
    change_type: ChangeType

    model_config = {"frozen": True}


class ComparisonResult(BaseModel):
    """Result of a positional section comparison between two texts.

    Attributes:
        diff_sections: Non-overlapping sections in line order.
        unchanged_ranges: Line ranges not covered by any section.
        total_changed_lines: Number of line positions that differ.
        total_unchanged_lines: Number of line positions that match.
        current_line_count: Lines in the current text.
        incoming_line_count: Lines in the incoming text.
        total_lines: The larger of the two line counts.
        context_lines: Context padding used to build the sections.
    """

    diff_sections: list[DiffSection] = []
    unchanged_ranges: list[LineRange] = []
    total_changed_lines: int = 0
    total_unchanged_lines: int = 0
    current_line_count: int = 0
    incoming_line_count: int = 0
    total_lines: int = 0
    context_lines: int = 3

    model_config = {"frozen": True}

    @property
    def has_changes(self) -> bool:
        return bool(self.diff_sections)


# ---------------------------------------------------------------------------
# Conflict presentation
# ---------------------------------------------------------------------------


class ConflictStrategy(str, Enum):
    """How a conflict was presented to the user."""

    MARKERS = "markers"
    REVIEW_DOCUMENT = "review_document"


class ConflictArtifact(BaseModel):
    """Review document generated for one conflicted file during a run."""

    path: str
    document_path: str

    model_config = {"frozen": True}


class ConflictResolution(BaseModel):
    """Outcome of presenting one conflict.

    Attributes:
        path: Conflicted file, relative to the project root.
        strategy: Presentation that was written.
        line_count: Larger line count of current and incoming text.
        artifact_path: Review document path for ``REVIEW_DOCUMENT``.
        fell_back: True if review rendering failed and markers were used.
        error: Message of the rendering failure when ``fell_back``.
    """

    path: str
    strategy: ConflictStrategy
    line_count: int
    artifact_path: str | None = None
    fell_back: bool = False
    error: str | None = None

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Run report
# ---------------------------------------------------------------------------


class ClassificationReport(BaseModel):
    """Aggregate report for classifying every file of a project.

    Attributes:
        states: One ``FileState`` per classified path, sorted by path.
        errors: Path to error message for files that could not be hashed.
        started_at: ISO 8601 timestamp when classification started.
        completed_at: ISO 8601 timestamp when classification completed.
    """

    states: list[FileState] = []
    errors: dict[str, str] = {}
    started_at: str
    completed_at: str | None = None

    model_config = {"frozen": True}

    def _with_action(self, action: FileAction) -> list[FileState]:
        return [s for s in self.states if s.action == action]

    @property
    def to_add(self) -> list[FileState]:
        """States where action is ADD."""
        return self._with_action(FileAction.ADD)

    @property
    def to_remove(self) -> list[FileState]:
        """States where action is REMOVE."""
        return self._with_action(FileAction.REMOVE)

    @property
    def to_update(self) -> list[FileState]:
        """States where action is UPDATE."""
        return self._with_action(FileAction.UPDATE)

    @property
    def preserved(self) -> list[FileState]:
        """States where action is PRESERVE."""
        return self._with_action(FileAction.PRESERVE)

    @property
    def conflicts(self) -> list[FileState]:
        """States where action is MERGE."""
        return self._with_action(FileAction.MERGE)

    @property
    def skipped(self) -> list[FileState]:
        """States where action is SKIP."""
        return self._with_action(FileAction.SKIP)

    def summary(self) -> str:
        """Format a short human-readable summary of the run.

        Returns:
            Multi-line summary string with counts by action.
        """
        lines = [
            "Template sync classification",
            f"  Add:       {len(self.to_add)}",
            f"  Update:    {len(self.to_update)}",
            f"  Remove:    {len(self.to_remove)}",
            f"  Preserve:  {len(self.preserved)}",
            f"  Conflicts: {len(self.conflicts)}",
            f"  Skipped:   {len(self.skipped)}",
            f"  Errors:    {len(self.errors)}",
            f"  Total:     {len(self.states) + len(self.errors)}",
        ]
        return "\n".join(lines)
