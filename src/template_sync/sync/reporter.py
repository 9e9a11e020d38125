"""Classification report formatting functions.

Provides human-readable and machine-readable output for a classification
run:

- ``format_classification_report`` -- full summary grouped by action.
- ``format_dry_run_preview`` -- proposed actions grouped by type.
- ``report_to_json`` -- structured dict for JSON serialisation.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ClassificationReport

from .models import FileAction

_DISPLAY_ORDER = [
    FileAction.ADD,
    FileAction.UPDATE,
    FileAction.REMOVE,
    FileAction.PRESERVE,
    FileAction.MERGE,
]

_SECTION_TITLES = {
    FileAction.ADD: "New from template:",
    FileAction.UPDATE: "Updated from template:",
    FileAction.REMOVE: "Removed upstream:",
    FileAction.PRESERVE: "Customized (kept as is):",
    FileAction.MERGE: "Conflicts (changed locally and upstream):",
}

# ------------------------------------------------------------------
# Human-readable report
# ------------------------------------------------------------------


def format_classification_report(report: ClassificationReport) -> str:
    """Format a classification report as human-readable text.

    Sections are only included when they contain at least one file.
    Skipped files are summarised by count only.

    Args:
        report: The completed classification report.

    Returns:
        Multi-line formatted string.
    """
    lines: list[str] = []
    lines.append("Template sync report")
    lines.append(f"Started: {report.started_at}")
    if report.completed_at:
        lines.append(f"Completed: {report.completed_at}")
    lines.append("")

    lines.append(
        f"Checked {len(report.states) + len(report.errors)} files: "
        f"{len(report.to_add)} new, {len(report.to_update)} updated, "
        f"{len(report.to_remove)} removed, "
        f"{len(report.preserved)} customized, "
        f"{len(report.conflicts)} conflicts, {len(report.errors)} errors"
    )
    lines.append("")

    groups: dict[FileAction, list[str]] = defaultdict(list)
    for state in report.states:
        groups[state.action].append(state.path)

    for action in _DISPLAY_ORDER:
        if not groups.get(action):
            continue
        lines.append(_SECTION_TITLES[action])
        for path in groups[action]:
            lines.append(f"  {path}")
        lines.append("")

    if report.errors:
        lines.append("Errors:")
        for path, message in sorted(report.errors.items()):
            lines.append(f"  {path}: {message}")
        lines.append("")

    skipped = len(report.skipped)
    if skipped > 0:
        lines.append(f"Unchanged: {skipped} files")
        lines.append("")

    return "\n".join(lines).rstrip()


# ------------------------------------------------------------------
# Dry-run preview
# ------------------------------------------------------------------


def format_dry_run_preview(report: ClassificationReport) -> str:
    """Format proposed actions grouped by type.

    Each proposed action is shown as ``[ACTION]`` followed by its paths.

    Args:
        report: A classification report.

    Returns:
        Multi-line formatted string.
    """
    lines: list[str] = []
    lines.append("DRY RUN -- No changes will be made")
    lines.append("")

    groups: dict[FileAction, list[str]] = defaultdict(list)
    for state in report.states:
        groups[state.action].append(state.path)

    for action in _DISPLAY_ORDER:
        if action not in groups:
            continue
        lines.append(f"[{action.value.upper()}]")
        for path in groups[action]:
            lines.append(f"  {path}")
        lines.append("")

    skip_count = len(groups.get(FileAction.SKIP, []))
    if skip_count > 0:
        lines.append(f"Skipped: {skip_count} files (unchanged)")
        lines.append("")

    if not any(a != FileAction.SKIP for a in groups):
        lines.append("No changes needed.")
        lines.append("")

    return "\n".join(lines).rstrip()


# ------------------------------------------------------------------
# JSON output
# ------------------------------------------------------------------


def report_to_json(report: ClassificationReport) -> dict:
    """Convert a classification report to a dict for JSON serialisation.

    Args:
        report: The classification report.

    Returns:
        Dict with timestamps, counts, per-file states and errors.
    """
    return {
        "started_at": report.started_at,
        "completed_at": report.completed_at,
        "counts": {
            "total": len(report.states) + len(report.errors),
            "add": len(report.to_add),
            "update": len(report.to_update),
            "remove": len(report.to_remove),
            "preserve": len(report.preserved),
            "merge": len(report.conflicts),
            "skip": len(report.skipped),
            "errors": len(report.errors),
        },
        "files": [state.model_dump(mode="json") for state in report.states],
        "errors": dict(sorted(report.errors.items())),
    }
