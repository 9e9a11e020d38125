"""Template sync decision engine.

Public API for deciding, per tracked file, how a project should follow an
upstream template without ever silently destroying user edits.

Architecture
------------
Each side is compared against the recorded **baseline fingerprint**: the
local file to detect customization, the upstream file to detect template
changes.  A file changed on both sides is a conflict and is presented for
human review instead of being merged.

Modules:

- ``hasher``     -- normalised SHA-256 fingerprints (BOM, CRLF and
  trailing whitespace insensitive).
- ``classifier`` -- ``classify_file``: the action table; plus
  filesystem-backed ``classify_record`` / ``classify_records``.
- ``scanner``    -- ``find_custom_files``: user-added files in a tracked
  directory.
- ``differ``     -- ``compare_sections``: positional, context-padded
  section diff.
- ``presenter``  -- ``ConflictPresenter``: inline markers for small files,
  Markdown review documents for large ones.
- ``janitor``    -- ``cleanup_artifacts``: best-effort removal of review
  documents.
- ``models``     -- pydantic data contracts.
- ``reporter``   -- human-readable and JSON report formatting.

Usage example
-------------
::

    from pathlib import Path
    from template_sync.sync import (
        ConflictPresenter,
        TrackedFileRecord,
        classify_records,
        cleanup_artifacts,
        format_classification_report,
    )

    root = Path("/path/to/project")
    records = [TrackedFileRecord(path="docs/guide.md", baseline_hash=h)]
    report = classify_records(records, root, upstream_contents)
    print(format_classification_report(report))

    presenter = ConflictPresenter(root)
    for state in report.conflicts:
        presenter.resolve_from_disk(
            state.path, baselines[state.path], upstream_contents[state.path],
            "v1.2.0", "v1.3.0",
        )

    # ... once the user has reviewed the documents
    cleanup_artifacts(root)
"""

from .classifier import (
    classify_file,
    classify_new_upstream,
    classify_record,
    classify_records,
)
from .differ import compare_sections
from .errors import (
    CleanupError,
    DiffComputationError,
    HashingIOError,
    TemplateSyncError,
)
from .hasher import content_hash, hash_file, normalize_content
from .janitor import cleanup_artifacts
from .models import (
    ChangeType,
    ClassificationReport,
    ComparisonResult,
    ConflictArtifact,
    ConflictResolution,
    ConflictStrategy,
    DiffSection,
    FileAction,
    FileState,
    LineRange,
    TrackedFileRecord,
)
from .presenter import (
    ConflictPresenter,
    build_conflict_markers,
    render_review_document,
)
from .reporter import (
    format_classification_report,
    format_dry_run_preview,
    report_to_json,
)
from .scanner import find_configured_custom_files, find_custom_files

__all__ = [
    "ChangeType",
    "ClassificationReport",
    "CleanupError",
    "ComparisonResult",
    "ConflictArtifact",
    "ConflictPresenter",
    "ConflictResolution",
    "ConflictStrategy",
    "DiffComputationError",
    "DiffSection",
    "FileAction",
    "FileState",
    "HashingIOError",
    "LineRange",
    "TemplateSyncError",
    "TrackedFileRecord",
    "build_conflict_markers",
    "classify_file",
    "classify_new_upstream",
    "classify_record",
    "classify_records",
    "cleanup_artifacts",
    "compare_sections",
    "content_hash",
    "find_configured_custom_files",
    "find_custom_files",
    "format_classification_report",
    "format_dry_run_preview",
    "hash_file",
    "normalize_content",
    "render_review_document",
    "report_to_json",
]
