"""File state classification.

Decides, for each tracked file, whether it is unmodified, customized by
the user, changed upstream, or both.  Local and upstream fingerprints are
each compared against the recorded baseline fingerprint:

* a file whose current fingerprint differs from the baseline is
  *customized* (unless an explicit override says otherwise);
* a file whose upstream fingerprint differs from the baseline has
  *upstream changes*;
* both at once is a conflict, which is never resolved automatically.

``classify_file`` is pure.  ``classify_record`` and ``classify_records``
read local files to compute fingerprints and are the only I/O here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from pathlib import Path

from template_sync.sync.errors import HashingIOError
from template_sync.sync.hasher import content_hash, hash_file
from template_sync.sync.models import (
    ClassificationReport,
    FileAction,
    FileState,
    TrackedFileRecord,
)

logger = logging.getLogger(__name__)


def classify_file(
    path: str,
    current_hash: str | None = None,
    baseline_hash: str | None = None,
    upstream_hash: str | None = None,
    is_official: bool = True,
    override: bool | None = None,
) -> FileState:
    """Classify one file from its fingerprints.

    Args:
        path: File path relative to the project root.
        current_hash: Fingerprint of the local file, ``None`` if absent.
        baseline_hash: Recorded baseline fingerprint, ``None``/empty if
            never recorded.
        upstream_hash: Fingerprint of the upstream file, ``None`` if
            absent upstream.
        is_official: Whether the file ships with the template.
        override: Out-of-band customization flag; takes precedence over
            hash comparison when not ``None``.

    Returns:
        The resulting ``FileState``.
    """
    exists_locally = current_hash is not None
    exists_upstream = upstream_hash is not None
    has_baseline = bool(baseline_hash)

    if override is not None:
        is_customized = override
    elif not has_baseline:
        # No baseline: nothing to compare against.
        is_customized = False
    else:
        is_customized = current_hash != baseline_hash

    if has_baseline:
        has_upstream_changes = upstream_hash != baseline_hash
    else:
        has_upstream_changes = current_hash != upstream_hash

    action = _decide_action(
        exists_locally, exists_upstream, is_customized, has_upstream_changes
    )

    return FileState(
        path=path,
        current_hash=current_hash,
        baseline_hash=baseline_hash,
        upstream_hash=upstream_hash,
        is_customized=is_customized,
        has_upstream_changes=has_upstream_changes,
        is_conflict=action == FileAction.MERGE,
        is_official=is_official,
        action=action,
    )


def _decide_action(
    exists_locally: bool,
    exists_upstream: bool,
    is_customized: bool,
    has_upstream_changes: bool,
) -> FileAction:
    """Map presence and change flags to an action.

    Existence is checked first, then customization and upstream change.
    """
    if not exists_locally:
        return FileAction.ADD if exists_upstream else FileAction.SKIP

    if not exists_upstream:
        return FileAction.PRESERVE if is_customized else FileAction.REMOVE

    if is_customized:
        return FileAction.MERGE if has_upstream_changes else FileAction.PRESERVE

    return FileAction.UPDATE if has_upstream_changes else FileAction.SKIP


# ---------------------------------------------------------------------------
# Filesystem-backed helpers
# ---------------------------------------------------------------------------


def _local_hash(project_root: Path, rel_path: str) -> str | None:
    """Fingerprint a local file, or ``None`` if it does not exist."""
    abs_path = project_root / rel_path
    if not abs_path.exists():
        return None
    return hash_file(abs_path)


def _upstream_hash(upstream_content: bytes | str | None) -> str | None:
    if upstream_content is None:
        return None
    return content_hash(upstream_content)


def classify_record(
    record: TrackedFileRecord,
    project_root: Path,
    upstream_content: bytes | str | None,
) -> FileState:
    """Classify a tracked file using its on-disk and upstream content.

    Args:
        record: The manifest record for the file.
        project_root: Absolute path to the project root.
        upstream_content: Downloaded upstream content, ``None`` if the
            file no longer exists upstream.

    Raises:
        HashingIOError: If the local file exists but cannot be read.
    """
    state = classify_file(
        record.path,
        current_hash=_local_hash(project_root, record.path),
        baseline_hash=record.baseline_hash,
        upstream_hash=_upstream_hash(upstream_content),
        is_official=record.is_official,
        override=record.customized_override,
    )
    logger.debug(
        "Classified %s as %s (customized=%s, upstream_changed=%s)",
        state.path,
        state.action.value,
        state.is_customized,
        state.has_upstream_changes,
    )
    return state


def classify_new_upstream(
    path: str,
    project_root: Path,
    upstream_content: bytes | str,
) -> FileState:
    """Classify an upstream file that has no manifest record yet."""
    return classify_record(
        TrackedFileRecord(path=path), project_root, upstream_content
    )


def classify_records(
    records: Iterable[TrackedFileRecord],
    project_root: Path,
    upstream: Mapping[str, bytes | str],
) -> ClassificationReport:
    """Classify every tracked record plus every untracked upstream file.

    Paths are processed in sorted order.  A file that cannot be hashed is
    recorded in ``report.errors`` and does not stop the others.

    Args:
        records: Manifest records for tracked files.
        project_root: Absolute path to the project root.
        upstream: Upstream path to content for every file that exists
            upstream.

    Returns:
        A ``ClassificationReport`` covering all paths.
    """
    started_at = datetime.now(timezone.utc).isoformat()
    by_path = {record.path: record for record in records}
    states: list[FileState] = []
    errors: dict[str, str] = {}

    for path in sorted(set(by_path) | set(upstream)):
        record = by_path.get(path) or TrackedFileRecord(path=path)
        try:
            states.append(
                classify_record(record, project_root, upstream.get(path))
            )
        except HashingIOError as exc:
            logger.error("Error classifying %s: %s", path, exc)
            errors[path] = str(exc)

    return ClassificationReport(
        states=states,
        errors=errors,
        started_at=started_at,
        completed_at=datetime.now(timezone.utc).isoformat(),
    )
