"""Conflict presentation for files changed both locally and upstream.

A conflict is never merged automatically.  Instead it is written out in a
form a human can review:

* **Small files** (at most ``small_file_threshold`` lines) get Git-style
  conflict markers written directly into the tracked file, with the
  baseline shown in a ``|||||||`` block (diff3 style) so editor
  conflict tooling picks them up.
* **Large files** get a Markdown review document under the artifacts
  directory (``<basename>.diff.md``) listing each changed section side by
  side.  The tracked file keeps the current (local) version.

If anything goes wrong while building the review document the presenter
falls back to conflict markers, whatever the file size, so a conflict is
always representable.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath

from template_sync.config import load_config
from template_sync.config_schema import (
    DEFAULT_ARTIFACTS_DIR,
    DEFAULT_CONTEXT_LINES,
    DEFAULT_SMALL_FILE_THRESHOLD,
    EngineConfig,
)
from template_sync.file_handler import (
    detect_language_hint,
    read_file_with_encoding,
    write_file,
)
from template_sync.sync.differ import compare_sections
from template_sync.sync.errors import DiffComputationError
from template_sync.sync.models import (
    ChangeType,
    ComparisonResult,
    ConflictArtifact,
    ConflictResolution,
    ConflictStrategy,
    DiffSection,
)

logger = logging.getLogger(__name__)

_BACKTICK_RUN = re.compile(r"`+")


def count_lines(text: str) -> int:
    """Number of lines in *text* (a trailing newline adds no line)."""
    return len(text.splitlines())


# ---------------------------------------------------------------------------
# Conflict markers
# ---------------------------------------------------------------------------


def _trim_newline(text: str) -> str:
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text


def build_conflict_markers(
    current_text: str,
    baseline_text: str | None,
    incoming_text: str,
    original_version_label: str,
    new_version_label: str,
) -> str:
    """Render the three versions of a file between diff3-style markers.

    Empty versions produce no content lines between their markers.
    """
    parts = ["<<<<<<< Current"]
    if current_text:
        parts.append(_trim_newline(current_text))
    parts.append(f"||||||| Base ({original_version_label})")
    if baseline_text:
        parts.append(_trim_newline(baseline_text))
    parts.append("=======")
    if incoming_text:
        parts.append(_trim_newline(incoming_text))
    parts.append(f">>>>>>> Incoming ({new_version_label})")
    return "\n".join(parts) + "\n"


# ---------------------------------------------------------------------------
# Review document
# ---------------------------------------------------------------------------


def _fence(content: str) -> str:
    """Pick a backtick fence longer than any backtick run in *content*."""
    longest = max(
        (len(m.group(0)) for m in _BACKTICK_RUN.finditer(content)),
        default=0,
    )
    return "`" * max(3, longest + 1)


def _render_side(
    title: str, start: int, end: int, content: str, language: str
) -> list[str]:
    if not content:
        return [f"### {title}", "", "_(no lines)_", ""]
    span = str(start) if start == end else f"{start}-{end}"
    fence = _fence(content)
    return [
        f"### {title} (lines {span})",
        "",
        f"{fence}{language}",
        content,
        fence,
        "",
    ]


def _render_section(
    section: DiffSection, total_sections: int, language: str
) -> list[str]:
    heading = (
        f"## Section {section.section_number} of {total_sections}"
    )
    if section.change_type != ChangeType.MODIFIED:
        heading += f" ({section.change_type.value})"
    lines = [heading, ""]
    lines += _render_side(
        "Current",
        section.current_start_line,
        section.current_end_line,
        section.current_content,
        language,
    )
    lines += _render_side(
        "Incoming",
        section.incoming_start_line,
        section.incoming_end_line,
        section.incoming_content,
        language,
    )
    return lines


def render_review_document(
    path: str,
    comparison: ComparisonResult,
    original_version_label: str,
    new_version_label: str,
    generated_at: str | None = None,
) -> str:
    """Render a Markdown review document for a large conflicted file.

    Args:
        path: Conflicted file path, relative to the project root.
        comparison: Section comparison of current vs incoming text.
        original_version_label: Template version the local file is based on.
        new_version_label: Template version being installed.
        generated_at: Timestamp for the metadata header.  Defaults to the
            current UTC time; this is the only field that varies between
            runs with identical inputs.

    Returns:
        The document text, ending with a newline.
    """
    if generated_at is None:
        generated_at = datetime.now(timezone.utc).isoformat(
            timespec="seconds"
        )
    language = detect_language_hint(path)
    sections = comparison.diff_sections

    lines = [
        f"# Conflict review: {path}",
        "",
        f"- **Current:** your local version (based on {original_version_label})",
        f"- **Incoming:** template version {new_version_label}",
        f"- **Generated:** {generated_at}",
        f"- **Lines:** {comparison.current_line_count} current, "
        f"{comparison.incoming_line_count} incoming",
        f"- **Changed lines:** {comparison.total_changed_lines} "
        f"in {len(sections)} section(s)",
        "",
        f"`{path}` still contains your current version. Apply the "
        "incoming changes you want to keep, then re-run the sync.",
        "",
    ]

    if not sections:
        lines += ["No differences found.", ""]
    for section in sections:
        lines += _render_section(section, len(sections), language)

    lines += ["## Unchanged lines", ""]
    if comparison.unchanged_ranges:
        spans = ", ".join(str(r) for r in comparison.unchanged_ranges)
        lines.append(
            f"Lines {spans} are identical in both versions and were "
            "left untouched."
        )
    else:
        lines.append("Every line is inside a changed section.")

    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Presenter
# ---------------------------------------------------------------------------


class ConflictPresenter:
    """Write a reviewable representation of each conflicted file.

    Args:
        project_root: Absolute path to the project root.
        artifacts_dir: Directory for review documents, relative to
            *project_root*.
        small_file_threshold: Largest line count that gets inline markers.
        context_lines: Context lines around each review section.
    """

    def __init__(
        self,
        project_root: Path,
        artifacts_dir: str = DEFAULT_ARTIFACTS_DIR,
        small_file_threshold: int = DEFAULT_SMALL_FILE_THRESHOLD,
        context_lines: int = DEFAULT_CONTEXT_LINES,
    ) -> None:
        self.project_root = project_root
        self.artifacts_root = project_root / artifacts_dir
        self.small_file_threshold = small_file_threshold
        self.context_lines = context_lines
        self.artifacts: list[ConflictArtifact] = []

    @classmethod
    def from_config(
        cls, project_root: Path, config: EngineConfig | None = None
    ) -> ConflictPresenter:
        """Build a presenter from the engine section of the config.

        Without *config* the project's config files are loaded.
        """
        if config is None:
            config = load_config(project_root).engine
        return cls(
            project_root,
            artifacts_dir=config.artifacts_dir,
            small_file_threshold=config.small_file_threshold,
            context_lines=config.context_lines,
        )

    # ------------------------------------------------------------------
    # Main entry points
    # ------------------------------------------------------------------

    def resolve(
        self,
        path: str,
        current_text: str,
        baseline_text: str | None,
        incoming_text: str,
        original_version_label: str,
        new_version_label: str,
    ) -> ConflictResolution:
        """Present one conflict.

        Args:
            path: Conflicted file path, relative to the project root.
            current_text: Local content of the file.
            baseline_text: Content at the recorded baseline, if known.
            incoming_text: Upstream content of the file.
            original_version_label: Template version of the baseline.
            new_version_label: Template version being installed.

        Returns:
            A ``ConflictResolution`` describing what was written.
        """
        line_count = max(
            count_lines(current_text), count_lines(incoming_text)
        )

        if line_count <= self.small_file_threshold:
            self._write_markers(
                path,
                current_text,
                baseline_text,
                incoming_text,
                original_version_label,
                new_version_label,
            )
            return ConflictResolution(
                path=path,
                strategy=ConflictStrategy.MARKERS,
                line_count=line_count,
            )

        try:
            document_path = self._write_review_document(
                path,
                current_text,
                baseline_text,
                incoming_text,
                original_version_label,
                new_version_label,
            )
        except Exception as exc:
            logger.warning(
                "Review document for %s failed, writing conflict markers instead: %s",
                path,
                exc,
            )
            self._write_markers(
                path,
                current_text,
                baseline_text,
                incoming_text,
                original_version_label,
                new_version_label,
            )
            return ConflictResolution(
                path=path,
                strategy=ConflictStrategy.MARKERS,
                line_count=line_count,
                fell_back=True,
                error=str(exc),
            )

        return ConflictResolution(
            path=path,
            strategy=ConflictStrategy.REVIEW_DOCUMENT,
            line_count=line_count,
            artifact_path=str(document_path),
        )

    def resolve_from_disk(
        self,
        path: str,
        baseline_text: str | None,
        incoming_text: str,
        original_version_label: str,
        new_version_label: str,
    ) -> ConflictResolution:
        """Like ``resolve()``, reading the current text from the project."""
        current_text, encoding = read_file_with_encoding(
            self.project_root / path
        )
        logger.debug("Read %s as %s", path, encoding)
        return self.resolve(
            path,
            current_text,
            baseline_text,
            incoming_text,
            original_version_label,
            new_version_label,
        )

    # ------------------------------------------------------------------
    # Writers
    # ------------------------------------------------------------------

    def _write_markers(
        self,
        path: str,
        current_text: str,
        baseline_text: str | None,
        incoming_text: str,
        original_version_label: str,
        new_version_label: str,
    ) -> None:
        content = build_conflict_markers(
            current_text,
            baseline_text,
            incoming_text,
            original_version_label,
            new_version_label,
        )
        write_file(self.project_root / path, content)
        logger.info("Conflict markers written to %s", path)

    def _write_review_document(
        self,
        path: str,
        current_text: str,
        baseline_text: str | None,
        incoming_text: str,
        original_version_label: str,
        new_version_label: str,
    ) -> Path:
        if not baseline_text:
            raise DiffComputationError(
                f"No baseline content for {path}; cannot anchor a review"
            )

        comparison = compare_sections(
            current_text, incoming_text, self.context_lines
        )
        document = render_review_document(
            path, comparison, original_version_label, new_version_label
        )

        document_path = (
            self.artifacts_root / f"{PurePosixPath(path).name}.diff.md"
        )
        replaced = [
            a.path
            for a in self.artifacts
            if a.document_path == str(document_path)
        ]
        if replaced:
            logger.warning(
                "Review document %s for %s replaces the one written for %s",
                document_path,
                path,
                ", ".join(replaced),
            )
        write_file(document_path, document)
        self.artifacts.append(
            ConflictArtifact(path=path, document_path=str(document_path))
        )
        logger.info(
            "Review document for %s written to %s", path, document_path
        )
        return document_path
