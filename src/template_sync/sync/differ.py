"""Positional section diff for conflict review documents.

Compares two texts line by line *by position*: line ``i`` of the current
text is compared with line ``i`` of the incoming text.  This is not an
insertion-aware alignment, so a single inserted line marks every later
line as changed until the texts realign.  In exchange the comparison is a
single linear pass and the resulting sections are stable.

Changed line positions are grouped into runs, each run is padded with
``context_lines`` of context on both sides, and runs whose padded ranges
overlap or touch are merged into one section.  Everything not covered by
a section is reported as an unchanged range.
"""

from __future__ import annotations

from template_sync.config_schema import DEFAULT_CONTEXT_LINES
from template_sync.sync.errors import DiffComputationError
from template_sync.sync.models import (
    ChangeType,
    ComparisonResult,
    DiffSection,
    LineRange,
)


def compare_sections(
    current_text: str,
    incoming_text: str,
    context_lines: int = DEFAULT_CONTEXT_LINES,
) -> ComparisonResult:
    """Group the differences between two texts into padded sections.

    Args:
        current_text: The local version of the file.
        incoming_text: The upstream version of the file.
        context_lines: Unchanged lines to include around each change.

    Returns:
        A ``ComparisonResult`` with 1-based, non-overlapping sections.

    Raises:
        DiffComputationError: If the inputs are not text or
            *context_lines* is negative.
    """
    if not isinstance(current_text, str) or not isinstance(
        incoming_text, str
    ):
        raise DiffComputationError(
            "Section comparison requires text on both sides"
        )
    if context_lines < 0:
        raise DiffComputationError(
            f"context_lines must be >= 0, got {context_lines}"
        )

    current_lines = current_text.splitlines()
    incoming_lines = incoming_text.splitlines()
    total = max(len(current_lines), len(incoming_lines))

    changed = [
        i
        for i in range(total)
        if i >= len(current_lines)
        or i >= len(incoming_lines)
        or current_lines[i] != incoming_lines[i]
    ]

    spans = _padded_spans(_runs(changed), context_lines, total)
    sections = [
        _build_section(
            number, lo, hi, current_lines, incoming_lines
        )
        for number, (lo, hi) in enumerate(spans, start=1)
    ]

    return ComparisonResult(
        diff_sections=sections,
        unchanged_ranges=_uncovered(spans, total),
        total_changed_lines=len(changed),
        total_unchanged_lines=total - len(changed),
        current_line_count=len(current_lines),
        incoming_line_count=len(incoming_lines),
        total_lines=total,
        context_lines=context_lines,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _runs(indices: list[int]) -> list[tuple[int, int]]:
    """Collapse sorted indices into inclusive ``(first, last)`` runs."""
    runs: list[tuple[int, int]] = []
    for i in indices:
        if runs and runs[-1][1] == i - 1:
            runs[-1] = (runs[-1][0], i)
        else:
            runs.append((i, i))
    return runs


def _padded_spans(
    runs: list[tuple[int, int]], context: int, total: int
) -> list[tuple[int, int]]:
    """Pad runs with context, clip to the text and merge touching spans.

    Two runs end up in one span when the gap between them is at most
    ``2 * context + 1`` lines.
    """
    spans: list[tuple[int, int]] = []
    for first, last in runs:
        lo = max(0, first - context)
        hi = min(total - 1, last + context)
        if spans and lo <= spans[-1][1] + 1:
            spans[-1] = (spans[-1][0], max(spans[-1][1], hi))
        else:
            spans.append((lo, hi))
    return spans


def _side_range(lo: int, hi: int, count: int) -> tuple[int, int]:
    """Clip a 0-based span to one side and return 1-based line numbers.

    A side with no lines inside the span ends before it, and reports its
    last line as the insertion point.  An empty side reports ``(0, 0)``.
    """
    end = min(hi, count - 1)
    if end < lo:
        return count, count
    return lo + 1, end + 1


def _build_section(
    number: int,
    lo: int,
    hi: int,
    current_lines: list[str],
    incoming_lines: list[str],
) -> DiffSection:
    current_slice = current_lines[lo : hi + 1]
    incoming_slice = incoming_lines[lo : hi + 1]

    if current_slice and incoming_slice:
        change_type = ChangeType.MODIFIED
    elif incoming_slice:
        change_type = ChangeType.ADDED
    else:
        change_type = ChangeType.REMOVED

    cur_start, cur_end = _side_range(lo, hi, len(current_lines))
    inc_start, inc_end = _side_range(lo, hi, len(incoming_lines))

    return DiffSection(
        section_number=number,
        current_start_line=cur_start,
        current_end_line=cur_end,
        incoming_start_line=inc_start,
        incoming_end_line=inc_end,
        current_content="\n".join(current_slice),
        incoming_content="\n".join(incoming_slice),
        change_type=change_type,
    )


def _uncovered(
    spans: list[tuple[int, int]], total: int
) -> list[LineRange]:
    """Return the 1-based line ranges not covered by any span."""
    ranges: list[LineRange] = []
    next_free = 0
    for lo, hi in spans:
        if lo > next_free:
            ranges.append(LineRange(start=next_free + 1, end=lo))
        next_free = hi + 1
    if next_free < total:
        ranges.append(LineRange(start=next_free + 1, end=total))
    return ranges
