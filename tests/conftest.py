"""Shared pytest fixtures for template-sync tests."""

from pathlib import Path

import pytest


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """An empty project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def numbered_text():
    """Factory fixture: ``n`` distinct lines, optionally with edits.

    ``numbered_text(5, {2: "changed"})`` returns lines ``line 1`` ..
    ``line 5`` with line 2 (1-based) replaced, newline-terminated.
    """

    def _make(count: int, replacements: dict[int, str] | None = None) -> str:
        replacements = replacements or {}
        lines = [
            replacements.get(i, f"line {i}") for i in range(1, count + 1)
        ]
        return "\n".join(lines) + "\n"

    return _make


@pytest.fixture
def write_project_file(project_root: Path):
    """Factory fixture writing a file (bytes or text) under the project."""

    def _write(rel_path: str, content: bytes | str) -> Path:
        path = project_root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
        return path

    return _write
