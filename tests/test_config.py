"""Tests for template_sync.config -- effective configuration assembly.

NOT to be confused with test_config_loader.py (YAML file reading) or
test_config_schema.py (Pydantic models).  This tests the precedence of
explicit overrides and config files in load_config().
"""

import pytest
from pydantic import ValidationError

from template_sync.config import load_config
from template_sync.config_schema import DEFAULT_ARTIFACTS_DIR


@pytest.fixture(autouse=True)
def empty_home(tmp_path, monkeypatch):
    """No user-wide config file."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


def _project_config(project_root, text):
    path = project_root / ".template_sync" / "config.yml"
    path.parent.mkdir(parents=True)
    path.write_text(text, encoding="utf-8")


class TestLoadConfig:
    def test_defaults(self, project_root):
        config = load_config(project_root)
        assert config.engine.artifacts_dir == DEFAULT_ARTIFACTS_DIR
        assert config.engine.small_file_threshold == 100
        assert config.engine.context_lines == 3

    def test_project_file_values(self, project_root):
        _project_config(project_root, "engine:\n  small_file_threshold: 40\n")
        assert load_config(project_root).engine.small_file_threshold == 40

    def test_override_beats_file(self, project_root):
        _project_config(project_root, "engine:\n  artifacts_dir: from-file\n")
        config = load_config(project_root, artifacts_dir="explicit")
        assert config.engine.artifacts_dir == "explicit"

    def test_none_override_ignored(self, project_root):
        _project_config(project_root, "engine:\n  artifacts_dir: from-file\n")
        config = load_config(project_root, artifacts_dir=None)
        assert config.engine.artifacts_dir == "from-file"

    def test_environment_not_consulted(self, project_root, monkeypatch):
        monkeypatch.setenv("TEMPLATE_SYNC_SMALL_FILE_THRESHOLD", "7")
        monkeypatch.setenv("TEMPLATE_SYNC_ARTIFACTS_DIR", "from-env")
        config = load_config(project_root)
        assert config.engine.small_file_threshold == 100
        assert config.engine.artifacts_dir == DEFAULT_ARTIFACTS_DIR

    def test_dotenv_file_ignored(self, project_root, monkeypatch):
        monkeypatch.chdir(project_root)
        (project_root / ".env").write_text(
            "TEMPLATE_SYNC_SMALL_FILE_THRESHOLD=12\n", encoding="utf-8"
        )
        assert load_config(project_root).engine.small_file_threshold == 100

    def test_out_of_range_value_raises(self, project_root):
        _project_config(project_root, "engine:\n  context_lines: 500\n")
        with pytest.raises(ValidationError):
            load_config(project_root)

    def test_logging_section(self, project_root):
        _project_config(project_root, "logging:\n  level: DEBUG\n")
        assert load_config(project_root).logging.level == "DEBUG"
