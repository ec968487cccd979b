"""Tests for settings and environment loading."""

from __future__ import annotations

import os

import pytest
import yaml
from pydantic import ValidationError

from codegen_bridge.config import (
    DEFAULT_EXTENSIONS,
    SETTINGS_FILENAME,
    BridgeSettings,
    load_settings,
    load_settings_file,
)
from codegen_bridge.env import get_api_key, load_environment


@pytest.fixture
def clean_env(monkeypatch):
    """Unset provider credentials for the duration of a test."""
    for var in ("CURSOR_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.setenv(var, "placeholder")
        monkeypatch.delenv(var)
    return monkeypatch


class TestSettings:
    def test_defaults_without_file(self, tmp_path):
        settings = load_settings(tmp_path)

        assert settings.source_extensions == DEFAULT_EXTENSIONS
        assert settings.claude_model == "sonnet"
        assert settings.timeout is None
        assert settings.verbose is False
        assert "production-ready" in settings.claude_system_prompt

    def test_load_from_workspace(self, tmp_path):
        with open(tmp_path / SETTINGS_FILENAME, "w") as f:
            yaml.dump({
                "source_extensions": [".PY", "ts", "py"],
                "claude_model": "opus",
                "claude_search_paths": ["/opt/claude/bin/claude"],
                "timeout": 120,
            }, f)

        settings = load_settings(tmp_path)

        assert settings.source_extensions == ["py", "ts"]
        assert settings.claude_model == "opus"
        assert settings.claude_search_paths == ["/opt/claude/bin/claude"]
        assert settings.timeout == 120

    def test_empty_file_gives_defaults(self, tmp_path):
        (tmp_path / SETTINGS_FILENAME).write_text("")
        assert load_settings(tmp_path) == BridgeSettings()

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings_file(tmp_path / "nonexistent.yaml")

    @pytest.mark.parametrize(
        "data",
        [
            {"timeout": 0},
            {"timeout": -5},
            {"source_extensions": []},
            {"source_extensions": [".", " "]},
        ],
    )
    def test_invalid_values(self, tmp_path, data):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump(data))

        with pytest.raises(ValidationError):
            load_settings_file(path)


class TestEnvironment:
    def test_get_api_key(self, clean_env):
        clean_env.setenv("CURSOR_API_KEY", "cursor-key")
        clean_env.setenv("ANTHROPIC_API_KEY", "anthropic-key")

        assert get_api_key("CURSOR") == "cursor-key"
        assert get_api_key("claude_code") == "anthropic-key"
        assert get_api_key("Claude") == "anthropic-key"

    def test_unset_and_unknown(self, clean_env):
        assert get_api_key("CURSOR") is None
        assert get_api_key("unknown_tool") is None

    def test_load_environment_from_workspace(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("CURSOR_API_KEY=from-dotenv\n")

        load_environment(tmp_path)

        assert os.environ["CURSOR_API_KEY"] == "from-dotenv"

    def test_load_environment_does_not_override(self, clean_env, tmp_path):
        clean_env.setenv("ANTHROPIC_API_KEY", "exported")
        (tmp_path / ".env").write_text("ANTHROPIC_API_KEY=from-dotenv\n")

        load_environment(tmp_path)

        assert os.environ["ANTHROPIC_API_KEY"] == "exported"

    def test_search_dir_takes_precedence_over_cwd(self, clean_env, tmp_path):
        project = tmp_path / "project"
        project.mkdir()
        (project / ".env").write_text("CURSOR_API_KEY=from-project\n")
        (tmp_path / ".env").write_text("CURSOR_API_KEY=from-cwd\n")
        clean_env.chdir(tmp_path)

        loaded = load_environment(project)

        assert loaded == project / ".env"
        assert os.environ["CURSOR_API_KEY"] == "from-project"

    def test_falls_back_to_cwd(self, clean_env, tmp_path):
        project = tmp_path / "project"
        project.mkdir()
        (tmp_path / ".env").write_text("CURSOR_API_KEY=from-cwd\n")
        clean_env.chdir(tmp_path)

        assert load_environment(project) == tmp_path / ".env"
        assert os.environ["CURSOR_API_KEY"] == "from-cwd"

    def test_no_env_file_found(self, clean_env, tmp_path):
        clean_env.chdir(tmp_path)

        assert load_environment(None, tmp_path / "missing") is None
        assert "CURSOR_API_KEY" not in os.environ
