"""
Tests for global settings and document discovery.
"""

import json
from pathlib import Path

import pytest

from cmdtree.config import CONFIG_ENV_VAR, GlobalConfig, Resolution
from cmdtree.core.provider import StaticProvider
from cmdtree.exceptions import ConfigurationError
from cmdtree.resolution.conflicts import OnConflict, Priority

FILE_NAME = "tasks.json"


def touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("{}")
    return path


class TestLoad:
    """Tests for loading global settings."""

    def test_defaults_without_settings_file(self, provider):
        """Test a missing settings file yields defaults."""
        config = GlobalConfig.load(provider)
        assert config == GlobalConfig()
        assert config.on_conflict is OnConflict.OVERRIDE
        assert config.resolution is Resolution.RECURSIVE
        assert config.priority is Priority.LOWEST_FIRST
        assert config.file_name == "cmdtree.json"

    def test_default_location(self, provider, home):
        """Test settings are read from the per-user config directory."""
        settings = home / ".config" / "cmdtree" / "config.json"
        settings.parent.mkdir(parents=True)
        settings.write_text(json.dumps({"on_conflict": "Error"}))

        assert GlobalConfig.settings_path(provider) == settings
        assert GlobalConfig.load(provider).on_conflict is OnConflict.ERROR

    def test_environment_override(self, tmp_path, home):
        """Test the settings path can be overridden from the environment."""
        settings = tmp_path / "settings.json"
        settings.write_text(
            json.dumps({"resolution": "CurrentFolder", "priority": "HighestFirst", "files": ["~/x.json"]})
        )
        provider = StaticProvider(current_dir=tmp_path, home=home, environ={CONFIG_ENV_VAR: str(settings)})

        config = GlobalConfig.load(provider)
        assert config.resolution is Resolution.CURRENT_FOLDER
        assert config.priority is Priority.HIGHEST_FIRST
        assert config.files == ("~/x.json",)

    def test_environment_override_expands_home(self, tmp_path, home):
        provider = StaticProvider(current_dir=tmp_path, home=home, environ={CONFIG_ENV_VAR: "~/cfg.json"})
        assert GlobalConfig.settings_path(provider) == home / "cfg.json"

    @pytest.mark.parametrize("content", ['{"on_conflict": "Sometimes"}', "{not json"])
    def test_invalid_settings(self, tmp_path, home, content):
        """Test invalid settings raise ConfigurationError."""
        settings = tmp_path / "settings.json"
        settings.write_text(content)
        provider = StaticProvider(current_dir=tmp_path, home=home, environ={CONFIG_ENV_VAR: str(settings)})

        with pytest.raises(ConfigurationError) as excinfo:
            GlobalConfig.load(provider)
        assert excinfo.value.path == settings


class TestDocumentPaths:
    """Tests for command document discovery."""

    @pytest.fixture
    def tree(self, tmp_path: Path) -> dict[str, Path]:
        return {
            "top": touch(tmp_path / FILE_NAME),
            "inner": touch(tmp_path / "repo" / "pkg" / FILE_NAME),
        }

    def test_recursive(self, tmp_path, home, tree):
        """Test recursive lookup lists outer documents first."""
        provider = StaticProvider(current_dir=tmp_path / "repo" / "pkg", home=home)
        config = GlobalConfig(file_name=FILE_NAME)
        assert config.document_paths(provider) == [tree["top"], tree["inner"]]

    def test_current_folder(self, tmp_path, home, tree):
        """Test CurrentFolder only looks at the current directory."""
        provider = StaticProvider(current_dir=tmp_path / "repo" / "pkg", home=home)
        config = GlobalConfig(file_name=FILE_NAME, resolution=Resolution.CURRENT_FOLDER)
        assert config.document_paths(provider) == [tree["inner"]]

    def test_git_root_stops_at_repository(self, tmp_path, home, tree):
        """Test GitRoot lookup does not go above the repository root."""
        repo_doc = touch(tmp_path / "repo" / FILE_NAME)
        provider = StaticProvider(
            current_dir=tmp_path / "repo" / "pkg", repo_root=tmp_path / "repo", home=home
        )
        config = GlobalConfig(file_name=FILE_NAME, resolution=Resolution.GIT_ROOT)
        assert config.document_paths(provider) == [repo_doc, tree["inner"]]

    def test_git_root_outside_repository(self, tmp_path, home, tree):
        """Test GitRoot falls back to the current directory outside a repository."""
        provider = StaticProvider(current_dir=tmp_path / "repo" / "pkg", home=home)
        config = GlobalConfig(file_name=FILE_NAME, resolution=Resolution.GIT_ROOT)
        assert config.document_paths(provider) == [tree["inner"]]

    def test_extra_files_come_first(self, tmp_path, home, tree):
        """Test extra files and globs are listed before project documents."""
        two = touch(home / "extra" / "two.json")
        one = touch(home / "extra" / "one.json")
        solo = touch(home / "solo.json")
        provider = StaticProvider(current_dir=tmp_path / "repo" / "pkg", home=home)
        config = GlobalConfig(
            file_name=FILE_NAME,
            resolution=Resolution.CURRENT_FOLDER,
            files=("extra/*.json", "~/solo.json", "~/missing.json"),
        )
        assert config.document_paths(provider) == [one, two, solo, tree["inner"]]

    def test_duplicates_are_dropped(self, tmp_path, home, tree):
        """Test a document found twice is listed once."""
        provider = StaticProvider(current_dir=tmp_path / "repo" / "pkg", home=home)
        config = GlobalConfig(
            file_name=FILE_NAME,
            resolution=Resolution.CURRENT_FOLDER,
            files=(str(tree["inner"]),),
        )
        assert config.document_paths(provider) == [tree["inner"]]

    def test_highest_first(self, tmp_path, home, tree):
        """Test HighestFirst reverses the discovered order."""
        provider = StaticProvider(current_dir=tmp_path / "repo" / "pkg", home=home)
        config = GlobalConfig(file_name=FILE_NAME, priority=Priority.HIGHEST_FIRST)
        assert config.document_paths(provider) == [tree["inner"], tree["top"]]
