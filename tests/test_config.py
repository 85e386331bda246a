"""Tests for settings loading and path resolution."""

from pathlib import Path

import pytest

from git_sub_project.config import LinkConfig, load_config, read_config_file
from git_sub_project.errors import ConfigError
from git_sub_project.paths import config_path, user_config_path


class TestPaths:
    def test_no_settings_file(self, tmp_path):
        assert config_path(tmp_path) is None

    def test_project_file_found(self, tmp_path):
        (tmp_path / ".sub-project.yaml").write_text("jobs: 2\n")
        assert config_path(tmp_path) == tmp_path / ".sub-project.yaml"

    def test_user_file_found(self, tmp_path):
        user_file = user_config_path()
        user_file.parent.mkdir(parents=True)
        user_file.write_text("jobs: 2\n")
        assert config_path(tmp_path / "elsewhere") == user_file

    def test_env_var_wins(self, tmp_path, monkeypatch):
        (tmp_path / ".sub-project.yaml").write_text("jobs: 2\n")
        monkeypatch.setenv("GIT_SUB_PROJECT_CONFIG", str(tmp_path / "custom.yaml"))
        assert config_path(tmp_path) == tmp_path / "custom.yaml"


class TestLoadConfig:
    def test_defaults(self, tmp_path):
        config = load_config(root=tmp_path)
        assert config == LinkConfig(root=tmp_path)
        assert config.metadata_dir == ".git-sub-project"
        assert config.probe == "git"
        assert config.nested is True
        assert config.jobs == 1
        assert not config.dry_run
        assert not config.repair_conflicts

    def test_reads_project_file(self, tmp_path):
        (tmp_path / ".sub-project.yaml").write_text(
            "probe: structural\nnested: false\nexclude: [node_modules, .venv]\njobs: 3\n"
        )
        config = load_config(root=tmp_path)
        assert config.probe == "structural"
        assert config.nested is False
        assert config.exclude == ("node_modules", ".venv")
        assert config.jobs == 3

    def test_overrides_beat_file(self, tmp_path):
        (tmp_path / ".sub-project.yaml").write_text("jobs: 3\nprobe: structural\n")
        config = load_config(root=tmp_path, jobs=8, probe=None)
        assert config.jobs == 8
        assert config.probe == "structural"

    def test_explicit_path(self, tmp_path):
        settings = tmp_path / "elsewhere.yaml"
        settings.write_text("metadata_dir: .git-vendored\n")
        assert load_config(root=tmp_path, path=settings).metadata_dir == ".git-vendored"

    def test_empty_file_gives_defaults(self, tmp_path):
        (tmp_path / ".sub-project.yaml").write_text("")
        assert load_config(root=tmp_path) == LinkConfig(root=tmp_path)

    def test_unknown_keys_warn(self, tmp_path):
        (tmp_path / ".sub-project.yaml").write_text("jobs: 2\ncolour: blue\n")
        with pytest.warns(UserWarning, match="colour"):
            config = load_config(root=tmp_path)
        assert config.jobs == 2

    def test_dry_run_not_read_from_file(self, tmp_path):
        (tmp_path / ".sub-project.yaml").write_text("dry_run: true\n")
        with pytest.warns(UserWarning, match="dry_run"):
            config = load_config(root=tmp_path)
        assert config.dry_run is False

    def test_missing_env_file_raises(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GIT_SUB_PROJECT_CONFIG", str(tmp_path / "missing.yaml"))
        with pytest.raises(ConfigError, match="not found"):
            load_config(root=tmp_path)

    @pytest.mark.parametrize("content, match", [
        ("- a\n- b\n", "not a YAML mapping"),
        ("probe: telepathy\n", "Unknown probe"),
        ("probe: [git]\n", "Unknown probe"),
        ("jobs: 0\n", "positive integer"),
        ("jobs: two\n", "positive integer"),
        ("metadata_dir: .git\n", "plain name"),
        ("metadata_dir: a/b\n", "plain name"),
        ("exclude: node_modules\n", "list of directory names"),
        ("nested: sometimes\n", "true or false"),
        ("probe: [unclosed\n", "Malformed"),
    ])
    def test_invalid_settings(self, tmp_path, content, match):
        (tmp_path / ".sub-project.yaml").write_text(content)
        with pytest.raises(ConfigError, match=match):
            load_config(root=tmp_path)

    def test_settings_path_is_a_directory(self, tmp_path, monkeypatch):
        (tmp_path / "settings-dir").mkdir()
        monkeypatch.setenv("GIT_SUB_PROJECT_CONFIG", str(tmp_path / "settings-dir"))
        with pytest.raises(ConfigError, match="Could not read"):
            load_config(root=tmp_path)

    def test_non_utf8_settings_file(self, tmp_path):
        (tmp_path / ".sub-project.yaml").write_bytes(b"probe: \xff\xfe\n")
        with pytest.raises(ConfigError):
            load_config(root=tmp_path)

    def test_read_config_file_missing(self):
        with pytest.raises(ConfigError):
            read_config_file(Path("/nonexistent/settings.yaml"))

    def test_with_overrides_validates(self, tmp_path):
        with pytest.raises(ConfigError):
            LinkConfig(root=tmp_path).with_overrides(jobs=-1)
