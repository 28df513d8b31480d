"""Tests for config system."""

import json
from pathlib import Path

import pytest

from dft.config import Config, ConfigMeta, get_platform_data_dir


class TestConfigMeta:
    def test_toggles_defined(self):
        assert "confirm_delete" in ConfigMeta.TOGGLES

    def test_settings_defined(self):
        assert "data_dir" in ConfigMeta.SETTINGS
        assert "feedback_timeout" in ConfigMeta.SETTINGS


class TestConfigDefaults:
    def test_defaults(self):
        config = Config(Path("/tmp/dft-test-nonexistent"))
        assert config.feedback_timeout == 1.5
        assert config.default_view == "list"
        assert config.confirm_delete is True

    def test_unknown_attribute(self):
        config = Config(Path("/tmp/dft-test-nonexistent"))
        with pytest.raises(AttributeError):
            config.no_such_setting


class TestConfigLoad:
    def test_load_from_file(self, tmp_path: Path):
        (tmp_path / "config.json").write_text(json.dumps({"default_view": "zen"}))
        config = Config.load(tmp_path)
        assert config.default_view == "zen"

    def test_corrupted_file_uses_defaults(self, tmp_path: Path):
        (tmp_path / "config.json").write_text("{oops")
        config = Config.load(tmp_path)
        assert config.default_view == "list"

    def test_default_dir_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DFT_CONFIG_DIR", str(tmp_path))
        assert Config.load().config_dir == tmp_path

    def test_cached(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DFT_CONFIG_DIR", str(tmp_path))
        assert Config.load() is Config.load()


class TestConfigEnvOverrides:
    def test_bool(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DFT_CONFIRM_DELETE", "false")
        assert Config.load(tmp_path).confirm_delete is False

    def test_float(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DFT_FEEDBACK_TIMEOUT", "0.25")
        assert Config.load(tmp_path).feedback_timeout == 0.25

    def test_int(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DFT_INTERACTIVE_WIDTH", "60")
        assert Config.load(tmp_path).interactive_width == 60


class TestConfigPersistence:
    def test_set_persists_and_coerces(self, tmp_path: Path):
        config = Config.load(tmp_path)
        config.set("interactive_width", "72")

        reloaded = Config.load(tmp_path)

        assert reloaded.interactive_width == 72
        assert json.loads((tmp_path / "config.json").read_text()) == {"interactive_width": 72}

    def test_set_unknown_key(self, tmp_path: Path):
        with pytest.raises(KeyError):
            Config.load(tmp_path).set("bogus", "1")


class TestProjectsDir:
    def test_custom_data_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DFT_DATA_DIR", str(tmp_path / "data"))
        config = Config.load(tmp_path)
        assert config.projects_dir == tmp_path / "data" / "depthfirst" / "projects"

    def test_xdg_data_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr("dft.config.sys.platform", "linux")
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
        assert get_platform_data_dir() == tmp_path / "xdg"

    def test_linux_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr("dft.config.sys.platform", "linux")
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_platform_data_dir() == tmp_path / ".local" / "share"

    def test_macos(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr("dft.config.sys.platform", "darwin")
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_platform_data_dir() == tmp_path / "Library" / "Application Support"
