"""Tests for global and project configuration."""

import json
from pathlib import Path

import pytest

from rimpub.config import (
    CONFIG_FILE_NAME,
    AppConfig,
    ProjectConfig,
    check_config,
    get_config_dir,
    load_config,
    save_config,
)
from rimpub.exceptions import ConfigError
from rimpub.path_resolver import NullPathResolver, PathResolver


class FixedResolver(PathResolver):
    def __init__(self, root):
        self.root = root

    def steam_roots(self):
        return [self.root]


class TestAppConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.path_mods is None
        assert config.no_ask is False
        assert config.get("path_mods") is None
        assert config.get("no_ask") == "false"

    def test_with_value_path(self, tmp_path):
        config = AppConfig().with_value("path_mods", f"  {tmp_path}  ")
        assert config.path_mods == tmp_path
        assert config.get("PATH_MODS") == str(tmp_path)

    @pytest.mark.parametrize(
        "value,expected",
        [("true", True), ("Yes", True), ("1", True), ("false", False), ("no", False)],
    )
    def test_with_value_bool(self, value, expected):
        assert AppConfig().with_value("no_ask", value).no_ask is expected

    def test_with_value_does_not_mutate(self):
        config = AppConfig()
        config.with_value("no_ask", "true")
        assert config.no_ask is False

    def test_invalid_bool(self):
        with pytest.raises(ConfigError, match="expected a boolean"):
            AppConfig().with_value("no_ask", "maybe")

    def test_empty_path(self):
        with pytest.raises(ConfigError):
            AppConfig().with_value("path_mods", "  ")

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="Unexpected key"):
            AppConfig().get("path_game")
        with pytest.raises(ConfigError):
            AppConfig().with_value("path_game", "/x")

    def test_dict_round_trip(self, tmp_path):
        config = AppConfig(path_mods=tmp_path, no_ask=True)
        assert AppConfig.from_dict(config.to_dict()) == config

    @pytest.mark.parametrize("data", [[], {"path_mods": 3}, {"no_ask": "yes"}])
    def test_from_dict_rejects_bad_types(self, data):
        with pytest.raises(ConfigError):
            AppConfig.from_dict(data)

    def test_from_dict_ignores_unknown_keys(self):
        assert AppConfig.from_dict({"path_mods": None, "colour": "red"}) == AppConfig()


class TestLoadConfig:
    def test_first_run_creates_default_with_detected_path(self, tmp_path):
        steam = tmp_path / "Steam"
        mods = steam / "steamapps" / "common" / "RimWorld" / "Mods"
        mods.mkdir(parents=True)
        config_dir = tmp_path / "home"

        config = load_config(config_dir, resolver=FixedResolver(steam))

        assert config.path_mods == mods.resolve()
        saved = json.loads((config_dir / CONFIG_FILE_NAME).read_text())
        assert saved == {"path_mods": str(mods.resolve()), "no_ask": False}

    def test_first_run_without_detected_path(self, tmp_path):
        config = load_config(tmp_path / "home", resolver=NullPathResolver())
        assert config == AppConfig()
        assert (tmp_path / "home" / CONFIG_FILE_NAME).exists()

    def test_existing_config_is_loaded(self, tmp_path):
        save_config(AppConfig(path_mods=tmp_path, no_ask=True), tmp_path)
        assert load_config(tmp_path, resolver=NullPathResolver()) == AppConfig(path_mods=tmp_path, no_ask=True)

    def test_invalid_json(self, tmp_path):
        (tmp_path / CONFIG_FILE_NAME).write_text("{not json")
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)
        assert exc_info.value.path == str(tmp_path / CONFIG_FILE_NAME)

    def test_config_dir_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("RIMPUB_HOME", str(tmp_path / "custom"))
        assert get_config_dir() == tmp_path / "custom"

    def test_default_config_dir(self, monkeypatch):
        monkeypatch.delenv("RIMPUB_HOME", raising=False)
        assert get_config_dir() == Path.home() / ".rimpub"


class TestCheckConfig:
    def test_unset(self):
        assert check_config(AppConfig()) == ["'path_mods' not configured"]

    def test_missing_directory(self, tmp_path):
        problems = check_config(AppConfig(path_mods=tmp_path / "missing"))
        assert len(problems) == 1
        assert "does not exist" in problems[0]

    def test_ready(self, tmp_path):
        assert check_config(AppConfig(path_mods=tmp_path)) == []


class TestProjectConfig:
    def test_missing_file(self, tmp_path):
        assert ProjectConfig.load(tmp_path) == (ProjectConfig(), False)

    def test_name_and_build_hook_list(self, tmp_path):
        (tmp_path / ".rimpub.toml").write_text('name = " Better Pawns "\nbuild_hook = ["dotnet", "build"]\n')
        config, found = ProjectConfig.load(tmp_path)
        assert found
        assert config.name == "Better Pawns"
        assert config.build_hook == ("dotnet", "build")

    def test_build_hook_string(self, tmp_path):
        (tmp_path / ".rimpub.toml").write_text('build_hook = "make mod"\n')
        config, _ = ProjectConfig.load(tmp_path)
        assert config.build_hook == "make mod"

    @pytest.mark.parametrize(
        "content",
        ["name = ", "name = 3\n", "build_hook = 3\n", "build_hook = [1, 2]\n"],
    )
    def test_invalid_file(self, tmp_path, content):
        (tmp_path / ".rimpub.toml").write_text(content)
        with pytest.raises(ConfigError):
            ProjectConfig.load(tmp_path)

    def test_resolve_name_prefers_configured_name(self, tmp_path):
        assert ProjectConfig(name="Better Pawns").resolve_name(tmp_path) == "Better Pawns"

    def test_resolve_name_falls_back_to_folder(self, tmp_path):
        mod = tmp_path / "MyMod"
        mod.mkdir()
        assert ProjectConfig().resolve_name(mod) == "MyMod"
