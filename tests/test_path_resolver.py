import sys
from pathlib import Path

import pytest

from rimpub.path_resolver import (
    LinuxPathResolver,
    MacPathResolver,
    NullPathResolver,
    PathResolver,
    WindowsPathResolver,
    select_resolver,
)


class FixedResolver(PathResolver):
    def __init__(self, roots):
        self.roots = roots

    def steam_roots(self):
        return self.roots


class FailingResolver(PathResolver):
    def steam_roots(self):
        raise OSError("registry key not found")


def make_mods_dir(steam_root):
    mods = steam_root / "steamapps" / "common" / "RimWorld" / "Mods"
    mods.mkdir(parents=True)
    return mods


@pytest.mark.parametrize(
    "platform,expected",
    [
        ("win32", WindowsPathResolver),
        ("darwin", MacPathResolver),
        ("linux", LinuxPathResolver),
        ("freebsd13", NullPathResolver),
    ],
)
def test_select_resolver(platform, expected):
    assert isinstance(select_resolver(platform), expected)


def test_find_mods_dir_uses_first_existing_candidate(tmp_path):
    mods = make_mods_dir(tmp_path / "second")
    resolver = FixedResolver([tmp_path / "first", tmp_path / "second"])
    assert resolver.find_mods_dir() == mods.resolve()


def test_find_mods_dir_without_install(tmp_path):
    assert FixedResolver([tmp_path]).find_mods_dir() is None


def test_find_mods_dir_swallows_lookup_errors():
    assert FailingResolver().find_mods_dir() is None


def test_null_resolver():
    assert NullPathResolver().find_mods_dir() is None


@pytest.mark.skipif(sys.platform == "win32", reason="HOME is not used on Windows")
def test_linux_resolver_checks_steam_locations(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)
    mods = make_mods_dir(tmp_path / ".local" / "share" / "Steam")

    resolver = LinuxPathResolver()
    assert resolver.steam_roots() == [tmp_path / ".steam" / "steam", tmp_path / ".local" / "share" / "Steam"]
    assert resolver.find_mods_dir() == mods.resolve()


@pytest.mark.skipif(sys.platform == "win32", reason="HOME is not used on Windows")
def test_linux_resolver_honors_xdg_data_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    assert LinuxPathResolver().steam_roots()[1] == Path(tmp_path / "data" / "Steam")
