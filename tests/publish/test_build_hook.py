import sys
from pathlib import Path

import pytest

from rimpub.exceptions import BuildHookError, ConfigError
from rimpub.publish import BuildHook


def test_from_string():
    hook = BuildHook.from_value("dotnet build 'Source/My Mod.csproj' -o", cwd="/mods/src")
    assert hook.command == ("dotnet", "build", "Source/My Mod.csproj", "-o")
    assert hook.cwd == Path("/mods/src")


def test_from_list():
    hook = BuildHook.from_value(["msbuild", "Source/Mod.sln"])
    assert hook.command == ("msbuild", "Source/Mod.sln")
    assert hook.cwd is None


@pytest.mark.parametrize("value", ["", "   ", []])
def test_empty_command(value):
    with pytest.raises(ConfigError):
        BuildHook.from_value(value)


def test_unbalanced_quotes():
    with pytest.raises(ConfigError):
        BuildHook.from_value("build 'unterminated")


def test_describe():
    assert BuildHook(("make", "all")).describe() == "make all"


def test_run_appends_target_and_returns_exit_code(tmp_path):
    code = "import sys; open(sys.argv[1] + '/arg.txt', 'w').write(sys.argv[1]); sys.exit(5)"
    hook = BuildHook((sys.executable, "-c", code))

    assert hook.run(tmp_path) == 5
    assert (tmp_path / "arg.txt").read_text() == str(tmp_path)


def test_run_uses_cwd(tmp_path):
    code = "import os, sys; open(os.path.join(sys.argv[1], 'cwd.txt'), 'w').write(os.getcwd())"
    work = tmp_path / "work"
    work.mkdir()
    hook = BuildHook((sys.executable, "-c", code), cwd=work)

    assert hook.run(tmp_path) == 0
    assert Path((tmp_path / "cwd.txt").read_text()).resolve() == work.resolve()


def test_run_missing_executable(tmp_path):
    with pytest.raises(BuildHookError) as exc_info:
        BuildHook(("rimpub-test-no-such-command-xyz", "--flag")).run(tmp_path)
    assert exc_info.value.command == "rimpub-test-no-such-command-xyz --flag"
