"""Tests for the generated template files."""

import pytest

from rimpub.config import ProjectConfig
from rimpub.ignore_rules import DEFAULT_PATTERNS, RuleSet
from rimpub.scaffold import generate_ignore_file, generate_project_config, ignore_file_template


def test_ignore_file_template_lists_defaults_as_comments():
    template = ignore_file_template()
    assert template.startswith("#")
    for pattern in DEFAULT_PATTERNS:
        assert f"# {pattern}\n" in template


def test_generated_ignore_file_has_no_active_rules(tmp_path):
    path = generate_ignore_file(tmp_path / ".rimpub-ignore")
    assert path.read_text(encoding="utf-8") == ignore_file_template()
    assert len(RuleSet.from_file(path)) == 0


def test_generate_ignore_file_refuses_to_overwrite(tmp_path):
    path = tmp_path / ".rimpub-ignore"
    generate_ignore_file(path)
    path.write_text("Source/\n")
    before = path.read_bytes()

    with pytest.raises(FileExistsError):
        generate_ignore_file(path)
    assert path.read_bytes() == before


def test_generate_ignore_file_overwrite(tmp_path):
    path = tmp_path / ".rimpub-ignore"
    path.write_text("Source/\n")
    generate_ignore_file(path, overwrite=True)
    assert path.read_text(encoding="utf-8") == ignore_file_template()


def test_generated_project_config_loads_with_defaults(tmp_path):
    generate_project_config(tmp_path / ".rimpub.toml")
    config, found = ProjectConfig.load(tmp_path)
    assert found
    assert config == ProjectConfig()


def test_generate_project_config_refuses_to_overwrite(tmp_path):
    path = tmp_path / ".rimpub.toml"
    path.write_text('name = "Custom"\n')
    with pytest.raises(FileExistsError):
        generate_project_config(path)
    assert path.read_text() == 'name = "Custom"\n'
