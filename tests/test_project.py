"""Tests for reading project identity."""

from pathlib import Path

import pytest

from buildmeta.errors import ProjectInfoError
from buildmeta.services.project import UNKNOWN_VERSION, canonical_name, load_project_info


def test_canonical_name():
    assert canonical_name("My_Project") == "my-project"
    assert canonical_name("a.b__c") == "a-b-c"


def test_load_project_info(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "My_Project"\nversion = "1.2.3"\n')
    info = load_project_info(tmp_path, group_id="com.example")
    assert info is not None
    assert info.name == "My_Project"
    assert info.version == "1.2.3"
    assert info.group_id == "com.example"
    assert info.artifact_id == "my-project"


def test_display_name(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "my-project"\nversion = "1.0"\n')
    info = load_project_info(tmp_path, display_name="My Project")
    assert info is not None
    assert info.name == "My Project"
    assert info.artifact_id == "my-project"


def test_dynamic_version_not_installed(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "buildmeta-no-such-dist"\ndynamic = ["version"]\n'
    )
    info = load_project_info(tmp_path)
    assert info is not None
    assert info.version == UNKNOWN_VERSION


def test_no_pyproject(tmp_path: Path):
    assert load_project_info(tmp_path) is None


def test_no_project_table(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text('[tool.other]\nkey = "value"\n')
    assert load_project_info(tmp_path) is None


def test_invalid_toml(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text("[project\nname = ")
    with pytest.raises(ProjectInfoError, match="Cannot read"):
        load_project_info(tmp_path)


def test_missing_name(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text('[project]\nversion = "1.0"\n')
    with pytest.raises(ProjectInfoError, match="no project name"):
        load_project_info(tmp_path)
