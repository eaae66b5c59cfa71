"""Shared test fixtures for buildmeta tests."""

import importlib
import os
import subprocess
import sys
import uuid
from collections.abc import Callable, Generator
from pathlib import Path
from types import ModuleType

import pytest
from typer.testing import CliRunner

from buildmeta.commands.project_information import _emitted as emitted_banners

PYPROJECT = """[project]
name = "My_Project"
version = "1.2.3"
"""


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_banner_state() -> Generator[None, None, None]:
    """Forget banners printed by earlier tests."""
    emitted_banners.clear()
    yield
    emitted_banners.clear()


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary git repository.

    Initializes a git repo with user config and an initial commit.
    Changes cwd to the repo directory for the duration of the test.
    """
    for args in (
        ["git", "init"],
        ["git", "config", "user.email", "test@test.com"],
        ["git", "config", "user.name", "Test User"],
    ):
        subprocess.run(args, cwd=tmp_path, check=True, capture_output=True)

    (tmp_path / "README.md").write_text("# Test\n")
    subprocess.run(["git", "add", "."], cwd=tmp_path, check=True, capture_output=True)
    subprocess.run(
        ["git", "commit", "-m", "Initial commit"],
        cwd=tmp_path,
        check=True,
        capture_output=True,
    )

    original_cwd = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_cwd)


@pytest.fixture
def python_project(temp_git_repo: Path) -> Path:
    """Git repository containing a committed pyproject.toml."""
    (temp_git_repo / "pyproject.toml").write_text(PYPROJECT)
    subprocess.run(["git", "add", "."], cwd=temp_git_repo, check=True, capture_output=True)
    subprocess.run(
        ["git", "commit", "-m", "Add pyproject"],
        cwd=temp_git_repo,
        check=True,
        capture_output=True,
    )
    return temp_git_repo


@pytest.fixture
def make_package(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Callable[[dict[str, str]], ModuleType]:
    """Factory for importable packages with resource files.

    The package defines classes Widget and Gadget. Each call creates a
    package with a unique name holding the given files.
    """
    root = tmp_path / "site"
    root.mkdir()
    monkeypatch.syspath_prepend(str(root))

    def factory(files: dict[str, str]) -> ModuleType:
        name = f"sample_app_{uuid.uuid4().hex}"
        package = root / name
        package.mkdir()
        (package / "__init__.py").write_text("class Widget:\n    pass\n\n\nclass Gadget:\n    pass\n")
        for filename, content in files.items():
            (package / filename).write_text(content, encoding="utf-8")
        importlib.invalidate_caches()
        module = importlib.import_module(name)
        monkeypatch.setitem(sys.modules, name, module)
        return module

    return factory
