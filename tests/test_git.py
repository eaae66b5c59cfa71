"""Tests for git operations."""

import os
import stat
import subprocess
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from buildmeta.services import git
from buildmeta.services.git import (
    GitError,
    find_checkout_root,
    find_executable,
    get_commit_timestamp,
    get_head_sha,
    inspect_checkout,
    is_clean,
    parse_git_log_date,
    run_git,
)


def make_executable(path: Path) -> Path:
    path.write_text("#!/bin/sh\nexit 0\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


class TestRunGit:
    """Tests for run_git function."""

    def test_simple_command(self, temp_git_repo: Path) -> None:
        """run_git should execute git commands."""
        result = run_git("status", cwd=temp_git_repo)
        assert "On branch" in result

    def test_raises_on_failure(self, temp_git_repo: Path) -> None:
        """run_git with check=True should raise on failure."""
        with pytest.raises(GitError, match="failed"):
            run_git("checkout", "nonexistent-branch", cwd=temp_git_repo)

    def test_no_raise_with_check_false(self, temp_git_repo: Path) -> None:
        """run_git with check=False should not raise."""
        result = run_git("checkout", "nonexistent-branch", cwd=temp_git_repo, check=False)
        assert isinstance(result, str)

    def test_missing_git(self, temp_git_repo: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(git, "find_executable", lambda name, *dirs: None)
        with pytest.raises(GitError, match="not found"):
            run_git("status", cwd=temp_git_repo)


class TestFindExecutable:
    """Tests for find_executable function."""

    def test_finds_in_extra_dir(self, tmp_path: Path) -> None:
        tool = make_executable(tmp_path / "buildmeta-test-tool")
        assert find_executable("buildmeta-test-tool", tmp_path) == tool

    def test_skips_non_executable(self, tmp_path: Path) -> None:
        (tmp_path / "buildmeta-test-tool").write_text("not executable")
        assert find_executable("buildmeta-test-tool", tmp_path) is None

    def test_direct_path(self, tmp_path: Path) -> None:
        """A name containing a path separator is checked directly."""
        tool = make_executable(tmp_path / "buildmeta-test-tool")
        assert find_executable(str(tool)) == tool

    def test_finds_on_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        tool = make_executable(tmp_path / "buildmeta-path-tool")
        monkeypatch.setenv("PATH", f"{tmp_path}{os.pathsep}{os.environ.get('PATH', '')}")
        monkeypatch.setattr(git, "_executable_cache", {})
        assert find_executable("buildmeta-path-tool") == tool

    def test_unknown(self) -> None:
        assert find_executable("buildmeta-no-such-tool-anywhere") is None

    def test_finds_git(self) -> None:
        found = find_executable("git")
        assert found is not None
        assert found.name == "git"


class TestFindCheckoutRoot:
    """Tests for find_checkout_root function."""

    def test_returns_repo_root(self, temp_git_repo: Path) -> None:
        assert find_checkout_root(temp_git_repo) == temp_git_repo.resolve()

    def test_from_subdirectory(self, temp_git_repo: Path) -> None:
        """find_checkout_root should work from a subdirectory."""
        subdir = temp_git_repo / "a" / "b"
        subdir.mkdir(parents=True)
        assert find_checkout_root(subdir) == temp_git_repo.resolve()

    def test_none_outside_repo(self, tmp_path: Path) -> None:
        assert find_checkout_root(tmp_path) is None


class TestCommitFacts:
    """Tests for reading commit facts."""

    def test_head_sha(self, temp_git_repo: Path) -> None:
        """get_head_sha should return full SHA."""
        assert len(get_head_sha(temp_git_repo)) == 40

    def test_clean_repo(self, temp_git_repo: Path) -> None:
        assert is_clean(temp_git_repo)

    def test_modified_file_is_dirty(self, temp_git_repo: Path) -> None:
        (temp_git_repo / "README.md").write_text("# Modified\n")
        assert not is_clean(temp_git_repo)

    def test_untracked_file_is_clean(self, temp_git_repo: Path) -> None:
        """Untracked files are not local modifications."""
        (temp_git_repo / "new.txt").write_text("new file")
        assert is_clean(temp_git_repo)

    def test_commit_timestamp(self, temp_git_repo: Path) -> None:
        timestamp = get_commit_timestamp(temp_git_repo)
        assert timestamp is not None
        assert timestamp.utcoffset() == timedelta(0)
        assert abs(datetime.now(UTC) - timestamp) < timedelta(hours=1)

    def test_parse_git_log_date(self) -> None:
        """git's iso dates should be converted to UTC."""
        parsed = parse_git_log_date("2021-03-01 16:36:09 +0100")
        assert parsed == datetime(2021, 3, 1, 15, 36, 9, tzinfo=UTC)
        assert parsed.tzinfo is UTC

    def test_parse_git_log_date_rejects(self) -> None:
        with pytest.raises(ValueError):
            parse_git_log_date("2021-03-01T16:36:09+01:00")


class TestInspectCheckout:
    """Tests for inspect_checkout function."""

    def test_clean_checkout(self, temp_git_repo: Path) -> None:
        facts = inspect_checkout(temp_git_repo)
        assert facts.checkout == temp_git_repo.resolve()
        assert facts.commit_hash == get_head_sha(temp_git_repo)
        assert facts.commit_timestamp is not None
        assert facts.clean

    def test_dirty_checkout(self, temp_git_repo: Path) -> None:
        (temp_git_repo / "README.md").write_text("# Modified\n")
        assert not inspect_checkout(temp_git_repo).clean

    def test_no_checkout(self, tmp_path: Path) -> None:
        """Outside a checkout every fact is missing and modifications are assumed."""
        facts = inspect_checkout(tmp_path)
        assert facts.checkout is None
        assert facts.commit_hash is None
        assert facts.commit_timestamp is None
        assert not facts.clean

    def test_no_commits(self, tmp_path: Path) -> None:
        """A fresh repository has no HEAD; inspection should not raise."""
        subprocess.run(["git", "init"], cwd=tmp_path, check=True, capture_output=True)
        facts = inspect_checkout(tmp_path)
        assert facts.checkout == tmp_path.resolve()
        assert facts.commit_hash is None
        assert facts.commit_timestamp is None

    def test_git_unavailable(self, temp_git_repo: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(git, "find_executable", lambda name, *dirs: None)
        facts = inspect_checkout(temp_git_repo)
        assert facts.checkout == temp_git_repo.resolve()
        assert facts.commit_hash is None
        assert not facts.clean
