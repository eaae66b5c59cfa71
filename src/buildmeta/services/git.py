"""Git operations for gathering commit facts.

Everything here is best effort from the caller's point of view:
inspect_checkout() never raises, it reports what it could find.
"""

import logging
import os
import subprocess
import threading
from datetime import UTC, datetime
from pathlib import Path

from ..constants import GIT_TIMEOUT
from ..models import CommitFacts

logger = logging.getLogger(__name__)

# Format of `git log --date=iso`, e.g. "2021-03-01 15:36:09 +0100"
GIT_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"

GIT_ENVIRONMENT = {
    "GIT_PAGER": "/bin/cat",
    "GIT_ASKPASS": "/usr/bin/false",
    "GIT_CONFIG_NOSYSTEM": "1",
    "GIT_TERMINAL_PROMPT": "0",
}

GIT_COMMON_ARGS = [
    "--no-pager",
    "-c",
    "push.default=current",
    "-c",
    "pull.rebase=false",
    "-c",
    "diff.renamelimit=0",
    "-c",
    "init.defaultBranch=main",
]

_executable_cache: dict[str, Path | None] = {}
_executable_lock = threading.Lock()


class GitError(Exception):
    """Git command failed."""

    pass


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def _search_dirs(extra_dirs: tuple[Path, ...]) -> list[Path]:
    """Return extra dirs, then PATH, then well-known bin directories, without repeats."""
    dirs = list(extra_dirs)
    dirs += [Path(p) for p in os.environ.get("PATH", "").split(os.pathsep) if p]
    home = Path.home()
    dirs += [
        Path("/bin"),
        Path("/usr/bin"),
        Path("/usr/local/bin"),
        Path("/opt/bin"),
        Path("/opt/local/bin"),
        Path("/opt/homebrew/bin"),
        home / ".local" / "bin",
        home / "bin",
    ]
    return list(dict.fromkeys(dirs))


def _find_executable(name: str, extra_dirs: tuple[Path, ...]) -> Path | None:
    if os.sep in name:
        path = Path(name)
        if _is_executable(path):
            return path
        name = path.name
    for directory in _search_dirs(extra_dirs):
        candidate = directory / name
        if _is_executable(candidate):
            return candidate
    return None


def find_executable(name: str, *extra_dirs: Path) -> Path | None:
    """Locate an executable by name.

    Args:
        name: Executable name, or a path to check directly
        *extra_dirs: Directories searched before PATH

    Returns:
        Path to the executable, or None if not found. Lookups without
        extra directories are cached for the life of the process.
    """
    if extra_dirs:
        return _find_executable(name, extra_dirs)
    with _executable_lock:
        if name not in _executable_cache:
            _executable_cache[name] = _find_executable(name, ())
        return _executable_cache[name]


def _run(args: tuple[str, ...], cwd: Path | None) -> subprocess.CompletedProcess[str]:
    git = find_executable("git")
    if git is None:
        raise GitError("git executable not found")
    try:
        return subprocess.run(
            [str(git), *GIT_COMMON_ARGS, *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT,
            env={**os.environ, **GIT_ENVIRONMENT},
        )
    except subprocess.TimeoutExpired as e:
        raise GitError(f"git {' '.join(args)} timed out after {GIT_TIMEOUT} seconds") from e
    except OSError as e:
        raise GitError(f"git {' '.join(args)} could not be started: {e}") from e


def run_git(*args: str, cwd: Path | None = None, check: bool = True) -> str:
    """Run git command and return stdout.

    Args:
        *args: Git command arguments
        cwd: Working directory
        check: Raise GitError on non-zero exit

    Returns:
        Stripped stdout

    Raises:
        GitError: If git is missing, times out, or fails with check=True
    """
    result = _run(args, cwd)
    if check and result.returncode != 0:
        raise GitError(f"git {' '.join(args)} failed: {result.stderr.strip()}")
    return result.stdout.strip()


def find_checkout_root(path: Path) -> Path | None:
    """Return the nearest directory at or above path that contains .git."""
    current = path.resolve()
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate
    return None


def get_head_sha(cwd: Path) -> str:
    """Get full SHA of HEAD."""
    return run_git("rev-parse", "HEAD", cwd=cwd)


def is_clean(cwd: Path) -> bool:
    """Return True if tracked files have no unstaged modifications.

    Dirty submodules are ignored.

    Raises:
        GitError: If git cannot answer
    """
    result = _run(("diff", "--quiet", "--ignore-submodules=dirty"), cwd)
    if result.returncode == 0:
        return True
    if result.returncode == 1:
        return False
    raise GitError(f"git diff failed: {result.stderr.strip()}")


def parse_git_log_date(text: str) -> datetime:
    """Parse a `git log --date=iso` date and convert it to UTC.

    Raises:
        ValueError: If text is not in git's iso date format
    """
    return datetime.strptime(text.strip(), GIT_LOG_DATE_FORMAT).astimezone(UTC)


def get_commit_timestamp(cwd: Path) -> datetime | None:
    """Get the committer date of HEAD in UTC, or None if it cannot be parsed."""
    text = run_git(
        "log",
        "-1",
        "--format=format:%cd",
        "--date=iso",
        "--no-color",
        "--encoding=utf8",
        cwd=cwd,
    )
    if not text:
        return None
    try:
        return parse_git_log_date(text)
    except ValueError:
        logger.error("Failed to parse git log date string %r", text)
        return None


def inspect_checkout(path: Path) -> CommitFacts:
    """Gather commit facts for the checkout containing path.

    Never raises: a missing checkout or git executable, or any failing git
    command, leaves the affected facts empty and assumes local modifications.
    """
    checkout = find_checkout_root(path)
    if checkout is None:
        logger.debug("No git checkout at or above %s", path)
        return CommitFacts()

    if find_executable("git") is None:
        logger.warning("git executable not found; commit facts unavailable")
        return CommitFacts(checkout=checkout)

    try:
        commit_hash: str | None = get_head_sha(checkout)
    except GitError as e:
        logger.warning("Could not read HEAD of %s: %s", checkout, e)
        commit_hash = None

    try:
        clean = is_clean(checkout)
    except GitError as e:
        logger.warning("Could not determine local modifications in %s: %s", checkout, e)
        clean = False

    try:
        timestamp = get_commit_timestamp(checkout)
    except GitError as e:
        logger.warning("Could not read commit date in %s: %s", checkout, e)
        timestamp = None

    facts = CommitFacts(
        checkout=checkout,
        commit_hash=commit_hash,
        commit_timestamp=timestamp,
        clean=clean,
    )
    logger.debug("Commit facts for %s: %s", checkout, facts)
    return facts
