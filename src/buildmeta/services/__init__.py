"""External integrations for buildmeta.

- git: Commit facts from a git checkout
- project: Project identity from pyproject.toml
"""

from .git import (
    GitError,
    find_checkout_root,
    find_executable,
    get_commit_timestamp,
    get_head_sha,
    inspect_checkout,
    is_clean,
    run_git,
)
from .project import canonical_name, load_project_info

__all__ = [
    "GitError",
    "canonical_name",
    "find_checkout_root",
    "find_executable",
    "get_commit_timestamp",
    "get_head_sha",
    "inspect_checkout",
    "is_clean",
    "load_project_info",
    "run_git",
]
