"""Pydantic data models for buildmeta.

- Commit facts from a git checkout (CommitFacts)
- Project identity written to project.properties (ProjectInfo)
"""

from .commit import CommitFacts
from .project import ProjectInfo

__all__ = [
    "CommitFacts",
    "ProjectInfo",
]
