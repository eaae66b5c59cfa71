"""Commit facts gathered from a version-control checkout."""

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from ..constants import NULL_COMMIT_HASH
from ..metadata import KEY_GIT_COMMIT_HASH, KEY_GIT_COMMIT_TIMESTAMP, KEY_GIT_REPO_CLEAN


class CommitFacts(BaseModel):
    """What the checkout says about the commit being built.

    Attributes:
        checkout: Root of the git checkout, or None if none was found.
        commit_hash: Full 40-character commit hash of HEAD.
        commit_timestamp: Committer date of HEAD, timezone-aware.
        clean: True only if the working tree had no modifications to
            tracked files. Assumed False when it could not be determined.
    """

    model_config = ConfigDict(frozen=True)

    checkout: Path | None = Field(default=None, description="Git checkout root")
    commit_hash: str | None = Field(default=None, description="Full commit hash of HEAD")
    commit_timestamp: datetime | None = Field(default=None, description="Committer date of HEAD")
    clean: bool = Field(default=False, description="True if no local modifications")

    def to_arguments(self) -> list[str]:
        """Return the facts as key/value arguments for generate().

        No arguments are produced when no checkout was found.
        """
        if self.checkout is None:
            return []
        args = [
            KEY_GIT_COMMIT_HASH,
            self.commit_hash or NULL_COMMIT_HASH,
            KEY_GIT_REPO_CLEAN,
            "true" if self.clean else "false",
        ]
        if self.commit_timestamp is not None:
            args += [KEY_GIT_COMMIT_TIMESTAMP, self.commit_timestamp.isoformat()]
        return args
