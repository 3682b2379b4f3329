"""
Data models for the release note generator.

This module contains the shared data structures passed between the
configuration, sync, log extraction and note generation phases.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class RepoRef:
    """A remote repository and the short name used as its key."""
    url: str
    name: str

    @classmethod
    def from_url(cls, url: str) -> "RepoRef":
        """
        Build a reference from a remote location.

        The short name is the last path segment with any trailing ``.git``
        removed, e.g. ``https://example.com/org/repo.git`` -> ``repo``.
        """
        url = url.strip()
        last = url.rstrip("/").split("/")[-1]
        # scp-style remotes without a slash: git@host:repo.git
        last = last.split(":")[-1]
        if last.endswith(".git"):
            last = last[: -len(".git")]
        return cls(url=url, name=last)


@dataclass(frozen=True)
class DateRange:
    """Inclusive ``YYYY-MM-DD`` date window."""
    since: str
    until: str


@dataclass
class ReleaseRun:
    """
    State carried through a single run.

    ``logs`` is filled by the log extraction phase, one entry per
    repository name, and read by note generation.
    """
    date_range: DateRange
    repos: List[RepoRef]
    logs: Dict[str, str] = field(default_factory=dict)

    def log_for(self, repo: RepoRef) -> str:
        return self.logs.get(repo.name, "")


@dataclass
class NoteResult:
    """Outcome of note generation for one repository."""
    repo_name: str
    state: str
    path: Optional[str] = None
    error: Optional[str] = None

    SKIPPED = "skipped"
    SAVED = "saved"
    FAILED = "failed"
    PRINTED = "printed"
