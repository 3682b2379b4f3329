"""
Git repository sync and merge log extraction.

This module handles all interactions with the ``git`` executable: cloning
missing checkouts, updating them to the latest ``main`` and reading the
merge-commit log for a date range.
"""

import logging
import os
import subprocess
from typing import Iterable, List, Optional

from .models import DateRange, ReleaseRun, RepoRef

# Set up logging
logger = logging.getLogger("release-notes.fetcher")

MAIN_BRANCH = "main"


class GitCommandError(RuntimeError):
    """A git invocation exited non-zero or could not be started."""

    def __init__(self, args: List[str], message: str) -> None:
        self.args_list = args
        super().__init__(f"git {' '.join(args)} failed: {message}")


class GitFetcher:
    """
    Keep local checkouts of the configured repositories and read their logs.

    Every checkout lives at ``{repo_dir}/{short name}``. Command failures are
    raised as ``GitCommandError`` and are not retried.

    Args:
        repo_dir: Directory holding one subdirectory per repository.
        git: Name or path of the git executable.
    """

    def __init__(self, repo_dir: str, git: str = "git") -> None:
        self.repo_dir = repo_dir
        self.git = git

    def repo_path(self, repo: RepoRef) -> str:
        """Return the local checkout path for ``repo``."""
        return os.path.join(self.repo_dir, repo.name)

    def _run(self, args: List[str], cwd: Optional[str] = None) -> str:
        """
        Run git and return stdout.

        Raises:
            GitCommandError: if git is missing or exits non-zero
        """
        cmd = [self.git] + args
        logger.info("%s%s", " ".join(cmd), f" (in {cwd})" if cwd else "")
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                check=True,
            )
        except FileNotFoundError as e:
            raise GitCommandError(args, f"executable not found: {e}") from e
        except subprocess.CalledProcessError as e:
            err_text = (e.stderr or "").strip() or f"exit status {e.returncode}"
            raise GitCommandError(args, err_text) from e
        return result.stdout

    def ensure_clone(self, repo: RepoRef) -> bool:
        """
        Clone ``repo`` unless a checkout already exists.

        Returns:
            True if a clone was performed
        """
        path = self.repo_path(repo)
        if os.path.exists(path):
            logger.debug("Checkout for %s already present at %s", repo.name, path)
            return False
        self._run(["clone", repo.url, path])
        return True

    def checkout_and_pull(self, repo: RepoRef) -> None:
        """Switch the checkout to ``main`` and pull the latest changes."""
        path = self.repo_path(repo)
        self._run(["checkout", MAIN_BRANCH], cwd=path)
        self._run(["pull"], cwd=path)

    def sync(self, repos: Iterable[RepoRef], skip_checkout_pull: bool = False) -> None:
        """
        Clone every missing repository, then update all of them.

        Freshly cloned repositories are updated too. Nothing is rolled back
        if a later command fails.
        """
        repos = list(repos)
        os.makedirs(self.repo_dir, exist_ok=True)
        for repo in repos:
            self.ensure_clone(repo)

        if skip_checkout_pull:
            logger.info("Skipping checkout and pull")
            return
        for repo in repos:
            self.checkout_and_pull(repo)

    def fetch_merge_log(self, repo: RepoRef, date_range: DateRange) -> str:
        """
        Return the raw merge-commit log for ``repo`` within ``date_range``.

        The output is returned verbatim and may be empty.
        """
        return self._run(
            [
                "log",
                "--merges",
                f"--since={date_range.since}",
                f"--until={date_range.until}",
                "--date=short",
            ],
            cwd=self.repo_path(repo),
        )

    def collect_logs(self, run: ReleaseRun) -> ReleaseRun:
        """Fill ``run.logs`` with one merge log per repository, in order."""
        for repo in run.repos:
            log = self.fetch_merge_log(repo, run.date_range)
            run.logs[repo.name] = log
            logger.debug("Fetched %d bytes of merge log for %s", len(log), repo.name)
        return run
