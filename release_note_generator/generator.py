"""
Release Note Generation Module

This module contains the ReleaseNoteGenerator class responsible for turning
the collected merge logs into release notes: summarized and written to disk
when a summarizer is available, printed raw otherwise.
"""

import logging
import os
from typing import List, Optional

from . import prompt_loader
from .models import DateRange, NoteResult, ReleaseRun
from .summarizer import ReleaseNoteSummarizer

logger = logging.getLogger("release-notes.generator")


def release_note_filename(repo_name: str, date_range: DateRange) -> str:
    """File name for a note: ``{repo}_{since}_{until}.md``."""
    return f"{repo_name}_{date_range.since}_{date_range.until}.md"


class ReleaseNoteGenerator:
    """
    Produce release notes for every repository of a run.

    Repositories are processed one at a time in configuration order. A
    repository without merges in range is skipped with a warning. A failed
    summarization request is logged and only affects that repository.

    Args:
        release_note_dir: Directory the Markdown notes are written to.
        summarizer: Summarizer to use; None selects raw mode.
    """

    def __init__(self, release_note_dir: str, summarizer: Optional[ReleaseNoteSummarizer] = None) -> None:
        self.release_note_dir = release_note_dir
        self.summarizer = summarizer

    def generate(self, run: ReleaseRun) -> List[NoteResult]:
        """
        Generate notes for ``run`` in summarized or raw mode.

        Returns:
            One NoteResult per repository, in repository order
        """
        if self.summarizer is not None:
            return self._generate_summarized(run)
        return self._generate_raw(run)

    def _generate_summarized(self, run: ReleaseRun) -> List[NoteResult]:
        results: List[NoteResult] = []
        for repo in run.repos:
            log = run.log_for(repo)
            if not log:
                logger.warning("Repository %s has no merge commits", repo.name)
                results.append(NoteResult(repo.name, NoteResult.SKIPPED))
                continue
            try:
                note = self.summarizer.summarize(repo.name, log)
                print(note)
                print("")
                path = self.save_release_note(repo.name, run.date_range, note)
            except Exception as e:
                logger.error("Release note generation failed for %s: %s", repo.name, e)
                results.append(NoteResult(repo.name, NoteResult.FAILED, error=str(e)))
                continue
            results.append(NoteResult(repo.name, NoteResult.SAVED, path=path))
        return results

    def _generate_raw(self, run: ReleaseRun) -> List[NoteResult]:
        results: List[NoteResult] = []
        for repo in run.repos:
            log = run.log_for(repo)
            if not log:
                logger.warning("Repository %s has no merge commits", repo.name)
                results.append(NoteResult(repo.name, NoteResult.SKIPPED))
                continue
            print(prompt_loader.render_user_message(repo.name, log))
            print("")
            results.append(NoteResult(repo.name, NoteResult.PRINTED))
        return results

    def save_release_note(self, repo_name: str, date_range: DateRange, note: str) -> str:
        """
        Write ``note`` for ``repo_name``, replacing any earlier file.

        Returns:
            Path of the written file
        """
        os.makedirs(self.release_note_dir, exist_ok=True)
        path = os.path.join(self.release_note_dir, release_note_filename(repo_name, date_range))
        with open(path, "w", encoding="utf-8") as f:
            f.write(note)
        logger.info("Wrote release note %s", path)
        return path
