#!/usr/bin/env python3
"""
Main driver script for the release note generator.

This script provides the command-line interface and runs the four phases:
configuration, repository sync, merge log extraction and note generation.

Usage (example):
    REPO_URL_0=https://github.com/owner/repo.git OPENAI_API_KEY=... \
        python -m release_note_generator.main --since 2024-02-01 --until 2024-02-29
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import API_KEY_ENV, Settings, load_settings
from .fetcher import GitFetcher
from .generator import ReleaseNoteGenerator
from .models import NoteResult, ReleaseRun
from .prompt_loader import load_system_prompt
from .summarizer import ReleaseNoteSummarizer

logger = logging.getLogger("release-notes")


def setup_argument_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(description="Generate release notes from git merge commits.")
    parser.add_argument("--since", help="Start date (YYYY-MM-DD), requires --until")
    parser.add_argument("--until", help="End date (YYYY-MM-DD), requires --since")
    parser.add_argument("--skip-checkout-pull", action="store_true", help="Skip checkout of main and pull")
    parser.add_argument("--skip-ai", action="store_true", help="Print raw merge logs instead of summarizing")
    parser.add_argument("--repo-dir", default=None, help="Directory for repository checkouts (default: repos)")
    parser.add_argument("--output-dir", default=None, help="Directory for release notes (default: release_notes)")
    parser.add_argument("--system-prompt", default=None, help="File replacing the packaged system instruction")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def build_generator(settings: Settings) -> ReleaseNoteGenerator:
    """Select summarized or raw mode from the settings."""
    summarizer = None
    if settings.use_ai:
        system_prompt = load_system_prompt(settings.system_prompt_path)
        summarizer = ReleaseNoteSummarizer.from_api_key(settings.api_key, settings.model, system_prompt)
    else:
        logger.info("AI summarization disabled (skip flag set or %s missing)", API_KEY_ENV)
    return ReleaseNoteGenerator(settings.release_note_dir, summarizer)


def run(settings: Settings, fetcher: Optional[GitFetcher] = None,
        generator: Optional[ReleaseNoteGenerator] = None) -> List[NoteResult]:
    """
    Run sync, log extraction and note generation for ``settings``.

    Git errors propagate; summarization errors are handled per repository
    by the generator.
    """
    fetcher = fetcher or GitFetcher(settings.repo_dir)
    generator = generator or build_generator(settings)

    fetcher.sync(settings.repos, skip_checkout_pull=settings.skip_checkout_pull)

    release_run = ReleaseRun(date_range=settings.date_range, repos=list(settings.repos))
    fetcher.collect_logs(release_run)

    logger.info("Generating release notes for %s..%s",
                release_run.date_range.since, release_run.date_range.until)
    return generator.generate(release_run)


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the release note generator.

    Exits with status 1 and prints the error to stderr on any failure
    outside per-repository summarization.
    """
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    try:
        settings = load_settings(args)
        logger.info("Processing %d repositories", len(settings.repos))
        results = run(settings)

        saved = [r for r in results if r.state == NoteResult.SAVED]
        failed = [r for r in results if r.state == NoteResult.FAILED]
        logger.info("Release note generation finished: %d saved, %d failed", len(saved), len(failed))

    except KeyboardInterrupt:
        logger.info("Release note generation interrupted by user")
        print("\nOperation cancelled by user", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.error("Release note generation failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
