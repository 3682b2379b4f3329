"""
Configuration resolution for the release note generator.

Turns command-line arguments and environment variables into a ``Settings``
object: the date range, the skip switches, the repositories to process and
the summarization credentials.
"""

import datetime
import logging
import os
import re
from dataclasses import dataclass
from typing import List, Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .models import DateRange, RepoRef

logger = logging.getLogger("release-notes.config")

DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

REPO_URL_ENV_PREFIX = "REPO_URL_"
API_KEY_ENV = "OPENAI_API_KEY"
MODEL_ENV = "OPENAI_MODEL"
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_REPO_DIR = "repos"
DEFAULT_RELEASE_NOTE_DIR = "release_notes"


class InputValidationError(ValueError):
    """Raised when the requested date range is partial or malformed."""


@dataclass
class Settings:
    """Fully resolved configuration for one run."""
    date_range: DateRange
    repos: List[RepoRef]
    skip_checkout_pull: bool
    skip_ai: bool
    api_key: Optional[str]
    model: str
    repo_dir: str
    release_note_dir: str
    system_prompt_path: Optional[str] = None

    @property
    def use_ai(self) -> bool:
        """Summarized mode needs a credential and no ``--skip-ai``."""
        return bool(self.api_key) and not self.skip_ai


def validate_date_arguments(since: Optional[str], until: Optional[str]) -> None:
    """
    Check the ``--since``/``--until`` pair.

    Raises:
        InputValidationError: if only one of the two is given, or if either
            does not match ``YYYY-MM-DD``.
    """
    if bool(since) != bool(until):
        raise InputValidationError("--since and --until must be given together")
    if since and not DATE_RE.fullmatch(since):
        raise InputValidationError(f"Invalid --since value {since!r}; expected YYYY-MM-DD")
    if until and not DATE_RE.fullmatch(until):
        raise InputValidationError(f"Invalid --until value {until!r}; expected YYYY-MM-DD")


def previous_month_range(today: datetime.date) -> DateRange:
    """Return the first and last day of the calendar month before ``today``."""
    last_day = today.replace(day=1) - datetime.timedelta(days=1)
    first_day = last_day.replace(day=1)
    return DateRange(since=first_day.isoformat(), until=last_day.isoformat())


def resolve_date_range(
    since: Optional[str],
    until: Optional[str],
    today: Optional[datetime.date] = None,
) -> DateRange:
    """
    Resolve the date window for the run.

    Args:
        since: Start date as given on the command line, or None
        until: End date as given on the command line, or None
        today: Reference date for the default range (defaults to now)

    Returns:
        The literal input when both dates are given, otherwise the
        previous calendar month.
    """
    validate_date_arguments(since, until)
    if since and until:
        return DateRange(since=since, until=until)
    if today is None:
        today = datetime.date.today()
    date_range = previous_month_range(today)
    logger.debug("No date range given, defaulting to %s..%s", date_range.since, date_range.until)
    return date_range


def load_repo_urls(environ: Mapping[str, str]) -> List[str]:
    """Collect ``REPO_URL_0``, ``REPO_URL_1``, ... up to the first gap."""
    urls: List[str] = []
    index = 0
    while environ.get(f"{REPO_URL_ENV_PREFIX}{index}"):
        urls.append(environ[f"{REPO_URL_ENV_PREFIX}{index}"])
        index += 1
    return urls


def load_settings(args, environ: Optional[Mapping[str, str]] = None,
                  today: Optional[datetime.date] = None) -> Settings:
    """
    Build ``Settings`` from parsed CLI arguments and the environment.

    When ``environ`` is None, a ``.env`` file in the working directory is
    loaded into ``os.environ`` first and ``os.environ`` is used.
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ

    date_range = resolve_date_range(args.since, args.until, today=today)
    repos = [RepoRef.from_url(url) for url in load_repo_urls(environ)]
    if not repos:
        logger.warning("No repositories configured (set %s0, %s1, ...)",
                       REPO_URL_ENV_PREFIX, REPO_URL_ENV_PREFIX)

    return Settings(
        date_range=date_range,
        repos=repos,
        skip_checkout_pull=bool(args.skip_checkout_pull),
        skip_ai=bool(args.skip_ai),
        api_key=environ.get(API_KEY_ENV) or None,
        model=environ.get(MODEL_ENV) or DEFAULT_MODEL,
        repo_dir=args.repo_dir or DEFAULT_REPO_DIR,
        release_note_dir=args.output_dir or DEFAULT_RELEASE_NOTE_DIR,
        system_prompt_path=args.system_prompt,
    )
