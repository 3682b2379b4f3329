"""
Release Note Generator - build release notes from git merge commits.
"""

from .models import DateRange, NoteResult, ReleaseRun, RepoRef
from .config import InputValidationError, Settings, load_settings, resolve_date_range
from .fetcher import GitCommandError, GitFetcher
from .generator import ReleaseNoteGenerator
from .summarizer import EmptyNoteError, ReleaseNoteSummarizer
from .main import main

__all__ = [
    'DateRange',
    'NoteResult',
    'ReleaseRun',
    'RepoRef',
    'InputValidationError',
    'Settings',
    'load_settings',
    'resolve_date_range',
    'GitCommandError',
    'GitFetcher',
    'ReleaseNoteGenerator',
    'ReleaseNoteSummarizer',
    'EmptyNoteError',
    'main'
]
