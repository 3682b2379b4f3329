"""
Release note summarization module.

Sends a repository's raw merge log to the OpenAI chat completion API
together with the fixed system instruction and returns the generated
Markdown release note.
"""

import logging
from typing import Dict, List, Optional

from . import prompt_loader

# External libs
try:
    from openai import OpenAI
except Exception as e:
    raise RuntimeError("openai is required. Install with: pip install openai") from e

# logging
logger = logging.getLogger("release-notes.summarizer")


class EmptyNoteError(RuntimeError):
    """The model answered without any note text."""


class ReleaseNoteSummarizer:
    """
    Turn merge logs into release notes with a chat completion model.

    Args:
        client: An ``openai.OpenAI`` instance (or anything exposing
                ``chat.completions.create``).
        model: Chat model name.
        system_prompt: System instruction text; the packaged prompt is used
                       when None.
    """

    def __init__(self, client, model: str, system_prompt: Optional[str] = None) -> None:
        self.client = client
        self.model = model
        self.system_prompt = system_prompt if system_prompt is not None else prompt_loader.load_system_prompt()

    @classmethod
    def from_api_key(cls, api_key: str, model: str, system_prompt: Optional[str] = None) -> "ReleaseNoteSummarizer":
        """Create a summarizer backed by a fresh OpenAI client."""
        return cls(OpenAI(api_key=api_key), model, system_prompt)

    def build_messages(self, repo_name: str, log_text: str) -> List[Dict[str, str]]:
        """Build the system and user messages for one repository."""
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": prompt_loader.render_user_message(repo_name, log_text)},
        ]

    def summarize(self, repo_name: str, log_text: str) -> str:
        """
        Request a release note for ``repo_name``.

        Errors raised by the client propagate to the caller.

        Returns:
            The text of the first choice

        Raises:
            EmptyNoteError: if the response carries no text
        """
        logger.info("Requesting release note for %s from %s", repo_name, self.model)
        response = self.client.chat.completions.create(
            model=self.model,
            messages=self.build_messages(repo_name, log_text),
        )
        message = response.choices[0].message if response.choices else None
        content = getattr(message, "content", None) if message is not None else None
        if not content:
            raise EmptyNoteError(f"Empty response from {self.model} for {repo_name}")
        return content
