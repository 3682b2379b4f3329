"""
Prompt templates for the summarization request.

The system instruction and the user message template are kept as data files
under ``release_note_generator/prompts/`` so they can be edited or replaced
without touching control flow.
"""

import os
from typing import Dict, Optional

PROMPT_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "prompts")
SYSTEM_PROMPT_NAME = "release_note_system.md"
USER_PROMPT_NAME = "release_note_user.txt"


def load_prompt_file(path: str) -> str:
    """
    Read a prompt template from an arbitrary path.

    Raises:
        FileNotFoundError: if the file does not exist
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Prompt file not found: {path}")
    with open(path, "r", encoding="utf-8") as handle:
        return handle.read()


def load_prompt(prompt_name: str) -> str:
    """Load a packaged prompt template by file name."""
    if not prompt_name:
        raise ValueError("prompt_name is required")
    return load_prompt_file(os.path.join(PROMPT_DIR, prompt_name))


def load_system_prompt(override_path: Optional[str] = None) -> str:
    """Return the system instruction, from ``override_path`` when given."""
    if override_path:
        return load_prompt_file(override_path)
    return load_prompt(SYSTEM_PROMPT_NAME)


def render_prompt(template: str, values: Dict[str, str]) -> str:
    """
    Replace ``{{token}}`` placeholders with supplied values.

    Unknown tokens are left in place.
    """
    if not template:
        return ""
    rendered = template
    for key, value in values.items():
        token = "{{" + key + "}}"
        rendered = rendered.replace(token, value if value is not None else "")
    return rendered


def render_user_message(repo_name: str, log_text: str) -> str:
    """Render the per-repository message: repository name, then raw log."""
    template = load_prompt(USER_PROMPT_NAME)
    return render_prompt(template, {"repo_name": repo_name, "log_text": log_text})
