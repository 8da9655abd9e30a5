"""Groq API key resolution.

The key comes from the environment when present. Otherwise the user is asked
for it once and an ``export`` line is appended to their shell profile so
later shells pick it up.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Mapping, Optional

from .config import Config, default_config
from .utils import ask, console

logger = logging.getLogger(__name__)

KEY_PROMPT = "Enter your Groq API key (it will be saved to your shell profile):\n> "


class EmptyCredentialError(Exception):
    """Raised when the user submits an empty API key."""


def profile_name(shell: str) -> str:
    """Return the profile file name for the user's shell."""
    return ".zshrc" if "zsh" in shell else ".bashrc"


def profile_path(environ: Mapping[str, str], home: Path) -> Path:
    return home / profile_name(environ.get("SHELL", ""))


def save_api_key(key: str, path: Path, env_var: str = "GROQ_API_KEY") -> bool:
    """Append an export line for ``key`` to ``path`` unless it is already there.

    The presence check is a plain substring test on the file content, so a key
    exported with different quoting is not recognised.

    Returns:
        bool: True if the file was written.
    """
    export_line = f'\nexport {env_var}="{key}"\n'

    already = path.exists() and export_line.strip() in path.read_text(encoding="utf-8", errors="replace")
    if already:
        logger.debug("Export line already present in %s", path)
        return False

    with path.open("a", encoding="utf-8") as f:
        f.write(export_line)
    return True


def load_api_key(config: Optional[Config] = None,
                 environ: Optional[Mapping[str, str]] = None,
                 home: Optional[Path] = None,
                 prompt: Callable[[str], str] = ask) -> str:
    """Return the API key from the environment or ask the user for it.

    Args:
        config: Supplies the name of the environment variable.
        environ: Environment to read, defaults to ``os.environ``.
        home: Directory holding the shell profile, defaults to the user's home.
        prompt: Line reader used when the key is not in the environment.

    Raises:
        EmptyCredentialError: If the user enters an empty key.
    """
    config = config or default_config
    environ = os.environ if environ is None else environ

    key = environ.get(config.api_key_env, "")
    if key:
        logger.debug("Using API key from %s", config.api_key_env)
        return key

    key = prompt(KEY_PROMPT)
    if not key:
        raise EmptyCredentialError("Empty key, aborting.")

    path = profile_path(environ, home or Path.home())
    save_api_key(key, path, config.api_key_env)

    console.print(
        f'Saved to {path}. Open a new terminal or run "source ~/{path.name}" to load it now.',
        markup=False, highlight=False, soft_wrap=True,
    )
    return key
