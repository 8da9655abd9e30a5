import logging
import tempfile
import time
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from rich.markup import escape

from .config import Config, default_config
from .credentials import load_api_key
from .generator import CommitMessageGenerator
from .summary import build_change_summary
from .utils import SubprocessHandler, ask, console, err_console

logger = logging.getLogger(__name__)

MESSAGE_PROMPT = "Enter a commit message:\n> "


class Stage(Enum):
    CHECKING_CHANGES = "checking changes"
    SUMMARIZING = "summarizing"
    RESOLVING_CREDENTIAL = "resolving credential"
    GENERATING = "generating"
    CONFIRMING_MESSAGE = "confirming message"
    COMMITTING = "committing"
    DONE = "done"
    ABORTED = "aborted"


def enter(stage: Stage) -> Stage:
    logger.debug("Stage: %s", stage.value)
    return stage


def has_changes(handler: SubprocessHandler) -> bool:
    return bool(handler.run_command(["git", "status", "--porcelain"]).stdout)


def generate_message(summary: str, api_key: str, config: Config,
                     generator_factory: Callable[..., CommitMessageGenerator] = CommitMessageGenerator) -> str:
    """Ask the model for a message, returning an empty string on any failure."""
    try:
        message = generator_factory(api_key, config).generate(summary)
    except Exception as e:
        logger.debug("Commit message generation failed: %s", e)
        console.print(f"[yellow]AI failed:[/yellow] {escape(str(e))}", highlight=False)
        return ""
    console.print("[cyan]AI commit message:[/cyan]")
    console.print(message, markup=False, highlight=False)
    return message


def commit_file_path() -> Path:
    """Return a fresh temp file path named after the current time in milliseconds."""
    return Path(tempfile.gettempdir()) / f"commit_{int(time.time() * 1000)}.txt"


def commit_and_push(message: str, handler: SubprocessHandler) -> None:
    """Stage everything, commit with ``message`` and push.

    The message file is removed whatever the outcome. Git failures propagate,
    so a failed commit is never pushed.
    """
    path = commit_file_path()
    path.write_text(message, encoding="utf-8")
    try:
        handler.run_command(["git", "add", "."])
        handler.run_command(["git", "commit", "-F", str(path)])
        handler.run_command(["git", "push"])
    finally:
        try:
            path.unlink()
        except FileNotFoundError:
            pass


def run_git(config: Optional[Config] = None,
            handler: Optional[SubprocessHandler] = None,
            generator_factory: Callable[..., CommitMessageGenerator] = CommitMessageGenerator) -> Stage:
    """Run the whole add/commit/push workflow in the current directory.

    Returns:
        Stage: ``Stage.DONE`` when the workflow finished or there was nothing to commit.
    """
    config = config or default_config
    handler = handler or SubprocessHandler(timeout=config.command_timeout,
                                           max_output_size=config.max_output_size)
    console.print("Starting git operations...")

    enter(Stage.CHECKING_CHANGES)
    if not has_changes(handler):
        console.print("No changes to commit")
        return enter(Stage.DONE)

    enter(Stage.SUMMARIZING)
    summary = build_change_summary(handler)

    enter(Stage.RESOLVING_CREDENTIAL)
    api_key = load_api_key(config, prompt=ask)

    enter(Stage.GENERATING)
    message = generate_message(summary, api_key, config, generator_factory)

    enter(Stage.CONFIRMING_MESSAGE)
    if not message:
        message = ask(MESSAGE_PROMPT)

    enter(Stage.COMMITTING)
    commit_and_push(message, handler)

    console.print("[green]Done.[/green]")
    return enter(Stage.DONE)


def main(config: Optional[Config] = None, verbose: bool = False) -> int:
    """Run the workflow and turn failures into an exit status."""
    try:
        run_git(config)
    except KeyboardInterrupt:
        err_console.print("\nOperation cancelled by user")
        return 130
    except Exception as e:
        enter(Stage.ABORTED)
        if verbose:
            raise
        err_console.print(f"[red]Process failed:[/red] {escape(str(e))}", highlight=False)
        return 1
    return 0
