"""Repository change summary sent to the model.

The section order and headings are part of the prompt the model sees, so
they must not change.
"""

from typing import List, Optional, Tuple

from .utils import SubprocessHandler

SUMMARY_SECTIONS: List[Tuple[str, str]] = [
    ("### GIT STATUS ###", "git status"),
    ("### STAGED ###", "git --no-pager diff --cached --shortstat"),
    ("### UNSTAGED ###", "git --no-pager diff --shortstat"),
    ("### RECENT COMMITS ###", "git --no-pager log --oneline -n 5"),
]


def build_summary_command() -> str:
    """Return one shell script printing every section under its heading."""
    lines: List[str] = []
    for i, (heading, command) in enumerate(SUMMARY_SECTIONS):
        if i:
            lines.append('echo ""')
        lines.append(f'echo "{heading}"')
        lines.append(command)
    return "\n".join(lines)


def build_change_summary(handler: Optional[SubprocessHandler] = None) -> str:
    """Run the summary script in the current directory and return its output."""
    handler = handler or SubprocessHandler()
    return handler.run_command(build_summary_command()).stdout
