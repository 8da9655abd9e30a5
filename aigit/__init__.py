"""
aigit: AI-written commit messages for a one-shot add/commit/push

Usage:
    Run the command in a Git repository:
    $ aigit

    The tool will:
    1. Check the working tree for changes
    2. Summarize status, diff stats and recent commits
    3. Ask the Groq API for a Conventional-Commit message
    4. Fall back to asking you for a message if that fails
    5. Run git add, commit and push

The API key is read from GROQ_API_KEY. When it is missing you are asked for it
once and an export line is appended to ~/.zshrc or ~/.bashrc.
"""

__version__ = "0.1.0"
__author__ = "Lincoln Aleixo"

from .workflow import main, run_git

__all__ = ['main', 'run_git', '__version__', '__author__']
