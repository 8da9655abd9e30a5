from pathlib import Path
from typing import Callable, Dict, List, Optional

import git
import httpx
import pytest

from aigit.config import Config
from aigit.generator import CommitMessageGenerator
from aigit.utils import CommandError, ShellResult

SAMPLE_SUMMARY = """### GIT STATUS ###
On branch main
Changes not staged for commit:
\tmodified:   a.py
\tmodified:   b.py

### STAGED ###

### UNSTAGED ###
 2 files changed, 4 insertions(+), 1 deletion(-)

### RECENT COMMITS ###
1a2b3c4 Initial commit
"""


@pytest.fixture
def remote_repo(tmp_path) -> git.Repo:
    """Bare repository acting as ``origin``."""
    return git.Repo.init(tmp_path / "remote.git", bare=True)


@pytest.fixture
def temp_git_repo(tmp_path, remote_repo) -> git.Repo:
    """Working repository with one commit pushed to a local bare remote."""
    repo_dir = tmp_path / "work"
    repo = git.Repo.init(repo_dir)

    # Configure git user for commits
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")

    (repo_dir / "a.py").write_text("def a():\n    return 1\n")
    (repo_dir / "b.py").write_text("def b():\n    return 2\n")
    repo.index.add(["a.py", "b.py"])
    repo.index.commit("Initial commit")

    repo.create_remote("origin", remote_repo.git_dir)
    repo.git.push("--set-upstream", "origin", repo.active_branch.name)
    return repo


@pytest.fixture
def git_repo_with_changes(temp_git_repo: git.Repo, monkeypatch) -> git.Repo:
    """Repository with one staged and one unstaged modification, used as cwd."""
    work = Path(temp_git_repo.working_dir)
    (work / "a.py").write_text("def a():\n    return 10\n\n\ndef c():\n    return 3\n")
    temp_git_repo.index.add(["a.py"])
    (work / "b.py").write_text("def b():\n    return 20\n")
    monkeypatch.chdir(work)
    return temp_git_repo


@pytest.fixture
def isolated_home(tmp_path, monkeypatch) -> Path:
    """Point HOME at an empty directory so profile writes stay inside the test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    return home


class RecordingHandler:
    """Stand-in for SubprocessHandler that records every command."""

    def __init__(self, porcelain: str = " M a.py\n M b.py\n", summary: str = SAMPLE_SUMMARY,
                 fail_on: Optional[str] = None, events: Optional[List[str]] = None) -> None:
        self.porcelain = porcelain
        self.summary = summary
        self.fail_on = fail_on
        self.commands: List = []
        self.events = events if events is not None else []
        self.message_path: Optional[Path] = None
        self.message: Optional[str] = None

    def run_command(self, command) -> ShellResult:
        self.commands.append(command)
        if isinstance(command, str):
            self.events.append("summary")
            return ShellResult(self.summary, "", 0)

        sub = command[1]
        self.events.append(sub)
        if sub == "status":
            return ShellResult(self.porcelain, "", 0)
        if sub == "commit":
            self.message_path = Path(command[3])
            self.message = self.message_path.read_text(encoding="utf-8")
        if sub == self.fail_on:
            raise CommandError(command, 1, "", f"{sub} rejected")
        return ShellResult("", "", 0)


@pytest.fixture
def recording_handler() -> RecordingHandler:
    return RecordingHandler()


def mock_generator_factory(responder: Callable[[httpx.Request], httpx.Response],
                           requests: Optional[List[httpx.Request]] = None) -> Callable[..., CommitMessageGenerator]:
    """Build a generator factory whose HTTP traffic goes to ``responder``."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return responder(request)

    def factory(api_key: str, config: Config) -> CommitMessageGenerator:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return CommitMessageGenerator(api_key, config, client=client)

    return factory


def completion(content: str) -> Dict:
    return {"choices": [{"message": {"content": content}}]}
