import logging
import os
import subprocess
import time
from typing import Any, Dict, List, NamedTuple, Optional, Union

from rich.console import Console

__all__ = ["console", "err_console", "ask", "ShellResult", "CommandError", "SubprocessHandler"]

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

Command = Union[str, List[str]]

# Large diffs on big repositories can be sizable
DEFAULT_MAX_OUTPUT_SIZE = 100 * 1024 * 1024


class ShellResult(NamedTuple):
    stdout: str
    stderr: str
    returncode: int


class CommandError(Exception):
    """Raised when an external command exits non-zero or overflows its output limit.

    Both captured streams are kept on the exception for the caller.
    """

    def __init__(self, command: Command, returncode: Optional[int], stdout: str = "", stderr: str = "",
                 reason: Optional[str] = None) -> None:
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        if reason is None:
            reason = f"exit status {returncode}"
            detail = stderr.strip() or stdout.strip()
            if detail:
                reason = f"{reason}: {detail}"
        super().__init__(f"Command failed ({_describe(command)}): {reason}")


def _describe(command: Command) -> str:
    if isinstance(command, str):
        return " ".join(command.split())
    return " ".join(command)


def ask(prompt: str) -> str:
    """Show ``prompt`` on stdout and return one trimmed line read from stdin."""
    return console.input(prompt).strip()


class SubprocessHandler:
    """Runs external commands and captures their output.

    A string command is handed to the shell, a list is executed directly.
    There is no timeout unless one is configured.
    """

    def __init__(self, timeout: Optional[float] = None,
                 max_output_size: Optional[int] = None,
                 max_termination_retries: Optional[int] = None,
                 termination_wait: Optional[float] = None) -> None:
        """Initialize the handler.

        Args:
            timeout: Seconds to wait for a command, ``None`` waits forever.
            max_output_size: Largest accepted size in bytes for each captured stream.
            max_termination_retries: Polls made after terminating a timed out process.
            termination_wait: Seconds between those polls.
        """
        self.timeout: Optional[float] = timeout
        self.max_output_size: int = max_output_size or DEFAULT_MAX_OUTPUT_SIZE
        self.max_termination_retries: int = max_termination_retries or 3
        self.termination_wait: float = termination_wait or 0.5

    @staticmethod
    def create_env() -> Dict[str, str]:
        """Create environment with explicit encoding settings for subprocess."""
        env = os.environ.copy()
        env['PYTHONIOENCODING'] = 'utf-8'
        return env

    def run_text_mode(self, command: Command, encoding: str = 'utf-8',
                      errors: str = 'replace') -> ShellResult:
        """Run the command in text mode, replacing bytes that do not decode."""
        process: Optional[subprocess.Popen[Any]] = None
        try:
            process = subprocess.Popen(
                command,
                shell=isinstance(command, str),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding=encoding,
                errors=errors,
                env=self.create_env(),
            )
            stdout, stderr = process.communicate(timeout=self.timeout)
            return ShellResult(stdout, stderr, process.returncode)
        except subprocess.TimeoutExpired:
            self._terminate_process(process)
            raise TimeoutError(f"Command timed out after {self.timeout} seconds: {_describe(command)}")
        finally:
            self._cleanup_process(process)

    def run_command(self, command: Command) -> ShellResult:
        """Execute a command and return its captured output.

        Raises:
            CommandError: If the command exits non-zero or prints more than
                ``max_output_size`` bytes on either stream.
            TimeoutError: If a timeout is configured and expires.
        """
        logger.debug("Running command: %s", _describe(command))
        result = self.run_text_mode(command)

        for stream in (result.stdout, result.stderr):
            if len(stream.encode('utf-8', errors='replace')) > self.max_output_size:
                raise CommandError(command, result.returncode, result.stdout, result.stderr,
                                   reason=f"output exceeded {self.max_output_size} bytes")

        if result.returncode != 0:
            raise CommandError(command, result.returncode, result.stdout, result.stderr)
        return result

    def _terminate_process(self, process: Optional[subprocess.Popen[Any]]) -> None:
        """Terminate a process, killing it if it does not exit in time."""
        if process is None or process.poll() is not None:
            return

        try:
            process.terminate()

            for _ in range(self.max_termination_retries):
                if process.poll() is not None:
                    return
                time.sleep(self.termination_wait)

            if process.poll() is None:
                process.kill()
        except OSError:
            # Process might already be gone
            pass

    def _cleanup_process(self, process: Optional[subprocess.Popen[Any]]) -> None:
        """Close the pipes of a finished or abandoned process."""
        if process is None:
            return

        for fd in [process.stdout, process.stderr]:
            if fd is not None:
                try:
                    fd.close()
                except (IOError, OSError):
                    pass

        self._terminate_process(process)
