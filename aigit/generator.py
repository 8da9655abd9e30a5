import logging
import re
from typing import Any, Dict, List, Optional

import httpx

from .config import Config, default_config

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "\n".join([
    "You are a git commit-message expert.",
    "Follow the Conventional Commits spec:",
    "",
    "1) A short subject line, eg. \"feat: add login page\"",
    "2) A blank line",
    "3) A body with at least one full sentence.",
    "",
    "Output only the commit message, nothing else.",
])

USER_PREAMBLE = "Write a commit message from the information below."

THINK_BLOCK = re.compile(r"<think>.*?</think>", re.IGNORECASE | re.DOTALL)


class RemoteServiceError(Exception):
    """Raised when the completion service answers with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Groq API error {status_code}: {body}")


def clean_commit(raw: str) -> str:
    """Strip reasoning blocks and tag-like lines from a model reply.

    Every line starting with ``<`` is dropped, not only reasoning tags.
    """
    text = THINK_BLOCK.sub("", raw)
    lines = [line for line in text.split("\n")
             if line.strip() and not line.strip().startswith("<")]
    return "\n".join(lines).strip()


def build_messages(summary: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "\n".join([USER_PREAMBLE, "", "---", summary])},
    ]


def extract_content(data: Any) -> str:
    """Return ``choices[0].message.content`` or an empty string if the shape is off."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        logger.debug("Unexpected completion payload shape")
        return ""
    return content if isinstance(content, str) else ""


class CommitMessageGenerator:
    """Asks the chat-completion endpoint for a commit message."""

    def __init__(self, api_key: str, config: Optional[Config] = None,
                 client: Optional[httpx.Client] = None) -> None:
        self.api_key = api_key
        self.config = config or default_config
        self._client = client

    def build_payload(self, summary: str) -> Dict[str, Any]:
        return {
            "model": self.config.model,
            "temperature": self.config.temperature,
            "top_p": self.config.top_p,
            "max_tokens": self.config.max_tokens,
            "stream": False,
            "messages": build_messages(summary),
        }

    def _post(self, client: httpx.Client, summary: str) -> httpx.Response:
        return client.post(
            self.config.endpoint,
            json=self.build_payload(summary),
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self.api_key}",
            },
        )

    def generate(self, summary: str) -> str:
        """Send ``summary`` to the model and return the cleaned message.

        Raises:
            RemoteServiceError: If the service answers with a non-success status.
            httpx.HTTPError: On transport failures.
        """
        logger.debug("Requesting commit message from %s (model %s)", self.config.endpoint, self.config.model)
        if self._client is not None:
            response = self._post(self._client, summary)
        else:
            with httpx.Client(timeout=self.config.request_timeout) as client:
                response = self._post(client, summary)

        if not response.is_success:
            raise RemoteServiceError(response.status_code, response.text)

        return clean_commit(extract_content(response.json()))
