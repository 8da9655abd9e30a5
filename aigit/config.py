"""Configuration module for aigit.

This module provides a configuration class that holds the settings for
the commit workflow and the Groq chat-completion request.
"""

import os
from typing import Mapping, Optional

DEFAULT_ENDPOINT = "https://api.groq.com/openai/v1/chat/completions"
DEFAULT_MODEL = "deepseek-r1-distill-llama-70b"

MODEL_ENV = "AIGIT_MODEL"
ENDPOINT_ENV = "AIGIT_ENDPOINT"


class Config:
    """Configuration class for aigit.

    Attributes:
        api_key_env: Environment variable holding the Groq API key.
        endpoint: Chat-completion URL the summary is posted to.
        model: Model identifier sent with the request.
        temperature: Sampling temperature.
        top_p: Nucleus sampling cutoff.
        max_tokens: Upper bound on the generated message length.
        max_output_size: Largest accepted output in bytes of a single git command.
        command_timeout: Seconds to wait for a git command, ``None`` waits forever.
        request_timeout: Seconds to wait for the API, ``None`` waits forever.
    """

    def __init__(
        self,
        api_key_env: str = "GROQ_API_KEY",
        endpoint: str = DEFAULT_ENDPOINT,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.7,
        top_p: float = 0.95,
        max_tokens: int = 512,
        max_output_size: int = 100 * 1024 * 1024,
        command_timeout: Optional[float] = None,
        request_timeout: Optional[float] = None,
    ):
        self.api_key_env: str = api_key_env
        self.endpoint: str = endpoint
        self.model: str = model
        self.temperature: float = temperature
        self.top_p: float = top_p
        self.max_tokens: int = max_tokens
        self.max_output_size: int = max_output_size
        self.command_timeout: Optional[float] = command_timeout
        self.request_timeout: Optional[float] = request_timeout

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build a configuration, applying model and endpoint overrides from ``environ``."""
        environ = os.environ if environ is None else environ
        config = cls()
        if environ.get(MODEL_ENV):
            config.model = environ[MODEL_ENV]
        if environ.get(ENDPOINT_ENV):
            config.endpoint = environ[ENDPOINT_ENV]
        return config

    def is_valid(self) -> bool:
        """Check that every setting is within its accepted range."""
        if not self.api_key_env or not self.model:
            return False
        if not self.endpoint.startswith(("http://", "https://")):
            return False
        if not 0.0 <= self.temperature <= 2.0:
            return False
        if not 0.0 < self.top_p <= 1.0:
            return False
        if self.max_tokens <= 0 or self.max_output_size <= 0:
            return False
        for timeout in (self.command_timeout, self.request_timeout):
            if timeout is not None and timeout <= 0:
                return False
        return True


# Default configuration instance
default_config = Config()
