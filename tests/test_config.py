"""Tests for the Config class."""

import pytest

from aigit.config import DEFAULT_ENDPOINT, DEFAULT_MODEL, Config, default_config


class TestConfig:
    """Test suite for the Config class."""

    def test_default_config(self):
        config = Config()
        assert config.is_valid()
        assert config.api_key_env == "GROQ_API_KEY"
        assert config.endpoint == "https://api.groq.com/openai/v1/chat/completions"
        assert config.model == "deepseek-r1-distill-llama-70b"
        assert config.temperature == 0.7
        assert config.top_p == 0.95
        assert config.max_tokens == 512
        assert config.max_output_size == 100 * 1024 * 1024
        assert config.command_timeout is None
        assert config.request_timeout is None

    def test_default_instance(self):
        assert default_config.model == DEFAULT_MODEL
        assert default_config.endpoint == DEFAULT_ENDPOINT

    def test_custom_config(self):
        config = Config(model="llama-3.1-8b-instant", temperature=0.0, top_p=1.0,
                        max_tokens=128, command_timeout=30, request_timeout=10.5)
        assert config.is_valid()
        assert config.model == "llama-3.1-8b-instant"
        assert config.request_timeout == 10.5

    @pytest.mark.parametrize("kwargs", [
        {"api_key_env": ""},
        {"endpoint": ""},
        {"endpoint": "api.groq.com/openai/v1/chat/completions"},
        {"model": ""},
        {"temperature": -0.1},
        {"temperature": 2.5},
        {"top_p": 0.0},
        {"top_p": 1.5},
        {"max_tokens": 0},
        {"max_output_size": -1},
        {"command_timeout": 0},
        {"request_timeout": -5},
    ])
    def test_invalid_values(self, kwargs):
        assert not Config(**kwargs).is_valid()

    def test_from_env_overrides(self):
        config = Config.from_env({"AIGIT_MODEL": "llama-3.3-70b-versatile",
                                  "AIGIT_ENDPOINT": "http://localhost:8080/v1/chat/completions"})
        assert config.model == "llama-3.3-70b-versatile"
        assert config.endpoint == "http://localhost:8080/v1/chat/completions"

    def test_from_env_ignores_empty_values(self):
        config = Config.from_env({"AIGIT_MODEL": "", "GROQ_API_KEY": "gsk"})
        assert config.model == DEFAULT_MODEL
        assert config.endpoint == DEFAULT_ENDPOINT

    def test_from_env_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("AIGIT_MODEL", "qwen-qwq-32b")
        assert Config.from_env().model == "qwen-qwq-32b"
