"""Tests for configuration resolution in deepgate.compose."""

import pytest

from deepgate.compose import resolve_config


class TestResolveConfig:
    """Priority: argument > environment > default."""

    def test_defaults(self):
        config = resolve_config(environ={})

        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.model_policy == "passthrough"
        assert config.upstream_timeout is None

    def test_environment(self):
        config = resolve_config(
            environ={
                "DEEPGATE_HOST": "0.0.0.0",
                "DEEPGATE_PORT": "9000",
                "DEEPGATE_MODEL_POLICY": "mapping",
                "DEEPGATE_UPSTREAM_TIMEOUT": "30",
            }
        )

        assert config.host == "0.0.0.0"
        assert config.port == 9000
        assert config.model_policy == "mapping"
        assert config.upstream_timeout == 30.0

    def test_arguments_win_over_environment(self):
        config = resolve_config(
            host="10.0.0.1",
            port=7000,
            model_policy="passthrough",
            upstream_timeout=5,
            environ={
                "DEEPGATE_HOST": "0.0.0.0",
                "DEEPGATE_PORT": "9000",
                "DEEPGATE_MODEL_POLICY": "mapping",
                "DEEPGATE_UPSTREAM_TIMEOUT": "30",
            },
        )

        assert config.host == "10.0.0.1"
        assert config.port == 7000
        assert config.model_policy == "passthrough"
        assert config.upstream_timeout == 5.0

    def test_empty_environment_values_ignored(self):
        """Blank variables fall back to defaults."""
        config = resolve_config(environ={"DEEPGATE_PORT": "", "DEEPGATE_MODEL_POLICY": ""})

        assert config.port == 8000
        assert config.model_policy == "passthrough"

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("DEEPGATE_MODEL_POLICY", "mapping")

        assert resolve_config().model_policy == "mapping"

    def test_invalid_port(self):
        with pytest.raises(ValueError, match="Invalid port"):
            resolve_config(environ={"DEEPGATE_PORT": "eighty"})

    def test_invalid_timeout(self):
        with pytest.raises(ValueError, match="Invalid upstream timeout"):
            resolve_config(environ={"DEEPGATE_UPSTREAM_TIMEOUT": "soon"})

    def test_invalid_policy(self):
        with pytest.raises(ValueError, match="Unknown model policy"):
            resolve_config(environ={"DEEPGATE_MODEL_POLICY": "fallback"})
