import pytest

from gtasks.config import ClientConfig, BASE_URL, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT


@pytest.mark.unit
class TestClientConfig:
    """Test cases for ClientConfig."""

    def test_defaults(self):
        config = ClientConfig()
        assert config.base_url == BASE_URL == "https://www.googleapis.com/tasks/v1"
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.user_agent == DEFAULT_USER_AGENT

    @pytest.mark.parametrize("kwargs", [{"base_url": ""}, {"timeout": 0}, {"timeout": -1.5}])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            ClientConfig(**kwargs)

    def test_timeout_can_be_disabled(self):
        assert ClientConfig(timeout=None).timeout is None

    def test_from_env(self, monkeypatch):
        """Test that environment variables override the defaults."""
        monkeypatch.setenv("GTASKS_BASE_URL", "http://localhost:8089/tasks/v1")
        monkeypatch.setenv("GTASKS_TIMEOUT", "5")
        monkeypatch.setenv("GTASKS_USER_AGENT", "my-app/1.0")

        config = ClientConfig.from_env()

        assert config == ClientConfig("http://localhost:8089/tasks/v1", 5.0, "my-app/1.0")

    def test_from_env_unset(self, monkeypatch):
        for name in ("GTASKS_BASE_URL", "GTASKS_TIMEOUT", "GTASKS_USER_AGENT"):
            monkeypatch.delenv(name, raising=False)

        assert ClientConfig.from_env() == ClientConfig()
