"""
Configuration for the Google Tasks client.

Values are fixed at client construction. Environment variables may override
the defaults through ClientConfig.from_env().
"""

import os
from dataclasses import dataclass
from typing import Optional

BASE_URL = "https://www.googleapis.com/tasks/v1"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "gtasks-python"

SCOPES = [
    "https://www.googleapis.com/auth/tasks",
]

# Allow environment variable override for credentials paths
TOKEN_PATH = os.getenv("GOOGLE_TOKEN_PATH", "token.json")
CREDENTIALS_PATH = os.getenv("GOOGLE_CREDENTIALS_PATH", "credentials.json")


@dataclass(frozen=True)
class ClientConfig:
    """
    Settings for the HTTP client behind a TasksService.

    Args:
        base_url: HTTPS origin and versioned path prefix of the Tasks API.
        timeout: Request timeout in seconds, or None to disable.
        user_agent: Value of the User-Agent header.
    """
    base_url: str = BASE_URL
    timeout: Optional[float] = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        if not self.base_url:
            raise ValueError("base_url cannot be empty")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Build a config from GTASKS_BASE_URL, GTASKS_TIMEOUT and GTASKS_USER_AGENT.
        Unset variables fall back to the defaults.
        """
        timeout = os.getenv("GTASKS_TIMEOUT")
        return cls(
            base_url=os.getenv("GTASKS_BASE_URL", BASE_URL),
            timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
            user_agent=os.getenv("GTASKS_USER_AGENT", DEFAULT_USER_AGENT),
        )
