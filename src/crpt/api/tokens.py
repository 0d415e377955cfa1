"""Authentication token providers."""

from __future__ import annotations

import os
from typing import Protocol

from crpt.exceptions import ConfigurationError


class TokenProvider(Protocol):
    def get_token(self) -> str:
        """Return the credential to send with the next request."""
        ...


class EnvTokenProvider:
    """Reads the bearer token from an environment variable on every call.

    Token issuance and refresh happen elsewhere; whatever process renews the
    token only has to update the variable (or the .env file loaded at startup).
    """

    def __init__(self, env_var: str = "CRPT_API_TOKEN") -> None:
        self.env_var = env_var

    def get_token(self) -> str:
        token = os.getenv(self.env_var)
        if not token:
            raise ConfigurationError(f"Environment variable {self.env_var} is not set")
        return token
