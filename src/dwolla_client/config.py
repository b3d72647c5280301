"""
Client Configuration Management

Loads API credentials and the target environment from environment variables
(optionally from a ``.env`` file) and maps the environment to base addresses.

Environment Variables:
    - DWOLLA_KEY: Application key
    - DWOLLA_SECRET: Application secret
    - DWOLLA_ENVIRONMENT: "sandbox" (default) or "production"
    - DWOLLA_TIMEOUT: Request timeout in seconds (default: 30)
"""

import os
from typing import Dict, Optional

import dotenv
from pydantic import BaseModel, Field

from .exceptions import ConfigurationError


class Environment(BaseModel):
    """Base addresses for one API environment."""
    name: str
    api_base_address: str = Field(..., description="Resource API base URL")
    auth_base_address: str = Field(..., description="OAuth2 token endpoint base URL")


ENVIRONMENTS: Dict[str, Environment] = {
    "sandbox": Environment(
        name="sandbox",
        api_base_address="https://api-sandbox.dwolla.com",
        auth_base_address="https://accounts-sandbox.dwolla.com",
    ),
    "production": Environment(
        name="production",
        api_base_address="https://api.dwolla.com",
        auth_base_address="https://accounts.dwolla.com",
    ),
}


def get_environment(name: str) -> Environment:
    """
    Look up an environment by name (case-insensitive).

    Raises:
        ConfigurationError: If the name is not a known environment
    """
    try:
        return ENVIRONMENTS[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unsupported environment: {name!r} (expected one of {sorted(ENVIRONMENTS)})"
        )


class DwollaSettings(BaseModel):
    """
    Credentials and connection settings.

    Attributes:
        key: Application key
        secret: Application secret
        environment: "sandbox" or "production"
        timeout: Request timeout in seconds
    """
    key: str
    secret: str
    environment: str = "sandbox"
    timeout: float = Field(default=30.0, gt=0)

    @property
    def is_sandbox(self) -> bool:
        return get_environment(self.environment).name == "sandbox"

    @property
    def api_base_address(self) -> str:
        return get_environment(self.environment).api_base_address

    @property
    def auth_base_address(self) -> str:
        return get_environment(self.environment).auth_base_address

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "DwollaSettings":
        """
        Build settings from environment variables.

        Variables already set in the process environment take precedence over
        values in the ``.env`` file.

        Args:
            env_file: Optional path to a dotenv file (default: search for ``.env``)

        Raises:
            ConfigurationError: If credentials are missing or a value is invalid
        """
        dotenv.load_dotenv(dotenv_path=env_file)

        key = os.getenv("DWOLLA_KEY")
        secret = os.getenv("DWOLLA_SECRET")
        if not key or not secret:
            raise ConfigurationError("DWOLLA_KEY and DWOLLA_SECRET must be set")

        environment = os.getenv("DWOLLA_ENVIRONMENT", "sandbox")
        get_environment(environment)

        raw_timeout = os.getenv("DWOLLA_TIMEOUT", "30")
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(f"DWOLLA_TIMEOUT must be a number, got {raw_timeout!r}")
        if timeout <= 0:
            raise ConfigurationError(f"DWOLLA_TIMEOUT must be positive, got {raw_timeout!r}")

        return cls(key=key, secret=secret, environment=environment, timeout=timeout)
