import pytest

from dwolla_client import config
from dwolla_client.clients.http_client import DwollaClient
from dwolla_client.config import DwollaSettings, get_environment
from dwolla_client.exceptions import ConfigurationError

ENV_VARS = ("DWOLLA_KEY", "DWOLLA_SECRET", "DWOLLA_ENVIRONMENT", "DWOLLA_TIMEOUT")


@pytest.fixture
def clean_env(monkeypatch):
    """Start without DWOLLA_* variables and drop any a dotenv file adds."""
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def no_dotenv(clean_env):
    clean_env.setattr(config.dotenv, "load_dotenv", lambda **kwargs: False)
    return clean_env


def test_from_env_defaults_to_sandbox(no_dotenv):
    no_dotenv.setenv("DWOLLA_KEY", "key")
    no_dotenv.setenv("DWOLLA_SECRET", "secret")

    settings = DwollaSettings.from_env()

    assert settings.key == "key"
    assert settings.secret == "secret"
    assert settings.is_sandbox
    assert settings.timeout == 30.0
    assert settings.api_base_address == "https://api-sandbox.dwolla.com"


def test_from_env_production(no_dotenv):
    no_dotenv.setenv("DWOLLA_KEY", "key")
    no_dotenv.setenv("DWOLLA_SECRET", "secret")
    no_dotenv.setenv("DWOLLA_ENVIRONMENT", "Production")
    no_dotenv.setenv("DWOLLA_TIMEOUT", "5")

    settings = DwollaSettings.from_env()

    assert not settings.is_sandbox
    assert settings.timeout == 5.0
    assert settings.auth_base_address == "https://accounts.dwolla.com"


def test_from_env_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("DWOLLA_KEY=file-key\nDWOLLA_SECRET=file-secret\n")

    settings = DwollaSettings.from_env(env_file=str(env_file))

    assert settings.key == "file-key"
    assert settings.secret == "file-secret"


@pytest.mark.parametrize("missing", ["DWOLLA_KEY", "DWOLLA_SECRET"])
def test_missing_credentials(no_dotenv, missing):
    no_dotenv.setenv("DWOLLA_KEY", "key")
    no_dotenv.setenv("DWOLLA_SECRET", "secret")
    no_dotenv.delenv(missing)

    with pytest.raises(ConfigurationError):
        DwollaSettings.from_env()


def test_unknown_environment(no_dotenv):
    no_dotenv.setenv("DWOLLA_KEY", "key")
    no_dotenv.setenv("DWOLLA_SECRET", "secret")
    no_dotenv.setenv("DWOLLA_ENVIRONMENT", "staging")

    with pytest.raises(ConfigurationError, match="staging"):
        DwollaSettings.from_env()


@pytest.mark.parametrize("value", ["soon", "0", "-1"])
def test_invalid_timeout(no_dotenv, value):
    no_dotenv.setenv("DWOLLA_KEY", "key")
    no_dotenv.setenv("DWOLLA_SECRET", "secret")
    no_dotenv.setenv("DWOLLA_TIMEOUT", value)

    with pytest.raises(ConfigurationError):
        DwollaSettings.from_env()


def test_get_environment_is_case_insensitive():
    assert get_environment(" SANDBOX ").name == "sandbox"


@pytest.mark.asyncio
async def test_client_from_settings():
    settings = DwollaSettings(key="key", secret="secret", environment="production", timeout=7)

    async with DwollaClient.from_settings(settings) as client:
        assert not client.is_sandbox
        assert client.api_base_address == "https://api.dwolla.com"
        assert client._rest.http_client.timeout.read == 7
