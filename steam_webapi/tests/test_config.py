import pytest

from steam_webapi.config import Config, validate_api_key
from steam_webapi.exceptions import InvalidKeyError

KEY = "0123456789ABCDEF0123456789ABCDEF"


def test_validate_api_key():
    assert validate_api_key(KEY) == KEY
    assert validate_api_key(None) is None
    for bad in ("test", KEY[:-1], KEY + "0", "0123456789abcdef0123456789abcdef", "G" * 32):
        with pytest.raises(InvalidKeyError):
            validate_api_key(bad)


def test_config_rejects_invalid_key():
    with pytest.raises(InvalidKeyError):
        Config(api_key="test")


def test_load_from_env_defaults():
    cfg = Config.load_from_env({})
    assert cfg == Config(api_key=None, secure=True, timeout_s=30.0)


def test_load_from_env_values():
    cfg = Config.load_from_env({
        "STEAM_WEB_API_KEY": KEY,
        "STEAM_WEB_API_SECURE": "off",
        "STEAM_WEB_API_TIMEOUT": "2.5",
    })
    assert cfg.api_key == KEY
    assert cfg.secure is False
    assert cfg.timeout_s == 2.5


def test_load_from_env_reads_os_environ(monkeypatch):
    monkeypatch.setenv("STEAM_WEB_API_KEY", KEY)
    monkeypatch.delenv("STEAM_WEB_API_SECURE", raising=False)
    monkeypatch.delenv("STEAM_WEB_API_TIMEOUT", raising=False)
    assert Config.load_from_env().api_key == KEY


@pytest.mark.parametrize(
    "env",
    [
        {"STEAM_WEB_API_SECURE": "maybe"},
        {"STEAM_WEB_API_TIMEOUT": "soon"},
        {"STEAM_WEB_API_TIMEOUT": "0"},
    ],
)
def test_load_from_env_invalid(env):
    with pytest.raises(ValueError):
        Config.load_from_env(env)


def test_load_from_env_invalid_key():
    with pytest.raises(InvalidKeyError):
        Config.load_from_env({"STEAM_WEB_API_KEY": "nope"})
