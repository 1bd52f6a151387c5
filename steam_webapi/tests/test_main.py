import json

import pytest

from steam_webapi import main as cli
from steam_webapi.exceptions import HttpError
from steam_webapi.models import ApiInterface, ApiMethod

KEY = "0123456789ABCDEF0123456789ABCDEF"


class StubClient:
    calls = []

    def __init__(self, config):
        self.config = config

    def list_interfaces(self):
        return [ApiInterface(name="ISteamUser", methods=[ApiMethod(name="GetPlayerSummaries", version=2)])]

    def load(self, format, interface, method, version, params):
        StubClient.calls.append(("load", format, interface, method, version, params))
        if interface == "IBroken":
            raise HttpError(503, "Service Unavailable")
        return "raw-body"

    def get_json_data(self, interface, method, version, params):
        StubClient.calls.append(("get_json_data", interface, method, version, params))
        return {"status": 1, "items": [1]}


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    monkeypatch.setenv("STEAM_WEB_API_KEY", KEY)
    monkeypatch.delenv("STEAM_WEB_API_SECURE", raising=False)
    monkeypatch.delenv("STEAM_WEB_API_TIMEOUT", raising=False)
    monkeypatch.setattr(cli, "WebApiClient", StubClient)
    StubClient.calls = []


def test_parse_params_keeps_order():
    assert list(cli.parse_params(["b=2", "a=1", "c=x=y"]).items()) == [("b", "2"), ("a", "1"), ("c", "x=y")]


def test_parse_params_rejects_missing_equals():
    with pytest.raises(ValueError):
        cli.parse_params(["nope"])


def test_version(capsys):
    assert cli.main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == cli.__version__


def test_config_keys(capsys):
    assert cli.main(["config", "keys"]) == 0
    assert capsys.readouterr().out.split() == ["STEAM_WEB_API_KEY", "STEAM_WEB_API_SECURE", "STEAM_WEB_API_TIMEOUT"]


def test_config_check_hides_key(capsys):
    assert cli.main(["--insecure", "config", "check"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("OK: api key set, secure=False")
    assert KEY not in out


def test_interfaces_with_methods(capsys):
    assert cli.main(["interfaces", "--methods"]) == 0
    assert capsys.readouterr().out.splitlines() == ["ISteamUser", "  GetPlayerSummaries v2"]


def test_call_raw(capsys):
    argv = ["call", "ISteamNews", "GetNewsForApp", "--api-version", "2", "--format", "xml", "--param", "appid=440"]
    assert cli.main(argv) == 0
    assert capsys.readouterr().out.strip() == "raw-body"
    assert StubClient.calls == [("load", "xml", "ISteamNews", "GetNewsForApp", 2, {"appid": "440"})]


def test_call_data(capsys):
    assert cli.main(["call", "ISteamUser", "GetFriendList", "--data"]) == 0
    assert json.loads(capsys.readouterr().out) == {"status": 1, "items": [1]}


def test_call_error_exit_code(capsys):
    assert cli.main(["call", "IBroken", "Method"]) == 1
    err = capsys.readouterr().err
    assert err.strip() == "ERROR: The Web API request has failed due to an HTTP error: Service Unavailable (status code: 503)."
