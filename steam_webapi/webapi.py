from __future__ import annotations

import json
import logging
import math
from dataclasses import replace
from typing import Any, Mapping

from .config import Config
from .exceptions import (
    ApiStatusError,
    HttpError,
    MalformedJsonError,
    TransportError,
    UnauthorizedError,
    WebApiError,
)
from .http import HttpClient
from .models import ApiInterface, ApiMethod, ApiParameter

logger = logging.getLogger(__name__)

API_HOST = "api.steampowered.com"
FORMATS = ("json", "vdf", "xml")


class WebApiClient:
    """Access to Steam's Web API.

    Most methods need an API key, see http://steamcommunity.com/dev. Each
    client owns its configuration; the transport can be swapped for tests::

        client = WebApiClient(Config(api_key="0123456789ABCDEF0123456789ABCDEF"))
        result = client.get_json_data("ISteamUser", "GetPlayerSummaries", 2, {"steamids": sid})
    """

    def __init__(self, config: Config | None = None, *, http: HttpClient | None = None):
        self.config = config or Config()
        self.http = http or HttpClient(timeout_s=self.config.timeout_s)

    @property
    def api_key(self) -> str | None:
        return self.config.api_key

    @property
    def secure(self) -> bool:
        return self.config.secure

    def get_api_key(self) -> str | None:
        return self.config.api_key

    def set_api_key(self, api_key: str | None) -> None:
        """Set the 128bit API key as an uppercase hex string, or ``None`` to clear it.

        Raises ``InvalidKeyError`` and keeps the current key if the value is
        malformed.
        """
        self.config = replace(self.config, api_key=api_key)

    def set_secure(self, secure: bool) -> None:
        self.config = replace(self.config, secure=bool(secure))

    def build_url(
        self,
        format: str,
        api_interface: str,
        method: str,
        version: int = 1,
        params: Mapping[str, Any] | None = None,
    ) -> str:
        if version < 1:
            raise ValueError(f"Web API method version must be positive: {version}")

        protocol = "https" if self.config.secure else "http"
        url = f"{protocol}://{API_HOST}/{api_interface}/{method}/v{version:04d}/?"

        merged: dict[str, Any] = dict(params or {})
        merged["format"] = format
        if self.config.api_key is not None:
            merged["key"] = self.config.api_key

        # Values go in verbatim, the service expects them unencoded.
        return url + "&".join(f"{k}={v}" for k, v in merged.items())

    def load(
        self,
        format: str,
        api_interface: str,
        method: str,
        version: int = 1,
        params: Mapping[str, Any] | None = None,
    ) -> str:
        """Fetch ``api_interface/method`` and return the raw body in ``format``.

        ``format`` is one of "json", "vdf" or "xml". Additional ``params``
        are sent via HTTP GET in their insertion order.
        """
        if format not in FORMATS:
            raise ValueError(f"Unsupported Web API format: {format!r}")

        url = self.build_url(format, api_interface, method, version, params)

        if logger.isEnabledFor(logging.INFO):
            api_key = self.config.api_key
            debug_url = url.replace(api_key, "SECRET") if api_key else url
            logger.info("Querying Steam Web API: %s", debug_url)

        try:
            with self.http.get(url) as resp:
                status_code = resp.status_code
                if not 200 <= status_code <= 299:
                    if status_code == 401:
                        raise UnauthorizedError()
                    raise HttpError(status_code, resp.reason)
                return resp.text
        except WebApiError:
            raise
        except Exception as e:
            raise TransportError() from e

    def get_json(
        self,
        api_interface: str,
        method: str,
        version: int = 1,
        params: Mapping[str, Any] | None = None,
    ) -> str:
        return self.load("json", api_interface, method, version, params)

    def get_json_data(
        self,
        api_interface: str,
        method: str,
        version: int = 1,
        params: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Like ``get_json`` but returns the decoded ``result`` object.

        Raises ``ApiStatusError`` when the result envelope reports a status
        other than 1.
        """
        data = self._parse_json(self.get_json(api_interface, method, version, params))

        result = data.get("result") if isinstance(data, dict) else None
        if not isinstance(result, dict):
            raise MalformedJsonError("Web API response has no \"result\" object")

        status = _to_int(result.get("status"))
        if status is None:
            raise MalformedJsonError("Web API result has no integer \"status\"")

        if status != 1:
            status_detail = result.get("statusDetail")
            if not isinstance(status_detail, str):
                raise MalformedJsonError("Web API result has no \"statusDetail\" string")
            raise ApiStatusError(status, status_detail)

        return result

    def get_interfaces(self) -> list[Any]:
        """Raw list of the interfaces and methods the Web API supports.

        Useful as a reference for calls this package has no helper for.
        """
        data = self._parse_json(self.get_json("ISteamWebAPIUtil", "GetSupportedAPIList"))
        try:
            interfaces = data["apilist"]["interfaces"]
        except (KeyError, TypeError) as e:
            raise MalformedJsonError("Web API response has no \"apilist.interfaces\"") from e
        if not isinstance(interfaces, list):
            raise MalformedJsonError("\"apilist.interfaces\" is not an array")
        return interfaces

    def list_interfaces(self) -> list[ApiInterface]:
        out: list[ApiInterface] = []
        for row in self.get_interfaces():
            if not isinstance(row, dict) or not row.get("name"):
                continue
            methods: list[ApiMethod] = []
            for m in _as_list(row.get("methods")):
                if not isinstance(m, dict) or not m.get("name"):
                    continue
                parameters = [
                    ApiParameter(
                        name=str(p["name"]),
                        type=str(p["type"]) if p.get("type") is not None else None,
                        optional=bool(p.get("optional", False)),
                        description=p.get("description"),
                    )
                    for p in _as_list(m.get("parameters"))
                    if isinstance(p, dict) and p.get("name")
                ]
                version = _to_int(m.get("version") or 1)
                if version is None:
                    raise MalformedJsonError(
                        f"Method {row['name']}.{m['name']} has a non-numeric version: {m.get('version')!r}"
                    )
                methods.append(
                    ApiMethod(
                        name=str(m["name"]),
                        version=version,
                        http_method=str(m.get("httpmethod") or "GET"),
                        parameters=parameters,
                    )
                )
            out.append(ApiInterface(name=str(row["name"]), methods=methods))
        return out

    @staticmethod
    def _parse_json(data: str) -> Any:
        try:
            return json.loads(data)
        except ValueError as e:
            raise MalformedJsonError(f"Failed to decode JSON from the Web API: {e}") from e


def _to_int(value: Any) -> int | None:
    """Coerce a JSON number or numeric string to ``int``; ``None`` if it is neither."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
        try:
            number = float(value)
        except ValueError:
            return None
        return int(number) if math.isfinite(number) else None
    return None


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []
