from __future__ import annotations

from dataclasses import dataclass
import requests

from ._version import __version__


@dataclass(frozen=True)
class HttpClient:
    timeout_s: float = 30.0
    user_agent: str = f"steam-webapi/{__version__}"

    def get(self, url: str) -> requests.Response:
        # stream=True leaves the body unread until .text is accessed;
        # callers use the response as a context manager to release it.
        return requests.get(
            url,
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout_s,
            stream=True,
        )
