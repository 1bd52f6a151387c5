from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ApiParameter:
    name: str
    type: str | None = None
    optional: bool = False
    description: str | None = None


@dataclass(frozen=True)
class ApiMethod:
    """One method entry of ``ISteamWebAPIUtil/GetSupportedAPIList``."""

    name: str
    version: int = 1
    http_method: str = "GET"
    parameters: list[ApiParameter] = field(default_factory=list)


@dataclass(frozen=True)
class ApiInterface:
    name: str
    methods: list[ApiMethod] = field(default_factory=list)

    def method_names(self) -> list[str]:
        # e.g. "GetPlayerSummaries v2"
        return [f"{m.name} v{m.version}" for m in self.methods]
