from __future__ import annotations


class WebApiError(Exception):
    """Base class for every failure raised by the Web API client."""


class InvalidKeyError(WebApiError):
    def __init__(self) -> None:
        super().__init__("This is not a valid Steam Web API key.")


class UnauthorizedError(WebApiError):
    def __init__(self) -> None:
        super().__init__(
            "Your Web API request has been rejected. "
            "You most likely did not specify a valid Web API key."
        )


class HttpError(WebApiError):
    def __init__(self, status_code: int, reason: str | None) -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(
            f"The Web API request has failed due to an HTTP error: {reason} "
            f"(status code: {status_code})."
        )


class TransportError(WebApiError):
    """Network level fault; the underlying exception is kept as ``__cause__``."""

    def __init__(self) -> None:
        super().__init__("Could not communicate with the Web API.")


class MalformedJsonError(WebApiError, ValueError):
    """The response body is not JSON or lacks the fields we need."""


class ApiStatusError(WebApiError):
    def __init__(self, status: int, status_detail: str | None) -> None:
        self.status = status
        self.status_detail = status_detail
        super().__init__(
            f"The Web API request failed with the following error: {status_detail} "
            f"(status code: {status})."
        )
