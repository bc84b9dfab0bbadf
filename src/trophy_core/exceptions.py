class TrophyException(Exception):
    """Base exception for all TrophyHunter core errors."""


class NetworkError(TrophyException):
    """Raised when a low-level network error occurs (DNS, Connection Refused, Timeout)."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class AppNotFound(TrophyException):
    """Raised when Steam has no data for an app (success=false or 404)."""

    def __init__(self, appid: str):
        super().__init__(f"App '{appid}' not found on Steam.")
        self.appid = appid


class AccessDenied(TrophyException):
    """
    Raised when Steam refuses the request (403 Forbidden / 401 Unauthorized).
    For user stats this usually means the profile is private; otherwise the API key is bad.
    """

    def __init__(self, endpoint: str, status_code: int):
        super().__init__(f"Access denied for {endpoint} (Status: {status_code}). Check API key or profile privacy.")
        self.endpoint = endpoint
        self.status_code = status_code


class RateLimitExceeded(TrophyException):
    """Raised when a Steam rate limit is hit (429)."""

    def __init__(self, endpoint: str, retry_after: float | None = None):
        msg = f"Rate limit exceeded for {endpoint}."
        if retry_after:
            msg += f" Retry after {retry_after}s."
        super().__init__(msg)
        self.endpoint = endpoint
        self.retry_after = retry_after


class MalformedResponse(TrophyException):
    """Raised when a response body is not the JSON document we expect."""

    def __init__(self, endpoint: str, details: str):
        super().__init__(f"Malformed response from {endpoint}: {details}")
        self.endpoint = endpoint


class APIError(TrophyException):
    """Raised when Steam returns an unexpected error (5xx, 400, etc)."""

    def __init__(self, endpoint: str, status_code: int | None = None, message: str = "Unknown error"):
        msg = f"{endpoint} API Error"
        if status_code:
            msg += f" ({status_code})"
        msg += f": {message}"
        super().__init__(msg)
        self.endpoint = endpoint
        self.status_code = status_code
