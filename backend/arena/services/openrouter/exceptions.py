"""Custom exceptions for OpenRouter service."""


class OpenRouterAPIError(Exception):
    """Base exception for OpenRouter API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class OpenRouterAuthError(OpenRouterAPIError):
    """Authentication failed (401)."""

    pass


class OpenRouterRateLimitError(OpenRouterAPIError):
    """Rate limit exceeded (429)."""

    pass


class OpenRouterResponseError(OpenRouterAPIError):
    """Response body did not have the expected shape."""

    pass
