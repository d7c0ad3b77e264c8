"""
Market data exception hierarchy.

Every failure surfaced by the adapter layer derives from MarketDataError so
callers can catch one type. Empty results are never errors: historical bars
and bulk lookups return empty collections instead of raising.
"""

from typing import Any


class MarketDataError(Exception):
    """Base exception for all market data errors."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "provider": self.provider,
            "context": self.context,
        }


class TransportError(MarketDataError):
    """
    Failure raised by a transport while issuing a request.

    Covers network errors, authentication rejections, rate limiting and any
    other non-success HTTP status. The adapter never retries or swallows it.
    """

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
        path: str | None = None,
        response_body: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, provider)
        self.status_code = status_code
        self.path = path
        self.response_body = response_body
        self.original_error = original_error

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data.update(
            {
                "status_code": self.status_code,
                "path": self.path,
                "response_body": self.response_body,
                "original_error": (
                    str(self.original_error) if self.original_error else None
                ),
            }
        )
        return data

    @property
    def is_rate_limited(self) -> bool:
        """Check if the upstream rejected the request for rate limiting."""
        return self.status_code == 429


class NotFoundError(MarketDataError):
    """A single-symbol lookup found no entry for the requested symbol."""

    def __init__(
        self, message: str, symbol: str, provider: str | None = None
    ) -> None:
        super().__init__(message, provider, context={"symbol": symbol})
        self.symbol = symbol


class ResponseShapeError(MarketDataError):
    """A payload matched none of the shapes known for its endpoint."""

    def __init__(
        self, message: str, endpoint: str, provider: str | None = None
    ) -> None:
        super().__init__(message, provider, context={"endpoint": endpoint})
        self.endpoint = endpoint
