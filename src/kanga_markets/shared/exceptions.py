"""Consolidated exceptions for Kanga Markets.

All custom exceptions are defined here to provide a single source of truth
for error handling across the application.
"""


class KangaMarketsError(Exception):
    """Base exception for Kanga Markets errors"""

    pass


class MarketDataValidationError(KangaMarketsError):
    """Raised when an upstream payload fails validation

    Carries every field-level message so callers can report all problems
    at once instead of the first one.
    """

    def __init__(self, entity: str, errors: list[str]) -> None:
        self.entity = entity
        self.errors = list(errors)
        super().__init__(f"Invalid {entity} data: {', '.join(self.errors)}")


class TransportError(KangaMarketsError):
    """Raised when the exchange cannot be reached or answers with an error"""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        code: str | None = None,
        details: object | None = None,
    ) -> None:
        self.message = message
        self.status = status
        self.code = code
        self.details = details
        super().__init__(message)


class UserInputError(KangaMarketsError):
    """Raised when a caller supplies an unusable argument"""

    pass


class ConfigurationError(KangaMarketsError):
    """Raised when configuration is invalid or missing"""

    pass
