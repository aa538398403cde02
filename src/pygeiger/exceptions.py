"""Custom exception hierarchy for pygeiger."""

from __future__ import annotations


class GeigerError(Exception):
    """Base exception for all pygeiger errors."""


class GeigerConfigError(GeigerError):
    """Invalid or missing configuration."""


class RateLimitedError(GeigerError):
    """A measurement was attempted before a full day elapsed.

    The caller may retry once ``retry_after`` (epoch seconds) is reached.
    Nothing is written when this is raised.
    """

    def __init__(
        self,
        message: str,
        *,
        identity: str = "",
        retry_after: int | None = None,
    ) -> None:
        self.identity = identity
        self.retry_after = retry_after
        super().__init__(message)


class UnauthorizedError(GeigerError):
    """An owner-only action was attempted by another identity."""

    def __init__(self, message: str, *, identity: str = "") -> None:
        self.identity = identity
        super().__init__(message)


class NotFoundError(GeigerError):
    """A record was requested that does not exist.

    Raised for identities that never measured and for the config
    singleton before instantiation.
    """

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class InvalidIdentityError(GeigerError):
    """An identity string failed validation."""

    def __init__(self, message: str, *, identity: str = "") -> None:
        self.identity = identity
        super().__init__(message)


class InvalidMessageError(GeigerError):
    """An execute/query message could not be parsed."""


class CounterOverflowError(GeigerError):
    """Incrementing the counter would exceed the unsigned 64-bit range."""

    def __init__(self, message: str, *, identity: str = "") -> None:
        self.identity = identity
        super().__init__(message)


class StoreError(GeigerError):
    """Underlying persistence failure (backend error or corrupt record).

    Fatal for the current call; never retried internally.
    """

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)
