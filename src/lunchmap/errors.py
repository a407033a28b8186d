"""Exception taxonomy shared by the search, routing and review services.

Validation problems (``ValidationError``, ``EmptyInputError``) subclass
``ValueError`` so they read as "fix your input"; remote failures
(``StoreError``, ``ProviderError``) subclass ``RuntimeError`` so they read
as "try again later".
"""

from __future__ import annotations


class LunchMapError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(LunchMapError, ValueError):
    """Input was rejected before any remote call was made."""


class EmptyInputError(LunchMapError, ValueError):
    """A geometry helper was called with no coordinates."""


class NotFoundError(LunchMapError, LookupError):
    """A requested record does not exist in the store."""


class StoreError(LunchMapError, RuntimeError):
    """The record store failed or returned a non-success response."""


class ProviderError(LunchMapError, RuntimeError):
    """The directions provider failed or returned an unusable payload."""

    def __init__(self, message: str, status: str | None = None) -> None:
        super().__init__(message)
        self.status = status


class NoRouteFoundError(ProviderError):
    """The provider answered successfully but found no route."""
