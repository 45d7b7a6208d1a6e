"""
Fetch and resolution failure classifications.

Fetch errors come from the transport. Resolution errors tag a fetch or decode
failure with the locator that was being loaded. Contract violations are
programming errors in how a resolution session is used.
"""

from typing import Any, Optional


class FetchError(Exception):
    """Transport failure while fetching a locator."""

    def __init__(self, message: str, locator: Optional[str] = None,
                 status_code: Optional[int] = None, retryable: bool = False,
                 context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.locator = locator
        self.status_code = status_code
        self.retryable = retryable
        self.context = context or {}


class ResourceNotFoundError(FetchError):
    """The locator does not point at an existing document."""

    def __init__(self, message: str, locator: Optional[str] = None, **kwargs):
        kwargs.setdefault("status_code", 404)
        super().__init__(message, locator=locator, **kwargs)


class ResolutionError(Exception):
    """A fetch or decode failure encountered while resolving one locator."""

    def __init__(self, locator: str, cause: Exception):
        super().__init__(f"Failed to resolve {locator}: {cause}")
        self.locator = locator
        self.cause = cause


class ContractViolation(Exception):
    """A resolution session was used in a way its contract forbids."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class UnresolvedReferenceError(ContractViolation):
    """A plain value was requested from a reference that was never resolved."""

    def __init__(self, message: str, locator: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.locator = locator
