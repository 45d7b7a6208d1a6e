"""
Error classification for plan decoding and reference resolution.

Decode errors describe malformed documents, fetch errors describe transport
failures, resolution errors tie either of those to the locator being loaded,
and contract violations flag programming mistakes in how a session is used.
"""

from .decoding import (
    DecodeError,
    InvalidFormatError,
    MissingFieldError,
    DocumentSyntaxError,
    ElementDecodeError,
    ZoneNotFoundError,
)
from .resolution import (
    FetchError,
    ResourceNotFoundError,
    ResolutionError,
    ContractViolation,
    UnresolvedReferenceError,
)

__all__ = [
    # Decode Errors
    "DecodeError",
    "InvalidFormatError",
    "MissingFieldError",
    "DocumentSyntaxError",
    "ElementDecodeError",
    "ZoneNotFoundError",
    # Fetch and Resolution Failures
    "FetchError",
    "ResourceNotFoundError",
    "ResolutionError",
    # Programming Errors
    "ContractViolation",
    "UnresolvedReferenceError",
]
