"""
Decode error classifications for plan documents.

These exceptions describe documents that are malformed or ambiguous. They are
never recovered locally: a document either decodes completely or the first
problem is surfaced together with the field path where it was found.
"""

from typing import Any, Optional, Union

PathSegment = Union[str, int]


class DecodeError(Exception):
    """Base class for malformed or ambiguous wire values."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.path: list[PathSegment] = []
        self.recoverable = False

    def with_path(self, segment: PathSegment) -> "DecodeError":
        """Prepend a field name or list index to the error path."""
        self.path.insert(0, segment)
        return self

    @property
    def field_path(self) -> str:
        """Dotted field path, e.g. ``weeks[0].days[1].workouts``."""
        rendered = ""
        for segment in self.path:
            if isinstance(segment, int):
                rendered += f"[{segment}]"
            elif rendered:
                rendered += f".{segment}"
            else:
                rendered = segment
        return rendered

    def __str__(self) -> str:
        if self.path:
            return f"{self.message} (at {self.field_path})"
        return self.message


class InvalidFormatError(DecodeError):
    """Value exists but matches none of the accepted formats."""

    def __init__(self, message: str, raw_value: Any = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_value = raw_value
        self.expected_format = expected_format


class MissingFieldError(DecodeError):
    """A required field is absent or null."""

    def __init__(self, message: str, field_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field_name = field_name


class DocumentSyntaxError(DecodeError):
    """Raw bytes are not a valid JSON or YAML document."""

    def __init__(self, message: str, document_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.document_format = document_format


class ElementDecodeError(DecodeError):
    """A list element is neither a locator nor a decodable inline value."""

    def __init__(self, message: str, index: int, cause: Optional[DecodeError] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.index = index
        self.cause = cause


class ZoneNotFoundError(DecodeError):
    """A zone code does not exist in the zone system it refers to."""

    def __init__(self, message: str, zone_code: Optional[str] = None,
                 zone_system: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.zone_code = zone_code
        self.zone_system = zone_system
