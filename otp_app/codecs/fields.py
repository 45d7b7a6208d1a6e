"""
Field access helpers for decoding document mappings.

Every helper attaches the field name (and list index) to decode errors
raised underneath it, so a failure deep in a plan reports a path like
``weeks[0].days[2].workouts[0].targetVolume``.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Callable, Optional, TypeVar

from ..errors import DecodeError, InvalidFormatError, MissingFieldError
from ..errors.decoding import PathSegment

T = TypeVar("T")


@contextmanager
def field_path(*segments: PathSegment) -> Iterator[None]:
    """Prefix decode errors raised in the block with the given path segments."""
    try:
        yield
    except DecodeError as e:
        for segment in reversed(segments):
            e.with_path(segment)
        raise


def expect_mapping(raw: Any, what: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise InvalidFormatError(
            f"{what} must be a mapping, got {type(raw).__name__}",
            raw_value=raw,
            expected_format="mapping",
        )
    return raw


def decode_field(raw: dict[str, Any], key: str, decode: Callable[[Any], T],
                 required: bool = False) -> Optional[T]:
    """Decode ``raw[key]`` with ``decode``; absent or null yields None unless required."""
    value = raw.get(key)
    if value is None:
        if required:
            raise MissingFieldError(f"Missing required field: {key}", field_name=key).with_path(key)
        return None
    with field_path(key):
        return decode(value)


def decode_list(raw: dict[str, Any], key: str, decode: Callable[[Any], T],
                required: bool = False) -> Optional[list[T]]:
    """Decode a list field element by element."""
    def _decode_items(value: Any) -> list[T]:
        if not isinstance(value, list):
            raise InvalidFormatError(
                f"Expected a list, got {type(value).__name__}",
                raw_value=value,
                expected_format="list",
            )
        items = []
        for i, item in enumerate(value):
            with field_path(i):
                items.append(decode(item))
        return items

    return decode_field(raw, key, _decode_items, required=required)


def decode_string(value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidFormatError(
            f"Expected a string, got {type(value).__name__}",
            raw_value=value,
            expected_format="string",
        )
    return value


def decode_number(value: Any) -> float:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise InvalidFormatError(
            f"Expected a number, got {value!r}",
            raw_value=value,
            expected_format="number",
        )
    return float(value)


def string_field(raw: dict[str, Any], key: str, required: bool = False) -> Optional[str]:
    return decode_field(raw, key, decode_string, required=required)


def string_list_field(raw: dict[str, Any], key: str) -> Optional[list[str]]:
    return decode_list(raw, key, decode_string)


def put_if_present(document: dict[str, Any], key: str, value: Any) -> None:
    """Set ``document[key]`` unless ``value`` is None."""
    if value is not None:
        document[key] = value
