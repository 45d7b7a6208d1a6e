"""
Reference cells.

A ``RemoteResource`` wraps a field that may be written inline or as a
locator; a ``RemoteResourceList`` does the same for each element of a list
field. Cells decode synchronously, keep their locator for re-encoding, and
are filled in place by the resolution pass.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

from ..errors import DecodeError, ElementDecodeError, InvalidFormatError, UnresolvedReferenceError
from .locator import parse_locator
from .resolvable import Resolvable

if TYPE_CHECKING:
    from .decoder import RemoteDecoder

T = TypeVar("T")


class CellState(str, Enum):
    """Resolution state of a reference cell."""
    EMPTY = "empty"              # Field absent
    UNRESOLVED = "unresolved"    # Locator known, value not fetched yet
    RESOLVED = "resolved"        # Value present (inline or fetched)


def _decode_inline(value_type: type, raw: Any, context: Any) -> Any:
    return value_type.from_document(raw, context)


def _encode_inline(value: Any) -> Any:
    return value.to_document()


class RemoteResource(Resolvable, Generic[T]):
    """Single field holding an inline value or a locator to one."""

    def __init__(self, value_type: type[T], value: Optional[T] = None,
                 locator: Optional[str] = None):
        self.value_type = value_type
        self.locator = locator
        self._value = value
        self._settled = False

    @classmethod
    def from_document(cls, value_type: type[T], raw: Any, context: Any = None) -> "RemoteResource[T]":
        """
        Decode a field value.

        A string that parses as an absolute URL becomes an unresolved
        reference; anything else must decode inline as ``value_type``.

        Raises:
            DecodeError: If the value is not a locator and fails to decode inline
        """
        if raw is None:
            return cls(value_type)

        locator = parse_locator(raw)
        if locator is not None:
            return cls(value_type, locator=locator)

        return cls(value_type, value=_decode_inline(value_type, raw, context))

    @property
    def state(self) -> CellState:
        if self._value is not None:
            return CellState.RESOLVED
        if self.locator is not None:
            return CellState.UNRESOLVED
        return CellState.EMPTY

    @property
    def value(self) -> Optional[T]:
        """
        The wrapped value, None for an absent field.

        Raises:
            UnresolvedReferenceError: If the locator has not been resolved yet
        """
        if self.state is CellState.UNRESOLVED:
            raise UnresolvedReferenceError(
                f"Reference {self.locator} has not been resolved",
                locator=self.locator,
            )
        return self._value

    def to_document(self) -> Any:
        """Re-emit the locator if there is one, else the inline value, else None."""
        if self.locator is not None:
            return self.locator
        if self._value is not None:
            return _encode_inline(self._value)
        return None

    async def resolve(self, decoder: "RemoteDecoder") -> None:
        if self._settled:
            return

        if self._value is None and self.locator is not None:
            self._value = await decoder.decode(self.locator, self.value_type)

        if isinstance(self._value, Resolvable):
            await self._value.resolve(decoder)

        self._settled = True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RemoteResource):
            return NotImplemented
        return self.locator == other.locator and self._value == other._value

    def __repr__(self) -> str:
        return (f"RemoteResource({self.value_type.__name__}, state={self.state.value}, "
                f"locator={self.locator!r})")


@dataclass(frozen=True)
class ListEntry(Generic[T]):
    """One element of a reference list: a locator or an inline value."""
    locator: Optional[str] = None
    value: Optional[T] = None


class RemoteResourceList(Resolvable, Generic[T]):
    """List field whose elements are each inline values or locators."""

    def __init__(self, value_type: type[T], entries: Optional[list[ListEntry[T]]] = None):
        self.value_type = value_type
        self.entries = entries
        self._values: Optional[list[T]] = None

    @classmethod
    def of(cls, value_type: type[T], values: Optional[list[T]]) -> "RemoteResourceList[T]":
        """Build a list cell from inline values only."""
        if values is None:
            return cls(value_type)
        return cls(value_type, [ListEntry(value=value) for value in values])

    @classmethod
    def from_document(cls, value_type: type[T], raw: Any, context: Any = None) -> "RemoteResourceList[T]":
        """
        Decode a list field, classifying each element independently.

        Raises:
            InvalidFormatError: If the value is not a list
            ElementDecodeError: If an element is neither a locator nor a valid inline value
        """
        if raw is None:
            return cls(value_type)

        if not isinstance(raw, list):
            raise InvalidFormatError(
                f"Expected a list of {value_type.__name__} values or locators, got {type(raw).__name__}",
                raw_value=raw,
                expected_format="list",
            )

        entries: list[ListEntry[T]] = []
        for i, item in enumerate(raw):
            locator = parse_locator(item)
            if locator is not None:
                entries.append(ListEntry(locator=locator))
                continue
            try:
                entries.append(ListEntry(value=_decode_inline(value_type, item, context)))
            except DecodeError as e:
                raise ElementDecodeError(
                    f"Element {i} is neither a locator nor a valid {value_type.__name__}: {e}",
                    index=i,
                    cause=e,
                ).with_path(i) from e

        return cls(value_type, entries)

    @property
    def state(self) -> CellState:
        if self.entries is None:
            return CellState.EMPTY
        if self._values is not None or all(entry.locator is None for entry in self.entries):
            return CellState.RESOLVED
        return CellState.UNRESOLVED

    @property
    def values(self) -> Optional[list[T]]:
        """
        Elements in declaration order, None for an absent field.

        Raises:
            UnresolvedReferenceError: If any element is still a bare locator
        """
        if self.entries is None:
            return None
        if self._values is not None:
            return list(self._values)
        pending = [entry.locator for entry in self.entries if entry.locator is not None]
        if pending:
            raise UnresolvedReferenceError(
                f"{len(pending)} reference(s) in list have not been resolved",
                locator=pending[0],
            )
        return [entry.value for entry in self.entries]

    def to_document(self) -> Optional[list[Any]]:
        if self.entries is None:
            return None
        return [
            entry.locator if entry.locator is not None else _encode_inline(entry.value)
            for entry in self.entries
        ]

    async def resolve(self, decoder: "RemoteDecoder") -> None:
        if self._values is not None or self.entries is None:
            return

        async def resolve_entry(entry: ListEntry[T]) -> T:
            value = entry.value
            if value is None:
                value = await decoder.decode(entry.locator, self.value_type)
            if isinstance(value, Resolvable):
                await value.resolve(decoder)
            return value

        self._values = await decoder.run_all(
            [lambda entry=entry: resolve_entry(entry) for entry in self.entries]
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RemoteResourceList):
            return NotImplemented
        return self.entries == other.entries

    def __repr__(self) -> str:
        count = len(self.entries) if self.entries is not None else 0
        return (f"RemoteResourceList({self.value_type.__name__}, state={self.state.value}, "
                f"entries={count})")
