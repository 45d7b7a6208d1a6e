"""
The Resolvable capability.

Every node of a decoded graph that may hold references, directly or in its
children, derives from ``Resolvable``. The default ``resolve`` discovers the
node's resolvable fields by introspection, so new node types need no
registration and no per-type dispatch.
"""

import dataclasses
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .decoder import RemoteDecoder


class Resolvable:
    """Mixin for graph nodes that can resolve their pending references."""

    async def resolve(self, decoder: "RemoteDecoder") -> None:
        """Resolve every resolvable field, in declaration order."""
        await decoder.resolve_each(list(resolvable_children(self)))


def resolvable_children(node: Any) -> Iterator[Resolvable]:
    """
    Yield the resolvable values held by ``node``'s fields.

    Fields are read in declaration order (dataclass fields, or instance
    attributes for plain classes). A field contributes itself if it is
    resolvable, or each resolvable element if it is a list or tuple.
    """
    if dataclasses.is_dataclass(node):
        values = [getattr(node, f.name) for f in dataclasses.fields(node)]
    else:
        values = list(vars(node).values())

    for value in values:
        if isinstance(value, Resolvable):
            yield value
        elif isinstance(value, (list, tuple)):
            for item in value:
                if isinstance(item, Resolvable):
                    yield item
