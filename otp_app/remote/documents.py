"""
Document formats.

A document decoder turns raw bytes into a document node of a requested type,
passing the session's decode context through. JSON documents are read with
orjson; YAML documents with PyYAML. The YAML loader is a safe loader that
drops YAML 1.1 sexagesimal numbers so durations such as ``30:00`` stay
strings.
"""

import re
from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol, TypeVar, Union

import orjson
import yaml

from ..errors import DocumentSyntaxError

T = TypeVar("T")


class DocumentNode(Protocol):
    """Type that can be decoded from, and encoded to, a parsed document."""

    @classmethod
    def from_document(cls, raw: Any, context: Any = None) -> Any: ...

    def to_document(self) -> Any: ...


class DocumentDecoder(ABC):
    """Base class for document formats."""

    format_name: str = ""

    @abstractmethod
    def load(self, data: Union[bytes, str]) -> Any:
        """
        Parse raw bytes into plain Python data.

        Raises:
            DocumentSyntaxError: If the bytes are not a valid document
        """

    @abstractmethod
    def dump(self, document: Any) -> bytes:
        """Serialize plain Python data."""

    def decode(self, value_type: type[T], data: Union[bytes, str], context: Any = None) -> T:
        """Parse ``data`` and decode it as ``value_type``."""
        return value_type.from_document(self.load(data), context)

    def encode(self, node: DocumentNode) -> bytes:
        """Serialize a document node in its wire form."""
        return self.dump(node.to_document())


class JsonDocumentDecoder(DocumentDecoder):
    """JSON documents via orjson."""

    format_name = "json"

    def load(self, data: Union[bytes, str]) -> Any:
        try:
            return orjson.loads(data)
        except orjson.JSONDecodeError as e:
            raise DocumentSyntaxError(f"Invalid JSON: {e}", document_format=self.format_name) from e

    def dump(self, document: Any) -> bytes:
        return orjson.dumps(document)


class _DocumentLoader(yaml.SafeLoader):
    """SafeLoader that reads only plain decimal ints and floats as numbers."""


_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"

_DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in (_INT_TAG, _FLOAT_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_DocumentLoader.add_implicit_resolver(
    _INT_TAG,
    re.compile(r"^[-+]?[0-9]+$"),
    list("-+0123456789"),
)
_DocumentLoader.add_implicit_resolver(
    _FLOAT_TAG,
    re.compile(r"^[-+]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?$"),
    list("-+0123456789."),
)


class YamlDocumentDecoder(DocumentDecoder):
    """YAML documents via PyYAML; also reads JSON."""

    format_name = "yaml"

    def load(self, data: Union[bytes, str]) -> Any:
        try:
            return yaml.load(data, Loader=_DocumentLoader)  # noqa: S506 - SafeLoader subclass
        except yaml.YAMLError as e:
            raise DocumentSyntaxError(f"Invalid YAML: {e}", document_format=self.format_name) from e

    def dump(self, document: Any) -> bytes:
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True).encode("utf-8")


_DECODERS: dict[str, type[DocumentDecoder]] = {
    JsonDocumentDecoder.format_name: JsonDocumentDecoder,
    YamlDocumentDecoder.format_name: YamlDocumentDecoder,
}


def get_document_decoder(format_name: Optional[str] = None) -> DocumentDecoder:
    """Create a decoder for ``json`` or ``yaml`` (the default)."""
    name = (format_name or YamlDocumentDecoder.format_name).lower()
    decoder_type = _DECODERS.get(name)
    if decoder_type is None:
        raise ValueError(f"Unsupported document format: {format_name}")
    return decoder_type()
