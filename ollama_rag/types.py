"""Data containers shared by the store, clustering and RAG pipeline."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import numpy as np

from .errors import MetadataError

MetadataValue = Union[str, int, float, bool, None, Dict[str, Any]]
Metadata = Dict[str, MetadataValue]

_SCALAR_TYPES = (str, int, float, bool, type(None))


def validate_metadata(metadata: Optional[Dict], path: str = '') -> Metadata:
    """Check metadata against the supported value types and return a copy.

    Values may be strings, numbers, booleans, ``None`` or nested mappings
    with string keys. Nested mappings are copied so later changes to the
    caller's dict do not leak into a stored entry.
    """
    if metadata is None:
        return {}
    if not isinstance(metadata, dict):
        raise MetadataError(f"Metadata{path and ' at ' + path} must be a dict, got {type(metadata).__name__}")

    checked = {}
    for key, value in metadata.items():
        if not isinstance(key, str):
            raise MetadataError(f"Metadata key {key!r} must be a string")
        key_path = f"{path}.{key}" if path else key
        if isinstance(value, dict):
            checked[key] = validate_metadata(value, key_path)
        elif isinstance(value, _SCALAR_TYPES):
            checked[key] = value
        else:
            raise MetadataError(
                f"Unsupported metadata value at {key_path}: {type(value).__name__}"
            )
    return checked


@dataclass(eq=False)
class Entry:
    """A stored vector with its source text and metadata.

    Entries are owned by the VectorStore that created them and compare by
    identity.
    """
    id: str
    vector: np.ndarray
    text: str
    metadata: Metadata = field(default_factory=dict)


@dataclass
class Document:
    """Caller-facing unit of insertion; one document becomes one entry."""
    id: str
    content: str
    metadata: Optional[Metadata] = None


@dataclass
class SearchResult:
    """Search result container.

    Holds a reference into the store; it is only valid while the entry is
    still stored.
    """
    entry: Entry
    similarity: float

    @property
    def id(self) -> str:
        return self.entry.id


@dataclass
class Source:
    """Id and similarity of one retrieved document."""
    id: str
    similarity: float


@dataclass
class RAGAnswer:
    """Generated answer plus the ranked sources it was grounded on."""
    answer: str
    sources: List[Source] = field(default_factory=list)
