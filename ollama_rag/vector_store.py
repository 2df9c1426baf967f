"""In-memory vector store with cosine similarity search."""

import logging
import threading
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from .embeddings import EmbeddingProvider
from .errors import DegenerateVectorError, DimensionMismatchError, DuplicateIdError
from .types import Document, Entry, SearchResult, validate_metadata

logger = logging.getLogger(__name__)


def _as_vector(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=np.float64).ravel()


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute cosine similarity.

    Raises DegenerateVectorError when either vector has zero norm.
    """
    a, b = _as_vector(a), _as_vector(b)
    if len(a) != len(b):
        raise DimensionMismatchError(len(a), len(b))
    norm_a, norm_b = np.linalg.norm(a), np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        raise DegenerateVectorError("Cosine similarity is undefined for a zero-norm vector")
    return float(np.clip(np.dot(a, b) / (norm_a * norm_b), -1.0, 1.0))


def similarity_matrix(rows: np.ndarray, targets: np.ndarray, row_ids: Optional[List[str]] = None) -> np.ndarray:
    """Cosine similarity of every row against every target.

    Returns an array of shape (len(rows), len(targets)). ``row_ids`` only
    serves to name the offending entry when a row has zero norm.
    """
    row_norms = np.linalg.norm(rows, axis=1)
    target_norms = np.linalg.norm(targets, axis=1)

    zero_rows = np.flatnonzero(row_norms == 0)
    if len(zero_rows):
        name = row_ids[zero_rows[0]] if row_ids else f"#{zero_rows[0]}"
        raise DegenerateVectorError(f"Entry {name} has a zero-norm vector")
    if np.any(target_norms == 0):
        raise DegenerateVectorError("Comparison vector has zero norm")

    sims = (rows @ targets.T) / np.outer(row_norms, target_norms)
    return np.clip(sims, -1.0, 1.0)


class VectorStore:
    """In-memory vector store owning (id, vector, metadata) entries.

    Every insertion embeds its text through the injected provider. The
    first entry fixes the dimension; later vectors of another length are
    rejected. Duplicate ids are kept as separate entries unless
    ``allow_duplicate_ids`` is False.
    """

    def __init__(self, embedder: EmbeddingProvider, allow_duplicate_ids: bool = True):
        self.embedder = embedder
        self.allow_duplicate_ids = allow_duplicate_ids
        self._entries: List[Entry] = []
        self._dimension: Optional[int] = None
        self._lock = threading.Lock()

    @property
    def dimension(self) -> Optional[int]:
        """Established vector length, None while the store is empty."""
        return self._dimension

    @property
    def entries(self) -> List[Entry]:
        """Snapshot of the stored entries in insertion order."""
        with self._lock:
            return list(self._entries)

    def add(self, id: str, text: str, metadata: Optional[Dict] = None) -> Entry:
        """Embed text and store it under id."""
        metadata = validate_metadata(metadata)
        vector = _as_vector(self.embedder.embed(text))

        with self._lock:
            if self._dimension is not None and len(vector) != self._dimension:
                raise DimensionMismatchError(self._dimension, len(vector))
            if not self.allow_duplicate_ids and any(e.id == id for e in self._entries):
                raise DuplicateIdError(f"Entry id {id!r} already exists")

            entry = Entry(id=id, vector=vector, text=text, metadata=metadata)
            self._entries.append(entry)
            if self._dimension is None:
                self._dimension = len(vector)

        logger.debug("Added entry %s (dim=%d, total=%d)", id, len(vector), len(self._entries))
        return entry

    def add_document(self, document: Document) -> Entry:
        return self.add(document.id, document.content, document.metadata)

    def add_documents(self, documents: Iterable[Document]) -> List[Entry]:
        """Add documents in order; a failure stops the batch."""
        return [self.add_document(doc) for doc in documents]

    def search(self, query: str, top_k: int = 5) -> List[SearchResult]:
        """Return the top_k entries most similar to query, best first.

        Ties keep insertion order. top_k is clamped to the store size.
        """
        if top_k < 0:
            raise ValueError(f"top_k must be non-negative, got {top_k}")

        query_vector = _as_vector(self.embedder.embed(query))
        entries = self.entries
        if not entries or top_k == 0:
            return []

        if len(query_vector) != self._dimension:
            raise DimensionMismatchError(self._dimension, len(query_vector))

        vectors = np.vstack([e.vector for e in entries])
        sims = similarity_matrix(vectors, query_vector[np.newaxis, :], [e.id for e in entries])[:, 0]

        order = np.argsort(-sims, kind='stable')[:min(top_k, len(entries))]
        logger.debug("Search returned %d of %d entries", len(order), len(entries))
        return [SearchResult(entry=entries[i], similarity=float(sims[i])) for i in order]

    def get(self, id: str) -> Optional[Entry]:
        """First entry stored under id, if any."""
        for entry in self.entries:
            if entry.id == id:
                return entry
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> Dict:
        """Get store statistics."""
        entries = self.entries
        return {
            'total_vectors': len(entries),
            'dimension': self._dimension or 0,
            'memory_bytes': sum(e.vector.nbytes for e in entries),
        }
