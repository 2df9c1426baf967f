"""Exceptions raised by the vector store and RAG pipeline."""


class OllamaRAGError(Exception):
    """Base class for all package errors."""


class DimensionMismatchError(OllamaRAGError, ValueError):
    """Vector length differs from the store's established dimension."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected vector of dimension {expected}, got {actual}")


class DegenerateVectorError(OllamaRAGError, ValueError):
    """Cosine similarity requested for a zero-norm vector."""


class DuplicateIdError(OllamaRAGError, ValueError):
    """Entry id already present in a store that rejects duplicates."""


class MetadataError(OllamaRAGError, TypeError):
    """Metadata value outside the supported str/number/bool/mapping types."""


class InsufficientDataError(OllamaRAGError):
    """Clustering requested on an empty store."""


class ProviderError(OllamaRAGError):
    """Embedding or generation provider failed to produce a result."""


class ProviderUnavailableError(ProviderError):
    """Provider could not be reached (connection refused, timeout)."""
