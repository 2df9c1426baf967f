"""In-memory vector store, clustering and RAG over a local Ollama runtime."""

from .errors import (
    OllamaRAGError,
    DimensionMismatchError,
    DegenerateVectorError,
    DuplicateIdError,
    MetadataError,
    InsufficientDataError,
    ProviderError,
    ProviderUnavailableError,
)
from .types import Entry, Document, SearchResult, Source, RAGAnswer
from .embeddings import EmbeddingProvider, OllamaEmbedding, SentenceTransformerEmbedding, HashEmbedding
from .generation import GenerationProvider, OllamaGenerator
from .vector_store import VectorStore, cosine_similarity
from .clustering import Cluster, ClusterEngine
from .rag import RAGPipeline

__all__ = [
    'OllamaRAGError',
    'DimensionMismatchError',
    'DegenerateVectorError',
    'DuplicateIdError',
    'MetadataError',
    'InsufficientDataError',
    'ProviderError',
    'ProviderUnavailableError',
    'Entry',
    'Document',
    'SearchResult',
    'Source',
    'RAGAnswer',
    'EmbeddingProvider',
    'OllamaEmbedding',
    'SentenceTransformerEmbedding',
    'HashEmbedding',
    'GenerationProvider',
    'OllamaGenerator',
    'VectorStore',
    'cosine_similarity',
    'Cluster',
    'ClusterEngine',
    'RAGPipeline',
]

__version__ = '0.1.0'
