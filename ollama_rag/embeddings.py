"""Embedding providers for the vector store."""

import hashlib
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import numpy as np

from . import config
from .client import make_client, translate_errors
from .errors import ProviderError

logger = logging.getLogger(__name__)


class EmbeddingProvider(ABC):
    """Maps text to a fixed-length vector."""

    @abstractmethod
    def embed(self, text: str) -> List[float]:
        """Generate embedding vector for given text."""

    def embed_many(self, texts: List[str]) -> List[List[float]]:
        """Generate embeddings for multiple texts, one request each."""
        return [self.embed(t) for t in texts]


class OllamaEmbedding(EmbeddingProvider):
    """Embeddings from a local Ollama model via its OpenAI-compatible API."""

    def __init__(self,
                 model: Optional[str] = None,
                 host: Optional[str] = None,
                 api_key: Optional[str] = None,
                 timeout: Optional[float] = None,
                 client=None):
        self.model = model or config.EMBED_MODEL
        self.client = client if client is not None else make_client(host, api_key, timeout)

    def embed(self, text: str) -> List[float]:
        logger.debug("Embedding %d chars with %s", len(text), self.model)
        with translate_errors('embedding', self.model):
            response = self.client.embeddings.create(model=self.model, input=text)

        if not response.data:
            raise ProviderError(f"Model {self.model!r} returned no embedding")
        embedding = response.data[0].embedding
        if not embedding:
            raise ProviderError(f"Model {self.model!r} returned an empty embedding")
        return [float(x) for x in embedding]


class SentenceTransformerEmbedding(EmbeddingProvider):
    """Local embeddings with sentence-transformers; the model loads on first use."""

    def __init__(self, model_name: str = 'all-MiniLM-L6-v2', device: Optional[str] = None):
        self.model_name = model_name
        self.device = device
        self._model = None

    @property
    def model(self):
        if self._model is None:
            from sentence_transformers import SentenceTransformer
            logger.debug("Loading sentence-transformers model %s", self.model_name)
            self._model = SentenceTransformer(self.model_name, device=self.device)
        return self._model

    def embed(self, text: str) -> List[float]:
        return self.model.encode(text, convert_to_numpy=True).astype(np.float64).tolist()

    def embed_many(self, texts: List[str], batch_size: int = 32) -> List[List[float]]:
        embeddings = self.model.encode(
            texts, convert_to_numpy=True, batch_size=batch_size,
            show_progress_bar=len(texts) > 100
        )
        return embeddings.astype(np.float64).tolist()


class HashEmbedding(EmbeddingProvider):
    """Deterministic pseudo-random embeddings keyed on the text.

    Useful offline: the same text always maps to the same vector, across
    processes, but there is no semantic similarity between related texts.
    """

    def __init__(self, dimension: int = 384):
        self.dimension = dimension

    def embed(self, text: str) -> List[float]:
        digest = hashlib.sha256(text.encode('utf-8')).digest()
        rng = np.random.default_rng(int.from_bytes(digest[:8], 'big'))
        return rng.standard_normal(self.dimension).tolist()
