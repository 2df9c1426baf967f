"""Shared fixtures: offline embedding/generation stubs and a fake OpenAI client."""

import re
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from ollama_rag import EmbeddingProvider, GenerationProvider, VectorStore


class KeywordEmbedding(EmbeddingProvider):
    """One dimension per keyword plus a constant bias so no text embeds to zero."""

    def __init__(self, vocabulary):
        self.vocabulary = [w.lower() for w in vocabulary]
        self.calls = []

    def embed(self, text):
        self.calls.append(text)
        words = set(re.findall(r'\w+', text.lower()))
        return [1.0] + [1.0 if w in words else 0.0 for w in self.vocabulary]


class FixedEmbedding(EmbeddingProvider):
    """Returns a preset vector per text."""

    def __init__(self, vectors):
        self.vectors = vectors
        self.calls = []

    def embed(self, text):
        self.calls.append(text)
        return self.vectors[text]


class RecordingGenerator(GenerationProvider):
    def __init__(self, answer='stub answer'):
        self.answer = answer
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        return self.answer


@pytest.fixture
def keyword_embedder():
    return KeywordEmbedding([
        'javascript', 'web', 'python', 'data', 'science', 'language',
        'pizza', 'sushi', 'food', 'mountains', 'oceans', 'nature',
    ])


@pytest.fixture
def store(keyword_embedder):
    return VectorStore(keyword_embedder)


@pytest.fixture
def generator():
    return RecordingGenerator()


@pytest.fixture
def fake_openai_client():
    """MagicMock shaped like openai.OpenAI for embeddings and chat completions."""
    client = MagicMock()
    client.embeddings.create.return_value = SimpleNamespace(
        data=[SimpleNamespace(embedding=[0.1, 0.2, 0.3])]
    )
    client.chat.completions.create.return_value = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content='generated'))]
    )
    return client


@pytest.fixture
def fixed_store():
    """Factory for a store whose provider maps each text to a preset vector."""
    def make(vectors, **kwargs):
        return VectorStore(FixedEmbedding(vectors), **kwargs)
    return make
