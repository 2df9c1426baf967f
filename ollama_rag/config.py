"""Environment-driven defaults for providers, retrieval and clustering."""

import os
from typing import Optional

# Ollama server (OpenAI-compatible API lives under /v1)
OLLAMA_HOST = os.getenv('OLLAMA_HOST', 'http://localhost:11434')
OLLAMA_API_KEY = os.getenv('OLLAMA_API_KEY', 'ollama')  # ignored by Ollama, required by the SDK

EMBED_MODEL = os.getenv('EMBED_MODEL', 'nomic-embed-text')
CHAT_MODEL = os.getenv('CHAT_MODEL', 'llama3.2')
PROVIDER_TIMEOUT_SEC = float(os.getenv('PROVIDER_TIMEOUT_SEC', '60'))

RAG_TOP_K = int(os.getenv('RAG_TOP_K', '3'))

CLUSTER_MAX_ITERATIONS = int(os.getenv('CLUSTER_MAX_ITERATIONS', '100'))
CLUSTER_CONVERGENCE_THRESHOLD = float(os.getenv('CLUSTER_CONVERGENCE_THRESHOLD', '0.99'))


def ollama_base_url(host: Optional[str] = None) -> str:
    """OpenAI-compatible base URL for an Ollama host."""
    host = (host or OLLAMA_HOST).rstrip('/')
    if host.endswith('/v1'):
        return host
    return f"{host}/v1"
