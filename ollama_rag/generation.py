"""Text generation providers used by the RAG pipeline."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from . import config
from .client import make_client, translate_errors
from .errors import ProviderError

logger = logging.getLogger(__name__)


class GenerationProvider(ABC):
    """Maps a prompt to a text completion."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Return the model's completion for prompt."""


class OllamaGenerator(GenerationProvider):
    """Chat completions from a local Ollama model via its OpenAI-compatible API."""

    def __init__(self,
                 model: Optional[str] = None,
                 host: Optional[str] = None,
                 api_key: Optional[str] = None,
                 timeout: Optional[float] = None,
                 system_prompt: Optional[str] = None,
                 temperature: Optional[float] = None,
                 max_tokens: Optional[int] = None,
                 client=None):
        self.model = model or config.CHAT_MODEL
        self.system_prompt = system_prompt
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.client = client if client is not None else make_client(host, api_key, timeout)

    def set_model(self, model: str):
        """Change the chat model."""
        self.model = model

    def _messages(self, prompt: str) -> List[Dict[str, str]]:
        messages = []
        if self.system_prompt:
            messages.append({'role': 'system', 'content': self.system_prompt})
        messages.append({'role': 'user', 'content': prompt})
        return messages

    def generate(self, prompt: str) -> str:
        kwargs = {}
        if self.temperature is not None:
            kwargs['temperature'] = self.temperature
        if self.max_tokens is not None:
            kwargs['max_tokens'] = self.max_tokens

        logger.debug("Generating with %s (%d char prompt)", self.model, len(prompt))
        with translate_errors('generation', self.model):
            response = self.client.chat.completions.create(
                model=self.model,
                messages=self._messages(prompt),
                **kwargs
            )

        if not response.choices:
            raise ProviderError(f"Model {self.model!r} returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise ProviderError(f"Model {self.model!r} returned no content")
        return content
