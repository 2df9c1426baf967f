"""Shared OpenAI-SDK client setup for talking to a local Ollama server."""

import logging
from contextlib import contextmanager
from typing import Optional

import openai

from . import config
from .errors import ProviderError, ProviderUnavailableError

logger = logging.getLogger(__name__)


def make_client(host: Optional[str] = None, api_key: Optional[str] = None,
                timeout: Optional[float] = None) -> openai.OpenAI:
    """Build an OpenAI client pointed at Ollama's compatible endpoint."""
    base_url = config.ollama_base_url(host)
    logger.debug("Creating OpenAI client for %s", base_url)
    return openai.OpenAI(
        base_url=base_url,
        api_key=api_key or config.OLLAMA_API_KEY,
        timeout=timeout if timeout is not None else config.PROVIDER_TIMEOUT_SEC,
        max_retries=0,
    )


@contextmanager
def translate_errors(operation: str, model: str):
    """Re-raise OpenAI SDK failures as provider errors.

    Connection problems and timeouts become ProviderUnavailableError, every
    other API failure becomes ProviderError. The original exception is kept
    as ``__cause__``.
    """
    try:
        yield
    except openai.APIConnectionError as e:
        raise ProviderUnavailableError(f"{operation} with model {model!r} failed: {e}") from e
    except openai.APIError as e:
        raise ProviderError(f"{operation} with model {model!r} failed: {e}") from e
