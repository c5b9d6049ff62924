"""Lookup of the streaming decoder for a provider name."""
from __future__ import annotations

from typing import Any, Dict, Type

from ...config.defaults import ANTHROPIC_PROVIDER, OPENAI_PROVIDER, OPENROUTER_PROVIDER
from .anthropic_decoder import AnthropicStreamDecoder
from .decode_support import BaseStreamDecoder
from .openai_decoder import OpenAIStreamDecoder

_DECODERS: Dict[str, Type[BaseStreamDecoder]] = {
    OPENAI_PROVIDER: OpenAIStreamDecoder,
    OPENROUTER_PROVIDER: OpenAIStreamDecoder,
    ANTHROPIC_PROVIDER: AnthropicStreamDecoder,
}


class UnknownProviderError(ValueError):
    """Raised when no decoder is registered for a provider name."""


def create_decoder(provider: str, **kwargs: Any) -> BaseStreamDecoder:
    """Instantiate the decoder for ``provider`` (case-insensitive).

    Keyword arguments are passed to the decoder constructor. OpenRouter shares
    the OpenAI dialect but keeps its own name in log context.
    """
    key = (provider or "").strip().lower()
    cls = _DECODERS.get(key)
    if cls is None:
        raise UnknownProviderError(f"no streaming decoder for provider {provider!r}")
    if cls is OpenAIStreamDecoder:
        kwargs.setdefault("provider", key)
    return cls(**kwargs)


def supported_providers() -> tuple:
    return tuple(sorted(_DECODERS))


__all__ = ["UnknownProviderError", "create_decoder", "supported_providers"]
