# Copyright (c) Meta Platforms, Inc. and affiliates.
# Modifications copyright (c) 2025 Logan Martel.
# Adapted from https://github.com/meta-pytorch/KernelAgent (Apache-2.0).

"""LLM provider registry."""

from __future__ import annotations

import logging

from typing import Any, Dict, Optional, Protocol

from intellicompiler.exceptions import CompilerConfigError
from intellicompiler.llm.providers.anthropic_provider import AnthropicProvider
from intellicompiler.llm.providers.base import BaseProvider, LLMResponse
from intellicompiler.llm.providers.models import get_model_provider
from intellicompiler.llm.providers.openai_provider import OpenAIProvider
from intellicompiler.llm.providers.relay_provider import RelayProvider


class LLMProvider(Protocol):
    def generate(self, prompt: str, **kwargs) -> str: ...


class EchoProvider:
    """Deterministic offline provider; wraps the prompt instead of answering it."""

    def generate(self, prompt: str, **kwargs) -> str:
        return f"LLM_OUTPUT({prompt})"


class ProviderAdapter:
    def __init__(
        self,
        provider: BaseProvider,
        model_name: str,
        *,
        default_kwargs: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._provider = provider
        self._model_name = model_name
        self._default_kwargs = default_kwargs or {}

    @property
    def provider(self) -> BaseProvider:
        return self._provider

    @property
    def model_name(self) -> str:
        return self._model_name

    def generate(self, prompt: str, **kwargs) -> str:
        messages = [{"role": "user", "content": prompt}]
        merged_kwargs = {**self._default_kwargs, **kwargs}
        response = self._provider.get_response(
            self._model_name, messages, **merged_kwargs
        )
        return response.content or ""


PROVIDER_ALIASES = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
    "relay": RelayProvider,
}

DEFAULT_PROVIDER_MODELS = {
    "openai": "gpt-4o-mini",
    "anthropic": "claude-sonnet-4-20250514",
    "relay": "default",
}

_LOGGER = logging.getLogger(__name__)


def load_provider(config: Dict[str, Any]) -> LLMProvider:
    """Load a provider from config.

    Expected keys:
      - provider: optional explicit provider name (e.g., "openai", "echo")
      - model: optional model name mapped via models registry
      - base_url, api_key_env, timeout_s: transport options
      - max_tokens, temperature: per-request defaults
    """

    provider_name = config.get("provider")
    model_name: Optional[str] = config.get("model")

    if provider_name == "echo" or (
        provider_name is None and model_name is None
    ):
        _LOGGER.warning(
            "Oracle provider is set to 'echo'; refinement output will only "
            "wrap prompts. Set `compiler.llm.provider` / `model` to use a "
            "real LLM."
        )
        return EchoProvider()

    default_kwargs: Dict[str, Any] = {}
    for key in ("max_tokens", "temperature"):
        if key in config:
            default_kwargs[key] = config[key]

    provider_kwargs: Dict[str, Any] = {}
    if config.get("base_url"):
        provider_kwargs["base_url"] = config["base_url"]
    if config.get("api_key_env"):
        provider_kwargs["api_key_env"] = config["api_key_env"]
    if config.get("timeout_s"):
        provider_kwargs["timeout_s"] = float(config["timeout_s"])

    if provider_name:
        provider_cls = PROVIDER_ALIASES.get(provider_name)
        if provider_cls is None:
            raise CompilerConfigError(
                f"Unknown LLM provider '{provider_name}'. "
                f"Available: {sorted(PROVIDER_ALIASES) + ['echo']}"
            )
        if provider_cls is AnthropicProvider:
            provider_kwargs.pop("base_url", None)
        provider = provider_cls(**provider_kwargs)
        model = model_name or DEFAULT_PROVIDER_MODELS.get(
            provider_name, provider_name
        )
    else:
        assert model_name is not None
        provider = get_model_provider(model_name, **provider_kwargs)
        model = model_name

    if not provider.is_available():
        _LOGGER.warning(
            "Provider '%s' is not available (missing SDK or API key); "
            "oracle calls will report failures",
            provider.name,
        )
    _LOGGER.info("Using LLM provider '%s' with model '%s'", provider.name, model)
    return ProviderAdapter(provider, model, default_kwargs=default_kwargs)


__all__ = [
    "BaseProvider",
    "EchoProvider",
    "LLMProvider",
    "LLMResponse",
    "PROVIDER_ALIASES",
    "ProviderAdapter",
    "load_provider",
]
