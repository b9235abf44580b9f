# Copyright (c) Meta Platforms, Inc. and affiliates.
# Modifications copyright (c) 2025 Logan Martel.
# Adapted from https://github.com/meta-pytorch/KernelAgent (Apache-2.0).

"""Model name to provider registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple, Type

from intellicompiler.exceptions import CompilerConfigError
from intellicompiler.llm.providers.anthropic_provider import AnthropicProvider
from intellicompiler.llm.providers.base import BaseProvider
from intellicompiler.llm.providers.openai_provider import OpenAIProvider


@dataclass
class ModelConfig:
    name: str
    provider_class: Type[BaseProvider]
    description: str = ""


AVAILABLE_MODELS = [
    ModelConfig(
        name="gpt-4o-mini",
        provider_class=OpenAIProvider,
        description="OpenAI GPT-4o mini",
    ),
    ModelConfig(
        name="o4-mini",
        provider_class=OpenAIProvider,
        description="OpenAI o-series",
    ),
    ModelConfig(
        name="gpt-5", provider_class=OpenAIProvider, description="OpenAI GPT-5"
    ),
    ModelConfig(
        name="claude-sonnet-4-20250514",
        provider_class=AnthropicProvider,
        description="Claude 4 Sonnet",
    ),
    ModelConfig(
        name="claude-opus-4-1-20250805",
        provider_class=AnthropicProvider,
        description="Claude 4.1 Opus",
    ),
]

MODEL_NAME_TO_CONFIG: Dict[str, ModelConfig] = {
    cfg.name: cfg for cfg in AVAILABLE_MODELS
}
_PROVIDER_CACHE: Dict[
    Tuple[Type[BaseProvider], Tuple[Tuple[str, Any], ...]], BaseProvider
] = {}


def get_model_provider(
    model_name: str, **provider_kwargs: Any
) -> BaseProvider:
    config = MODEL_NAME_TO_CONFIG.get(model_name)
    if config is None:
        available = sorted(MODEL_NAME_TO_CONFIG)
        raise CompilerConfigError(
            f"Unknown model '{model_name}'. Available: {available}"
        )
    provider_cls = config.provider_class
    key = (provider_cls, tuple(sorted(provider_kwargs.items())))
    if key not in _PROVIDER_CACHE:
        _PROVIDER_CACHE[key] = provider_cls(**provider_kwargs)
    return _PROVIDER_CACHE[key]


def register_model(config: ModelConfig) -> None:
    MODEL_NAME_TO_CONFIG[config.name] = config
