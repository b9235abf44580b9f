from __future__ import annotations

from typing import Any, Dict, List

import pytest

from intellicompiler.exceptions import CompilerConfigError
from intellicompiler.llm.providers import (
    PROVIDER_ALIASES,
    BaseProvider,
    EchoProvider,
    LLMResponse,
    load_provider,
    models as model_mod,
)
from intellicompiler.llm.providers.models import ModelConfig
from intellicompiler.oracle import LLMOracle


def test_load_provider_echo_by_default():
    provider = load_provider({})
    assert isinstance(provider, EchoProvider)
    assert provider.generate("hello") == "LLM_OUTPUT(hello)"


def test_load_provider_echo_explicit():
    provider = load_provider({"provider": "echo", "timeout_s": 5})
    assert provider.generate("foo") == "LLM_OUTPUT(foo)"


class _StubProvider(BaseProvider):
    def __init__(self, **kwargs: Any) -> None:
        self.init_kwargs = kwargs
        self.responses: List[Dict[str, Any]] = []
        super().__init__()

    def _initialize_client(self) -> None:
        self.client = object()

    def get_response(
        self, model_name: str, messages: List[Dict[str, str]], **kwargs: Any
    ) -> LLMResponse:
        self.responses.append(
            {"model": model_name, "messages": messages, "kwargs": kwargs}
        )
        return LLMResponse(content="stubbed", model=model_name, provider="stub")

    def is_available(self) -> bool:
        return True

    @property
    def name(self) -> str:
        return "stub"


def test_load_provider_passes_options(monkeypatch):
    monkeypatch.setitem(PROVIDER_ALIASES, "stub", _StubProvider)
    provider = load_provider(
        {
            "provider": "stub",
            "model": "stub-model",
            "base_url": "http://example.com",
            "api_key_env": "CUSTOM_KEY",
            "timeout_s": 12,
            "temperature": 0.1,
        }
    )
    assert provider.generate("prompt") == "stubbed"
    stub = provider.provider  # type: ignore[attr-defined]
    assert stub.init_kwargs == {
        "base_url": "http://example.com",
        "api_key_env": "CUSTOM_KEY",
        "timeout_s": 12.0,
    }
    call = stub.responses[0]
    assert call["model"] == "stub-model"
    assert call["messages"] == [{"role": "user", "content": "prompt"}]
    assert call["kwargs"] == {"temperature": 0.1}


def test_load_provider_model_uses_registry(monkeypatch):
    monkeypatch.setattr(model_mod, "MODEL_NAME_TO_CONFIG", {})
    monkeypatch.setattr(model_mod, "_PROVIDER_CACHE", {})
    model_mod.register_model(
        ModelConfig(
            name="stub-model", provider_class=_StubProvider, description="stub"
        )
    )
    provider = load_provider(
        {"model": "stub-model", "base_url": "http://relay.local"}
    )
    stub = provider.provider  # type: ignore[attr-defined]
    assert stub.init_kwargs["base_url"] == "http://relay.local"
    assert provider.model_name == "stub-model"  # type: ignore[attr-defined]


def test_unknown_provider_and_model_raise(monkeypatch):
    with pytest.raises(CompilerConfigError):
        load_provider({"provider": "carrier-pigeon"})
    monkeypatch.setattr(model_mod, "MODEL_NAME_TO_CONFIG", {})
    with pytest.raises(CompilerConfigError):
        load_provider({"model": "no-such-model"})


def test_unavailable_provider_surfaces_as_oracle_failure(monkeypatch):
    monkeypatch.delenv("INTELLICOMPILER_TEST_MISSING_KEY", raising=False)
    provider = load_provider(
        {"provider": "openai", "api_key_env": "INTELLICOMPILER_TEST_MISSING_KEY"}
    )
    result = LLMOracle(provider).predict("hello")
    assert not result.ok
    assert result.error.startswith("ORACLE_ERROR: OracleUnavailableError:")
