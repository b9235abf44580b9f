"""Refinement oracle capability: ``predict(prompt) -> OracleResult``."""

from __future__ import annotations

import logging

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from intellicompiler.constants import ORACLE_ERROR_PREFIX
from intellicompiler.llm.providers import LLMProvider
from intellicompiler.logging import redact

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class OracleResult:
    """Either the oracle's text or a tagged description of why it failed."""

    text: str
    error: Optional[str] = None

    @classmethod
    def success(cls, text: str) -> "OracleResult":
        return cls(text=text)

    @classmethod
    def failure(cls, exc: BaseException) -> "OracleResult":
        message = redact(str(exc)) or "no details"
        return cls(
            text="",
            error=f"{ORACLE_ERROR_PREFIX}: {type(exc).__name__}: {message}",
        )

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        return self.text if self.error is None else self.error


@runtime_checkable
class RefinementOracle(Protocol):
    """Anything that can answer a prompt without raising."""

    def predict(self, prompt: str) -> OracleResult:
        ...


class LLMOracle:
    """Adapts an LLM provider to the oracle capability.

    Provider exceptions never escape ``predict``; they come back as failed
    results so that callers can keep going and still tell the cases apart.
    """

    def __init__(self, provider: LLMProvider) -> None:
        self._provider = provider

    @property
    def provider(self) -> LLMProvider:
        return self._provider

    def predict(self, prompt: str) -> OracleResult:
        try:
            text = self._provider.generate(prompt)
        except Exception as exc:
            result = OracleResult.failure(exc)
            LOGGER.warning("Oracle call failed: %s", result.error)
            return result
        return OracleResult.success(text or "")


__all__ = ["LLMOracle", "OracleResult", "RefinementOracle"]
