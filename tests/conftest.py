"""Shared fixtures: deterministic oracles that never touch the network."""

from __future__ import annotations

import sys
import threading

from pathlib import Path
from typing import List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from intellicompiler.llm.providers import EchoProvider  # noqa: E402
from intellicompiler.oracle import LLMOracle  # noqa: E402


class RecordingProvider:
    """Echo provider that also remembers every prompt it was given."""

    def __init__(self, fail_on: Optional[str] = None) -> None:
        self.prompts: List[str] = []
        self._fail_on = fail_on
        self._lock = threading.Lock()

    def generate(self, prompt: str, **kwargs) -> str:
        with self._lock:
            self.prompts.append(prompt)
        if self._fail_on is not None and self._fail_on in prompt:
            raise RuntimeError("oracle offline")
        return f"LLM_OUTPUT({prompt})"


class FailingProvider:
    def generate(self, prompt: str, **kwargs) -> str:
        raise RuntimeError("oracle offline")


@pytest.fixture()
def echo_oracle() -> LLMOracle:
    return LLMOracle(EchoProvider())


@pytest.fixture()
def recording_provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture()
def failing_oracle() -> LLMOracle:
    return LLMOracle(FailingProvider())
