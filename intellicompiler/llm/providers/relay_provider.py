# Copyright (c) Meta Platforms, Inc. and affiliates.
# Modifications copyright (c) 2025 Logan Martel.
# Adapted from https://github.com/meta-pytorch/KernelAgent (Apache-2.0).
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Self-hosted OpenAI-compatible endpoint (vLLM, llama.cpp server, Ollama)."""

from __future__ import annotations

from intellicompiler.constants import DEFAULT_ORACLE_TIMEOUT_S
from intellicompiler.llm.providers.openai_base import OpenAICompatibleProvider


class RelayProvider(OpenAICompatibleProvider):
    def __init__(
        self,
        *,
        api_key_env: str = "RELAY_API_KEY",
        base_url: str = "http://localhost:8000/v1",
        timeout_s: float = DEFAULT_ORACLE_TIMEOUT_S,
    ) -> None:
        super().__init__(
            api_key_env=api_key_env, base_url=base_url, timeout_s=timeout_s
        )

    @property
    def name(self) -> str:
        return "relay"
