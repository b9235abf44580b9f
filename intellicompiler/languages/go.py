"""Go source templates."""

from __future__ import annotations

from typing import Sequence

from intellicompiler.languages.base import LanguageTemplates


class GoTemplates(LanguageTemplates):
    language_name = "go"

    def identifier(self, name: str) -> str:
        return f"var {name} any"

    def function(self, name: str, parameters: Sequence[str], body: str) -> str:
        return f"func {name}({', '.join(parameters)}) {{\n{body}\n}}"


__all__ = ["GoTemplates"]
