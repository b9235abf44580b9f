"""C++ source templates."""

from __future__ import annotations

from typing import Sequence

from intellicompiler.languages.base import LanguageTemplates


class CppTemplates(LanguageTemplates):
    language_name = "cpp"

    def identifier(self, name: str) -> str:
        return f"auto {name};"

    def function(self, name: str, parameters: Sequence[str], body: str) -> str:
        return f"auto {name}({', '.join(parameters)}) {{\n{body}\n}}"


__all__ = ["CppTemplates"]
