"""Rust source templates."""

from __future__ import annotations

from typing import Sequence

from intellicompiler.languages.base import LanguageTemplates


class RustTemplates(LanguageTemplates):
    language_name = "rust"

    def identifier(self, name: str) -> str:
        return f"let {name};"

    def function(self, name: str, parameters: Sequence[str], body: str) -> str:
        return f"fn {name}({', '.join(parameters)}) {{\n{body}\n}}"


__all__ = ["RustTemplates"]
