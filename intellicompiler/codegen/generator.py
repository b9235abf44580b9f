"""Rule-based skeleton generator driven by per-language templates."""

from __future__ import annotations

import math

from decimal import Decimal
from typing import Mapping, Optional

from intellicompiler.constants import UNSUPPORTED_PLACEHOLDER
from intellicompiler.languages import LanguageTemplates, get_language_templates
from intellicompiler.nodes import (
    BinaryOperation,
    FunctionDefinition,
    Identifier,
    NumberLiteral,
    SyntaxNode,
)


def format_number(value: float) -> str:
    """Canonical decimal text: no trailing ``.0`` and no exponent."""

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if text.endswith(".0"):
        return text[:-2]
    return text


class TemplateCodeGenerator:
    """Recursively renders a node tree into target-language text.

    The output is a scaffold only; nothing checks that it is valid in the
    target language.
    """

    def __init__(
        self, templates: Optional[Mapping[str, LanguageTemplates]] = None
    ) -> None:
        self._templates = (
            {name.lower(): value for name, value in templates.items()}
            if templates is not None
            else None
        )

    def generate(self, node: SyntaxNode, language: str) -> str:
        templates = self._lookup(language)
        if isinstance(node, Identifier):
            if templates is None:
                return node.name
            return templates.identifier(node.name)
        if isinstance(node, NumberLiteral):
            return format_number(node.value)
        if isinstance(node, BinaryOperation):
            left = self.generate(node.left, language)
            right = self.generate(node.right, language)
            return f"{left} {node.operator} {right}"
        if isinstance(node, FunctionDefinition):
            body = "\n".join(
                self.generate(child, language) for child in node.body
            )
            if templates is None:
                params = ", ".join(node.parameters)
                return f"fn {node.name}({params}) {{\n{body}\n}}"
            return templates.function(node.name, node.parameters, body)
        return UNSUPPORTED_PLACEHOLDER

    def _lookup(self, language: str) -> Optional[LanguageTemplates]:
        if self._templates is not None:
            return self._templates.get(language.lower())
        return get_language_templates(language)


__all__ = ["TemplateCodeGenerator", "format_number"]
