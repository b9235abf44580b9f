"""Shallow semantic labelling of syntax nodes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from intellicompiler.nodes import (
    BinaryOperation,
    FunctionDefinition,
    Identifier,
    NumberLiteral,
    SyntaxNode,
)


@dataclass(frozen=True)
class SemanticInfo:
    meaning: str
    type_tags: Tuple[str, ...] = ()


class SemanticClassifier:
    """Maps a node to a short description and coarse type tags."""

    def classify(self, node: SyntaxNode) -> SemanticInfo:
        if isinstance(node, Identifier):
            return SemanticInfo(f"identifier '{node.name}'", ("dynamic",))
        if isinstance(node, NumberLiteral):
            return SemanticInfo("number literal", ("number",))
        if isinstance(node, BinaryOperation):
            return SemanticInfo(f"binary op '{node.operator}'", ("number",))
        if isinstance(node, FunctionDefinition):
            return SemanticInfo(f"function '{node.name}'", ("fn",))
        return SemanticInfo("unknown")


__all__ = ["SemanticClassifier", "SemanticInfo"]
