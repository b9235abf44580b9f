from __future__ import annotations

import pytest

from intellicompiler.engines import SemanticClassifier, SemanticInfo
from intellicompiler.nodes import (
    BinaryOperation,
    FunctionDefinition,
    Identifier,
    NumberLiteral,
    SyntaxNode,
    Unrecognized,
)


@pytest.mark.parametrize(
    "node, expected",
    [
        (Identifier("x"), SemanticInfo("identifier 'x'", ("dynamic",))),
        (NumberLiteral(4), SemanticInfo("number literal", ("number",))),
        (
            BinaryOperation("*", NumberLiteral(1), Identifier("y")),
            SemanticInfo("binary op '*'", ("number",)),
        ),
        (FunctionDefinition("main"), SemanticInfo("function 'main'", ("fn",))),
        (Unrecognized(), SemanticInfo("unknown", ())),
    ],
)
def test_classify_each_variant(node, expected):
    assert SemanticClassifier().classify(node) == expected


def test_unmapped_subclass_falls_back_to_unknown():
    class Lambda(SyntaxNode):
        kind = "lambda"

    info = SemanticClassifier().classify(Lambda())
    assert info.meaning == "unknown"
    assert info.type_tags == ()
