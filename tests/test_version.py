from __future__ import annotations

from intellicompiler.configuration import VersionOverride, VersionSettings
from intellicompiler.engines import VersionInferenceEngine
from intellicompiler.nodes import (
    BinaryOperation,
    FunctionDefinition,
    Identifier,
    NumberLiteral,
    Unrecognized,
)


def test_go_generics_override_wins_over_other_metadata():
    engine = VersionInferenceEngine()
    node = Identifier(
        "x",
        metadata={
            "uses_generics": "true",
            "pointer_arith": "true",
            "strict_concurrency": "true",
        },
    )
    assert engine.infer("go", node) == "1.21"


def test_go_without_flag_uses_latest_version():
    engine = VersionInferenceEngine()
    assert engine.infer("go", Identifier("x")) == "1.22"
    assert (
        engine.infer("go", Identifier("x", metadata={"uses_generics": "false"}))
        == "1.22"
    )


def test_overrides_are_language_specific():
    engine = VersionInferenceEngine()
    concepts = Identifier("x", metadata={"concepts": "true"})
    assert engine.infer("cpp", concepts) == "20"
    assert engine.infer("go", concepts) == "1.22"
    assert engine.infer("swift", concepts) == "6.0"
    strict = Identifier("x", metadata={"strict_concurrency": "true"})
    assert engine.infer("swift", strict) == "6.0"
    assert engine.infer("cpp", strict) == "23"


def test_unknown_language_returns_sentinel():
    engine = VersionInferenceEngine()
    for node in (
        Identifier("x", metadata={"uses_generics": "true"}),
        NumberLiteral(1),
        Unrecognized(),
    ):
        assert engine.infer("unknown-language", node) == "unknown"


def test_language_lookup_is_case_insensitive():
    engine = VersionInferenceEngine()
    assert engine.infer("Go", Identifier("x")) == "1.22"


def test_custom_table_and_first_matching_override():
    settings = VersionSettings(
        table={"zig": ("0.11", "0.12", "0.13")},
        overrides=(
            VersionOverride("zig", "async", "0.11"),
            VersionOverride("zig", "packed", "0.12"),
        ),
    )
    engine = VersionInferenceEngine(settings)
    both = FunctionDefinition(
        "f", metadata={"async": "true", "packed": "true"}
    )
    assert engine.infer("zig", both) == "0.11"
    assert engine.infer("zig", Identifier("x", metadata={"packed": "true"})) == "0.12"
    assert engine.infer("zig", BinaryOperation("+", Identifier("a"), Identifier("b"))) == "0.13"
    assert engine.infer("go", Identifier("x")) == "unknown"
    assert engine.languages == ("zig",)
