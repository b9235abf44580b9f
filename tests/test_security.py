from __future__ import annotations

import pytest

from intellicompiler.engines import (
    SecurityRule,
    SecurityRuleEngine,
    metadata_flag_rule,
)
from intellicompiler.nodes import BinaryOperation, Identifier, NumberLiteral


def test_pointer_arith_flag_then_oracle_entry(echo_oracle):
    node = Identifier("p", metadata={"pointer_arith": "true"})
    findings = SecurityRuleEngine(echo_oracle).analyze(node)
    assert findings[0] == "POINTER_ARITH"
    assert len(findings) == 2
    assert findings[-1].startswith("LLM: LLM_OUTPUT(Analyze security")
    assert "Identifier(name='p'" in findings[-1]
    assert "Rule-based checks already flagged: POINTER_ARITH" in findings[-1]


@pytest.mark.parametrize(
    "metadata, expected_hits",
    [
        ({}, []),
        ({"pointer_arith": "false"}, []),
        ({"overflow_risk": "true"}, ["INTEGER_OVERFLOW"]),
        (
            {"overflow_risk": "true", "pointer_arith": "true"},
            ["POINTER_ARITH", "INTEGER_OVERFLOW"],
        ),
    ],
)
def test_findings_are_hits_in_rule_order_plus_one(
    echo_oracle, metadata, expected_hits
):
    node = NumberLiteral(3, metadata=metadata)
    findings = SecurityRuleEngine(echo_oracle).analyze(node)
    assert len(findings) == len(expected_hits) + 1
    assert findings[:-1] == expected_hits
    assert findings[-1].startswith("LLM: ")


def test_oracle_failure_becomes_final_diagnostic(failing_oracle):
    node = Identifier("p", metadata={"pointer_arith": "true"})
    assessment = SecurityRuleEngine(failing_oracle).assess(node)
    assert assessment.rule_hits == ("POINTER_ARITH",)
    assert not assessment.oracle.ok
    assert assessment.findings == [
        "POINTER_ARITH",
        "ORACLE_ERROR: RuntimeError: oracle offline",
    ]


def test_custom_rules_keep_declaration_order(echo_oracle):
    rules = [
        metadata_flag_rule("B_RULE", "b"),
        SecurityRule("DEEP_TREE", lambda node: bool(node.children())),
        metadata_flag_rule("A_RULE", "a"),
    ]
    node = BinaryOperation(
        "-", Identifier("x"), Identifier("y"), metadata={"a": "true", "b": "true"}
    )
    engine = SecurityRuleEngine(echo_oracle, rules)
    assert [rule.name for rule in engine.rules] == ["B_RULE", "DEEP_TREE", "A_RULE"]
    assert engine.analyze(node)[:-1] == ["B_RULE", "DEEP_TREE", "A_RULE"]


def test_raising_predicate_is_treated_as_not_flagged(echo_oracle):
    def boom(node):
        raise KeyError("broken rule")

    rules = [SecurityRule("BROKEN", boom), metadata_flag_rule("OK", "ok")]
    node = Identifier("x", metadata={"ok": "true"})
    findings = SecurityRuleEngine(echo_oracle, rules).analyze(node)
    assert findings[:-1] == ["OK"]


def test_empty_rule_set_still_asks_oracle(recording_provider):
    from intellicompiler.oracle import LLMOracle

    engine = SecurityRuleEngine(LLMOracle(recording_provider), rules=[])
    findings = engine.analyze(Identifier("x", metadata={"pointer_arith": "true"}))
    assert len(findings) == 1
    assert len(recording_provider.prompts) == 1
    assert "already flagged" not in recording_provider.prompts[0]
