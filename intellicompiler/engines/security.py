"""Rule-based security flags plus one free-text oracle assessment."""

from __future__ import annotations

import logging

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from intellicompiler.configuration import SecuritySettings
from intellicompiler.constants import SECURITY_ORACLE_PREFIX
from intellicompiler.nodes import SyntaxNode
from intellicompiler.oracle import OracleResult, RefinementOracle
from intellicompiler.prompting import OraclePrompts

LOGGER = logging.getLogger(__name__)

Predicate = Callable[[SyntaxNode], bool]


@dataclass(frozen=True)
class SecurityRule:
    name: str
    predicate: Predicate


def metadata_flag_rule(name: str, flag: str) -> SecurityRule:
    """Rule that fires when ``flag`` is set to ``"true"`` on the node."""

    return SecurityRule(name=name, predicate=lambda node: node.meta.flag(flag))


@dataclass(frozen=True)
class SecurityAssessment:
    rule_hits: Tuple[str, ...]
    oracle: OracleResult

    @property
    def oracle_entry(self) -> str:
        if self.oracle.ok:
            return f"{SECURITY_ORACLE_PREFIX}{self.oracle.text}"
        return str(self.oracle)

    @property
    def findings(self) -> List[str]:
        return [*self.rule_hits, self.oracle_entry]


class SecurityRuleEngine:
    """Evaluates a fixed rule set over a node, then asks the oracle.

    Output order is rule declaration order followed by exactly one oracle
    entry, so ``len(analyze(node)) == hits + 1``.
    """

    def __init__(
        self,
        oracle: RefinementOracle,
        rules: Optional[Iterable[SecurityRule]] = None,
        *,
        prompts: Optional[OraclePrompts] = None,
    ) -> None:
        self._oracle = oracle
        self._rules: Tuple[SecurityRule, ...] = (
            tuple(rules) if rules is not None else self.rules_from_settings()
        )
        self._prompts = prompts or OraclePrompts()

    @staticmethod
    def rules_from_settings(
        settings: Optional[SecuritySettings] = None,
    ) -> Tuple[SecurityRule, ...]:
        settings = settings or SecuritySettings()
        return tuple(
            metadata_flag_rule(rule.name, rule.flag)
            for rule in settings.flag_rules
        )

    @property
    def rules(self) -> Tuple[SecurityRule, ...]:
        return self._rules

    def assess(self, node: SyntaxNode) -> SecurityAssessment:
        hits = tuple(rule.name for rule in self._rules if self._fires(rule, node))
        prompt = self._prompts.security(node.describe(), flagged=hits)
        return SecurityAssessment(rule_hits=hits, oracle=self._oracle.predict(prompt))

    def analyze(self, node: SyntaxNode) -> List[str]:
        return self.assess(node).findings

    def _fires(self, rule: SecurityRule, node: SyntaxNode) -> bool:
        try:
            return bool(rule.predicate(node))
        except Exception:
            LOGGER.exception(
                "Security rule %s raised; treating it as not flagged", rule.name
            )
            return False


__all__ = [
    "SecurityAssessment",
    "SecurityRule",
    "SecurityRuleEngine",
    "metadata_flag_rule",
]
