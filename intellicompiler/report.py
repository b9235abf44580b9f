"""Compilation report produced by the pipeline for one node."""

from __future__ import annotations

import json

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import yaml

from intellicompiler.engines.security import SecurityAssessment
from intellicompiler.oracle import OracleResult


@dataclass(frozen=True)
class Report:
    language: str
    version: str
    meaning: str
    base_code: str
    refinement: OracleResult
    security: SecurityAssessment
    type_tags: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def refined_code(self) -> str:
        return str(self.refinement)

    @property
    def security_findings(self) -> List[str]:
        return self.security.findings

    @property
    def oracle_failures(self) -> List[str]:
        failures = []
        if not self.refinement.ok:
            failures.append(f"refinement: {self.refinement.error}")
        if not self.security.oracle.ok:
            failures.append(f"security: {self.security.oracle.error}")
        return failures

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language": self.language,
            "version": self.version,
            "meaning": self.meaning,
            "type_tags": list(self.type_tags),
            "base_code": self.base_code,
            "refined_code": self.refined_code,
            "security_findings": self.security_findings,
            "oracle_failures": self.oracle_failures,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False)

    def render_text(self) -> str:
        findings = ", ".join(json.dumps(item) for item in self.security_findings)
        return (
            "=== Intelligent Compiler ===\n"
            f"Language: {self.language}\n"
            f"Version: {self.version}\n"
            f"Meaning: {self.meaning}\n\n"
            f"Base Code:\n{self.base_code}\n\n"
            f"AI Refined Code:\n{self.refined_code}\n\n"
            f"Security:\n[{findings}]"
        )


__all__ = ["Report"]
