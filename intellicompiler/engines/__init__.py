"""Analysis engines that run over a single syntax node."""

from .security import (
    SecurityAssessment,
    SecurityRule,
    SecurityRuleEngine,
    metadata_flag_rule,
)
from .semantic import SemanticClassifier, SemanticInfo
from .version import VersionInferenceEngine

__all__ = [
    "SecurityAssessment",
    "SecurityRule",
    "SecurityRuleEngine",
    "SemanticClassifier",
    "SemanticInfo",
    "VersionInferenceEngine",
    "metadata_flag_rule",
]
