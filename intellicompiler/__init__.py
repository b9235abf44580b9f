"""intellicompiler package entry point."""

from .exceptions import CompilerError, DirectoryTranspileError
from .nodes import (
    BinaryOperation,
    FunctionDefinition,
    Identifier,
    NumberLiteral,
    SyntaxNode,
    Unrecognized,
    node_from_dict,
)
from .oracle import LLMOracle, OracleResult, RefinementOracle
from .orchestrator import IntelligentCompiler
from .report import Report
from .transpiler import DirectoryTranspiler, TranspileSummary

__all__ = [
    "BinaryOperation",
    "CompilerError",
    "DirectoryTranspileError",
    "DirectoryTranspiler",
    "FunctionDefinition",
    "Identifier",
    "IntelligentCompiler",
    "LLMOracle",
    "NumberLiteral",
    "OracleResult",
    "RefinementOracle",
    "Report",
    "SyntaxNode",
    "TranspileSummary",
    "Unrecognized",
    "node_from_dict",
]
