"""Custom exceptions for the compiler pipeline."""


class CompilerError(RuntimeError):
    """Base exception for pipeline failures."""


class CompilerConfigError(CompilerError):
    """Raised when configuration is invalid."""


class NodeDecodeError(CompilerError, ValueError):
    """Raised when a node document cannot be turned into a SyntaxNode."""


class OracleUnavailableError(CompilerError):
    """Raised by providers when the refinement oracle cannot answer."""


class DirectoryTranspileError(CompilerError):
    """Raised when a directory walk cannot proceed at all."""
