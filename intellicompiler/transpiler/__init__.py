"""Directory-wide transpilation through the refinement oracle."""

from .directory import (
    DirectoryTranspiler,
    TranspileFailure,
    TranspileSummary,
    strip_code_fences,
)

__all__ = [
    "DirectoryTranspiler",
    "TranspileFailure",
    "TranspileSummary",
    "strip_code_fences",
]
