"""Default knowledge tables and shared constants."""

from __future__ import annotations

from typing import Dict, Tuple

UNKNOWN_VERSION = "unknown"
UNSUPPORTED_PLACEHOLDER = "/* unsupported */"
ORACLE_ERROR_PREFIX = "ORACLE_ERROR"
SECURITY_ORACLE_PREFIX = "LLM: "

DEFAULT_VERSION_TABLE: Dict[str, Tuple[str, ...]] = {
    "go": ("1.18", "1.20", "1.21", "1.22"),
    "cpp": ("17", "20", "23"),
    "swift": ("5.9", "6.0"),
}

# (language, metadata flag, version); earlier entries win.
DEFAULT_VERSION_OVERRIDES: Tuple[Tuple[str, str, str], ...] = (
    ("go", "uses_generics", "1.21"),
    ("cpp", "concepts", "20"),
    ("swift", "strict_concurrency", "6.0"),
)

# (rule name, metadata flag)
DEFAULT_SECURITY_FLAG_RULES: Tuple[Tuple[str, str], ...] = (
    ("POINTER_ARITH", "pointer_arith"),
    ("INTEGER_OVERFLOW", "overflow_risk"),
)

DEFAULT_SKIP_DIRS: Tuple[str, ...] = (
    ".git",
    ".hg",
    ".svn",
    "target",
    "build",
    "dist",
    "out",
    "node_modules",
    "vendor",
    "__pycache__",
    ".venv",
    "venv",
    ".idea",
    ".vscode",
)

DEFAULT_CONVERTIBLE_EXTENSIONS: Tuple[str, ...] = (
    "rs",
    "go",
    "c",
    "h",
    "cc",
    "cpp",
    "hpp",
    "swift",
    "py",
    "js",
    "ts",
    "java",
    "kt",
    "cs",
    "rb",
)

DEFAULT_EXTENSION_MAP: Dict[str, str] = {
    "go": "go",
    "cpp": "cpp",
    "c": "c",
    "swift": "swift",
    "rust": "rs",
    "python": "py",
    "ruby": "rb",
    "java": "java",
    "kotlin": "kt",
    "javascript": "js",
    "typescript": "ts",
    "csharp": "cs",
}

DEFAULT_FALLBACK_EXTENSION = "txt"
DEFAULT_ORACLE_TIMEOUT_S = 60
DEFAULT_TRANSPILE_WORKERS = 1
