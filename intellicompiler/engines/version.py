"""Target-language version inference."""

from __future__ import annotations

from typing import Optional

from intellicompiler.configuration import VersionSettings
from intellicompiler.constants import UNKNOWN_VERSION
from intellicompiler.nodes import SyntaxNode


class VersionInferenceEngine:
    """Picks a target version from node metadata, defaulting to the latest."""

    def __init__(self, settings: Optional[VersionSettings] = None) -> None:
        settings = settings or VersionSettings()
        self._table = {
            language.lower(): tuple(versions)
            for language, versions in settings.table.items()
        }
        self._overrides = tuple(settings.overrides)

    @property
    def languages(self) -> tuple[str, ...]:
        return tuple(sorted(self._table))

    def infer(self, language: str, node: SyntaxNode) -> str:
        key = language.lower()
        versions = self._table.get(key)
        if not versions:
            return UNKNOWN_VERSION
        for override in self._overrides:
            if override.language == key and node.meta.flag(override.flag):
                return override.version
        return versions[-1]


__all__ = ["VersionInferenceEngine"]
