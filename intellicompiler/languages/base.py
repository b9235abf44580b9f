"""Base language template interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence


class LanguageTemplates(ABC):
    """Literal source templates for one target language."""

    language_name: str = "unknown"

    @property
    def name(self) -> str:
        return self.language_name

    @abstractmethod
    def identifier(self, name: str) -> str:
        """Render a declaration-shaped statement for ``name``."""

    @abstractmethod
    def function(self, name: str, parameters: Sequence[str], body: str) -> str:
        """Render a function definition around an already generated body."""
