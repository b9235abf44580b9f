"""Language template registry."""

from typing import Dict, Optional, Type

from .base import LanguageTemplates
from .cpp import CppTemplates
from .go import GoTemplates
from .rust import RustTemplates
from .swift import SwiftTemplates

LANGUAGE_TEMPLATES: Dict[str, Type[LanguageTemplates]] = {
    "go": GoTemplates,
    "cpp": CppTemplates,
    "swift": SwiftTemplates,
    "rust": RustTemplates,
}


def register_language_templates(
    name: str, templates_cls: Type[LanguageTemplates]
) -> None:
    """Register or override the templates for a target language."""

    LANGUAGE_TEMPLATES[name.lower()] = templates_cls


def unregister_language_templates(name: str) -> None:
    """Remove templates that were previously registered."""

    LANGUAGE_TEMPLATES.pop(name.lower(), None)


def get_language_templates(name: str) -> Optional[LanguageTemplates]:
    templates_cls = LANGUAGE_TEMPLATES.get(name.lower())
    return templates_cls() if templates_cls else None


__all__ = [
    "LANGUAGE_TEMPLATES",
    "CppTemplates",
    "GoTemplates",
    "LanguageTemplates",
    "RustTemplates",
    "SwiftTemplates",
    "get_language_templates",
    "register_language_templates",
    "unregister_language_templates",
]
