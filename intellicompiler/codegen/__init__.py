"""Template-based code generation."""

from .generator import TemplateCodeGenerator, format_number

__all__ = ["TemplateCodeGenerator", "format_number"]
