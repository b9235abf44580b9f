"""Prompt templates sent to the refinement oracle."""

from intellicompiler.prompting.manager import OraclePrompts, PromptManager

__all__ = ["OraclePrompts", "PromptManager"]
