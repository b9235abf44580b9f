"""LLM transport used by the refinement oracle."""
