"""Prompt templates that describe a schema to a language model."""

from .prompt_builder import PromptParts, PromptTemplateError, build_prompt

__all__ = ["PromptParts", "PromptTemplateError", "build_prompt"]
