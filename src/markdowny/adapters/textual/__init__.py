"""Textual bindings for the surround engine's collaborators."""

from .prompt import HrefPromptScreen, TextualHrefPrompt

__all__ = ["HrefPromptScreen", "TextualHrefPrompt"]
