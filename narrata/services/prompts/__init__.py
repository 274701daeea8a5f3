"""
Prompt templates
"""
from .loader import PromptLoader, get_prompt_loader, get_prompt

__all__ = ["PromptLoader", "get_prompt_loader", "get_prompt"]
