# -*- coding: utf-8 -*-
"""
Prompt loader.

Loads YAML prompt files, caches them and fills {variable} placeholders.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml
from loguru import logger

from narrata.core.config import settings


class PromptLoader:
    """
    YAML prompt loader.

    Supports:
    - YAML files next to this module
    - {variable} placeholders filled with str.format
    - caching, skipped in hot-reload mode
    """

    def __init__(self, base_path: Path | str | None = None, hot_reload: bool = False):
        if base_path is None:
            base_path = Path(__file__).parent
        self.base_path = Path(base_path)
        self.hot_reload = hot_reload
        self._cache: Dict[str, Dict[str, Any]] = {}

    def load(self, name: str) -> Dict[str, Any]:
        """
        Load a YAML prompt file.

        Args:
            name: file name without the .yaml suffix

        Raises:
            FileNotFoundError: the file does not exist
            yaml.YAMLError: the file is not valid YAML
        """
        if not self.hot_reload and name in self._cache:
            return self._cache[name]

        file_path = self.base_path / f"{name}.yaml"
        if not file_path.exists():
            raise FileNotFoundError(f"Prompt file not found: {file_path}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            self._cache[name] = data
            return data
        except yaml.YAMLError as e:
            logger.error("Failed to parse YAML {}: {}", file_path, e)
            raise

    def get(self, name: str, key: str, **kwargs) -> str:
        """
        Return one prompt with placeholders filled.

        Args:
            name: file name without the .yaml suffix
            key: prompt key; dots address nested keys
            **kwargs: placeholder values

        Raises:
            KeyError: the key does not exist
        """
        data = self.load(name)

        value = data
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                raise KeyError(f"Prompt key not found: {name}.{key}")
            value = value[part]

        if not isinstance(value, str):
            raise TypeError(f"Expected a string prompt, {name}.{key} is {type(value).__name__}")

        if kwargs:
            try:
                return value.format(**kwargs)
            except KeyError as e:
                logger.warning("Prompt placeholder missing: {} in {}.{}", e, name, key)
                return value
        return value


_loader: PromptLoader | None = None


def get_prompt_loader() -> PromptLoader:
    """Global PromptLoader; hot reload in development."""
    global _loader
    if _loader is None:
        _loader = PromptLoader(hot_reload=settings.is_development)
    return _loader


def get_prompt(name: str, key: str, **kwargs) -> str:
    """
    Shortcut for get_prompt_loader().get(...)

    Example:
        >>> prompt = get_prompt("resume_analysis", "resume.user", text="...")
    """
    return get_prompt_loader().get(name, key, **kwargs)
