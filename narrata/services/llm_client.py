"""
Shared LLM client wrapper
"""
import asyncio
import json
from typing import Dict, List, Any, Optional
from openai import AsyncOpenAI
from threading import Lock
from loguru import logger

from narrata.core.config import settings


class LLMClient:
    """
    OpenAI-compatible client with a concurrency cap and JSON reply parsing.
    """

    _instance: Optional["LLMClient"] = None
    _lock = Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if getattr(self, "_initialized", False):
            return

        self.model = settings.llm_model
        self.api_key = settings.llm_api_key
        self.base_url = settings.llm_base_url
        self.temperature = settings.llm_temperature
        self.timeout = settings.llm_timeout

        self._client = AsyncOpenAI(
            api_key=self.api_key or "not-configured",
            base_url=self.base_url,
            timeout=self.timeout,
        )
        self._semaphore = asyncio.Semaphore(settings.llm_max_concurrency)

        self._initialized = True
        logger.info(
            "LLMClient initialized: model={}, max_concurrency={}",
            self.model,
            settings.llm_max_concurrency,
        )

    def _parse_json(self, content: str) -> Dict[str, Any]:
        """Parse a JSON reply, tolerating markdown code fences."""
        text = content.strip()
        if text.startswith("```json"):
            text = text[7:]
        elif text.startswith("```"):
            text = text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("JSON parse failed: {}\nRaw content: {}", exc, text[:500])
            raise ValueError(f"LLM reply is not valid JSON: {exc}")

    async def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        model: Optional[str] = None,
    ) -> str:
        """Send a chat request and return the text reply."""
        async with self._semaphore:
            try:
                response = await self._client.chat.completions.create(
                    model=model or self.model,
                    messages=messages,
                    temperature=temperature if temperature is not None else self.temperature,
                )
                if not response or not response.choices:
                    raise ValueError("LLM returned an empty response")
                content = response.choices[0].message.content
                if content is None:
                    raise ValueError("LLM returned no content")
                return content.strip()
            except Exception as exc:
                logger.error("LLM call failed: {}", exc)
                raise

    async def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: Optional[float] = None,
        model: Optional[str] = None,
    ) -> Dict[str, Any]:
        """System + user message, parsed JSON reply."""
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        content = await self.chat(messages, temperature, model)
        return self._parse_json(content)

    def is_configured(self) -> bool:
        """Whether an API key is set."""
        return bool(self.api_key) and self.api_key != "your-api-key-here"


def get_llm_client() -> LLMClient:
    """LLMClient singleton."""
    return LLMClient()
