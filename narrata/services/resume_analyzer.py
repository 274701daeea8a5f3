"""
LLM document analysis

Turns extracted resume / cover letter text into structured work history.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from loguru import logger

from .llm_client import LLMClient, get_llm_client
from .prompts import get_prompt

MAX_TEXT_LENGTH = 30000


@dataclass
class LLMAnalysisResult:
    """Outcome of one analysis call"""
    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    retryable: bool = False


class ResumeAnalyzer:
    """Structured extraction over the shared LLM client"""

    def __init__(self, client: Optional[LLMClient] = None):
        self.client = client or get_llm_client()

    async def analyze(self, text: str, kind: str = "resume") -> LLMAnalysisResult:
        """
        Analyze document text.

        Args:
            text: extracted plain text
            kind: "resume" or "cover_letter"
        """
        if not self.client.is_configured():
            return LLMAnalysisResult(success=False, error="LLM is not configured", retryable=False)
        if kind not in ("resume", "cover_letter"):
            return LLMAnalysisResult(success=False, error=f"Unsupported document kind: {kind}")
        if not text or not text.strip():
            return LLMAnalysisResult(success=False, error="No text to analyze")

        if len(text) > MAX_TEXT_LENGTH:
            logger.warning("Truncating {} text from {} to {} chars", kind, len(text), MAX_TEXT_LENGTH)
            text = text[:MAX_TEXT_LENGTH]

        try:
            data = await self.client.complete_json(
                get_prompt("resume_analysis", f"{kind}.system"),
                get_prompt("resume_analysis", f"{kind}.user", text=text),
            )
        except ValueError as exc:
            # Unparseable reply; another attempt may succeed
            return LLMAnalysisResult(success=False, error=str(exc), retryable=True)
        except Exception as exc:
            logger.error("{} analysis failed: {}", kind, exc)
            return LLMAnalysisResult(success=False, error=str(exc) or "LLM analysis failed", retryable=True)

        if not isinstance(data, dict):
            return LLMAnalysisResult(success=False, error="LLM reply is not a JSON object", retryable=True)

        data.setdefault("workHistory", [])
        logger.info(
            "{} analyzed: {} work history entries", kind, len(data.get("workHistory") or [])
        )
        return LLMAnalysisResult(success=True, data=data)
