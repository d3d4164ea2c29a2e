"""Gemini invocation for the AI pipelines.

One request per call: no retry, explicit timeout from settings. A non-success
status or transport failure becomes UpstreamError; the raw error body goes to
the log, the client only sees the status code.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from core.config import settings
from core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationParams:
    """Sampling parameters for one kind of request."""
    temperature: float
    top_k: int
    top_p: float
    max_output_tokens: int


# Plans are much larger documents than scorecards
ANALYSIS_GENERATION = GenerationParams(temperature=0.7, top_k=40, top_p=0.95, max_output_tokens=2048)
PLAN_GENERATION = GenerationParams(temperature=0.8, top_k=40, top_p=0.95, max_output_tokens=4096)


def build_gemini_client(api_key: str, timeout_s: float, base_url: Optional[str] = None) -> genai.Client:
    http_options = genai_types.HttpOptions(
        timeout=int(timeout_s * 1000),  # milliseconds
        base_url=base_url,
    )
    return genai.Client(api_key=api_key, http_options=http_options)


def _response_text(response: Any) -> str:
    """Concatenated text of the first candidate, or "" when the model returned none."""
    if not response.candidates:
        return ""
    candidate = response.candidates[0]
    if not candidate.content or not candidate.content.parts:
        return ""
    return "".join(
        part.text for part in candidate.content.parts
        if part.text and getattr(part, "thought", None) is not True
    )


class GeminiInvoker:
    """Sends a rendered prompt to a Gemini model and returns the raw text output."""

    def __init__(self, client: Any, model: str):
        self.client = client
        self.model = model

    def generate(self, prompt: str, params: GenerationParams) -> str:
        contents = [
            genai_types.Content(
                role="user",
                parts=[genai_types.Part(text=prompt)],
            ),
        ]
        config = genai_types.GenerateContentConfig(
            temperature=params.temperature,
            top_k=params.top_k,
            top_p=params.top_p,
            max_output_tokens=params.max_output_tokens,
        )

        start = time.monotonic()
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=contents,
                config=config,
            )
        except genai_errors.APIError as e:
            logger.error(f"Gemini API error {e.code}: {e.message}")
            raise UpstreamError(f"Gemini API error: {e.code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Gemini request failed: {type(e).__name__}: {e}")
            raise UpstreamError("Gemini API request failed") from e

        latency_ms = int((time.monotonic() - start) * 1000)
        usage = getattr(response, "usage_metadata", None)
        logger.info(
            "Gemini response received",
            extra={
                "extra_fields": {
                    "model": self.model,
                    "latency_ms": latency_ms,
                    "input_tokens": getattr(usage, "prompt_token_count", None),
                    "output_tokens": getattr(usage, "candidates_token_count", None),
                }
            }
        )
        return _response_text(response)


@lru_cache(maxsize=1)
def get_model_invoker() -> GeminiInvoker:
    """FastAPI dependency: one invoker per process, built from settings."""
    client = build_gemini_client(
        settings.GEMINI_API_KEY,
        settings.GEMINI_TIMEOUT_S,
        settings.GEMINI_API_BASE_URL,
    )
    return GeminiInvoker(client, settings.GEMINI_MODEL)
