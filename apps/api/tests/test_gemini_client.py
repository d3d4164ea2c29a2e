"""Tests for the Gemini invoker: request shape, text extraction, error mapping."""
from unittest.mock import MagicMock

import httpx
import pytest
from google.genai import errors as genai_errors

from core.exceptions import UpstreamError
from services.gemini_client import (
    ANALYSIS_GENERATION,
    PLAN_GENERATION,
    GeminiInvoker,
)


def _part(text, thought=None):
    part = MagicMock()
    part.text = text
    part.thought = thought
    return part


def _client_returning(*parts):
    client = MagicMock()
    response = MagicMock()
    candidate = MagicMock()
    candidate.content.parts = list(parts)
    response.candidates = [candidate]
    client.models.generate_content.return_value = response
    return client


class TestGenerate:

    def test_returns_first_candidate_text(self):
        client = _client_returning(_part('{"a": 1}'))
        assert GeminiInvoker(client, "gemini-test").generate("prompt", ANALYSIS_GENERATION) == '{"a": 1}'

    def test_joins_parts_and_skips_thoughts(self):
        client = _client_returning(_part("thinking...", thought=True), _part('{"a": '), _part("1}"))
        assert GeminiInvoker(client, "gemini-test").generate("prompt", ANALYSIS_GENERATION) == '{"a": 1}'

    def test_no_candidates_is_empty_text(self):
        client = MagicMock()
        client.models.generate_content.return_value.candidates = []
        assert GeminiInvoker(client, "gemini-test").generate("prompt", PLAN_GENERATION) == ""

    def test_sends_prompt_model_and_sampling(self):
        client = _client_returning(_part("ok"))
        GeminiInvoker(client, "gemini-test").generate("Analyze this", ANALYSIS_GENERATION)

        kwargs = client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["contents"][0].parts[0].text == "Analyze this"
        config = kwargs["config"]
        assert config.temperature == 0.7
        assert config.top_k == 40
        assert config.top_p == 0.95
        assert config.max_output_tokens == 2048

    def test_plan_has_larger_token_ceiling(self):
        assert PLAN_GENERATION.max_output_tokens == 4096
        assert PLAN_GENERATION.temperature == 0.8
        assert PLAN_GENERATION.max_output_tokens > ANALYSIS_GENERATION.max_output_tokens


class TestErrors:

    def test_api_error_becomes_upstream_error_with_status(self):
        client = MagicMock()
        client.models.generate_content.side_effect = genai_errors.ServerError(
            503, {"error": {"code": 503, "message": "model overloaded", "status": "UNAVAILABLE"}}
        )
        with pytest.raises(UpstreamError) as exc_info:
            GeminiInvoker(client, "gemini-test").generate("prompt", ANALYSIS_GENERATION)
        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "Gemini API error: 503"
        assert "overloaded" not in exc_info.value.detail

    def test_timeout_becomes_upstream_error(self):
        client = MagicMock()
        client.models.generate_content.side_effect = httpx.ReadTimeout("timed out")
        with pytest.raises(UpstreamError, match="request failed"):
            GeminiInvoker(client, "gemini-test").generate("prompt", PLAN_GENERATION)

    def test_single_attempt_no_retry(self):
        client = MagicMock()
        client.models.generate_content.side_effect = genai_errors.ServerError(
            500, {"error": {"code": 500, "message": "boom", "status": "INTERNAL"}}
        )
        with pytest.raises(UpstreamError):
            GeminiInvoker(client, "gemini-test").generate("prompt", ANALYSIS_GENERATION)
        assert client.models.generate_content.call_count == 1