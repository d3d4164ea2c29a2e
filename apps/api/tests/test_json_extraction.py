"""Tests for extracting structured results from free-form model output."""
import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent))

from schemas import AnalysisResult, TrainingPlanResult
from services.fallbacks import fallback_analysis, fallback_training_plan
from services.json_extraction import extract_or_fallback, find_json_object, parse_json_object
from fixtures.ai_results import VALID_ANALYSIS, valid_plan


class TestFindJsonObject:

    def test_object_wrapped_in_prose(self):
        text = 'Sure! Here you go: {"a": 1} Let me know if you need more.'
        assert find_json_object(text) == '{"a": 1}'

    def test_markdown_fenced_object(self):
        text = '```json\n{"a": {"b": [1, 2]}}\n```'
        assert find_json_object(text) == '{"a": {"b": [1, 2]}}'

    def test_nested_braces_match_outermost(self):
        text = 'x {"outer": {"inner": {}}} y {"second": 2}'
        assert find_json_object(text) == '{"outer": {"inner": {}}}'

    def test_braces_inside_strings_ignored(self):
        text = 'prefix {"note": "use {curly} and \\"quoted\\" text", "n": 1} suffix'
        assert json.loads(find_json_object(text)) == {"note": 'use {curly} and "quoted" text', "n": 1}

    def test_no_braces(self):
        assert find_json_object("I could not analyze this video.") is None

    def test_unbalanced(self):
        assert find_json_object('{"a": {"b": 1}') is None


class TestParseJsonObject:

    def test_empty_text(self):
        assert parse_json_object("") == (None, "No response text from model")
        assert parse_json_object(None) == (None, "No response text from model")

    def test_no_json(self):
        parsed, error = parse_json_object("plain prose only")
        assert parsed is None
        assert error == "No JSON found in model response"

    def test_invalid_json(self):
        parsed, error = parse_json_object("{overall_score: 80,}")
        assert parsed is None
        assert error.startswith("Invalid JSON in model response")

    def test_valid(self):
        assert parse_json_object('ok {"a": [1, "}"]}') == ({"a": [1, "}"]}, None)


class TestExtractOrFallback:

    def test_valid_analysis_kept_verbatim(self):
        text = "Analysis:\n" + json.dumps(VALID_ANALYSIS)
        extraction = extract_or_fallback(text, AnalysisResult, fallback_analysis)
        assert extraction.used_fallback is False
        assert extraction.error is None
        assert extraction.payload == VALID_ANALYSIS
        assert extraction.result.ai_confidence == 88

    @pytest.mark.parametrize("text", ["", "No JSON here", "{not: valid}"])
    def test_unusable_text_falls_back(self, text):
        extraction = extract_or_fallback(text, AnalysisResult, fallback_analysis)
        assert extraction.used_fallback is True
        assert extraction.payload == fallback_analysis()
        assert extraction.result.ai_confidence == 60

    def test_out_of_range_score_falls_back(self):
        payload = dict(VALID_ANALYSIS, speed_score=140)
        extraction = extract_or_fallback(json.dumps(payload), AnalysisResult, fallback_analysis)
        assert extraction.used_fallback is True
        assert "AnalysisResult" in extraction.error

    def test_missing_field_falls_back(self):
        payload = {k: v for k, v in VALID_ANALYSIS.items() if k != "weaknesses"}
        extraction = extract_or_fallback(json.dumps(payload), AnalysisResult, fallback_analysis)
        assert extraction.used_fallback is True

    def test_extra_fields_allowed(self):
        payload = dict(VALID_ANALYSIS, injury_risk="low")
        extraction = extract_or_fallback(json.dumps(payload), AnalysisResult, fallback_analysis)
        assert extraction.used_fallback is False
        assert extraction.payload["injury_risk"] == "low"

    def test_plan_duration_must_match_request(self):
        fallback = lambda: fallback_training_plan("cricket", 3, 10)
        extraction = extract_or_fallback(
            json.dumps(valid_plan(8)), TrainingPlanResult, fallback, context={"duration_weeks": 10}
        )
        assert extraction.used_fallback is True
        assert extraction.result.duration_weeks == 10

    def test_plan_numeric_reps_and_capitalized_intensity_accepted(self):
        plan = valid_plan(4)
        plan["weeks"][0]["days"][0]["exercises"][0]["reps"] = 12
        plan["weeks"][0]["days"][0]["intensity"] = "High"
        fallback = lambda: fallback_training_plan("cricket", 3, 4)
        extraction = extract_or_fallback(
            json.dumps(plan), TrainingPlanResult, fallback, context={"duration_weeks": 4}
        )
        assert extraction.used_fallback is False
        assert extraction.result.weeks[0].days[0].exercises[0].reps == "12"
        assert extraction.result.weeks[0].days[0].intensity == "high"
        # the stored payload is what the model sent
        assert extraction.payload["weeks"][0]["days"][0]["exercises"][0]["reps"] == 12

    def test_plan_difficulty_out_of_range_falls_back(self):
        plan = dict(valid_plan(4), difficulty_level=7)
        fallback = lambda: fallback_training_plan("cricket", 3, 4)
        extraction = extract_or_fallback(
            json.dumps(plan), TrainingPlanResult, fallback, context={"duration_weeks": 4}
        )
        assert extraction.used_fallback is True
        assert extraction.result.difficulty_level == 4
