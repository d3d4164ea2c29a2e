"""
Inbound payload validation for the AI endpoints.

Runs before any storage read or model call. Every rejection is a
BadRequestError (400) with a message the client can act on.
"""
import json
from typing import Any

from fastapi import Request
from pydantic import ValidationError

from core.exceptions import BadRequestError
from schemas import AnalyzeVideoRequest, GenerateTrainingPlanRequest


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "body"
    return f"Invalid {field}: {first['msg']}"


def _require_object(body: Any) -> dict:
    if not isinstance(body, dict):
        raise BadRequestError("Request body must be a JSON object")
    return body


def validate_analysis_request(body: Any) -> AnalyzeVideoRequest:
    """Both videoId and athleteId must be present and non-empty."""
    try:
        request = AnalyzeVideoRequest.model_validate(_require_object(body))
    except ValidationError as e:
        raise BadRequestError(_describe(e)) from e

    if not request.videoId or not request.athleteId:
        raise BadRequestError("Missing videoId or athleteId")
    return request


def validate_plan_request(body: Any) -> GenerateTrainingPlanRequest:
    """athleteId is mandatory; goals, focusAreas and duration (default 8 weeks) are optional."""
    try:
        request = GenerateTrainingPlanRequest.model_validate(_require_object(body))
    except ValidationError as e:
        raise BadRequestError(_describe(e)) from e

    if not request.athleteId:
        raise BadRequestError("Missing athleteId")
    return request


async def read_json_body(request: Request) -> Any:
    """Decode the request body; an empty or non-JSON body is a bad request."""
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise BadRequestError("Request body must be valid JSON") from e
