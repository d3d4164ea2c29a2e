"""Structured-result extraction from free-form model output.

The model is asked for JSON but tends to wrap it in prose or markdown
fences. extract_or_fallback() treats the output as untrusted text: it finds
the first balanced {...} object, parses it, validates it against a pydantic
schema, and on any failure substitutes a fallback result. Both paths return
the same Extraction type, so callers never branch on exceptions here.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def find_json_object(text: str) -> Optional[str]:
    """Return the substring from the first '{' to its matching '}', or None.

    Braces inside JSON string literals do not count toward nesting.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def parse_json_object(text: Optional[str]) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """Locate and parse the embedded object. Returns (object, None) or (None, reason)."""
    if not text or not text.strip():
        return None, "No response text from model"

    candidate = find_json_object(text)
    if candidate is None:
        return None, "No JSON found in model response"

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        return None, f"Invalid JSON in model response: {e}"
    return parsed, None


@dataclass
class Extraction(Generic[ModelT]):
    """Outcome of extract_or_fallback.

    result is the validated view used for typed access; payload is the dict to
    persist (the parsed object verbatim, or the fallback dict).
    """
    result: ModelT
    payload: Dict[str, Any]
    used_fallback: bool = False
    error: Optional[str] = None


def extract_or_fallback(
    text: Optional[str],
    schema: Type[ModelT],
    fallback: Callable[[], Dict[str, Any]],
    context: Optional[Dict[str, Any]] = None,
) -> Extraction[ModelT]:
    """Parse-or-default: the extracted result when it validates, otherwise the fallback."""
    payload, error = parse_json_object(text)
    if payload is not None:
        try:
            result = schema.model_validate(payload, context=context)
            return Extraction(result=result, payload=payload)
        except ValidationError as e:
            error = f"Model result failed {schema.__name__} validation: {e.error_count()} error(s), first: {e.errors()[0]['msg']}"

    logger.warning(f"Using fallback {schema.__name__}: {error}")
    fallback_payload = fallback()
    return Extraction(
        result=schema.model_validate(fallback_payload, context=context),
        payload=fallback_payload,
        used_fallback=True,
        error=error,
    )
