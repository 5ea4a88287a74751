import json
import logging
import re

from pydantic import ValidationError

from models import AnalysisResult

logger = logging.getLogger(__name__)

# Matches ```json / ``` fences, with the newline that usually follows or precedes them
CODE_FENCE_RE = re.compile(r"```(?:json)?[ \t]*\n?|\n?```", re.IGNORECASE)


class AnalysisParseError(ValueError):
    """Raised when the model's reply is not a usable AnalysisResult."""


def strip_code_fences(text: str) -> str:
    """Removes markdown code fences the model may wrap its JSON in."""
    return CODE_FENCE_RE.sub("", text or "").strip()


def parse_analysis(text: str) -> AnalysisResult:
    """
    Parses the model's text reply into an AnalysisResult.

    Raises:
        AnalysisParseError: the reply is empty, not JSON, not a JSON object,
            or does not match the AnalysisResult schema.
    """
    clean_json = strip_code_fences(text)
    if not clean_json:
        raise AnalysisParseError("Model returned an empty response.")

    try:
        data = json.loads(clean_json)
    except json.JSONDecodeError as e:
        logger.error(f"Model reply is not valid JSON ({e}): {clean_json[:200]}...")
        raise AnalysisParseError(f"Model reply is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise AnalysisParseError(f"Expected a JSON object, got {type(data).__name__}.")

    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as e:
        logger.error(f"Model reply does not match the expected schema: {e}")
        raise AnalysisParseError(f"Model reply does not match the expected schema: {e.error_count()} error(s).") from e
