import json
import logging
from typing import List, Optional

from pydantic import ValidationError

from shared_utils.exceptions import ResponseParseError, SchemaViolationError

from . import constants
from .schemas import AnalysisResult, RemixSource, RemixVariables, ToneLabel

logger = logging.getLogger(__name__)


def build_analysis_prompt() -> str:
    return constants.ANALYSIS_PROMPT


def format_tone_labels(tones: Optional[List[ToneLabel]]) -> str:
    """Joins tone labels for the remix prompt, or returns the N/A placeholder."""
    if not tones:
        return constants.MISSING_TONES_PLACEHOLDER
    return ", ".join(tone.label for tone in tones)


def build_remix_prompt(analysis: RemixSource, variables: RemixVariables) -> str:
    return constants.REMIX_PROMPT.format(
        hook=analysis.hook,
        retention=analysis.retention,
        payoff=analysis.payoff,
        sentiment=analysis.sentiment,
        tone_labels=format_tone_labels(analysis.tones),
        niche=variables.niche,
        product=variables.product,
        audience=variables.audience,
        tone=variables.tone,
    )


def strip_code_fences(text: str) -> str:
    """Removes every markdown fence marker, wherever it appears, and trims the result."""
    for marker in constants.CODE_FENCE_MARKERS:
        text = text.replace(marker, "")
    return text.strip()


def parse_analysis_response(raw_text: str) -> AnalysisResult:
    """
    Turns the raw model completion into an AnalysisResult.

    Raises ResponseParseError when the text is not JSON at all and
    SchemaViolationError when it is JSON of the wrong shape.
    """
    clean_text = strip_code_fences(raw_text)
    try:
        payload = json.loads(clean_text)
    except json.JSONDecodeError as e:
        logger.warning(f"Model response is not valid JSON: {e}")
        raise ResponseParseError(f"Model response is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise SchemaViolationError(details=f"Expected a JSON object, got {type(payload).__name__}.")

    try:
        return AnalysisResult.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Model response failed schema validation: {e.error_count()} error(s)")
        raise SchemaViolationError(details=e.errors(include_url=False, include_context=False, include_input=False)) from e
