"""Turns the model's structured-analysis reply into a StructuredSummary."""
import json
import logging

from pydantic import ValidationError

from healthmate.schemas.insight import StructuredSummary

logger = logging.getLogger(__name__)

FALLBACK_SUMMARY = "AI could not structure the data properly."


def fallback_summary() -> StructuredSummary:
    return StructuredSummary(summary=FALLBACK_SUMMARY)


def parse_structured_summary(raw: str) -> StructuredSummary:
    """Parse the reply as a JSON object; anything else gives the fallback record. Never raises."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.error("Failed to parse model JSON: %s", e)
        return fallback_summary()
    if not isinstance(data, dict):
        logger.error("Model JSON is not an object: %s", type(data).__name__)
        return fallback_summary()
    try:
        return StructuredSummary.model_validate(data)
    except ValidationError as e:
        logger.error("Model JSON has an unexpected shape: %s", e)
        return fallback_summary()
