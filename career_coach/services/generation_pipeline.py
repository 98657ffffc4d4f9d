"""Shared generate -> sanitize -> parse -> validate pipeline used by every JSON artifact."""

from typing import Optional, Type

from career_coach.schemas.artifacts import Artifact
from career_coach.services.ai_providers import DualProviderGenerator, GenerationRequest, get_generator
from career_coach.services.errors import ResponseParseError
from career_coach.services.response_sanitizer import parse_json_response
from career_coach.utils.logger import logger


async def generate_artifact(
    request: GenerationRequest,
    schema: Type[Artifact],
    artifact: str,
    generator: Optional[DualProviderGenerator] = None,
) -> dict:
    """
    Produce one fully-populated artifact or raise.

    Raises:
        ProviderUnavailableError: both providers failed
        ResponseParseError: output is not a JSON object or lacks a required field
    """
    generator = generator or get_generator()

    raw_text = await generator.generate(request)
    parsed = parse_json_response(raw_text)

    if not isinstance(parsed, dict):
        raise ResponseParseError(
            f"Expected a JSON object for {artifact}, got {type(parsed).__name__}",
            raw_text=raw_text,
        )

    missing = schema.missing_required(parsed)
    if missing:
        raise ResponseParseError(
            f"Model output for {artifact} is missing: {', '.join(missing)}",
            raw_text=raw_text,
        )

    logger.info(f"[Pipeline] Generated {artifact} ({len(raw_text)} chars)")
    return schema.coerce(parsed)
