"""Roadmap generation orchestrator with validation, repair, and fallback.

    BUILD_PROMPT -> CALL_MODEL -> SANITIZE -> PARSE -> VALIDATE -> NORMALIZE
                       |                       |         |          |
                       +-----------------------+---------+----------+--> FALLBACK

Every AI-path failure lands on the local template generator, which does no
I/O and cannot fail, so callers always get a roadmap for a valid request.
"""
import json
import logging

from ai import roadmap_generator
from ai.llm_client import LLMError
from ai.local_generators import generate_fallback_roadmap
from ai.prompt_builder import topics_per_week
from engine.roadmap_normalizer import EmptyRoadmapError, normalize_roadmap
from engine.roadmap_validator import validate_roadmap

logger = logging.getLogger(__name__)

SOURCE_AI = 'ai'
SOURCE_FALLBACK = 'fallback'


class RoadmapGenerationError(RuntimeError):
    """Neither the AI path nor the fallback produced a roadmap."""


def _try_ai(request):
    """Run the AI path. Returns a normalized roadmap or None on any failure."""
    try:
        data, model, _ = roadmap_generator.generate(request)
    except (LLMError, ConnectionError) as e:
        logger.warning('Model call failed for "%s": %s', request.goal, e)
        return None
    except (json.JSONDecodeError, ValueError) as e:
        logger.warning('Could not parse model output for "%s": %s', request.goal, e)
        return None

    is_valid, reason = validate_roadmap(data)
    if not is_valid:
        logger.warning('Validation rejected roadmap from %s: %s', model, reason)
        return None

    try:
        roadmap = normalize_roadmap(data, request)
    except EmptyRoadmapError as e:
        logger.warning('Normalization rejected roadmap from %s: %s', model, e)
        return None

    logger.info('AI roadmap for "%s" via %s: %d weeks',
                request.goal, model, roadmap['totalWeeks'])
    return roadmap


def generate(request):
    """Produce a roadmap for a validated RoadmapRequest.

    Returns (roadmap, source) where source is 'ai' or 'fallback'.
    Raises RoadmapGenerationError only if the fallback itself breaks.
    """
    roadmap = _try_ai(request)
    if roadmap is not None:
        return roadmap, SOURCE_AI

    per_week = topics_per_week(request.weekly_hours)
    try:
        roadmap = generate_fallback_roadmap(
            request.goal, request.weekly_hours, request.total_weeks, per_week,
        )
    except Exception as e:
        logger.exception('Fallback generator failed for "%s"', request.goal)
        raise RoadmapGenerationError(f'Could not generate roadmap: {e}') from e

    logger.info('Fallback roadmap for "%s": %d weeks x %d topics',
                request.goal, request.total_weeks, per_week)
    return roadmap, SOURCE_FALLBACK
