"""Roadmap request: validated, immutable user input for one generation."""
from collections import namedtuple

from config.settings import ROADMAP_DEFAULTS

RoadmapRequest = namedtuple(
    'RoadmapRequest', ['goal', 'weekly_hours', 'total_weeks', 'skills'],
)

GOAL_REQUIRED = 'Goal is required'
WEEKLY_HOURS_REQUIRED = 'Valid weekly hours is required (minimum 1)'
DURATION_REQUIRED = 'Valid total duration is required (minimum 1)'
BODY_REQUIRED = 'Request body must be a JSON object'


class RequestValidationError(ValueError):
    """The client sent a request that cannot produce a roadmap."""


def _positive_int(value):
    """Coerce a JSON number (or numeric string) to an int >= 1, else None."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None
    return number if number >= 1 else None


def _parse_skills(raw):
    if not raw:
        return ()
    if isinstance(raw, str):
        raw = raw.split(',')
    if not isinstance(raw, (list, tuple)):
        return ()
    return tuple(str(s).strip() for s in raw if str(s).strip())


def from_payload(payload):
    """Validate a POST /api/roadmap body and build a RoadmapRequest.

    Oversized hour and week values are clamped to ROADMAP_DEFAULTS caps.
    Raises RequestValidationError with a client-facing message.
    """
    if not isinstance(payload, dict):
        raise RequestValidationError(BODY_REQUIRED)

    goal = payload.get('goal')
    if not isinstance(goal, str) or not goal.strip():
        raise RequestValidationError(GOAL_REQUIRED)

    weekly_hours = _positive_int(payload.get('weeklyHours'))
    if weekly_hours is None:
        raise RequestValidationError(WEEKLY_HOURS_REQUIRED)

    total_weeks = _positive_int(payload.get('totalDuration'))
    if total_weeks is None:
        raise RequestValidationError(DURATION_REQUIRED)

    return RoadmapRequest(
        goal=goal.strip(),
        weekly_hours=min(weekly_hours, ROADMAP_DEFAULTS['max_weekly_hours']),
        total_weeks=min(total_weeks, ROADMAP_DEFAULTS['max_weeks']),
        skills=_parse_skills(payload.get('skills')),
    )
