"""Default and repair a validated roadmap into its canonical form.

Runs after validate_roadmap() accepts the parsed JSON. Builds a new dict
rather than editing the parsed one, and never rejects anything except a
roadmap with no topics at all.
"""
import logging

logger = logging.getLogger(__name__)

OPTIONAL_TOPIC_LISTS = ('commands', 'files', 'tools')


class EmptyRoadmapError(ValueError):
    """The roadmap has no topics in any week."""


def _text(value):
    return value.strip() if isinstance(value, str) else ''


def _string_list(value):
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None and str(v).strip()]


def _normalize_topic(topic, week_number, position, goal):
    normalized = dict(topic)
    normalized['title'] = _text(topic.get('title')) or f'Week {week_number} topic {position}'
    normalized['description'] = (_text(topic.get('description'))
                                 or f'Study {normalized["title"]} as part of {goal}.')
    normalized['whyImportant'] = (_text(topic.get('whyImportant'))
                                  or f'Builds a skill needed for {goal}.')
    normalized['whyThisOrder'] = (_text(topic.get('whyThisOrder'))
                                  or f'Follows the earlier topics of week {week_number}.')
    for field in OPTIONAL_TOPIC_LISTS:
        if field in topic:
            normalized[field] = _string_list(topic[field])
    return normalized


def count_topics(roadmap):
    """Total number of topics across all weeks."""
    return sum(len(week.get('topics') or []) for week in roadmap.get('roadmap', []))


def normalize_roadmap(data, request):
    """Fill defaults from the request and renumber weeks sequentially.

    totalWeeks always follows the number of week entries actually returned.
    Raises EmptyRoadmapError if no week has any topics.
    """
    goal = data.get('goal') or request.goal

    weeks = []
    for index, week in enumerate(data.get('roadmap') or [], start=1):
        if week.get('week') != index:
            logger.debug('Renumbering week %r to %d', week.get('week'), index)
        raw_topics = week.get('topics') if isinstance(week.get('topics'), list) else []
        weeks.append({
            'week': index,
            'summary': _text(week.get('summary')) or f'Week {index} focus for {goal}',
            'topics': [
                _normalize_topic(topic, index, position, goal)
                for position, topic in enumerate(raw_topics, start=1)
            ],
            'resources': _string_list(week.get('resources')),
        })

    declared_weeks = data.get('totalWeeks') or request.total_weeks
    if declared_weeks != len(weeks):
        logger.info('Model declared %s weeks but returned %d; using %d',
                    declared_weeks, len(weeks), len(weeks))

    roadmap = {
        'goal': goal,
        'totalWeeks': len(weeks),
        'weeklyHours': data.get('weeklyHours') or request.weekly_hours,
        'roadmap': weeks,
    }

    if count_topics(roadmap) == 0:
        raise EmptyRoadmapError(f'Roadmap for "{goal}" has no topics')
    return roadmap
