"""Structural validation of parsed roadmap JSON.

Checks shape only, never content quality. Returns (is_valid, rejection_reason)
so the orchestrator can branch on the result without exception handling.
"""

REQUIRED_TOPIC_STRINGS = ('title', 'description', 'whyImportant', 'whyThisOrder')


def _is_number(value):
    # bool is an int subclass; JSON true/false is not a number here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_topic(topic, week_index, topic_index):
    where = f'week[{week_index}].topics[{topic_index}]'
    if not isinstance(topic, dict):
        return False, f'{where} is not an object'
    for field in REQUIRED_TOPIC_STRINGS:
        if not isinstance(topic.get(field), str):
            return False, f'{where}.{field} missing or not a string'
    if not _is_number(topic.get('estimatedHours')):
        return False, f'{where}.estimatedHours missing or not a number'
    return True, ''


def _validate_week(week, week_index):
    where = f'week[{week_index}]'
    if not isinstance(week, dict):
        return False, f'{where} is not an object'
    if not _is_number(week.get('week')):
        return False, f'{where}.week missing or not a number'
    if not isinstance(week.get('summary'), str):
        return False, f'{where}.summary missing or not a string'
    topics = week.get('topics')
    if not isinstance(topics, list):
        return False, f'{where}.topics missing or not a list'
    for topic_index, topic in enumerate(topics):
        is_valid, reason = _validate_topic(topic, week_index, topic_index)
        if not is_valid:
            return False, reason
    return True, ''


def validate_roadmap(candidate):
    """Validate a parsed roadmap.

    Args:
        candidate: any value produced by json.loads

    Returns:
        (is_valid, reason), reason is '' if valid.
    """
    if not isinstance(candidate, dict):
        return False, f'Roadmap is {type(candidate).__name__}, expected object'

    if not isinstance(candidate.get('goal'), str):
        return False, 'goal missing or not a string'
    if not _is_number(candidate.get('totalWeeks')):
        return False, 'totalWeeks missing or not a number'
    if not _is_number(candidate.get('weeklyHours')):
        return False, 'weeklyHours missing or not a number'

    weeks = candidate.get('roadmap')
    if not isinstance(weeks, list):
        return False, 'roadmap missing or not a list'

    for week_index, week in enumerate(weeks):
        is_valid, reason = _validate_week(week, week_index)
        if not is_valid:
            return False, reason

    return True, ''


def is_valid_roadmap(candidate):
    """Boolean form of validate_roadmap()."""
    return validate_roadmap(candidate)[0]
