"""Local roadmap generator that doesn't need an LLM.

Used when the AI path fails. Deterministic: the same request always yields
the same roadmap, and the output passes validate_roadmap().
"""
import re

# Study activity cycle; topic n uses FOCUS_AREAS[(n - 1) % len(FOCUS_AREAS)]
FOCUS_AREAS = [
    ('Core concepts', 'the vocabulary and mental model'),
    ('Environment setup', 'a working local setup'),
    ('Guided exercise', 'a small worked example'),
    ('Deep dive', 'one concept in depth'),
    ('Mini project', 'a self-contained practice project'),
    ('Debugging practice', 'finding and fixing common mistakes'),
    ('Review and notes', 'a written summary of the week'),
]

WEEK_THEMES = ['Foundations', 'Core skills', 'Applied practice', 'Integration',
               'Projects', 'Polish and review']


def _slug(goal):
    """File-name friendly form of the goal: 'Become a Dev' -> 'become-a-dev'."""
    slug = re.sub(r'[^a-z0-9]+', '-', goal.lower()).strip('-')
    return slug[:40].rstrip('-') or 'learning'


def _week_theme(week_number, total_weeks):
    """Spread WEEK_THEMES evenly over the roadmap, in order."""
    index = (week_number - 1) * len(WEEK_THEMES) // max(total_weeks, 1)
    return WEEK_THEMES[min(index, len(WEEK_THEMES) - 1)]


def _build_topic(goal, day, hours):
    focus, target = FOCUS_AREAS[(day - 1) % len(FOCUS_AREAS)]
    slug = _slug(goal)
    return {
        'title': f'Day {day}: {focus} for {goal}',
        'description': f'Spend this session on {target} for {goal}.',
        'estimatedHours': hours,
        'whyImportant': f'{focus} is a building block you need to reach "{goal}".',
        'whyThisOrder': (f'It builds on the previous {day - 1} sessions.'
                         if day > 1 else 'It is the starting point of the roadmap.'),
        'commands': [f'mkdir -p {slug}/day-{day:02d}', f'cd {slug}/day-{day:02d}'],
        'files': [f'{slug}/day-{day:02d}/notes.md'],
        'tools': ['Text editor', 'Terminal'],
        'outcome': f'You can explain and apply {target} for {goal}.',
    }


def generate_fallback_roadmap(goal, weekly_hours, total_weeks, topics_per_week):
    """Build a template roadmap with exactly total_weeks x topics_per_week topics.

    Topics are numbered 'Day <n>' across the whole roadmap.
    Returns a roadmap dict in the same shape the AI path produces.
    """
    topics_per_week = max(1, topics_per_week)
    hours = max(1, weekly_hours // topics_per_week)

    weeks = []
    day = 1
    for week_number in range(1, total_weeks + 1):
        topics = []
        for _ in range(topics_per_week):
            topics.append(_build_topic(goal, day, hours))
            day += 1
        theme = _week_theme(week_number, total_weeks)
        weeks.append({
            'week': week_number,
            'summary': f'Week {week_number}: {theme} for {goal}',
            'topics': topics,
            'resources': [
                f'Official documentation for {goal}',
                f'Community tutorials on {theme.lower()} for {goal}',
            ],
        })

    return {
        'goal': goal,
        'totalWeeks': total_weeks,
        'weeklyHours': weekly_hours,
        'roadmap': weeks,
    }
