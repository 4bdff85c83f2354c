"""Build the system and user prompts for roadmap generation."""
from config.settings import ROADMAP_DEFAULTS

ROADMAP_SHAPE = """{
  "goal": "string",
  "totalWeeks": number,
  "weeklyHours": number,
  "roadmap": [
    {
      "week": number,
      "summary": "string",
      "topics": [
        {
          "title": "string",
          "description": "string",
          "estimatedHours": number,
          "whyImportant": "string",
          "whyThisOrder": "string",
          "commands": ["string"],
          "files": ["string"],
          "tools": ["string"],
          "outcome": "string"
        }
      ],
      "resources": ["string"]
    }
  ]
}"""

SYSTEM_PROMPT = f"""You are an expert learning-path planner. You turn a learner's goal
and time budget into a week-by-week roadmap of small, execution-ready topics.

Return ONLY raw JSON in this exact format:
{ROADMAP_SHAPE}

Rules:
1. Return ONLY the JSON object. No prose, no markdown, no ``` fences, no commentary.
2. Use double quotes for every key and string value.
3. Number weeks sequentially starting at 1.
4. Each topic is one atomic unit of study taking 1-3 hours.
5. Order topics from foundational to advanced; whyThisOrder explains the position.
6. commands, files and tools list concrete things the learner will type, create or install.
7. outcome states what the learner can do after finishing the topic."""


def topics_per_week(weekly_hours):
    """One topic per HOURS_PER_TOPIC hours, never fewer than one."""
    return max(1, weekly_hours // ROADMAP_DEFAULTS['hours_per_topic'])


def build(goal, weekly_hours, total_weeks, skills=()):
    """Build prompts for a roadmap request.

    Returns (system_prompt, user_prompt).
    """
    per_week = topics_per_week(weekly_hours)
    total_topics = total_weeks * per_week
    skills_str = ', '.join(skills) if skills else 'None stated'

    user_prompt = f"""Create a learning roadmap for:
- Goal: {goal}
- Time budget: {weekly_hours} hours per week
- Duration: {total_weeks} weeks
- Current skills: {skills_str}

Produce exactly {total_weeks} weeks with {per_week} topics per week
({total_topics} topics in total). Set "goal" to "{goal}", "totalWeeks" to {total_weeks}
and "weeklyHours" to {weekly_hours}.

Required JSON shape:
{ROADMAP_SHAPE}

Return JSON only."""

    return SYSTEM_PROMPT, user_prompt
