"""Generate a roadmap via the LLM provider."""
import logging

from ai.llm_client import ask
from ai.json_utils import parse_roadmap_json
from ai.prompt_builder import build

logger = logging.getLogger(__name__)


def generate(request):
    """Prompt the model for a roadmap and parse its reply.

    Returns (roadmap_data, model_used, prompt_used). roadmap_data is the
    parsed but not yet validated dict. Provider and parse errors propagate.
    """
    system_prompt, user_prompt = build(
        request.goal, request.weekly_hours, request.total_weeks, request.skills,
    )
    text, model, prompt = ask(system_prompt, user_prompt)
    logger.info('Raw LLM response for "%s": %s', request.goal, text[:500])
    data = parse_roadmap_json(text)
    return data, model, prompt
