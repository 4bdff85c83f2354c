"""Pathwise: centralized configuration."""
import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEBUG = os.environ.get('DEBUG', '').lower() in ('1', 'true', 'yes', 'on')
SECRET_KEY = os.environ.get('SECRET_KEY', 'pathwise-dev-key')

# LLM provider: 'openai' (any chat-completions compatible API) or 'huggingface'
LLM_PROVIDER = os.environ.get('LLM_PROVIDER', 'openai').lower()
LLM_BASE_URL = os.environ.get('LLM_BASE_URL', 'https://api.openai.com/v1')
LLM_API_KEY = (os.environ.get('LLM_API_KEY')
               or os.environ.get('OPENAI_API_KEY')
               or os.environ.get('HF_API_KEY', ''))

# Candidate models, tried in order while the provider reports them unavailable
LLM_MODELS = [
    m.strip()
    for m in os.environ.get('LLM_MODELS', 'gpt-4o-mini').split(',')
    if m.strip()
]
LLM_TIMEOUT = float(os.environ.get('LLM_TIMEOUT', '60'))
LLM_MAX_TOKENS = int(os.environ.get('LLM_MAX_TOKENS', '4096'))
LLM_TEMPERATURE = float(os.environ.get('LLM_TEMPERATURE', '0.7'))

# Roadmap sizing. Requests above the caps are clamped, and the response
# echoes the clamped weeklyHours/totalWeeks. The caps bound prompt and
# fallback size.
ROADMAP_DEFAULTS = {
    'hours_per_topic': 2,
    'max_weeks': 52,
    'max_weekly_hours': 80,
}
