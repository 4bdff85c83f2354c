"""HTTP client for hosted LLM inference.

Speaks two envelopes:
  - 'openai': chat-completions API (OpenAI, Groq, Together, Ollama /v1, ...)
  - 'huggingface': Inference API text-generation ([{"generated_text": ...}])

One LLMClient is built per process and only holds configuration, so it is
safe to share across request threads.
"""
import http.client
import json
import logging
import threading
import time
import urllib.request
import urllib.error

from config.settings import (
    LLM_PROVIDER, LLM_BASE_URL, LLM_API_KEY, LLM_MODELS,
    LLM_TIMEOUT, LLM_MAX_TOKENS, LLM_TEMPERATURE,
)

logger = logging.getLogger(__name__)

# HTTP statuses meaning "this model can't serve right now, try another"
UNAVAILABLE_STATUSES = {404, 410, 429, 503}
UNAVAILABLE_MARKERS = ('loading', 'unavailable', 'rate limit', 'overloaded')


class LLMError(Exception):
    """Base class for provider failures."""


class LLMConfigurationError(LLMError):
    """Provider is not configured (e.g. API key missing)."""


class LLMUnavailableError(LLMError):
    """Model is loading, rate limited, or not served by the provider."""


class LLMResponseError(LLMError):
    """Provider answered, but not with usable text."""


class LLMClient:
    def __init__(self, provider, base_url, api_key, models, timeout=60.0,
                 max_tokens=4096, temperature=0.7):
        if provider not in ('openai', 'huggingface'):
            raise LLMConfigurationError(f'Unknown LLM provider: {provider}')
        self.provider = provider
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.models = tuple(models)
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.temperature = temperature

    def ask(self, system_prompt, user_prompt, max_tokens=None, temperature=None):
        """Send one prompt, trying each candidate model until one answers.

        Returns (response_text, model_used, full_prompt).
        Raises LLMConfigurationError, LLMUnavailableError, LLMResponseError,
        or ConnectionError for network failures and timeouts.
        """
        if not self.api_key:
            raise LLMConfigurationError(
                'LLM API key is not configured. Set LLM_API_KEY in your .env file.'
            )
        if not self.models:
            raise LLMConfigurationError('No LLM models configured (LLM_MODELS).')

        full_prompt = f"SYSTEM: {system_prompt}\n\nUSER: {user_prompt}"
        max_tokens = max_tokens or self.max_tokens
        temperature = self.temperature if temperature is None else temperature

        last_error = None
        for model in self.models:
            try:
                text = self._call(model, system_prompt, user_prompt, full_prompt,
                                  max_tokens, temperature)
            except LLMUnavailableError as e:
                logger.warning('Model %s unavailable: %s', model, e)
                last_error = e
                continue
            return text, model, full_prompt
        raise last_error

    def _call(self, model, system_prompt, user_prompt, full_prompt,
              max_tokens, temperature):
        if self.provider == 'huggingface':
            url = f"{self.base_url}/models/{model}"
            payload = {
                'inputs': full_prompt,
                'parameters': {
                    'max_new_tokens': max_tokens,
                    'temperature': temperature,
                    'return_full_text': False,
                },
            }
        else:
            url = f"{self.base_url}/chat/completions"
            payload = {
                'model': model,
                'messages': [
                    {'role': 'system', 'content': system_prompt},
                    {'role': 'user', 'content': user_prompt},
                ],
                'temperature': temperature,
                'max_tokens': max_tokens,
            }

        req = urllib.request.Request(
            url,
            data=json.dumps(payload).encode(),
            headers={
                'Content-Type': 'application/json',
                'Authorization': f'Bearer {self.api_key}',
            },
            method='POST',
        )

        t0 = time.monotonic()
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                body = resp.read()
        except urllib.error.HTTPError as e:
            detail = e.read().decode('utf-8', errors='replace')[:300]
            if e.code in UNAVAILABLE_STATUSES:
                raise LLMUnavailableError(f'HTTP {e.code}: {detail}') from e
            raise LLMResponseError(f'HTTP {e.code}: {detail}') from e
        except http.client.HTTPException as e:
            # IncompleteRead, BadStatusLine: the connection broke mid-response
            logger.error('LLM response from %s was cut off: %r', model, e)
            raise ConnectionError(
                f"Broken response from LLM provider at {self.base_url}: {e!r}") from e
        except OSError as e:
            # URLError, socket timeouts, connection resets
            logger.error('LLM request failed: %s', e)
            raise ConnectionError(f"Cannot reach LLM provider at {self.base_url}: {e}") from e
        elapsed = time.monotonic() - t0

        try:
            result = json.loads(body)
        except ValueError as e:
            raise LLMResponseError(f'Provider returned non-JSON body: {body[:200]!r}') from e

        text = self._extract_text(result)
        if not text.strip():
            raise LLMResponseError(f'Model {model} returned empty text')

        logger.info('LLM %s: %d chars, %.1fs', model, len(text), elapsed)
        return text

    def _extract_text(self, result):
        if isinstance(result, dict) and result.get('error'):
            error = result['error']
            message = error.get('message', '') if isinstance(error, dict) else error
            message = str(message)
            if any(marker in message.lower() for marker in UNAVAILABLE_MARKERS):
                raise LLMUnavailableError(message)
            raise LLMResponseError(message)

        if self.provider == 'huggingface':
            if isinstance(result, list) and result and isinstance(result[0], dict):
                result = result[0]
            if not isinstance(result, dict):
                raise LLMResponseError('generated_text missing from response')
            text = result.get('generated_text')
            return text if isinstance(text, str) else ''

        choices = result.get('choices') if isinstance(result, dict) else None
        if not isinstance(choices, list) or not choices:
            raise LLMResponseError('choices missing from response')
        first = choices[0] if isinstance(choices[0], dict) else {}
        message = first.get('message')
        if not isinstance(message, dict):
            raise LLMResponseError(
                f'choices[0].message is {type(message).__name__}, expected object')
        content = message.get('content')
        return content if isinstance(content, str) else ''


_client = None
_client_lock = threading.Lock()


def get_client():
    """Return the process-wide LLMClient, building it on first use."""
    global _client
    with _client_lock:
        if _client is None:
            _client = LLMClient(
                provider=LLM_PROVIDER,
                base_url=LLM_BASE_URL,
                api_key=LLM_API_KEY,
                models=LLM_MODELS,
                timeout=LLM_TIMEOUT,
                max_tokens=LLM_MAX_TOKENS,
                temperature=LLM_TEMPERATURE,
            )
            logger.info('LLM client ready: provider=%s models=%s',
                        LLM_PROVIDER, ', '.join(LLM_MODELS))
    return _client


def ask(system_prompt, user_prompt, max_tokens=None, temperature=None):
    """Send a prompt through the shared client.

    Returns (response_text, model_used, full_prompt).
    """
    return get_client().ask(system_prompt, user_prompt,
                            max_tokens=max_tokens, temperature=temperature)
