"""Tests for services/roadmap_service.py: AI path and fallback transitions."""
import http.client
import json
from unittest.mock import patch, MagicMock

import pytest

from ai import llm_client
from ai.llm_client import LLMConfigurationError, LLMUnavailableError, LLMResponseError
from models.roadmap_request import RoadmapRequest
from services import roadmap_service

REQUEST = RoadmapRequest(goal='Become a Frontend Developer', weekly_hours=10,
                         total_weeks=4, skills=())


def _topic(n):
    return {
        'title': f'Topic {n}',
        'description': 'desc',
        'estimatedHours': 2,
        'whyImportant': 'because',
        'whyThisOrder': 'order',
    }


def _ai_roadmap(weeks=2):
    return {
        'goal': 'Become a Frontend Developer',
        'totalWeeks': 4,
        'weeklyHours': 10,
        'roadmap': [
            {'week': w, 'summary': f'Week {w}', 'topics': [_topic(w)]}
            for w in range(1, weeks + 1)
        ],
    }


def _mock_generate(data):
    def _gen(request):
        return data, 'test-model', 'test-prompt'
    return _gen


def _assert_fallback(roadmap, source):
    assert source == roadmap_service.SOURCE_FALLBACK
    assert roadmap['totalWeeks'] == 4
    assert roadmap['weeklyHours'] == 10
    assert len(roadmap['roadmap']) == 4
    assert all(len(w['topics']) == 5 for w in roadmap['roadmap'])


@patch('services.roadmap_service.roadmap_generator.generate')
def test_ai_success(mock_gen):
    mock_gen.side_effect = _mock_generate(_ai_roadmap())
    roadmap, source = roadmap_service.generate(REQUEST)
    assert source == roadmap_service.SOURCE_AI
    assert roadmap['roadmap'][0]['topics'][0]['title'] == 'Topic 1'


@patch('services.roadmap_service.roadmap_generator.generate')
def test_ai_total_weeks_trusts_roadmap_length(mock_gen):
    mock_gen.side_effect = _mock_generate(_ai_roadmap(weeks=2))
    roadmap, _ = roadmap_service.generate(REQUEST)
    assert roadmap['totalWeeks'] == 2
    assert [w['week'] for w in roadmap['roadmap']] == [1, 2]


@pytest.mark.parametrize('error', [
    LLMConfigurationError('no key'),
    LLMUnavailableError('loading'),
    LLMResponseError('empty'),
    ConnectionError('timeout'),
])
@patch('services.roadmap_service.roadmap_generator.generate')
def test_model_call_failure_falls_back(mock_gen, error):
    mock_gen.side_effect = error
    _assert_fallback(*roadmap_service.generate(REQUEST))


@patch('services.roadmap_service.roadmap_generator.generate')
def test_parse_failure_falls_back(mock_gen):
    mock_gen.side_effect = json.JSONDecodeError('No JSON', '', 0)
    _assert_fallback(*roadmap_service.generate(REQUEST))


@patch('services.roadmap_service.roadmap_generator.generate')
def test_validation_failure_falls_back(mock_gen):
    data = _ai_roadmap()
    del data['roadmap'][0]['topics'][0]['estimatedHours']
    mock_gen.side_effect = _mock_generate(data)
    _assert_fallback(*roadmap_service.generate(REQUEST))


@patch('services.roadmap_service.roadmap_generator.generate')
def test_zero_topics_falls_back(mock_gen):
    data = _ai_roadmap()
    for week in data['roadmap']:
        week['topics'] = []
    mock_gen.side_effect = _mock_generate(data)
    _assert_fallback(*roadmap_service.generate(REQUEST))


@patch('ai.roadmap_generator.ask', return_value=('', 'm', 'p'))
def test_empty_provider_text_falls_back(mock_ask):
    _assert_fallback(*roadmap_service.generate(REQUEST))
    assert mock_ask.call_count == 1


@patch('ai.roadmap_generator.ask')
def test_provider_text_through_full_pipeline(mock_ask):
    text = '```json\n' + json.dumps(_ai_roadmap(weeks=4)) + '\n```\nEnjoy!'
    mock_ask.return_value = (text, 'm', 'p')
    roadmap, source = roadmap_service.generate(REQUEST)
    assert source == roadmap_service.SOURCE_AI
    assert roadmap['totalWeeks'] == 4


@patch('services.roadmap_service.generate_fallback_roadmap',
       side_effect=RuntimeError('template bug'))
@patch('services.roadmap_service.roadmap_generator.generate',
       side_effect=ConnectionError('down'))
def test_broken_fallback_raises_generation_error(mock_gen, mock_fallback):
    with pytest.raises(roadmap_service.RoadmapGenerationError):
        roadmap_service.generate(REQUEST)


@patch('services.roadmap_service.roadmap_generator.generate')
def test_unexpected_error_propagates(mock_gen):
    mock_gen.side_effect = KeyError('bug')
    with pytest.raises(KeyError):
        roadmap_service.generate(REQUEST)


@patch('urllib.request.urlopen')
def test_truncated_provider_response_falls_back(mock_open, monkeypatch):
    monkeypatch.setattr(llm_client, '_client', llm_client.LLMClient(
        'openai', 'https://example.test/v1', 'sk-test', ['model-a'], timeout=5,
    ))
    resp = MagicMock()
    resp.read.side_effect = http.client.IncompleteRead(b'{"cho', 500)
    resp.__enter__.return_value = resp
    resp.__exit__.return_value = False
    mock_open.return_value = resp
    _assert_fallback(*roadmap_service.generate(REQUEST))
