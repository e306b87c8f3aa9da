import json
import random
from types import SimpleNamespace

import pytest

from conftest import FailingProvider, FakeProvider
from feedback_core import Settings
from feedback_core.claude import FEEDBACK_PROMPT, ClaudeProvider, build_prompt, create_provider
from feedback_core.heuristics import IMPROVEMENT_SUGGESTIONS
from feedback_core.service import (
    FeedbackHandler,
    FeedbackParseError,
    ValidationError,
    parse_feedback_response,
    validate_text
)
from feedback_core.stats import compute_stats

TEXT = "Please review my plan. We launch next week and need help!"

AI_REPLY = json.dumps({
    'clarity': {'score': 150, 'feedback': 'Clear enough.', 'suggestions': ['a', 'b', 'c']},
    'tone': {'score': 72, 'analysis': 'Friendly.', 'adjustment': 'Keep it up.'},
    'improvement': {'overall': -3, 'suggestions': ['w', 'x', 'y', 'z'], 'revised_excerpt': 'Better.'},
    'stats': {'word_count': 9999},
    'mode': 'demo'
})


@pytest.mark.parametrize('text', [None, '', 123, ['a list'], 'hi', '   short   '])
def test_validate_text_rejects_bad_input(text):
    with pytest.raises(ValidationError):
        validate_text(text)


def test_validate_text_returns_trimmed_text():
    assert validate_text('   long enough text   ') == 'long enough text'


def test_parse_feedback_response_clamps_scores_and_drops_extras():
    feedback = parse_feedback_response('Sure! Here it is:\n' + AI_REPLY)

    assert feedback['clarity']['score'] == 100
    assert feedback['tone']['score'] == 72
    assert feedback['improvement']['overall'] == 0
    assert set(feedback) == {'clarity', 'tone', 'improvement'}


def reply_with(section, **fields):
    """A valid reply with some fields of one section replaced"""
    data = json.loads(AI_REPLY)
    data[section].update(fields)
    return json.dumps(data)


@pytest.mark.parametrize('raw', [
    "Sorry, I can't help with that.",
    '{"clarity": {"score": 80}}',
    '{"clarity": {"score": "high"}, "tone": {"score": 1}, "improvement": {"overall": 1}}',
    '{"clarity": [], "tone": {}, "improvement": {}}',
    AI_REPLY.replace('150', 'Infinity'),
    AI_REPLY.replace('-3', '1e400'),
    AI_REPLY.replace('72', '1' + '0' * 400),
    AI_REPLY.replace('150', 'NaN'),
    reply_with('clarity', feedback=None),
    reply_with('clarity', suggestions=['only one']),
    reply_with('clarity', suggestions=['a', 'b', 'c', 'd', 'e']),
    reply_with('tone', analysis=['not', 'text']),
    reply_with('tone', adjustment=7),
    reply_with('improvement', suggestions='none'),
    reply_with('improvement', suggestions=['a', 'b', 'c', 'd', 'e']),
    reply_with('improvement', suggestions=['a', 2]),
    reply_with('improvement', revised_excerpt=None),
])
def test_parse_feedback_response_rejects_unusable_replies(raw):
    with pytest.raises(FeedbackParseError):
        parse_feedback_response(raw)


def test_demo_mode_without_provider(settings):
    handler = FeedbackHandler(settings, rng=random.Random(1))
    result = handler.handle(TEXT)

    assert handler.ai_available is False
    assert result['mode'] == 'demo'
    assert 'error_message' not in result
    assert result['stats'] == compute_stats(TEXT)


def test_demo_mode_waits_within_configured_delay():
    delays = []
    handler = FeedbackHandler(Settings(), sleep=delays.append)
    handler.handle(TEXT)

    assert len(delays) == 1
    assert 0.6 <= delays[0] <= 1.0


def test_demo_delay_can_be_disabled(settings):
    delays = []
    FeedbackHandler(settings, sleep=delays.append).handle(TEXT)

    assert delays == []


def test_ai_mode_uses_provider_reply_with_fresh_stats(settings):
    provider = FakeProvider(AI_REPLY)
    handler = FeedbackHandler(settings, provider=provider)
    result = handler.handle('  ' + TEXT + '  ', 'Spanish')

    assert provider.calls == [(TEXT, 'Spanish')]
    assert result['mode'] == 'ai'
    assert result['clarity']['feedback'] == 'Clear enough.'
    assert result['stats'] == compute_stats(TEXT)
    assert 'error_message' not in result


def test_non_string_language_defaults_to_english(settings):
    provider = FakeProvider(AI_REPLY)
    FeedbackHandler(settings, provider=provider).handle(TEXT, None)

    assert provider.calls == [(TEXT, 'English')]


def test_unparseable_reply_falls_back_to_heuristics(settings):
    handler = FeedbackHandler(settings, provider=FakeProvider('I cannot produce JSON today.'))
    result = handler.handle(TEXT)

    assert result['mode'] == 'demo_fallback'
    assert 'error_message' not in result
    assert 50 <= result['clarity']['score'] <= 95


def test_provider_error_falls_back_with_message(settings):
    provider = FailingProvider(RuntimeError('quota exceeded'))
    result = FeedbackHandler(settings, provider=provider).handle(TEXT)

    assert provider.calls == 1
    assert result['mode'] == 'error_fallback'
    assert result['error_message'] == 'quota exceeded'
    assert result['stats'] == compute_stats(TEXT)


def test_invalid_text_never_reaches_provider(settings):
    provider = FakeProvider(AI_REPLY)

    with pytest.raises(ValidationError):
        FeedbackHandler(settings, provider=provider).handle('hi')
    assert provider.calls == []


def test_fallback_builds_error_result(settings):
    result = FeedbackHandler(settings).fallback('  ' + TEXT, ValueError('boom'))

    assert result['mode'] == 'error_fallback'
    assert result['error_message'] == 'boom'
    assert result['stats']['character_count'] == len(TEXT)


def test_build_prompt_truncates_text():
    prompt = build_prompt('x' * 2500, 'French')

    assert 'x' * 2000 in prompt
    assert 'x' * 2001 not in prompt
    assert 'Language: French' in prompt


class FakeMessages:
    def __init__(self):
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        return SimpleNamespace(content=[
            SimpleNamespace(type='text', text='{"clarity": '),
            SimpleNamespace(type='text', text='{}}')
        ])


def test_claude_provider_sends_one_request():
    messages = FakeMessages()
    provider = ClaudeProvider(Settings(api_key='sk-ant-test'), client=SimpleNamespace(messages=messages))

    reply = provider.request_feedback(TEXT, 'English')

    assert reply == '{"clarity": {}}'
    assert messages.kwargs['system'] == FEEDBACK_PROMPT
    assert messages.kwargs['max_tokens'] == 800
    assert messages.kwargs['temperature'] == 0.7
    assert messages.kwargs['messages'][0]['role'] == 'user'
    assert TEXT in messages.kwargs['messages'][0]['content']


def test_create_provider_requires_key():
    assert create_provider(Settings()) is None
    assert isinstance(create_provider(Settings(api_key='sk-ant-test')), ClaudeProvider)


def test_parse_feedback_response_keeps_only_known_fields():
    feedback = parse_feedback_response(reply_with('tone', extra='ignored'))

    assert feedback['tone'] == {'score': 72, 'analysis': 'Friendly.', 'adjustment': 'Keep it up.'}
    assert feedback['improvement']['suggestions'] == ['w', 'x', 'y', 'z']


def test_non_finite_scores_fall_back_to_heuristics(settings):
    reply = '{"clarity": {"score": Infinity}, "tone": {"score": 1}, "improvement": {"overall": 1e400}}'
    result = FeedbackHandler(settings, provider=FakeProvider(reply)).handle(TEXT)

    assert result['mode'] == 'demo_fallback'
    assert 'error_message' not in result


def test_incomplete_reply_falls_back_to_heuristics(settings):
    reply = ('{"clarity": {"score": 80}, "tone": {"score": 70}, '
             '"improvement": {"overall": 60, "suggestions": "none"}}')
    result = FeedbackHandler(settings, provider=FakeProvider(reply)).handle(TEXT)

    assert result['mode'] == 'demo_fallback'
    assert result['improvement']['suggestions'] == IMPROVEMENT_SUGGESTIONS[:4]


class FixedDelay:
    def __init__(self, delay):
        self.delay = delay

    def uniform(self, low, high):
        return self.delay

    def randint(self, low, high):
        return 3


def test_demo_delay_comes_from_injected_rng():
    delays = []
    FeedbackHandler(Settings(), rng=FixedDelay(0.75), sleep=delays.append).handle(TEXT)

    assert delays == [0.75]
