# Feedback Assistant Service
# Validates requests, asks Claude for feedback and falls back to heuristics

import random
import time

from .config import DEFAULT_LANGUAGE, MIN_TEXT_LENGTH
from .helpers import clamp_score, extract_json_object
from .heuristics import generate_mock_feedback
from .stats import compute_stats

# Provenance tags for a feedback result
MODE_AI = 'ai'
MODE_DEMO = 'demo'
MODE_DEMO_FALLBACK = 'demo_fallback'
MODE_ERROR_FALLBACK = 'error_fallback'

# section: (score field, text fields, suggestions (min, max) items)
SECTION_FIELDS = {
    'clarity': ('score', ['feedback'], (3, 4)),
    'tone': ('score', ['analysis', 'adjustment'], None),
    'improvement': ('overall', ['revised_excerpt'], (0, 4))
}


class ValidationError(ValueError):
    """Submitted text is missing, not a string or too short"""


class FeedbackParseError(ValueError):
    """Claude's reply could not be turned into a feedback result"""


def validate_text(text):
    """Return the trimmed text or raise ValidationError"""
    if not text or not isinstance(text, str):
        raise ValidationError('Valid text is required')

    trimmed = text.strip()
    if len(trimmed) < MIN_TEXT_LENGTH:
        raise ValidationError(f'Text must be at least {MIN_TEXT_LENGTH} characters')
    return trimmed


def _parse_section(section, block):
    score_key, text_keys, suggestion_range = SECTION_FIELDS[section]
    if not isinstance(block, dict):
        raise FeedbackParseError(f"Missing '{section}' section")

    try:
        parsed = {score_key: clamp_score(block.get(score_key))}
    except (TypeError, ValueError) as e:
        raise FeedbackParseError(f"Invalid {section}.{score_key}: {e}") from e

    for key in text_keys:
        value = block.get(key)
        if not isinstance(value, str):
            raise FeedbackParseError(f"{section}.{key} must be a string")
        parsed[key] = value

    if suggestion_range:
        suggestions = block.get('suggestions')
        low, high = suggestion_range
        if (not isinstance(suggestions, list)
                or not all(isinstance(item, str) for item in suggestions)):
            raise FeedbackParseError(f"{section}.suggestions must be a list of strings")
        if not low <= len(suggestions) <= high:
            raise FeedbackParseError(
                f"{section}.suggestions must have {low}-{high} items, got {len(suggestions)}"
            )
        parsed['suggestions'] = suggestions

    return parsed


def parse_feedback_response(raw):
    """Turn Claude's raw reply into the clarity/tone/improvement sections.

    Tolerates prose or code fences around the JSON. Scores are clamped to
    [0, 100] and every section must carry its text fields and suggestion
    list. Any stats, mode or extra keys the model invents are dropped.

    Raises FeedbackParseError if the reply is unusable.
    """
    try:
        data = extract_json_object(raw)
    except ValueError as e:
        raise FeedbackParseError(str(e)) from e

    return {section: _parse_section(section, data.get(section)) for section in SECTION_FIELDS}


class FeedbackHandler:
    """Produces one feedback result per request.

    Args:
        settings: Settings, fixed for the lifetime of the handler
        provider: object with request_feedback(text, language) -> str,
            or None to use heuristic feedback only
        rng: random.Random for suggestion counts and the demo delay
        sleep: called with the demo delay in seconds
    """

    def __init__(self, settings, provider=None, rng=None, sleep=time.sleep):
        self.settings = settings
        self.provider = provider
        self.rng = rng
        self.sleep = sleep

    @property
    def ai_available(self):
        return self.provider is not None

    def handle(self, text, language=DEFAULT_LANGUAGE):
        """Validate text and return a feedback result tagged with its mode"""
        text = validate_text(text)
        if not isinstance(language, str) or not language.strip():
            language = DEFAULT_LANGUAGE

        print(f"Processing {len(text)} characters for feedback...")

        if self.provider is None:
            print("Using heuristic feedback (demo mode)")
            self._demo_delay()
            return self._heuristic(text, MODE_DEMO)

        try:
            raw = self.provider.request_feedback(text, language)
        except Exception as e:
            print(f"Error calling Claude: {e}")
            return self._heuristic(text, MODE_ERROR_FALLBACK, error_message=str(e))

        try:
            feedback = parse_feedback_response(raw)
        except FeedbackParseError as e:
            print(f"Error parsing Claude response: {e}")
            return self._heuristic(text, MODE_DEMO_FALLBACK)

        feedback['stats'] = compute_stats(text)
        feedback['mode'] = MODE_AI
        return feedback

    def fallback(self, text, error):
        """Heuristic result for an unexpected error once text is known to be usable"""
        return self._heuristic(text.strip(), MODE_ERROR_FALLBACK, error_message=str(error))

    def _heuristic(self, text, mode, error_message=None):
        feedback = generate_mock_feedback(text, rng=self.rng)
        feedback['mode'] = mode
        if error_message is not None:
            feedback['error_message'] = error_message
        return feedback

    def _demo_delay(self):
        low, high = self.settings.demo_delay_min, self.settings.demo_delay_max
        if high > 0:
            self.sleep((self.rng or random).uniform(low, high))
