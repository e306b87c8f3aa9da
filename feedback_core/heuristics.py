# Feedback Assistant Heuristics
# Rule-based feedback used when Claude is not configured or fails

import random
import re

from .helpers import clamp
from .stats import average_word_length, compute_stats

CLARITY_SUGGESTIONS = [
    'Use more active voice constructions',
    'Break long sentences into shorter ones',
    'Define technical terms for broader audience',
    'Add transitional words between paragraphs'
]

IMPROVEMENT_SUGGESTIONS = [
    'Add a stronger opening sentence to hook the reader',
    'Include data or examples to support your claims',
    'End with a clear call to action or conclusion',
    'Proofread for consistent tense usage',
    'Vary sentence structure for better rhythm'
]

BRIEF_FEEDBACK = 'Your text is quite brief. Consider adding more details and examples to improve clarity.'
FLOW_FEEDBACK = ('Your text is generally clear, but could benefit from more specific examples '
                 'and transitional phrases to improve flow.')

POLITE_ANALYSIS = 'Your tone is polite and professional, which is appropriate for most contexts.'
NEUTRAL_ANALYSIS = 'The tone is professional but could be more engaging for your target audience.'
TONE_ADJUSTMENT = "Consider using more positive language and addressing the reader directly with 'you' more often."

POLITE_PATTERN = re.compile(r'please|thank you|appreciate', re.IGNORECASE)
SENTENCE_PATTERN = re.compile(r'[^.!?]+[.!?]+')
HEDGE_PATTERN = re.compile(r'I think|maybe|perhaps')
WHITESPACE_PATTERN = re.compile(r'\s+')

SCORE_FLOOR = 50
SCORE_CEILING = 95


def _bounded(score):
    return clamp(score, SCORE_FLOOR, SCORE_CEILING)


def generate_revised_excerpt(text):
    """Suggest a more direct version of the first sentence"""
    sentences = SENTENCE_PATTERN.findall(text) or [text[:100]]
    first_sentence = sentences[0].strip()

    if len(first_sentence.split()) <= 5:
        return f'"{first_sentence}" could be expanded with more details.'

    improved = HEDGE_PATTERN.sub('', first_sentence)
    improved = WHITESPACE_PATTERN.sub(' ', improved).strip()

    return (f'Original: "{first_sentence[:80]}..."\n'
            f'Improved: "{improved[:80]}..." (more direct and confident)')


def generate_mock_feedback(text, rng=None):
    """Build a feedback result from superficial text signals.

    Args:
        text: Trimmed text of at least 10 characters
        rng: random.Random used to pick 3 or 4 clarity suggestions;
            pass a seeded instance for repeatable output

    Returns:
        Feedback dict with clarity, tone, improvement and stats.
        The caller sets the mode.
    """
    rng = rng or random
    stats = compute_stats(text)
    word_count = stats['word_count']
    words_per_sentence = word_count / max(1, stats['sentence_count'])

    clarity_score = 70
    if average_word_length(text) < 6:
        clarity_score += 10
    if words_per_sentence > 20:
        clarity_score -= 15

    tone_score = 65
    if '!' in text:
        tone_score += 5
    if '?' in text:
        tone_score += 5

    improvement_score = 60 + (15 if word_count > 100 else 0)

    return {
        'clarity': {
            'score': _bounded(clarity_score),
            'feedback': BRIEF_FEEDBACK if word_count < 50 else FLOW_FEEDBACK,
            'suggestions': CLARITY_SUGGESTIONS[:rng.randint(3, 4)]
        },
        'tone': {
            'score': _bounded(tone_score),
            'analysis': POLITE_ANALYSIS if POLITE_PATTERN.search(text) else NEUTRAL_ANALYSIS,
            'adjustment': TONE_ADJUSTMENT
        },
        'improvement': {
            'overall': _bounded(improvement_score),
            'suggestions': IMPROVEMENT_SUGGESTIONS[:4],
            'revised_excerpt': generate_revised_excerpt(text)
        },
        'stats': stats
    }
