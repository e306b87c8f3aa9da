# Feedback Assistant Stats
# Basic text statistics attached to every feedback result

import re

from .helpers import format_reading_time

SENTENCE_TERMINATORS = re.compile(r'[.!?]+')


def count_words(text):
    return len(text.split())


def count_sentences(text):
    """Count non-empty segments between runs of . ! ?"""
    return len([part for part in SENTENCE_TERMINATORS.split(text) if part.strip()])


def average_word_length(text):
    """Characters per word, counting whitespace and punctuation."""
    text = text.strip()
    return len(text) / max(1, count_words(text))


def compute_stats(text):
    """Compute the stats block for a feedback result.

    Args:
        text: The submitted text; it is trimmed before counting.

    Returns:
        Dict with word_count, character_count, sentence_count and reading_time
    """
    text = text.strip()
    word_count = count_words(text)

    return {
        'word_count': word_count,
        'character_count': len(text),
        'sentence_count': count_sentences(text),
        'reading_time': format_reading_time(word_count)
    }
