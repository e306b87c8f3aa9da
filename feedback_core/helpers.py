# Feedback Assistant Helpers
# Small pure functions shared by the stats, heuristics and service modules

import json
import math


def strip_markdown_json(content):
    """Strip markdown code blocks from Claude's JSON response"""
    content = content.strip()
    if content.startswith('```'):
        # Remove first line (```json or ```)
        content = content.split('\n', 1)[1] if '\n' in content else content[3:]
    if content.endswith('```'):
        # Remove trailing ```
        content = content.rsplit('```', 1)[0]
    return content.strip()


def find_json_object(content):
    """Return the first balanced {...} region in content.

    Braces inside JSON strings (including escaped quotes) are ignored.
    Raises ValueError if no complete object is found.
    """
    start = content.find('{')
    if start == -1:
        raise ValueError('No JSON object found in response')

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(content)):
        char = content[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == '\\':
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0:
                return content[start:index + 1]

    raise ValueError('Unbalanced JSON object in response')


def extract_json_object(content):
    """Parse the first JSON object out of text that may wrap it in prose or fences.

    Returns the decoded dict. Raises ValueError (json.JSONDecodeError is a
    subclass) when nothing usable is found.
    """
    if not isinstance(content, str):
        raise ValueError('Response content is not text')
    data = json.loads(find_json_object(strip_markdown_json(content)))
    if not isinstance(data, dict):
        raise ValueError('Response JSON is not an object')
    return data


def clamp(value, low, high):
    return max(low, min(high, value))


def clamp_score(value):
    """Coerce a score to an int in [0, 100]"""
    if isinstance(value, bool):
        raise ValueError(f"Score must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError:
        raise ValueError(f"Score out of range: {value!r}")
    if not math.isfinite(number):
        raise ValueError(f"Score must be finite, got {value!r}")
    return int(clamp(round(number), 0, 100))


def format_reading_time(word_count, words_per_minute=200):
    """Format reading time, e.g. '1 minute' or '3 minutes'"""
    minutes = math.ceil(word_count / words_per_minute)
    return f"{minutes} minute{'' if minutes == 1 else 's'}"
