# Feedback Assistant Config
# Settings are read from the environment once at start-up and passed around

import os
from dataclasses import dataclass

from dotenv import load_dotenv

SERVICE_NAME = 'AI Feedback Assistant'
SERVICE_VERSION = '1.0.0'

# Anthropic
ANTHROPIC_MODEL = 'claude-sonnet-4-20250514'
PLACEHOLDER_API_KEY = 'your_anthropic_api_key_here'

# Request limits
MIN_TEXT_LENGTH = 10
PROMPT_TEXT_LIMIT = 2000
MAX_CONTENT_LENGTH = 10 * 1024 * 1024

DEFAULT_LANGUAGE = 'English'


@dataclass(frozen=True)
class Settings:
    api_key: str = None
    model: str = ANTHROPIC_MODEL
    timeout: float = 30.0
    max_tokens: int = 800
    temperature: float = 0.7
    demo_delay_min: float = 0.6
    demo_delay_max: float = 1.0
    port: int = 3000

    @property
    def ai_available(self):
        """True when a real (non-placeholder) API key is configured"""
        return bool(self.api_key) and self.api_key != PLACEHOLDER_API_KEY


def parse_delay_range(value):
    """Parse DEMO_DELAY_MS ('600-1000', '800' or '0') into seconds.

    Returns a (min, max) tuple of floats.
    """
    value = value.strip()
    if '-' in value:
        low, high = value.split('-', 1)
        low, high = float(low) / 1000, float(high) / 1000
    else:
        low = high = float(value) / 1000
    if low < 0 or high < low:
        raise ValueError(f"Invalid demo delay range: {value!r}")
    return low, high


def load_settings(environ=None, dotenv_path=None):
    """Build Settings from environment variables.

    When no mapping is given, variables from a .env file (dotenv_path, or
    the nearest one python-dotenv finds) are loaded into os.environ first.
    Variables already set in the environment win over the file.
    """
    if environ is None:
        load_dotenv(dotenv_path)
        environ = os.environ

    delay_min, delay_max = parse_delay_range(environ.get('DEMO_DELAY_MS', '600-1000'))

    return Settings(
        api_key=environ.get('ANTHROPIC_API_KEY') or None,
        model=environ.get('ANTHROPIC_MODEL', ANTHROPIC_MODEL),
        timeout=float(environ.get('ANTHROPIC_TIMEOUT', 30)),
        max_tokens=int(environ.get('FEEDBACK_MAX_TOKENS', 800)),
        temperature=float(environ.get('FEEDBACK_TEMPERATURE', 0.7)),
        demo_delay_min=delay_min,
        demo_delay_max=delay_max,
        port=int(environ.get('PORT', 3000))
    )
