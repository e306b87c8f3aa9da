# Feedback Assistant Claude Provider
# Sends text to Claude and returns the raw reply

import os

import httpx
from anthropic import Anthropic

from .config import PROMPT_TEXT_LIMIT

PROMPT_PATH = os.path.join(os.path.dirname(__file__), 'prompt.txt')
with open(PROMPT_PATH, 'r') as f:
    FEEDBACK_PROMPT = f.read()


def build_prompt(text, language):
    """Build the user message for a feedback request"""
    return f"""Analyze this text for clarity, tone, and improvements.

Text: "{text[:PROMPT_TEXT_LIMIT]}"
Language: {language}

Reply in {language} using the JSON format from your instructions."""


class ClaudeProvider:
    """Feedback provider backed by the Anthropic messages API.

    Errors from the SDK (anthropic.APIError, timeouts) are not caught here;
    the handler decides how to fall back.
    """

    def __init__(self, settings, client=None):
        self.settings = settings
        self.client = client or Anthropic(
            api_key=settings.api_key,
            http_client=httpx.Client(timeout=settings.timeout, follow_redirects=True)
        )

    def request_feedback(self, text, language):
        response = self.client.messages.create(
            model=self.settings.model,
            max_tokens=self.settings.max_tokens,
            temperature=self.settings.temperature,
            system=FEEDBACK_PROMPT,
            messages=[
                {'role': 'user', 'content': build_prompt(text, language)}
            ]
        )

        return ''.join(
            block.text for block in response.content
            if getattr(block, 'type', 'text') == 'text'
        )


def create_provider(settings):
    """Return a ClaudeProvider, or None when no API key is configured"""
    if not settings.ai_available:
        print("No Anthropic API key configured")
        return None
    return ClaudeProvider(settings)
