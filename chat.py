import logging

import openai
from openai import OpenAI

import config
from usage_counter import QuotaExceeded

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a helpful assistant."


class ChatError(Exception):
    pass


class GroqChat:
    """Chat completion against Groq, counted against the daily quota.

    Only successful calls are counted. A failed call leaves the counter
    untouched.
    """

    def __init__(self, tracker, client=None, model=None, max_tokens=None, daily_limit=None):
        self.tracker = tracker
        self._client = client
        self.model = config.GROQ_MODEL if model is None else model
        self.max_tokens = config.GROQ_MAX_TOKENS if max_tokens is None else max_tokens
        self.daily_limit = config.GROQ_DAILY_LIMIT if daily_limit is None else daily_limit

    @property
    def client(self):
        if self._client is None:
            self._client = OpenAI(api_key=config.GROQ_API_KEY, base_url=config.GROQ_API_URL)
        return self._client

    def ask(self, prompt):
        if self.tracker.is_over_limit(self.daily_limit):
            logger.warning("Daily Groq limit reached (%d)", self.daily_limit)
            raise QuotaExceeded("Daily Groq limit reached.")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=self.max_tokens,
                stream=False,
            )
        except openai.APIError as e:
            logger.warning("Groq request failed: %s", e)
            raise ChatError(f"Groq error: {e}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            logger.warning("Malformed Groq response: %r", response)
            raise ChatError("Groq error: malformed response") from e

        count = self.tracker.increment_usage()
        logger.info("Groq call succeeded, %d/%d used today", count, self.daily_limit)
        return (content or "").strip()
