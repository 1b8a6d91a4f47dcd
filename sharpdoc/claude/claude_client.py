"""Anthropic Messages API client used for documentation generation.

Timeouts and rate limits are retried with exponential backoff; every other
API error is raised on the first attempt.
"""

import os
import time
from typing import Optional

import anthropic


class ClaudeClient:
    """Sends a single prompt to Claude and returns the reply text.

    Args:
        api_key: Anthropic API key. Falls back to ANTHROPIC_API_KEY.
        model: Claude model name.
        base_url: API endpoint. The SDK default is used when empty.
        max_retries: Attempts made for a timed-out or rate-limited request.
        retry_delay: Backoff before the second attempt, doubled after that.
        timeout: Per-request timeout in seconds.
        temperature: Sampling temperature.

    Raises:
        ValueError: If no API key is given or found in the environment.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "claude-sonnet-4-20250514",
        base_url: Optional[str] = None,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        timeout: float = 30.0,
        temperature: float = 0.2,
    ):
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        if not self.api_key:
            raise ValueError(
                "API key must be provided either as parameter or via "
                "ANTHROPIC_API_KEY environment variable"
            )

        self.model = model
        self.base_url = base_url
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout = timeout
        self.temperature = temperature

        if base_url:
            self.client = anthropic.Anthropic(api_key=self.api_key, base_url=base_url)
        else:
            self.client = anthropic.Anthropic(api_key=self.api_key)

    def complete(
        self, prompt: str, max_tokens: int = 1024, system: Optional[str] = None
    ) -> str:
        """Return Claude's reply to ``prompt``.

        Args:
            prompt: User message with the declaration and instructions.
            max_tokens: Upper bound on the reply length.
            system: Optional system prompt.

        Returns:
            Text of the first text block in the reply.

        Raises:
            RuntimeError: If every attempt timed out, or the reply has no text.
            anthropic.RateLimitError: If every attempt was rate limited.
            anthropic.APIError: For any other API failure.
        """
        request = self._build_request(prompt, max_tokens, system)

        attempt = 0
        while True:
            try:
                return _reply_text(self.client.messages.create(**request))
            except (anthropic.APITimeoutError, anthropic.RateLimitError) as e:
                delay = self._backoff(attempt)
                if delay is None:
                    if isinstance(e, anthropic.APITimeoutError):
                        raise RuntimeError(
                            f"Claude API request timed out after {self.max_retries} "
                            f"attempts. Each request has a {self.timeout} second timeout."
                        ) from e
                    raise
                time.sleep(delay)
                attempt += 1

    def _build_request(self, prompt: str, max_tokens: int, system: Optional[str]) -> dict:
        request = {
            "model": self.model,
            "max_tokens": max_tokens,
            "timeout": self.timeout,
            "temperature": self.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            request["system"] = system
        return request

    def _backoff(self, attempt: int) -> Optional[float]:
        """Delay before retrying after ``attempt`` (0-indexed), or None when out of attempts."""
        if attempt >= self.max_retries - 1:
            return None
        return self.retry_delay * (2 ** attempt)


def _reply_text(message) -> str:
    for block in message.content:
        text = getattr(block, "text", None)
        if isinstance(text, str):
            return text
    kinds = ", ".join(type(block).__name__ for block in message.content) or "none"
    raise RuntimeError(f"Claude reply contained no text block (got: {kinds})")
