"""
Report summarization module.

This module sends the prepared prompt to an OpenAI-compatible chat-completions
endpoint (DeepSeek by default) and returns the generated report text.
"""

import logging
from typing import Any, Dict

import requests

from .errors import GenerationError, MalformedResponseError, ServiceError

# logging
logger = logging.getLogger("commit-report.summarizer")

DEFAULT_BASE_URL = "https://api.deepseek.com"
DEFAULT_MODEL = "deepseek-chat"


class ReportSummarizer:
    """
    Generate a report from a prompt with a text-generation service.

    One blocking request per report; there are no retries.

    Args:
        api_key: Bearer key for the service
        base_url: Service root, ``/v1/chat/completions`` is appended
        model: Chat model name
        temperature: Sampling temperature
        max_tokens: Upper bound on the generated length
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.7,
        max_tokens: int = 4000,
        timeout: float = 120.0,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._session = requests.Session()

    @property
    def url(self) -> str:
        return f"{self.base_url}/v1/chat/completions"

    def generate(self, prompt: str) -> str:
        """
        Send the prompt and return the generated text.

        Raises:
            ServiceError: If the service answers with a non-success status
            MalformedResponseError: If the answer carries no generated text
            GenerationError: If the request itself fails
        """
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        logger.info("Requesting report from %s (model=%s, prompt=%d chars)", self.url, self.model, len(prompt))
        try:
            resp = self._session.post(self.url, headers=headers, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise GenerationError(f"Text-generation request failed: {e}") from e

        if not resp.ok:
            logger.error("Text-generation API returned %d", resp.status_code)
            raise ServiceError(resp.status_code, resp.text)

        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponseError("Text-generation API returned invalid JSON") from e

        return self._extract_content(data)

    @staticmethod
    def _extract_content(data: Any) -> str:
        choices = data.get("choices") if isinstance(data, dict) else None
        if not choices:
            raise MalformedResponseError("Text-generation API response has no choices")
        message = choices[0].get("message") or {}
        content = message.get("content")
        if not isinstance(content, str):
            raise MalformedResponseError("Text-generation API response has no message content")
        return content.strip()
