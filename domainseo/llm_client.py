"""Minimal async client for a generative-text API (Gemini generateContent)."""

import json
import logging
import os
import re
from typing import Any, Dict, Optional

import httpx

from .exceptions import EnrichmentError

logger = logging.getLogger(__name__)

_JSON_BLOCK_RE = re.compile(r'\{[\s\S]*\}')


def extract_json(text: str) -> Dict[str, Any]:
    """Pull the first brace-delimited block out of free-form model output."""
    match = _JSON_BLOCK_RE.search(text or '')
    if not match:
        raise EnrichmentError("No JSON found in model response")
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise EnrichmentError(f"Malformed JSON in model response: {e}") from e
    if not isinstance(data, dict):
        raise EnrichmentError("Model response JSON is not an object")
    return data


class LLMClient:
    """Sends single-prompt requests and returns the reply text."""

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-pro",
        timeout: float = 30.0,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        self.model = model
        self.timeout = timeout
        self.base_url = (base_url or self.BASE_URL).rstrip('/')
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def generate(self, prompt: str, temperature: float = 0.2, max_tokens: int = 1024) -> str:
        """Send a prompt and return the first candidate's text."""
        if not self.api_key:
            raise EnrichmentError("No API key configured for the generative-text service")

        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "topK": 40,
                "topP": 0.95,
                "maxOutputTokens": max_tokens,
            }
        }
        url = f"{self.base_url}/{self.model}:generateContent"

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    url,
                    json=payload,
                    headers={"x-goog-api-key": self.api_key},
                )
            except httpx.HTTPError as e:
                raise EnrichmentError(f"Request to {self.model} failed: {e}") from e

        if response.status_code >= 400:
            logger.debug("Model API error %s: %s", response.status_code, response.text[:200])
            raise EnrichmentError(f"Model API returned HTTP {response.status_code}")

        try:
            return response.json()["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise EnrichmentError("Unexpected model API response shape") from e

    async def generate_json(self, prompt: str, **kwargs) -> Dict[str, Any]:
        return extract_json(await self.generate(prompt, **kwargs))
