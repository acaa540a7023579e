"""LLM client for interacting with language models (Anthropic Claude).

The legal-language transformer talks to Anthropic's Claude models. Tests and
offline runs still need document composition to work when no API key is
available, so the client operates in two modes:

* When an ``ANTHROPIC_API_KEY`` is available, requests are proxied to the
  official Anthropic SDK.
* Otherwise, the client falls back to a deterministic stub that never performs
  network operations (see :mod:`tools.stub_llm_client`).
"""

from __future__ import annotations

import logging
import os
from typing import Any

from anthropic import APIConnectionError, AsyncAnthropic, InternalServerError, RateLimitError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from tools.stub_llm_client import StubLLMHandler

logger = logging.getLogger("claims.llm_client")

DEFAULT_MODEL = "claude-sonnet-4-20250514"


class LLMClient:
    """Wrapper for the Anthropic Messages API with a stub fallback."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
    ):
        """Initialise the client.

        Args:
            api_key: Anthropic API key. If ``None`` the environment variable
                ``ANTHROPIC_API_KEY`` is consulted.
            model: Claude model to use when the API key is present. Defaults
                to ``CLAIMS_LLM_MODEL`` or :data:`DEFAULT_MODEL`.
        """

        self.api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        self.model = model or os.getenv("CLAIMS_LLM_MODEL") or DEFAULT_MODEL
        self._stub_mode = not self.api_key
        self.client = None if self._stub_mode else AsyncAnthropic(api_key=self.api_key)
        self._stub_handler = StubLLMHandler() if self._stub_mode else None

    @property
    def stub_mode(self) -> bool:
        return self._stub_mode

    @retry(
        retry=retry_if_exception_type((APIConnectionError, RateLimitError, InternalServerError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _call_anthropic_api(
        self,
        system_prompt: str,
        messages: list[dict[str, str]],
        max_tokens: int,
        temperature: float | None = None,
    ) -> str:
        """Call the Anthropic API with retry logic.

        Retries up to 3 times with exponential backoff on connection errors,
        rate limiting and server errors. Client errors propagate immediately.
        """
        logger.debug(f"Calling Anthropic API (model: {self.model}, max_tokens: {max_tokens})")

        request_params: dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "system": system_prompt,
            "messages": messages,
        }
        if temperature is not None:
            request_params["temperature"] = temperature

        response = await self.client.messages.create(**request_params)

        content_parts = []
        for block in response.content:
            if getattr(block, "type", None) == "text":
                content_parts.append(block.text)

        content = "\n".join(content_parts)
        logger.debug(f"Received response from Anthropic API ({len(content)} chars)")
        return content

    async def generate_text(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = 2000,
        temperature: float | None = None,
    ) -> str:
        """Generate a plain-text response from the LLM.

        Args:
            system_prompt: System prompt for the model.
            user_prompt: User prompt for the model.
            max_tokens: Maximum tokens to generate.
            temperature: Sampling temperature; the API default when ``None``.
        """
        if self._stub_mode:
            return self._stub_handler.generate_text(
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                max_tokens=max_tokens,
            )

        messages = [{"role": "user", "content": user_prompt}]
        return await self._call_anthropic_api(system_prompt, messages, max_tokens, temperature)


# Global singleton for easy access
_llm_client: LLMClient | None = None


def get_llm_client() -> LLMClient:
    """Get or create the global LLM client instance."""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient()
    return _llm_client


def set_llm_client(client: LLMClient | None) -> None:
    """Set the global LLM client instance (useful for testing)."""
    global _llm_client
    _llm_client = client
