"""Stub LLM handler for running without API keys.

The stub never performs network operations. For legal-language rewrites it
returns the client's own text, taken from between the triple-quote markers of
the prompt and normalized, so documents composed offline stay faithful to the
intake answers.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger("claims.llm_client.stub")

QUOTE_MARKER = '"""'


class StubLLMHandler:
    """Handles LLM operations when no API key is available."""

    def generate_text(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
    ) -> str:
        """Echo the quoted client text, one normalized sentence after another."""
        quoted = self._extract_quoted(user_prompt)
        if not quoted:
            logger.debug("Stub received a prompt without quoted text")
            return ""
        sentences = self._split_sentences(quoted)
        return " ".join(sentences)

    # ------------------------------------------------------------------
    # Utility helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _extract_quoted(text: str) -> str:
        """Extract the content between the first pair of triple-quote markers."""
        start = text.find(QUOTE_MARKER)
        if start == -1:
            return ""
        end = text.find(QUOTE_MARKER, start + len(QUOTE_MARKER))
        if end == -1:
            return ""
        return text[start + len(QUOTE_MARKER):end].strip()

    @staticmethod
    def _split_sentences(text: str) -> list[str]:
        """Split text into sentences, collapsing internal whitespace."""
        collapsed = re.sub(r"\s+", " ", text.strip()) if text else ""
        fragments = re.split(r"(?<=[.!?])\s+", collapsed)
        return [fragment.strip() for fragment in fragments if fragment.strip()]
