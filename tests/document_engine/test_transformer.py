"""Tests for legal-language rewriting and its fallback behavior."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from document_engine.exceptions import TransformerError
from document_engine.transformer import (
    IdentityTransformer,
    LLMLegalLanguageTransformer,
    TransformContext,
    TransformRequest,
    build_user_prompt,
    rewrite_many,
    rewrite_or_fallback,
)

CONTEXT = TransformContext(
    claim_type_label="תביעת גירושין",
    claimant_name="דנה כהן",
    respondent_name="יוסי כהן",
    field_label="רקע",
)


class FailingTransformer:
    name = "failing"

    async def transform(self, text: str, context: TransformContext) -> str:
        raise RuntimeError("service unavailable")


class EmptyTransformer:
    name = "empty"

    async def transform(self, text: str, context: TransformContext) -> str:
        return "   "


class UpperTransformer:
    name = "upper"

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def transform(self, text: str, context: TransformContext) -> str:
        self.calls.append(text)
        return f"  [{text}]  "


class TestRewriteOrFallback:
    @pytest.mark.asyncio
    async def test_failure_keeps_original_text(self) -> None:
        result = await rewrite_or_fallback(FailingTransformer(), "התחתנו ב-2010", CONTEXT)
        assert result == "התחתנו ב-2010"

    @pytest.mark.asyncio
    async def test_empty_output_keeps_original_text(self) -> None:
        assert await rewrite_or_fallback(EmptyTransformer(), "טקסט", CONTEXT) == "טקסט"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", [None, "", "   \n"])
    async def test_blank_input_skips_transformer(self, text) -> None:
        transformer = UpperTransformer()

        assert await rewrite_or_fallback(transformer, text, CONTEXT) == ""
        assert transformer.calls == []

    @pytest.mark.asyncio
    async def test_rewritten_text_is_stripped(self) -> None:
        assert await rewrite_or_fallback(UpperTransformer(), "א", CONTEXT) == "[א]"

    @pytest.mark.asyncio
    async def test_identity_transformer(self) -> None:
        assert await rewrite_or_fallback(IdentityTransformer(), "ללא שינוי", CONTEXT) == "ללא שינוי"


class TestRewriteMany:
    @pytest.mark.asyncio
    async def test_preserves_request_order(self) -> None:
        requests = [TransformRequest(text, CONTEXT) for text in ("א", None, "ג")]

        assert await rewrite_many(UpperTransformer(), requests) == ["[א]", "", "[ג]"]


class TestLLMLegalLanguageTransformer:
    @pytest.mark.asyncio
    async def test_sends_prompt_to_client(self) -> None:
        client = MagicMock()
        client.stub_mode = False
        client.generate_text = AsyncMock(return_value="התובעת טוענת כי הצדדים נישאו.")
        transformer = LLMLegalLanguageTransformer(client, timeout_seconds=5, max_tokens=500)

        result = await transformer.transform("התחתנו", CONTEXT)

        assert result == "התובעת טוענת כי הצדדים נישאו."
        kwargs = client.generate_text.await_args.kwargs
        assert kwargs["max_tokens"] == 500
        assert '"""\nהתחתנו\n"""' in kwargs["user_prompt"]
        assert not transformer.stub_mode

    @pytest.mark.asyncio
    async def test_timeout_raises_transformer_error(self) -> None:
        async def slow(**kwargs):
            await asyncio.sleep(1)
            return "late"

        client = MagicMock()
        client.generate_text = slow
        transformer = LLMLegalLanguageTransformer(client, timeout_seconds=0.01)

        with pytest.raises(TransformerError) as exc_info:
            await transformer.transform("טקסט", CONTEXT)
        assert exc_info.value.details["field"] == "רקע"

    @pytest.mark.asyncio
    async def test_timeout_falls_back_to_original(self) -> None:
        async def slow(**kwargs):
            await asyncio.sleep(1)
            return "late"

        client = MagicMock()
        client.generate_text = slow
        transformer = LLMLegalLanguageTransformer(client, timeout_seconds=0.01)

        assert await rewrite_or_fallback(transformer, "טקסט", CONTEXT) == "טקסט"

    def test_prompt_includes_additional_context(self) -> None:
        context = TransformContext("תביעה", "א", "ב", "שדה", additional_context="ילדים: 2")
        prompt = build_user_prompt("טקסט", context)

        assert "הקשר נוסף: ילדים: 2" in prompt
        assert prompt.splitlines()[0] == "סוג התביעה: תביעה"
