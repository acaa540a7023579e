"""Tests for the LLM client in stub and API modes."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from tools import llm_client
from tools.llm_client import LLMClient, get_llm_client, set_llm_client
from tools.stub_llm_client import StubLLMHandler


@pytest.fixture
def stub_llm_client(monkeypatch) -> LLMClient:
    """Create an LLM client in stub mode (no API key)."""
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    return LLMClient(api_key=None)


class TestStubMode:
    def test_no_key_means_stub(self, stub_llm_client: LLMClient) -> None:
        assert stub_llm_client.stub_mode
        assert stub_llm_client.client is None

    @pytest.mark.asyncio
    async def test_echoes_quoted_text(self, stub_llm_client: LLMClient) -> None:
        prompt = 'נושא השדה: רקע\n"""\nהתחתנו   ב-2010.\nנפרדנו ב-2024.\n"""\nהמר את הטקסט.'

        result = await stub_llm_client.generate_text(system_prompt="system", user_prompt=prompt)

        assert result == "התחתנו ב-2010. נפרדנו ב-2024."

    @pytest.mark.asyncio
    async def test_prompt_without_quotes_yields_nothing(self, stub_llm_client: LLMClient) -> None:
        assert await stub_llm_client.generate_text(system_prompt="s", user_prompt="no quotes") == ""

    def test_unterminated_quote(self) -> None:
        handler = StubLLMHandler()
        assert handler.generate_text(system_prompt="", user_prompt='"""open', max_tokens=10) == ""


class TestApiMode:
    @pytest.fixture
    def api_client(self) -> LLMClient:
        client = LLMClient(api_key="test-key", model="test-model")
        response = SimpleNamespace(
            content=[
                SimpleNamespace(type="text", text="התובעת טוענת"),
                SimpleNamespace(type="tool_use", text="ignored"),
                SimpleNamespace(type="text", text="כי הצדדים נפרדו."),
            ]
        )
        client.client = SimpleNamespace(messages=SimpleNamespace(create=AsyncMock(return_value=response)))
        return client

    @pytest.mark.asyncio
    async def test_joins_text_blocks(self, api_client: LLMClient) -> None:
        result = await api_client.generate_text(system_prompt="system", user_prompt="user", max_tokens=100)

        assert not api_client.stub_mode
        assert result == "התובעת טוענת\nכי הצדדים נפרדו."

    @pytest.mark.asyncio
    async def test_request_parameters(self, api_client: LLMClient) -> None:
        await api_client.generate_text(system_prompt="system", user_prompt="user", max_tokens=100, temperature=0.3)

        kwargs = api_client.client.messages.create.await_args.kwargs
        assert kwargs == {
            "model": "test-model",
            "max_tokens": 100,
            "system": "system",
            "messages": [{"role": "user", "content": "user"}],
            "temperature": 0.3,
        }

    @pytest.mark.asyncio
    async def test_temperature_omitted_by_default(self, api_client: LLMClient) -> None:
        await api_client.generate_text(system_prompt="system", user_prompt="user")

        assert "temperature" not in api_client.client.messages.create.await_args.kwargs

    def test_model_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("CLAIMS_LLM_MODEL", "env-model")
        assert LLMClient(api_key="key").model == "env-model"


class TestGlobalClient:
    def test_get_and_set(self, monkeypatch, stub_llm_client: LLMClient) -> None:
        monkeypatch.setattr(llm_client, "_llm_client", None)

        set_llm_client(stub_llm_client)
        assert get_llm_client() is stub_llm_client

        set_llm_client(None)
        created = get_llm_client()
        assert isinstance(created, LLMClient)
        assert get_llm_client() is created
