"""
Unit Tests for the Claude client wrapper
"""
from types import SimpleNamespace

import pytest

from promptide.utils import claude_client
from promptide.utils.claude_client import ClaudeClient


class FakeMessages:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def make_response(text: str):
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=text)],
        usage=SimpleNamespace(input_tokens=10, output_tokens=5),
        stop_reason="end_turn",
    )


def make_client(*outcomes):
    messages = FakeMessages(outcomes)
    client = ClaudeClient(api_key="test", model="test-model", async_client=SimpleNamespace(messages=messages))
    return client, messages


class TestGenerate:
    """Test ClaudeClient.generate"""

    @pytest.mark.asyncio
    async def test_returns_content_and_usage(self):
        client, messages = make_client(make_response("```html\n<p/>\n```"))

        result = await client.generate(prompt="page", system_prompt="be brief")

        assert result["content"] == "```html\n<p/>\n```"
        assert result["total_tokens"] == 15
        call = messages.calls[0]
        assert call["model"] == "test-model"
        assert call["system"] == "be brief"
        assert call["messages"] == [{"role": "user", "content": "page"}]

    @pytest.mark.asyncio
    async def test_non_retryable_error_raised(self):
        client, messages = make_client(ValueError("bad request"))

        with pytest.raises(ValueError):
            await client.generate(prompt="page")

        assert len(messages.calls) == 1

    @pytest.mark.asyncio
    async def test_retryable_error_retried(self, monkeypatch):
        client, messages = make_client(ConnectionResetError("reset"), make_response("ok"))
        monkeypatch.setattr(client, "_is_retryable_error", lambda error: True)

        async def no_sleep(delay):
            return None

        monkeypatch.setattr(claude_client.asyncio, "sleep", no_sleep)

        result = await client.generate(prompt="page")

        assert result["content"] == "ok"
        assert len(messages.calls) == 2

    def test_retry_delay_is_capped(self):
        client, _ = make_client()

        assert client._calculate_retry_delay(10) <= claude_client.MAX_DELAY * 1.25
