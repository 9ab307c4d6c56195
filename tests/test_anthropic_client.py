from __future__ import annotations

from types import SimpleNamespace

import anthropic
import httpx
import pytest

from trainer_aide.core.config import Settings
from trainer_aide.core.exceptions import AIClientError, AIResponseParseError
from trainer_aide.services.anthropic_client import (
    ClaudeClient,
    ClaudeResponse,
    ClaudeUsage,
    estimate_cost,
    estimate_tokens,
    extract_json_text,
    parse_json_response,
    validate_api_key,
)


class FakeMessages:
    def __init__(self, text: str = "", error: Exception | None = None, stop_reason: str = "end_turn"):
        self.text = text
        self.error = error
        self.stop_reason = stop_reason
        self.kwargs: dict = {}

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            content=[SimpleNamespace(type="text", text=self.text)],
            stop_reason=self.stop_reason,
            usage=SimpleNamespace(input_tokens=120, output_tokens=45),
            model=kwargs["model"],
        )


def _client(messages: FakeMessages) -> ClaudeClient:
    settings = Settings(anthropic_api_key="sk-ant-api03-test", ai_temperature=0.5)
    return ClaudeClient(settings=settings, client=SimpleNamespace(messages=messages))


def test_extract_json_text_strips_fences():
    assert extract_json_text('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert extract_json_text('```\n{"a": 1}\n```') == '{"a": 1}'


def test_extract_json_text_cuts_surrounding_prose():
    assert extract_json_text('Here you go: {"a": {"b": 2}} Enjoy!') == '{"a": {"b": 2}}'


def test_parse_json_response_raises_with_stop_reason():
    response = ClaudeResponse(content='{"weekly_structure": [', stop_reason="max_tokens", usage=ClaudeUsage(), model="m")
    with pytest.raises(AIResponseParseError) as exc:
        parse_json_response(response)
    assert exc.value.stop_reason == "max_tokens"
    assert exc.value.error_type == "json_parse_error"


def test_validate_api_key():
    assert validate_api_key("sk-ant-api03-abc") == (True, None)
    ok, error = validate_api_key("")
    assert not ok and "not set" in error
    ok, error = validate_api_key("sk-live-123")
    assert not ok and "sk-ant-api" in error


def test_estimate_cost():
    usage = ClaudeUsage(input_tokens=1_000_000, output_tokens=1_000_000)
    assert estimate_cost("claude-sonnet-4-5-20250929", usage) == pytest.approx(18.0)
    assert estimate_cost("claude-3-haiku-20240307", usage) == pytest.approx(1.5)
    assert estimate_cost("unknown-model", usage) == pytest.approx(18.0)


def test_estimate_tokens():
    assert estimate_tokens("abcd" * 10) == 10
    assert estimate_tokens("abcde") == 2


@pytest.mark.asyncio
async def test_call_claude_json_parses_fenced_reply():
    messages = FakeMessages('```json\n{"program_name": "Base"}\n```')
    data, raw = await _client(messages).call_claude_json("system", "user", json_schema='{"program_name": "str"}', max_tokens=2000)
    assert data == {"program_name": "Base"}
    assert raw.usage.output_tokens == 45
    assert messages.kwargs["max_tokens"] == 2000
    assert messages.kwargs["temperature"] == 0.5
    assert "ONLY valid JSON" in messages.kwargs["system"]
    assert "Expected JSON structure" in messages.kwargs["system"]


@pytest.mark.asyncio
async def test_sdk_errors_become_client_errors():
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    messages = FakeMessages(error=anthropic.APIConnectionError(request=request))
    with pytest.raises(AIClientError) as exc:
        await _client(messages).call_claude("system", "user")
    assert exc.value.error_type == "APIConnectionError"


@pytest.mark.asyncio
async def test_connection_check_rejects_bad_key():
    client = ClaudeClient(settings=Settings(anthropic_api_key="nope"), client=SimpleNamespace(messages=FakeMessages("ok")))
    ok, error = await client.test_connection()
    assert not ok
    assert "Invalid API key format" in error
