"""Claude client: plain and JSON calls, token/cost estimates, connection check.

Wraps ``anthropic.AsyncAnthropic``. Errors from the SDK are re-raised as
AIClientError so callers deal with one exception family.
"""

from __future__ import annotations

import json
import logging
import math
import re
import time
from dataclasses import dataclass
from typing import Any

import anthropic

from trainer_aide.core.config import Settings, get_settings
from trainer_aide.core.exceptions import AIClientError, AIResponseParseError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"

# USD per million tokens
TOKEN_COSTS: dict[str, dict[str, float]] = {
    "claude-sonnet-4-5-20250929": {"input": 3.0, "output": 15.0},
    "claude-sonnet-4-20250514": {"input": 3.0, "output": 15.0},
    "claude-opus-4-20250514": {"input": 15.0, "output": 75.0},
    "claude-3-5-sonnet-20241022": {"input": 3.0, "output": 15.0},
    "claude-3-5-sonnet-20240620": {"input": 3.0, "output": 15.0},
    "claude-3-haiku-20240307": {"input": 0.25, "output": 1.25},
}

JSON_ONLY_INSTRUCTION = (
    "IMPORTANT: You MUST respond with ONLY valid JSON. "
    "Do not include any text before or after the JSON object."
)

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


@dataclass
class ClaudeUsage:
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass
class ClaudeResponse:
    content: str
    stop_reason: str | None
    usage: ClaudeUsage
    model: str
    latency_ms: int = 0


def estimate_cost(model: str, usage: ClaudeUsage) -> float:
    """USD cost of a call; unknown models are priced like the default model."""
    costs = TOKEN_COSTS.get(model, TOKEN_COSTS[DEFAULT_MODEL])
    return (usage.input_tokens / 1_000_000) * costs["input"] + (
        usage.output_tokens / 1_000_000
    ) * costs["output"]


def estimate_tokens(text: str) -> int:
    """Rough token count (~4 characters per token)."""
    return math.ceil(len(text) / 4)


def validate_api_key(api_key: str | None) -> tuple[bool, str | None]:
    if not api_key:
        return False, "ANTHROPIC_API_KEY environment variable is not set"
    if not api_key.startswith("sk-ant-api"):
        return False, 'Invalid API key format. Should start with "sk-ant-api"'
    return True, None


def extract_json_text(content: str) -> str:
    """Strip markdown fences and, if needed, cut out the first {...} span."""
    text = content.strip()
    if text.startswith("```"):
        text = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", text, count=1), count=1).strip()
    if not text.startswith(("{", "[")):
        match = _JSON_OBJECT.search(text)
        if match:
            text = match.group(0)
    return text


def parse_json_response(response: ClaudeResponse) -> Any:
    try:
        return json.loads(extract_json_text(response.content))
    except json.JSONDecodeError as e:
        logger.error(
            "Failed to parse JSON response (stop_reason=%s, output_tokens=%s, length=%s): %s",
            response.stop_reason,
            response.usage.output_tokens,
            len(response.content),
            e,
        )
        if response.stop_reason == "max_tokens":
            logger.error("Response was truncated by max_tokens; the JSON is incomplete")
        raise AIResponseParseError(f"Failed to parse JSON: {e}", stop_reason=response.stop_reason) from e


class ClaudeClient:
    """Thin async wrapper around the Messages API."""

    def __init__(self, settings: Settings | None = None, client: anthropic.AsyncAnthropic | None = None):
        self.settings = settings or get_settings()
        self.model = self.settings.ai_model or DEFAULT_MODEL
        self._client = client

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(
                api_key=self.settings.anthropic_api_key or None,
                timeout=self.settings.ai_timeout_seconds,
            )
        return self._client

    async def call_claude(
        self,
        system_prompt: str,
        user_prompt: str,
        model: str | None = None,
        max_tokens: int = 4096,
        temperature: float | None = None,
    ) -> ClaudeResponse:
        model = model or self.model
        temperature = self.settings.ai_temperature if temperature is None else temperature
        started = time.perf_counter()
        try:
            message = await self.client.messages.create(
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except anthropic.APIStatusError as e:
            logger.error("Claude API error %s: %s", e.status_code, e.message)
            raise AIClientError(e.message, error_type=type(e).__name__, code=str(e.status_code)) from e
        except anthropic.APIError as e:
            logger.error("Claude API error: %s", e)
            raise AIClientError(str(e), error_type=type(e).__name__) from e

        latency_ms = int((time.perf_counter() - started) * 1000)
        content = "\n".join(block.text for block in message.content if block.type == "text")
        response = ClaudeResponse(
            content=content,
            stop_reason=message.stop_reason,
            usage=ClaudeUsage(
                input_tokens=message.usage.input_tokens,
                output_tokens=message.usage.output_tokens,
            ),
            model=message.model,
            latency_ms=latency_ms,
        )
        logger.info(
            "Claude call ok (%sms) input=%s output=%s cost=$%.4f",
            latency_ms,
            response.usage.input_tokens,
            response.usage.output_tokens,
            estimate_cost(response.model, response.usage),
        )
        if response.stop_reason == "max_tokens":
            logger.warning(
                "Response truncated by max_tokens (requested %s, used %s); JSON may be incomplete",
                max_tokens,
                response.usage.output_tokens,
            )
        return response

    async def call_claude_json(
        self,
        system_prompt: str,
        user_prompt: str,
        json_schema: str | None = None,
        **kwargs: Any,
    ) -> tuple[Any, ClaudeResponse]:
        """Ask for JSON only and parse it. Returns (data, raw response)."""
        system = f"{system_prompt}\n\n{JSON_ONLY_INSTRUCTION}"
        if json_schema:
            system += f"\n\nExpected JSON structure:\n{json_schema}"
        response = await self.call_claude(system, user_prompt, **kwargs)
        return parse_json_response(response), response

    async def test_connection(self) -> tuple[bool, str | None]:
        valid, error = validate_api_key(self.settings.anthropic_api_key)
        if not valid:
            return False, error
        try:
            await self.call_claude(
                "You are a helpful assistant.",
                'Say "API connection successful" and nothing else.',
                max_tokens=50,
            )
        except AIClientError as e:
            return False, str(e)
        return True, None


def get_claude_client() -> ClaudeClient:
    """FastAPI dependency; tests override it with a fake."""
    return ClaudeClient()
