"""
Shared fixtures for unit tests.

Vendor HTTP traffic is faked with httpx.MockTransport; every request is
recorded so tests can assert on payloads and on the number of calls.
"""
import json

import httpx
import pytest

from llm_gateway.core.config import GatewaySettings
from llm_gateway.models import ModelConfig


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it serves."""

    def __init__(self, handler):
        self.requests = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


def chat_response(content="Hello there", **message_fields) -> httpx.Response:
    message = {"role": "assistant", "content": content, **message_fields}
    return httpx.Response(200, json={"choices": [{"index": 0, "message": message}]})


def sse_response(frames) -> httpx.Response:
    body = "".join(f"data: {frame}\n\n" for frame in frames)
    return httpx.Response(
        200,
        content=body.encode("utf-8"),
        headers={"content-type": "text/event-stream"},
    )


@pytest.fixture
def settings():
    return GatewaySettings(timeout=5.0, stream_timeout=5.0, max_retries=0)


@pytest.fixture
def openai_config():
    return ModelConfig(
        provider="openai",
        name="OpenAI",
        base_url="https://api.test/v1",
        api_key="sk-test",
        models=["gpt-4", "gpt-3.5-turbo"],
        default_model="gpt-4",
    )


@pytest.fixture
def deepseek_config():
    return ModelConfig(
        provider="deepseek",
        name="DeepSeek",
        base_url="https://api.deepseek.test/v1",
        api_key="sk-deepseek",
        models=["deepseek-chat", "deepseek-reasoner"],
        default_model="deepseek-reasoner",
    )


@pytest.fixture
def gemini_config():
    return ModelConfig(
        provider="gemini",
        name="Gemini",
        base_url="https://generativelanguage.googleapis.com/v1beta",
        api_key="gm-test",
        models=["gemini-2.0-flash"],
        default_model="gemini-2.0-flash",
    )


@pytest.fixture
def anthropic_config():
    return ModelConfig(
        provider="anthropic",
        name="Anthropic",
        base_url="https://api.anthropic.test/v1",
        api_key="ak-test",
        models=["claude-3-haiku-20240307"],
        default_model="claude-3-haiku-20240307",
    )
