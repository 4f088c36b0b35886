"""
Unit tests for the vendor adapters.

HTTP traffic goes through a recording MockTransport; no network access.
"""
import json

import httpx
import pytest

from conftest import RecordingTransport, chat_response, sse_response
from llm_gateway.adapters import AnthropicAdapter, GeminiAdapter, OpenAIAdapter
from llm_gateway.adapters.openai_adapter import THINKING_INSTRUCTION
from llm_gateway.core.errors import (
    APIAuthenticationError,
    APIConnectionError,
    APIError,
    APIRateLimitError,
    ValidationError,
)
from llm_gateway.core.interface import ProviderCapability
from llm_gateway.extractors import THINKING_TOOL_NAME
from llm_gateway.models import Message, StreamHandlers


def user(content="Hello"):
    return Message(role="user", content=content)


class CollectingHandlers(StreamHandlers):
    """Stream handlers recording every callback."""

    def __init__(self):
        self.tokens = []
        self.completed = 0
        self.errors = []
        super().__init__(
            on_token=self.tokens.append,
            on_complete=self._complete,
            on_error=self.errors.append,
        )

    def _complete(self):
        self.completed += 1


class TestOpenAIAdapter:
    """Test the OpenAI-compatible adapter."""

    @pytest.mark.asyncio
    async def test_send_message(self, openai_config, settings):
        """Test a completion round trip and the outgoing payload."""
        transport = RecordingTransport(lambda request: chat_response("Hi!"))
        async with OpenAIAdapter(openai_config, settings=settings, transport=transport) as adapter:
            text = await adapter.send_message([user()])

        assert text == "Hi!"
        request = transport.requests[0]
        assert str(request.url) == "https://api.test/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-test"
        body = transport.last_json()
        assert body["model"] == "gpt-4"
        assert body["messages"] == [{"role": "user", "content": "Hello"}]
        assert body["temperature"] == 0.7
        assert "tools" not in body

    @pytest.mark.asyncio
    async def test_base_url_normalization(self, openai_config, settings):
        """Test a base URL ending in /chat/completions is trimmed."""
        config = openai_config.merged(base_url="https://api.test/v1/chat/completions/")
        transport = RecordingTransport(lambda request: chat_response())
        async with OpenAIAdapter(config, settings=settings, transport=transport) as adapter:
            await adapter.send_message([user()])
        assert str(transport.requests[0].url) == "https://api.test/v1/chat/completions"

    @pytest.mark.asyncio
    async def test_empty_response_raises(self, openai_config, settings):
        """Test an empty answer is never returned as success."""
        transport = RecordingTransport(lambda request: chat_response("   "))
        async with OpenAIAdapter(openai_config, settings=settings, transport=transport) as adapter:
            with pytest.raises(APIError):
                await adapter.send_message([user()])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status,error_class", [
        (401, APIAuthenticationError),
        (403, APIAuthenticationError),
        (500, APIError),
    ])
    async def test_http_error_mapping(self, openai_config, settings, status, error_class):
        """Test non-2xx responses map onto the error taxonomy."""
        transport = RecordingTransport(
            lambda request: httpx.Response(status, json={"error": {"message": "nope"}})
        )
        async with OpenAIAdapter(openai_config, settings=settings, transport=transport) as adapter:
            with pytest.raises(error_class) as exc_info:
                await adapter.send_message([user()])

        assert exc_info.value.status_code == status
        assert exc_info.value.provider == "openai"
        assert exc_info.value.model == "gpt-4"

    @pytest.mark.asyncio
    async def test_rate_limit_retry_after(self, openai_config, settings):
        """Test 429 carries the Retry-After delay."""
        transport = RecordingTransport(
            lambda request: httpx.Response(429, headers={"Retry-After": "3"}, json={})
        )
        async with OpenAIAdapter(openai_config, settings=settings, transport=transport) as adapter:
            with pytest.raises(APIRateLimitError) as exc_info:
                await adapter.send_message([user()])
        assert exc_info.value.retry_after == 3.0

    @pytest.mark.asyncio
    async def test_network_failure(self, openai_config, settings):
        """Test transport errors become connection errors."""
        def fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        adapter = OpenAIAdapter(openai_config, settings=settings, transport=httpx.MockTransport(fail))
        async with adapter:
            with pytest.raises(APIConnectionError):
                await adapter.send_message([user()])

    @pytest.mark.asyncio
    async def test_malformed_json(self, openai_config, settings):
        """Test a non-JSON body is a vendor API error."""
        transport = RecordingTransport(lambda request: httpx.Response(200, content=b"<html>"))
        async with OpenAIAdapter(openai_config, settings=settings, transport=transport) as adapter:
            with pytest.raises(APIError):
                await adapter.send_message([user()])

    @pytest.mark.asyncio
    async def test_stream_tokens_in_order(self, openai_config, settings):
        """Test fragments arrive in wire order followed by one completion."""
        frames = [
            json.dumps({"choices": [{"delta": {"role": "assistant"}}]}),
            json.dumps({"choices": [{"delta": {"content": "Hel"}}]}),
            json.dumps({"choices": [{"delta": {"content": "lo"}}]}),
            "not-json",
            json.dumps({"choices": [{"delta": {"content": "!"}}]}),
            "[DONE]",
            json.dumps({"choices": [{"delta": {"content": "ignored"}}]}),
        ]
        transport = RecordingTransport(lambda request: sse_response(frames))
        handlers = CollectingHandlers()

        adapter = OpenAIAdapter(openai_config, streaming=True, settings=settings, transport=transport)
        async with adapter:
            await adapter.send_message_stream([user()], handlers)

        assert handlers.tokens == ["Hel", "lo", "!"]
        assert handlers.completed == 1
        assert handlers.errors == []
        assert transport.last_json()["stream"] is True

    @pytest.mark.asyncio
    async def test_stream_error_frame(self, openai_config, settings):
        """Test an in-stream error fires on_error once and is raised."""
        frames = [
            json.dumps({"choices": [{"delta": {"content": "partial"}}]}),
            json.dumps({"error": {"message": "overloaded"}}),
        ]
        transport = RecordingTransport(lambda request: sse_response(frames))
        handlers = CollectingHandlers()

        adapter = OpenAIAdapter(openai_config, streaming=True, settings=settings, transport=transport)
        async with adapter:
            with pytest.raises(APIError) as exc_info:
                await adapter.send_message_stream([user()], handlers)

        assert "overloaded" in str(exc_info.value)
        assert handlers.tokens == ["partial"]
        assert handlers.errors == [exc_info.value]
        assert handlers.completed == 0

    @pytest.mark.asyncio
    async def test_stream_http_error(self, openai_config, settings):
        """Test a rejected stream request is delivered through on_error."""
        transport = RecordingTransport(lambda request: httpx.Response(401, json={"error": "bad key"}))
        handlers = CollectingHandlers()

        adapter = OpenAIAdapter(openai_config, streaming=True, settings=settings, transport=transport)
        async with adapter:
            with pytest.raises(APIAuthenticationError):
                await adapter.send_message_stream([user()], handlers)

        assert len(handlers.errors) == 1
        assert handlers.completed == 0

    @pytest.mark.asyncio
    async def test_relay_rewrite(self, openai_config, settings, monkeypatch):
        """Test the relay flag routes requests through the relay origin."""
        monkeypatch.setenv("LLM_GATEWAY_RELAY_ORIGIN", "http://localhost:3000/")
        config = openai_config.merged(use_proxy=True)
        transport = RecordingTransport(lambda request: chat_response())

        async with OpenAIAdapter(config, settings=settings, transport=transport) as adapter:
            await adapter.send_message([user()])

        url = transport.requests[0].url
        assert url.host == "localhost"
        assert url.path == "/api/proxy"
        assert url.params["targetUrl"] == "https://api.test/v1/chat/completions"

    @pytest.mark.asyncio
    async def test_relay_flag_without_origin(self, openai_config, settings, monkeypatch):
        """Test the relay flag is ignored when no relay is configured."""
        monkeypatch.delenv("LLM_GATEWAY_RELAY_ORIGIN", raising=False)
        config = openai_config.merged(use_proxy=True)
        transport = RecordingTransport(lambda request: chat_response())

        async with OpenAIAdapter(config, settings=settings, transport=transport) as adapter:
            await adapter.send_message([user()])
        assert str(transport.requests[0].url) == "https://api.test/v1/chat/completions"

    def test_tool_calling_detection(self, openai_config, deepseek_config):
        """Test the tool-calling deny-list and reasoner detection."""
        gpt = OpenAIAdapter(openai_config)
        assert gpt.supports_tool_calling()
        assert not gpt.is_reasoner()
        assert gpt.supports(ProviderCapability.FUNCTION_CALLING)

        reasoner = OpenAIAdapter(deepseek_config)
        assert not reasoner.supports_tool_calling()
        assert reasoner.is_reasoner()
        assert reasoner.supports(ProviderCapability.NATIVE_REASONING)

        chat = OpenAIAdapter(deepseek_config.merged(default_model="deepseek-chat"))
        assert not chat.supports_tool_calling()
        assert not chat.is_reasoner()

    @pytest.mark.asyncio
    async def test_thinking_via_tool_call(self, openai_config, settings):
        """Test tool-capable models get the thinking tool."""
        transport = RecordingTransport(lambda request: chat_response(
            "4",
            tool_calls=[{
                "id": "call_1",
                "type": "function",
                "function": {"name": "thinking", "arguments": '{"thoughts": "2+2"}'},
            }],
        ))
        async with OpenAIAdapter(openai_config, settings=settings, transport=transport) as adapter:
            result = await adapter.send_message_with_thinking([user("2+2?")])

        body = transport.last_json()
        assert body["tools"][0]["function"]["name"] == THINKING_TOOL_NAME
        assert body["tool_choice"] == "auto"
        assert result.thinking == "2+2"
        assert result.content == "4"

    @pytest.mark.asyncio
    async def test_thinking_via_reasoner_native_field(self, deepseek_config, settings):
        """Test reasoners get the instruction and the native field wins."""
        transport = RecordingTransport(lambda request: chat_response(
            "```thinking\ntext trace\n```\n9.9", reasoning_content="native trace",
        ))
        messages = [Message(role="system", content="Be brief."), user("Which is larger?")]
        async with OpenAIAdapter(deepseek_config, settings=settings, transport=transport) as adapter:
            result = await adapter.send_message_with_thinking(messages)

        body = transport.last_json()
        assert "tools" not in body
        assert body["messages"][0]["role"] == "system"
        assert body["messages"][0]["content"] == f"Be brief.\n\n{THINKING_INSTRUCTION}"
        assert len(body["messages"]) == 2
        assert result.thinking == "native trace"

    @pytest.mark.asyncio
    async def test_thinking_via_text_markers(self, deepseek_config, settings):
        """Test the fenced block is parsed when no native field exists."""
        config = deepseek_config.merged(default_model="deepseek-chat")
        transport = RecordingTransport(lambda request: chat_response(
            "```thinking\ncompare digits\n```\nFinal answer: 9.9"
        ))
        async with OpenAIAdapter(config, settings=settings, transport=transport) as adapter:
            result = await adapter.send_message_with_thinking([user("Which is larger?")])

        body = transport.last_json()
        assert body["messages"][0] == {"role": "system", "content": THINKING_INSTRUCTION}
        assert result.thinking == "compare digits"
        assert result.content == "9.9"

    @pytest.mark.asyncio
    async def test_thinking_empty_response_raises(self, openai_config, settings):
        """Test a response with neither answer nor thinking is an error."""
        transport = RecordingTransport(lambda request: chat_response(""))
        async with OpenAIAdapter(openai_config, settings=settings, transport=transport) as adapter:
            with pytest.raises(APIError):
                await adapter.send_message_with_thinking([user()])

    @pytest.mark.asyncio
    async def test_fetch_models(self, openai_config, settings):
        """Test GET /models is parsed into ModelInfo."""
        transport = RecordingTransport(lambda request: httpx.Response(
            200, json={"data": [{"id": "gpt-4"}, {"id": "gpt-4o"}, {"object": "model"}]}
        ))
        async with OpenAIAdapter(openai_config, settings=settings, transport=transport) as adapter:
            models = await adapter.fetch_models()

        assert [m.id for m in models] == ["gpt-4", "gpt-4o"]
        assert transport.requests[0].method == "GET"
        assert str(transport.requests[0].url) == "https://api.test/v1/models"

    @pytest.mark.asyncio
    async def test_fetch_models_failure_returns_empty(self, openai_config, settings):
        """Test listing failures degrade to an empty list."""
        transport = RecordingTransport(lambda request: httpx.Response(500, text="down"))
        async with OpenAIAdapter(openai_config, settings=settings, transport=transport) as adapter:
            assert await adapter.fetch_models() == []

    @pytest.mark.asyncio
    async def test_fetch_models_skips_malformed_entries(self, openai_config, settings):
        """Test entries without a string id are skipped."""
        transport = RecordingTransport(lambda request: httpx.Response(
            200, json={"data": [{"id": 123}, "gpt-3", {"id": None}, {"id": "gpt-4o"}]}
        ))
        async with OpenAIAdapter(openai_config, settings=settings, transport=transport) as adapter:
            models = await adapter.fetch_models()

        assert [m.id for m in models] == ["gpt-4o"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{"data": {"id": "gpt-4"}}, ["gpt-4"], {"data": "gpt-4"}])
    async def test_fetch_models_unexpected_shape_returns_empty(self, openai_config, settings, payload):
        """Test a listing that is not a list of entries degrades to []."""
        transport = RecordingTransport(lambda request: httpx.Response(200, json=payload))
        async with OpenAIAdapter(openai_config, settings=settings, transport=transport) as adapter:
            assert await adapter.fetch_models() == []

    @pytest.mark.asyncio
    async def test_stream_matches_send_message(self, openai_config, settings):
        """Test joined stream fragments equal the non-streaming answer."""
        fragments = ["The capital", " of France", " is Paris."]
        frames = [json.dumps({"choices": [{"delta": {"content": f}}]}) for f in fragments] + ["[DONE]"]

        def handler(request):
            if json.loads(request.content).get("stream"):
                return sse_response(frames)
            return chat_response("".join(fragments))

        transport = RecordingTransport(handler)
        async with OpenAIAdapter(openai_config, settings=settings, transport=transport) as adapter:
            text = await adapter.send_message([user()])

        handlers = CollectingHandlers()
        adapter = OpenAIAdapter(openai_config, streaming=True, settings=settings, transport=transport)
        async with adapter:
            await adapter.send_message_stream([user()], handlers)

        assert "".join(handlers.tokens) == text
        assert handlers.completed == 1

    @pytest.mark.asyncio
    async def test_deepseek_builtin_catalog(self, deepseek_config, settings):
        """Test DeepSeek models are listed without a network call."""
        transport = RecordingTransport(lambda request: chat_response())
        async with OpenAIAdapter(deepseek_config, settings=settings, transport=transport) as adapter:
            models = await adapter.fetch_models()

        assert [m.id for m in models] == ["deepseek-chat", "deepseek-coder", "deepseek-reasoner"]
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_test_connection(self, openai_config, settings):
        """Test the connection check is a one-token request."""
        transport = RecordingTransport(lambda request: chat_response(""))
        async with OpenAIAdapter(openai_config, settings=settings, transport=transport) as adapter:
            await adapter.test_connection()

        body = transport.last_json()
        assert body["max_tokens"] == 1
        assert body["messages"] == [{"role": "user", "content": "ok"}]


class TestGeminiAdapter:
    """Test the Gemini adapter."""

    @staticmethod
    def gemini_response(text):
        return httpx.Response(200, json={
            "candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}],
        })

    @pytest.mark.asyncio
    async def test_send_message_payload(self, gemini_config, settings):
        """Test system instruction, history and final turn mapping."""
        transport = RecordingTransport(lambda request: self.gemini_response("Paris"))
        messages = [
            Message(role="system", content="Be brief."),
            Message(role="system", content="Answer in English."),
            Message(role="user", content="Hi"),
            Message(role="assistant", content="Hello!"),
            Message(role="user", content="Capital of France?"),
        ]
        async with GeminiAdapter(gemini_config, settings=settings, transport=transport) as adapter:
            text = await adapter.send_message(messages)

        assert text == "Paris"
        request = transport.requests[0]
        assert request.url.path == "/v1beta/models/gemini-2.0-flash:generateContent"
        assert request.headers["x-goog-api-key"] == "gm-test"

        body = transport.last_json()
        assert body["systemInstruction"] == {"parts": [{"text": "Be brief.\nAnswer in English."}]}
        assert body["contents"] == [
            {"role": "user", "parts": [{"text": "Hi"}]},
            {"role": "model", "parts": [{"text": "Hello!"}]},
            {"role": "user", "parts": [{"text": "Capital of France?"}]},
        ]
        assert body["generationConfig"]["temperature"] == 0.7

    @pytest.mark.asyncio
    async def test_conversation_must_end_with_user(self, gemini_config, settings):
        """Test a trailing assistant turn is rejected before any request."""
        transport = RecordingTransport(lambda request: self.gemini_response("x"))
        messages = [user("Hi"), Message(role="assistant", content="Hello!")]
        async with GeminiAdapter(gemini_config, settings=settings, transport=transport) as adapter:
            with pytest.raises(ValidationError):
                await adapter.send_message(messages)
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_stream(self, gemini_config, settings):
        """Test SSE streaming from streamGenerateContent."""
        frames = [
            json.dumps({"candidates": [{"content": {"parts": [{"text": "Bon"}]}}]}),
            json.dumps({"candidates": [{"content": {"parts": [{"text": "jour"}]}}]}),
        ]
        transport = RecordingTransport(lambda request: sse_response(frames))
        handlers = CollectingHandlers()

        adapter = GeminiAdapter(gemini_config, streaming=True, settings=settings, transport=transport)
        async with adapter:
            await adapter.send_message_stream([user()], handlers)

        assert handlers.tokens == ["Bon", "jour"]
        assert handlers.completed == 1
        request = transport.requests[0]
        assert request.url.path == "/v1beta/models/gemini-2.0-flash:streamGenerateContent"
        assert request.url.params["alt"] == "sse"

    @pytest.mark.asyncio
    async def test_thinking_instruction_and_parse(self, gemini_config, settings):
        """Test the thinking prompt is appended and the reply parsed."""
        transport = RecordingTransport(
            lambda request: self.gemini_response("```thinking\nrecall geography\n```\nParis")
        )
        async with GeminiAdapter(gemini_config, settings=settings, transport=transport) as adapter:
            result = await adapter.send_message_with_thinking([user("Capital of France?")])

        prompt = transport.last_json()["contents"][-1]["parts"][0]["text"]
        assert prompt.startswith("Capital of France?")
        assert "```thinking" in prompt
        assert result.thinking == "recall geography"
        assert result.content == "Paris"

    @pytest.mark.asyncio
    async def test_fetch_models(self, gemini_config, settings):
        """Test model names are stripped of their prefix and filtered."""
        transport = RecordingTransport(lambda request: httpx.Response(200, json={"models": [
            {
                "name": "models/gemini-2.0-flash",
                "displayName": "Gemini 2.0 Flash",
                "supportedGenerationMethods": ["generateContent", "countTokens"],
            },
            {
                "name": "models/text-embedding-004",
                "supportedGenerationMethods": ["embedContent"],
            },
        ]}))
        async with GeminiAdapter(gemini_config, settings=settings, transport=transport) as adapter:
            models = await adapter.fetch_models()

        assert [(m.id, m.name) for m in models] == [("gemini-2.0-flash", "Gemini 2.0 Flash")]
        assert transport.requests[0].url.path == "/v1beta/models"

    @pytest.mark.asyncio
    async def test_fetch_models_failure_returns_empty(self, gemini_config, settings):
        """Test listing failures degrade to an empty list."""
        transport = RecordingTransport(lambda request: httpx.Response(403, json={}))
        async with GeminiAdapter(gemini_config, settings=settings, transport=transport) as adapter:
            assert await adapter.fetch_models() == []

    @pytest.mark.asyncio
    async def test_fetch_models_skips_malformed_entries(self, gemini_config, settings):
        """Test entries without a string name are skipped."""
        transport = RecordingTransport(lambda request: httpx.Response(200, json={"models": [
            {"name": 42, "supportedGenerationMethods": ["generateContent"]},
            {"name": ["models/x"]},
            {"name": "models/gemini-1.5-pro", "displayName": 7},
        ]}))
        async with GeminiAdapter(gemini_config, settings=settings, transport=transport) as adapter:
            models = await adapter.fetch_models()

        assert [(m.id, m.name) for m in models] == [("gemini-1.5-pro", "gemini-1.5-pro")]

    @pytest.mark.asyncio
    async def test_fetch_models_unexpected_shape_returns_empty(self, gemini_config, settings):
        """Test a listing that is not a list of entries degrades to []."""
        transport = RecordingTransport(lambda request: httpx.Response(200, json={"models": "none"}))
        async with GeminiAdapter(gemini_config, settings=settings, transport=transport) as adapter:
            assert await adapter.fetch_models() == []

    @pytest.mark.asyncio
    async def test_stream_matches_send_message(self, gemini_config, settings):
        """Test joined stream fragments equal the non-streaming answer."""
        fragments = ["Bonjour", ", le", " monde"]
        frames = [json.dumps({"candidates": [{"content": {"parts": [{"text": f}]}}]}) for f in fragments]

        def handler(request):
            if request.url.path.endswith(":streamGenerateContent"):
                return sse_response(frames)
            return self.gemini_response("".join(fragments))

        transport = RecordingTransport(handler)
        async with GeminiAdapter(gemini_config, settings=settings, transport=transport) as adapter:
            text = await adapter.send_message([user()])

        handlers = CollectingHandlers()
        adapter = GeminiAdapter(gemini_config, streaming=True, settings=settings, transport=transport)
        async with adapter:
            await adapter.send_message_stream([user()], handlers)

        assert "".join(handlers.tokens) == text
        assert handlers.completed == 1

    @pytest.mark.asyncio
    async def test_test_connection(self, gemini_config, settings):
        """Test the connection check limits output to one token."""
        transport = RecordingTransport(lambda request: self.gemini_response(""))
        async with GeminiAdapter(gemini_config, settings=settings, transport=transport) as adapter:
            await adapter.test_connection()
        assert transport.last_json()["generationConfig"]["maxOutputTokens"] == 1


class TestAnthropicAdapter:
    """Test the Anthropic adapter."""

    @pytest.mark.asyncio
    async def test_fetch_models_without_network(self, anthropic_config, settings):
        """Test the fixed catalog is returned without a request."""
        transport = RecordingTransport(lambda request: chat_response())
        async with AnthropicAdapter(anthropic_config, settings=settings, transport=transport) as adapter:
            models = await adapter.fetch_models()

        assert len(models) == 4
        assert models[0].id == "claude-3-opus-20240229"
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_send_message_delegates(self, anthropic_config, settings):
        """Test completions go through the chat-completion wire format."""
        transport = RecordingTransport(lambda request: chat_response("Hi from Claude"))
        async with AnthropicAdapter(anthropic_config, settings=settings, transport=transport) as adapter:
            text = await adapter.send_message([user()])

        assert text == "Hi from Claude"
        assert str(transport.requests[0].url) == "https://api.anthropic.test/v1/chat/completions"
        assert transport.last_json()["model"] == "claude-3-haiku-20240307"

    @pytest.mark.asyncio
    async def test_stream_delegates(self, anthropic_config, settings):
        """Test streaming tokens come from the delegated adapter."""
        frames = [json.dumps({"choices": [{"delta": {"content": "Hi"}}]}), "[DONE]"]
        transport = RecordingTransport(lambda request: sse_response(frames))
        handlers = CollectingHandlers()

        adapter = AnthropicAdapter(anthropic_config, streaming=True, settings=settings, transport=transport)
        async with adapter:
            await adapter.send_message_stream([user()], handlers)

        assert handlers.tokens == ["Hi"]
        assert handlers.completed == 1

    @pytest.mark.asyncio
    async def test_thinking_from_text(self, anthropic_config, settings):
        """Test the default thinking path scans the answer text."""
        transport = RecordingTransport(lambda request: chat_response("<think>weigh</think>B"))
        async with AnthropicAdapter(anthropic_config, settings=settings, transport=transport) as adapter:
            result = await adapter.send_message_with_thinking([user()])

        assert result.thinking == "weigh"
        assert result.content == "B"

    def test_capabilities(self, anthropic_config):
        """Test model listing is not advertised."""
        adapter = AnthropicAdapter(anthropic_config)
        assert adapter.supports(ProviderCapability.CHAT_COMPLETION)
        assert not adapter.supports(ProviderCapability.MODEL_LISTING)
