import json

import httpx
import pytest
import respx

from promptline.language_model import AgentMessage, ModelError
from promptline.models.ollama import OllamaProvider

DEFAULT_ENDPOINT = "http://localhost:11434/api/chat"


def test_defaults():
    provider = OllamaProvider()
    info = provider.model_info()
    assert info.provider == "ollama"
    assert info.model == "llama2"
    assert info.max_tokens == 4096
    assert info.supports_tools is False
    assert provider.supports_tools() is False


def test_custom_model_in_info():
    assert OllamaProvider(default_model="mistral").model_info().model == "mistral"


@pytest.mark.asyncio
async def test_chat_returns_content():
    with respx.mock:
        route = respx.post(DEFAULT_ENDPOINT).mock(
            return_value=httpx.Response(200, json={"message": {"content": "Hello"}, "done": True})
        )
        reply = await OllamaProvider().chat([AgentMessage.user("Hi")])

    assert reply.content == "Hello"
    assert reply.model == "llama2"
    assert reply.finish_reason == "stop"
    request = route.calls.last.request
    assert "Authorization" not in request.headers
    body = json.loads(request.content)
    assert body["stream"] is False
    assert body["messages"] == [{"role": "user", "content": "Hi"}]


@pytest.mark.asyncio
async def test_chat_sends_bearer_key_to_custom_url():
    with respx.mock:
        route = respx.post("http://ollama.example.com/api/chat").mock(
            return_value=httpx.Response(200, json={"message": {"content": "ok"}, "done": True})
        )
        reply = await OllamaProvider("http://ollama.example.com", "token").chat(
            [AgentMessage.user("Hi")]
        )

    assert reply.content == "ok"
    assert route.calls.last.request.headers["Authorization"] == "Bearer token"


@pytest.mark.asyncio
async def test_complete_with_system_prompt():
    with respx.mock:
        route = respx.post(DEFAULT_ENDPOINT).mock(
            return_value=httpx.Response(200, json={"message": {"content": "ok"}, "done": True})
        )
        reply = await OllamaProvider().complete("Question", "Rules")

    assert reply.content == "ok"
    body = json.loads(route.calls.last.request.content)
    assert [m["role"] for m in body["messages"]] == ["system", "user"]
    assert [m["content"] for m in body["messages"]] == ["Rules", "Question"]


@pytest.mark.asyncio
async def test_chat_with_tools_matches_chat():
    with respx.mock:
        respx.post(DEFAULT_ENDPOINT).mock(
            return_value=httpx.Response(200, json={"message": {"content": "same"}, "done": True})
        )
        reply = await OllamaProvider().chat_with_tools([AgentMessage.user("Hi")], [])

    assert reply.content == "same"


@pytest.mark.asyncio
async def test_api_error():
    with respx.mock:
        respx.post(DEFAULT_ENDPOINT).mock(return_value=httpx.Response(500, text="boom"))
        with pytest.raises(ModelError, match="Ollama API error: boom"):
            await OllamaProvider().chat([AgentMessage.user("Hi")])


@pytest.mark.asyncio
async def test_malformed_response():
    with respx.mock:
        respx.post(DEFAULT_ENDPOINT).mock(return_value=httpx.Response(200, json={"done": True}))
        with pytest.raises(ModelError):
            await OllamaProvider().chat([AgentMessage.user("Hi")])