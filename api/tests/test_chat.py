"""Tests for the study assistant relay."""
import json

import httpx
import pytest

import config
import routes.chat
from errors import ServiceUnavailableError
from models import ChatTurn, PaperContext
from services.chat.relay import (
    FALLBACK_REPLY,
    SYSTEM_PROMPT,
    ChatRelay,
    build_messages,
    build_system_prompt,
    get_chat_relay,
)

PAPER = {
    "id": "b1d2",
    "title": "DSDV 3rd Sem 2024",
    "subject": "dsdv",
    "board": "university-vtu",
    "class_level": "ece",
    "year": 2024,
    "exam_type": "sem_paper",
    "description": None,
}


def completion(content):
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "google/gemini-2.5-flash",
        "choices": [{
            "index": 0,
            "message": {"role": "assistant", "content": content},
            "finish_reason": "stop",
        }],
    }


class Gateway:
    """Stub upstream that records every request body."""

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = body if body is not None else completion("Revise Karnaugh maps first.")
        self.requests: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append({
            "url": str(request.url),
            "auth": request.headers.get("Authorization"),
            "json": json.loads(request.content),
        })
        return httpx.Response(self.status_code, json=self.body)

    def relay(self) -> ChatRelay:
        return ChatRelay(
            api_key="gateway-key",
            base_url="https://gateway.test/v1",
            http_client=httpx.Client(transport=httpx.MockTransport(self)),
        )


@pytest.fixture
def gateway(monkeypatch):
    gw = Gateway()
    monkeypatch.setattr(routes.chat, "get_chat_relay", gw.relay)
    return gw


class TestPrompt:
    def test_without_paper_is_the_fixed_preamble(self) -> None:
        assert build_system_prompt(None) == SYSTEM_PROMPT

    def test_paper_details_are_included(self) -> None:
        prompt = build_system_prompt(PaperContext(**PAPER))
        assert prompt.startswith(SYSTEM_PROMPT)
        assert "- Title: DSDV 3rd Sem 2024" in prompt
        assert "- Subject: dsdv" in prompt
        assert "- Class: ece" in prompt
        assert "- Exam Type: sem_paper" in prompt
        assert "Description" not in prompt

    def test_description_only_when_present(self) -> None:
        prompt = build_system_prompt(PaperContext(**{**PAPER, "description": "Model paper"}))
        assert "- Description: Model paper" in prompt

    def test_history_is_bounded_to_last_ten(self) -> None:
        history = [ChatTurn(role="user" if i % 2 == 0 else "assistant", content=f"turn {i}") for i in range(14)]
        messages = build_messages("next", None, history)

        assert messages[0]["role"] == "system"
        assert [m["content"] for m in messages[1:-1]] == [f"turn {i}" for i in range(4, 14)]
        assert messages[-1] == {"role": "user", "content": "next"}


class TestRelay:
    def test_request_sent_upstream(self) -> None:
        gw = Gateway()
        reply = gw.relay().reply("Explain flip-flops", PaperContext(**PAPER))

        assert reply == "Revise Karnaugh maps first."
        assert len(gw.requests) == 1
        sent = gw.requests[0]
        assert sent["url"] == "https://gateway.test/v1/chat/completions"
        assert sent["auth"] == "Bearer gateway-key"
        assert sent["json"]["model"] == config.AI_CHAT_MODEL
        assert sent["json"]["max_tokens"] == 1024
        assert sent["json"]["temperature"] == 0.7
        assert sent["json"]["messages"][-1] == {"role": "user", "content": "Explain flip-flops"}

    def test_empty_completion_falls_back(self) -> None:
        assert Gateway(body=completion(None)).relay().reply("hi") == FALLBACK_REPLY

    def test_missing_api_key(self) -> None:
        with pytest.raises(ServiceUnavailableError):
            ChatRelay(api_key="")

    def test_relay_reused_across_requests(self, monkeypatch) -> None:
        monkeypatch.setattr(config, "AI_GATEWAY_API_KEY", "key-one")
        first = get_chat_relay()
        assert get_chat_relay() is first

        monkeypatch.setattr(config, "AI_GATEWAY_API_KEY", "key-two")
        assert get_chat_relay() is not first

    def test_missing_key_is_not_cached(self, monkeypatch) -> None:
        monkeypatch.setattr(config, "AI_GATEWAY_API_KEY", "")
        with pytest.raises(ServiceUnavailableError):
            get_chat_relay()
        monkeypatch.setattr(config, "AI_GATEWAY_API_KEY", "key-one")
        assert isinstance(get_chat_relay(), ChatRelay)


class TestChatRoute:
    @pytest.mark.parametrize("path", ["/api/chat", "/functions/v1/ai-chat"])
    def test_reply(self, client, gateway, path) -> None:
        response = client.post(path, json={
            "message": "What should I revise?",
            "paperContext": PAPER,
            "conversationHistory": [
                {"role": "user", "content": "Hi"},
                {"role": "assistant", "content": "Hello! How can I help?"},
            ],
        })

        assert response.status_code == 200
        assert response.json() == {"message": "Revise Karnaugh maps first."}

        sent = gateway.requests[0]["json"]["messages"]
        system = sent[0]["content"]
        assert "DSDV 3rd Sem 2024" in system
        assert "dsdv" in system
        assert "sem_paper" in system
        assert [m["role"] for m in sent] == ["system", "user", "assistant", "user"]

    @pytest.mark.parametrize("body", [{"message": ""}, {"message": "   "}, {}])
    def test_blank_message_never_reaches_upstream(self, client, gateway, body) -> None:
        response = client.post("/api/chat", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "Message is required"}
        assert gateway.requests == []

    def test_not_configured(self, client, monkeypatch) -> None:
        monkeypatch.setattr(config, "AI_GATEWAY_API_KEY", "")
        response = client.post("/api/chat", json={"message": "hello"})
        assert response.status_code == 500
        assert response.json() == {"error": "AI service not configured"}

    def test_upstream_error(self, client, monkeypatch) -> None:
        gw = Gateway(status_code=429, body={"error": {"message": "rate limited"}})
        monkeypatch.setattr(routes.chat, "get_chat_relay", gw.relay)

        response = client.post("/api/chat", json={"message": "hello"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to get AI response"}
        assert len(gw.requests) == 1

    def test_requires_authorization(self, anonymous_client, gateway) -> None:
        response = anonymous_client.post("/api/chat", json={"message": "hello"})
        assert response.status_code == 401
        assert gateway.requests == []
