import io
import json
import urllib.error

import pytest

from src.drsem.llm_client import (
    GeminiJSONClient,
    LLMRequestError,
    MissingApiKeyError,
    build_request_payload,
    parse_structured_reply,
)


class FakeResponse:
    def __init__(self, payload):
        self._body = json.dumps(payload).encode("utf-8")

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def _gemini_reply(inner):
    return {"candidates": [{"content": {"parts": [{"text": json.dumps(inner)}]}}]}


def test_payload_orders_history_then_attachment_then_text():
    history = [{"role": "model", "text": "Hello"}, {"role": "user", "text": "Hi"}]
    attachment = {"name": "fig.png", "mime_type": "image/png", "data": "data:image/png;base64,QUJD"}

    payload = build_request_payload(history, "What is CFA?", attachment)

    assert [turn["role"] for turn in payload["contents"]] == ["model", "user", "user"]
    last_parts = payload["contents"][-1]["parts"]
    assert last_parts[0] == {"inline_data": {"mime_type": "image/png", "data": "QUJD"}}
    assert last_parts[1] == {"text": "What is CFA?"}
    assert payload["generationConfig"]["responseMimeType"] == "application/json"
    assert "Dr.SEM" in payload["system_instruction"]["parts"][0]["text"]


def test_parse_structured_reply_reads_schema_fields():
    reply = parse_structured_reply(
        json.dumps({"answer": "CFA is...", "suggestedQuestions": ["Q1", " "], "relatedQuestions": ["R1"]})
    )
    assert reply == {"answer": "CFA is...", "suggested_questions": ["Q1"], "related_questions": ["R1"]}


def test_parse_structured_reply_falls_back_to_raw_text():
    assert parse_structured_reply("plain words")["answer"] == "plain words"
    assert parse_structured_reply("")["answer"] == ""


def test_missing_key_raises(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    client = GeminiJSONClient()
    assert client.is_enabled() is False
    with pytest.raises(MissingApiKeyError):
        client.send_message([], "hello")


def test_send_message_posts_to_generate_content(monkeypatch):
    captured = {}

    def fake_urlopen(request, timeout=None):
        captured["url"] = request.full_url
        captured["key"] = request.get_header("X-goog-api-key")
        captured["body"] = json.loads(request.data.decode("utf-8"))
        return FakeResponse(_gemini_reply({"answer": "ok", "suggestedQuestions": [], "relatedQuestions": []}))

    monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)
    client = GeminiJSONClient(api_key="secret", model="gemini-2.5-flash")

    reply = client.send_message([], "hello")

    assert reply["answer"] == "ok"
    assert captured["url"].endswith("/gemini-2.5-flash:generateContent")
    assert captured["key"] == "secret"
    assert captured["body"]["contents"][-1]["parts"] == [{"text": "hello"}]


def test_http_error_is_wrapped(monkeypatch):
    def fake_urlopen(request, timeout=None):
        raise urllib.error.HTTPError(
            request.full_url, 400, "Bad Request", None, io.BytesIO(b'{"error": "API key not valid"}')
        )

    monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)

    with pytest.raises(LLMRequestError, match="API key not valid"):
        GeminiJSONClient(api_key="bad").send_message([], "hello")


def test_timeout_is_wrapped(monkeypatch):
    def fake_urlopen(request, timeout=None):
        raise TimeoutError("timed out")

    monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)

    with pytest.raises(LLMRequestError, match="timed out"):
        GeminiJSONClient(api_key="key").send_message([], "hello")


def test_non_json_body_is_wrapped(monkeypatch):
    class HtmlResponse(FakeResponse):
        def read(self):
            return b"<html>Bad Gateway</html>"

    monkeypatch.setattr("urllib.request.urlopen", lambda request, timeout=None: HtmlResponse({}))

    with pytest.raises(LLMRequestError, match="unreadable"):
        GeminiJSONClient(api_key="key").send_message([], "hello")
