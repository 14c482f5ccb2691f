import base64
import json

import httpx
import pytest

from app.summarization.exceptions import ModelBlockedError, TransportError
from app.summarization.gemini_client_adapter import GEMINI_BASE_URL, GeminiClientAdapter


def _make_adapter(handler) -> GeminiClientAdapter:
    return GeminiClientAdapter(
        api_key="test-key",
        timeout_seconds=5,
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def _generate(adapter: GeminiClientAdapter):
    return adapter.generate(
        model="gemini-2.5-flash",
        prompt="Summarize",
        temperature=0.2,
        max_output_tokens=1024,
    )


def _candidate(*parts: dict) -> dict:
    return {"candidates": [{"content": {"parts": list(parts)}, "finishReason": "STOP"}]}


class TestRequest:
    def test_posts_generate_content(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_candidate({"text": "{}"}))

        _generate(_make_adapter(handler))

        request = seen[0]
        assert str(request.url).startswith(
            f"{GEMINI_BASE_URL}/models/gemini-2.5-flash:generateContent"
        )
        assert request.url.params["key"] == "test-key"
        body = json.loads(request.content)
        assert body["contents"][0]["parts"][0]["text"] == "Summarize"
        config = body["generationConfig"]
        assert config["temperature"] == 0.2
        assert config["maxOutputTokens"] == 1024
        assert config["responseMimeType"] == "application/json"


class TestResponse:
    def test_text_parts_joined(self) -> None:
        adapter = _make_adapter(
            lambda request: httpx.Response(200, json=_candidate({"text": '{"a":'}, {"text": " 1}"}))
        )
        assert _generate(adapter).text == '{"a": 1}'

    def test_inline_data_read(self) -> None:
        encoded = base64.b64encode(b'{"summary": "x"}').decode()
        adapter = _make_adapter(
            lambda request: httpx.Response(
                200, json=_candidate({"inlineData": {"mimeType": "application/json", "data": encoded}})
            )
        )
        output = _generate(adapter)
        assert output.text == ""
        assert output.inline_data == encoded

    def test_no_candidates_is_blocked(self) -> None:
        adapter = _make_adapter(
            lambda request: httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}})
        )
        with pytest.raises(ModelBlockedError, match="SAFETY"):
            _generate(adapter)

    def test_safety_finish_without_parts_is_blocked(self) -> None:
        adapter = _make_adapter(
            lambda request: httpx.Response(
                200, json={"candidates": [{"finishReason": "SAFETY"}]}
            )
        )
        with pytest.raises(ModelBlockedError):
            _generate(adapter)


class TestErrors:
    def test_non_success_status(self) -> None:
        adapter = _make_adapter(lambda request: httpx.Response(503, text="unavailable"))
        with pytest.raises(TransportError, match="Gemini API error: 503"):
            _generate(adapter)

    def test_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError, match="network error"):
            _generate(_make_adapter(handler))

    def test_non_json_body(self) -> None:
        adapter = _make_adapter(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(TransportError, match="non-JSON"):
            _generate(adapter)

    def test_non_object_body(self) -> None:
        adapter = _make_adapter(lambda request: httpx.Response(200, json=[{"candidates": []}]))
        with pytest.raises(TransportError, match="unexpected body: list"):
            _generate(adapter)
