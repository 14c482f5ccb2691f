from typing import Any

import httpx

from app.summarization.client_base import BaseSummaryClient
from app.summarization.exceptions import ModelBlockedError, TransportError
from app.summarization.models import ModelOutput

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GeminiClientAdapter(BaseSummaryClient):
    """Summary client built on the Gemini generateContent REST API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = (base_url or GEMINI_BASE_URL).rstrip("/")
        self._http = http_client or httpx.Client(timeout=timeout_seconds)

    def generate(
        self,
        *,
        model: str,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
    ) -> ModelOutput:
        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "topK": 32,
                "topP": 0.95,
                "maxOutputTokens": max_output_tokens,
                "responseMimeType": "application/json",
            },
        }
        try:
            response = self._http.post(
                f"{self._base_url}/models/{model}:generateContent",
                params={"key": self._api_key},
                json=body,
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"Gemini network error: {exc}") from exc

        if not response.is_success:
            raise TransportError(
                f"Gemini API error: {response.status_code} {response.text[:200]}"
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError(f"Gemini returned a non-JSON body: {exc}") from exc
        if not isinstance(payload, dict):
            raise TransportError(
                f"Gemini returned an unexpected body: {type(payload).__name__}"
            )
        return self._read_output(payload)

    @staticmethod
    def _read_output(payload: dict[str, Any]) -> ModelOutput:
        candidates = payload.get("candidates") or []
        if not candidates:
            reason = (payload.get("promptFeedback") or {}).get("blockReason")
            raise ModelBlockedError(
                f"Gemini returned no candidates (block reason: {reason or 'unknown'})"
            )

        candidate = candidates[0]
        parts = (candidate.get("content") or {}).get("parts") or []
        texts: list[str] = []
        inline_data: str | None = None
        for part in parts:
            if not isinstance(part, dict):
                continue
            text = part.get("text")
            if isinstance(text, str):
                texts.append(text)
            inline = part.get("inlineData") or part.get("inline_data")
            if inline_data is None and isinstance(inline, dict):
                data = inline.get("data")
                if isinstance(data, str):
                    inline_data = data

        if not parts and candidate.get("finishReason") in ("SAFETY", "BLOCKLIST", "PROHIBITED_CONTENT"):
            raise ModelBlockedError(f"Gemini blocked the response: {candidate['finishReason']}")
        return ModelOutput(text="".join(texts), inline_data=inline_data)
