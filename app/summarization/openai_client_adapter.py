import httpx
import openai

from app.summarization.client_base import BaseSummaryClient
from app.summarization.exceptions import ModelBlockedError, TransportError
from app.summarization.models import ModelOutput


class OpenAIClientAdapter(BaseSummaryClient):
    """Summary client built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        system_prompt: str = "You produce strict JSON summaries of uploaded data.",
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )
        self._system_prompt = system_prompt

    def generate(
        self,
        *,
        model: str,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
    ) -> ModelOutput:
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_output_tokens,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": self._system_prompt},
                    {"role": "user", "content": prompt},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise TransportError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise TransportError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise ModelBlockedError("AI returned no choices")
        choice = response.choices[0]
        if choice.finish_reason == "content_filter":
            raise ModelBlockedError("AI response was blocked by the content filter")
        return ModelOutput(text=choice.message.content or "")
