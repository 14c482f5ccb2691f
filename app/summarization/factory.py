from typing import ClassVar

from app.config.settings import Settings
from app.summarization.client_base import BaseSummaryClient
from app.summarization.example_client_adapter import ExampleClientAdapter
from app.summarization.gemini_client_adapter import GeminiClientAdapter
from app.summarization.openai_client_adapter import OpenAIClientAdapter


class SummaryClientFactory:
    """Creates the configured model client, or None when no credential is set."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseSummaryClient | None:
        provider = settings.summary_provider.strip().lower()
        if provider == "example":
            return ExampleClientAdapter()

        cls._check_provider(provider)
        api_key = settings.summary_api_key.strip()
        if not api_key:
            return None

        base_url = settings.summary_base_url.strip() or None
        if provider == "gemini":
            return GeminiClientAdapter(
                api_key=api_key,
                timeout_seconds=settings.summary_timeout_seconds,
                base_url=base_url,
            )
        return OpenAIClientAdapter(
            api_key=api_key,
            timeout_seconds=settings.summary_timeout_seconds,
            base_url=cls._resolve_openai_base_url(provider, base_url),
        )

    @classmethod
    def _check_provider(cls, provider: str) -> None:
        supported = [
            "example",
            "gemini",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        if provider not in supported:
            raise ValueError(
                f"Unknown summary provider '{provider}'. Choose from: {supported}"
            )

    @classmethod
    def _resolve_openai_base_url(cls, provider: str, base_url: str | None) -> str | None:
        if provider == "openai":
            return base_url
        if provider == "openai_compatible":
            if not base_url:
                raise ValueError(
                    "summary_base_url is required for summary_provider=openai_compatible"
                )
            return base_url
        return base_url or cls.OPENAI_COMPATIBLE_BASE_URLS[provider]
