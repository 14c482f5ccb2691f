from unittest.mock import patch

import pytest

from app.config.settings import Settings
from app.summarization.example_client_adapter import ExampleClientAdapter
from app.summarization.factory import SummaryClientFactory
from app.summarization.gemini_client_adapter import GeminiClientAdapter
from app.summarization.openai_client_adapter import OpenAIClientAdapter


def _make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {"summary_api_key": "key-123"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestSummaryClientFactory:
    def test_gemini_is_default(self) -> None:
        assert isinstance(SummaryClientFactory.create(_make_settings()), GeminiClientAdapter)

    def test_missing_key_returns_none(self) -> None:
        assert SummaryClientFactory.create(_make_settings(summary_api_key="  ")) is None

    def test_example_needs_no_key(self) -> None:
        settings = _make_settings(summary_provider="example", summary_api_key="")
        assert isinstance(SummaryClientFactory.create(settings), ExampleClientAdapter)

    def test_unknown_provider(self) -> None:
        with pytest.raises(ValueError, match="Unknown summary provider"):
            SummaryClientFactory.create(_make_settings(summary_provider="nope"))

    def test_unknown_provider_rejected_without_key(self) -> None:
        with pytest.raises(ValueError):
            SummaryClientFactory.create(_make_settings(summary_provider="nope", summary_api_key=""))

    def test_openai(self) -> None:
        with patch("app.summarization.openai_client_adapter.openai.OpenAI") as mock_cls:
            client = SummaryClientFactory.create(_make_settings(summary_provider="OpenAI"))
        assert isinstance(client, OpenAIClientAdapter)
        assert mock_cls.call_args.kwargs["base_url"] is None

    def test_named_compatible_provider_uses_known_url(self) -> None:
        with patch("app.summarization.openai_client_adapter.openai.OpenAI") as mock_cls:
            SummaryClientFactory.create(_make_settings(summary_provider="groq"))
        assert mock_cls.call_args.kwargs["base_url"] == "https://api.groq.com/openai/v1"

    def test_openai_compatible_requires_base_url(self) -> None:
        with pytest.raises(ValueError, match="summary_base_url"):
            SummaryClientFactory.create(_make_settings(summary_provider="openai_compatible"))

    def test_openai_compatible_with_base_url(self) -> None:
        with patch("app.summarization.openai_client_adapter.openai.OpenAI") as mock_cls:
            SummaryClientFactory.create(
                _make_settings(
                    summary_provider="openai_compatible",
                    summary_base_url="http://localhost:8000/v1",
                )
            )
        assert mock_cls.call_args.kwargs["base_url"] == "http://localhost:8000/v1"
