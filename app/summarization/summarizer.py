"""Model-backed summarizer with its fallback ladder."""

from dataclasses import dataclass

from app.config.settings import Settings
from app.ingestion.models import Metadata
from app.logging.logger import Log
from app.parsing.models import DocumentData
from app.summarization.client_base import BaseSummaryClient
from app.summarization.exceptions import (
    EmptyOutputError,
    ModelBlockedError,
    TerminalSummarizationError,
    TransportError,
)
from app.summarization.extractor import decode_output_text, extract_json_object
from app.summarization.heuristics import heuristic_summary
from app.summarization.models import DataOverview, SummaryResult
from app.summarization.prompt_builder import PromptBuilder
from app.summarization.sampler import PROMPT_CHAR_BUDGET, build_sample

OFFLINE_STUB_NOTE = "offline_stub"
TEXT_RESPONSE_NOTE = "model_text_response"
MAX_TEXT_SUMMARY_CHARS = 800


@dataclass(frozen=True)
class SummaryOptions:
    """Generation controls for one model call."""

    model: str
    temperature: float = 0.2
    max_output_tokens: int = 1024
    prompt_char_budget: int = PROMPT_CHAR_BUDGET

    @classmethod
    def from_settings(cls, settings: Settings) -> "SummaryOptions":
        return cls(
            model=settings.summary_model_name,
            temperature=max(0.0, min(1.0, settings.summary_temperature)),
            max_output_tokens=settings.summary_max_output_tokens,
        )


def offline_stub_summary(metadata: Metadata) -> SummaryResult:
    return SummaryResult(
        summary="AI summarization unavailable (no model API key configured).",
        file_type_guess=metadata.filetype,
        insights=["Sample-based parsing completed"],
        data_overview=DataOverview(
            records=metadata.record_count,
            columns=list(metadata.detected_columns),
            notes=[OFFLINE_STUB_NOTE],
        ),
    )


def text_summary(metadata: Metadata, text: str) -> SummaryResult:
    return SummaryResult(
        summary=text[:MAX_TEXT_SUMMARY_CHARS],
        file_type_guess=metadata.filetype,
        data_overview=DataOverview(
            records=metadata.record_count,
            columns=list(metadata.detected_columns),
            notes=[TEXT_RESPONSE_NOTE],
        ),
    )


class Summarizer:
    """Produces a SummaryResult: model JSON, then model text, then heuristics.

    A missing client means no credential is configured; that is a success
    path returning the offline stub.
    """

    def __init__(
        self,
        *,
        client: BaseSummaryClient | None,
        options: SummaryOptions,
        prompt_builder: PromptBuilder | None = None,
    ) -> None:
        self._client = client
        self._options = options
        self._prompt_builder = prompt_builder or PromptBuilder()

    @property
    def has_model(self) -> bool:
        return self._client is not None

    def summarize(self, metadata: Metadata, data: DocumentData) -> SummaryResult:
        """Run the fallback ladder for one document.

        Raises:
            EmptyOutputError: the model call succeeded but returned nothing usable.
            TerminalSummarizationError: the heuristic fallback itself failed.
        """
        if self._client is None:
            Log.info(f"No model credential configured; stub summary for {metadata.filename}")
            return offline_stub_summary(metadata)

        sample = build_sample(data, self._options.prompt_char_budget)
        prompt = self._prompt_builder.build(metadata, sample)
        Log.debug(f"Summary prompt:\n{prompt}")

        try:
            output = self._client.generate(
                model=self._options.model,
                prompt=prompt,
                temperature=self._options.temperature,
                max_output_tokens=self._options.max_output_tokens,
            )
        except (TransportError, ModelBlockedError) as exc:
            Log.warning(f"Model unavailable for {metadata.filename}, using heuristics: {exc}")
            return self.fallback(metadata, data)

        text = decode_output_text(output)
        Log.debug(f"Model raw response:\n{text}")

        payload = extract_json_object(text)
        if payload is not None:
            result = SummaryResult.from_payload(payload)
            if not result.is_empty():
                Log.info(f"Model summary accepted for {metadata.filename}")
                return result
            Log.warning(f"Model JSON for {metadata.filename} had no usable fields")

        if text.strip():
            Log.warning(f"Model response for {metadata.filename} was not JSON; keeping text")
            return text_summary(metadata, text.strip())

        raise EmptyOutputError("Model returned no usable output")

    @staticmethod
    def fallback(metadata: Metadata, data: DocumentData) -> SummaryResult:
        try:
            return heuristic_summary(metadata, data)
        except Exception as exc:
            raise TerminalSummarizationError(f"Heuristic summary failed: {exc}") from exc
