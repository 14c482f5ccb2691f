"""Example summary client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseSummaryClient and register the provider in SummaryClientFactory.
"""

import json
from typing import ClassVar

from app.summarization.client_base import BaseSummaryClient
from app.summarization.models import ModelOutput


class ExampleClientAdapter(BaseSummaryClient):
    """Returns a fixed, valid summary JSON without any network call."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "summary": "Example summary generated without a model provider.",
        "file_type_guess": "",
        "probable_domain": "general",
        "key_fields": [],
        "insights": [],
        "anomalies": [],
        "data_overview": {"records": 0, "columns": [], "notes": ["example_provider"]},
    }

    def generate(
        self,
        *,
        model: str,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
    ) -> ModelOutput:
        _ = model, prompt, temperature, max_output_tokens
        return ModelOutput(text=json.dumps(self.DEFAULT_RESPONSE))
