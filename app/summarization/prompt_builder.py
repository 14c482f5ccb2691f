import json
from pathlib import Path

from app.ingestion.models import Metadata
from app.summarization.prompt_loader import load_json_schema, load_prompt_template
from app.summarization.sampler import METADATA_CHAR_BUDGET, to_json_text, truncate_text


class PromptBuilder:
    """Composes the summary prompt: instructions, schema, metadata, then sample.

    Output depends only on (metadata, sample), so the same upload always
    produces the same prompt.
    """

    def __init__(
        self,
        *,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        metadata_char_budget: int = METADATA_CHAR_BUDGET,
    ) -> None:
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._json_schema = load_json_schema(json_schema_path)
        self._json_schema_dict = json.loads(self._json_schema)
        self._metadata_char_budget = metadata_char_budget

    @property
    def json_schema(self) -> dict[str, object]:
        return self._json_schema_dict

    def build(self, metadata: Metadata, sample: str) -> str:
        metadata_text = truncate_text(
            to_json_text(metadata.to_dict()), self._metadata_char_budget
        )
        return self._prompt_template.format(
            json_schema=self._json_schema.strip(),
            metadata=metadata_text,
            sample=sample,
        )
