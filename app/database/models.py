from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.ingestion.models import Metadata
from app.summarization.models import SummaryResult
from app.worker.state_machine import ProcessingStatus


@dataclass
class ProcessingRecord:
    """Represents a row from the processed_files table."""

    id: str
    metadata: Metadata
    raw_data: Any
    status: ProcessingStatus
    summary: SummaryResult | None = None
    last_error: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status.value,
            "metadata": self.metadata.to_dict(),
            "raw_parsed_data": self.raw_data,
            "ai_summary": self.summary.to_dict() if self.summary is not None else None,
            "last_error": self.last_error,
        }
