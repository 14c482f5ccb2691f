from abc import ABC, abstractmethod
from typing import Any

from app.database.models import ProcessingRecord
from app.ingestion.models import Metadata
from app.summarization.models import SummaryResult
from app.worker.state_machine import ProcessingStatus


class BaseRecordStore(ABC):
    """Contract for persisting processing records."""

    @abstractmethod
    def create(
        self,
        record_id: str,
        metadata: Metadata,
        raw_data: Any,
        status: ProcessingStatus = ProcessingStatus.PROCESSING,
    ) -> None:
        """Insert a new record with a null summary."""

    @abstractmethod
    def update_summary(
        self,
        record_id: str,
        summary: SummaryResult | None,
        status: ProcessingStatus,
        last_error: str | None,
    ) -> bool:
        """Atomically set (summary, status, last_error) on one row.

        A summary of None leaves the stored summary unchanged.

        Returns:
            False if the record does not exist.
        """

    @abstractmethod
    def get(self, record_id: str) -> ProcessingRecord | None:
        """Fetch one record, or None if it does not exist."""

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """Delete one record. Returns False if it did not exist."""

    @abstractmethod
    def list_all(self) -> list[ProcessingRecord]:
        """All records, newest first."""

    @abstractmethod
    def find_stale_processing(self, older_than_seconds: int, limit: int = 20) -> list[str]:
        """Ids of records left in 'processing' longer than the given age."""

    def mark_processing(self, record_id: str) -> bool:
        return self.update_summary(record_id, None, ProcessingStatus.PROCESSING, None)

    def mark_completed(self, record_id: str, summary: SummaryResult) -> bool:
        return self.update_summary(record_id, summary, ProcessingStatus.COMPLETED, None)

    def mark_failed(self, record_id: str, error: str) -> bool:
        return self.update_summary(record_id, None, ProcessingStatus.FAILED, error)
