from app.database.repositories.base import BaseRecordStore
from app.logging.logger import Log
from app.parsing.models import restore_data
from app.summarization.summarizer import Summarizer
from app.worker.state_machine import ProcessingStatus, ensure_transition


class SummaryRunner:
    """Drive one record through processing -> completed | failed."""

    def __init__(self, summarizer: Summarizer, store: BaseRecordStore) -> None:
        self._summarizer = summarizer
        self._store = store

    def run(self, record_id: str) -> ProcessingStatus | None:
        """Summarize a record and persist the resulting state.

        Returns the final status, or None if the record no longer exists.
        Never raises for summarization problems; they end in 'failed'.
        """
        record = self._store.get(record_id)
        if record is None:
            Log.warning(f"Record {record_id} not found, skipping summarization")
            return None

        ensure_transition(record.status, ProcessingStatus.PROCESSING)
        if not self._store.mark_processing(record_id):
            Log.warning(f"Record {record_id} disappeared before processing started")
            return None
        Log.info(f"Summarizing record {record_id} ({record.metadata.filename})")

        data = restore_data(record.metadata.data_shape, record.raw_data)
        try:
            summary = self._summarizer.summarize(record.metadata, data)
        except Exception as exc:
            return self._finish_failed(record_id, exc)

        if not self._store.mark_completed(record_id, summary):
            Log.warning(f"Record {record_id} was deleted while summarizing; result dropped")
            return None
        Log.info(f"Record {record_id} completed")
        return ProcessingStatus.COMPLETED

    def _finish_failed(self, record_id: str, exc: Exception) -> ProcessingStatus | None:
        Log.error(f"Summarization of record {record_id} failed: {exc}")
        if not self._store.mark_failed(record_id, str(exc) or type(exc).__name__):
            Log.warning(f"Record {record_id} was deleted while summarizing; failure dropped")
            return None
        return ProcessingStatus.FAILED
