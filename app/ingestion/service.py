import uuid
from concurrent.futures import TimeoutError as FutureTimeoutError

from app.config.settings import Settings
from app.database.models import ProcessingRecord
from app.database.repositories.base import BaseRecordStore
from app.ingestion.acceptance import check_upload
from app.ingestion.exceptions import RecordNotFoundError
from app.ingestion.models import Metadata, UploadReceipt
from app.logging.logger import Log
from app.parsing.file_parser import parse_file
from app.worker.dispatcher import SummaryDispatcher
from app.worker.state_machine import ProcessingStatus


class IngestionService:
    """Operations an HTTP layer exposes: upload, re-summarize, list, detail, delete."""

    def __init__(
        self,
        store: BaseRecordStore,
        dispatcher: SummaryDispatcher,
        settings: Settings,
    ) -> None:
        self._store = store
        self._dispatcher = dispatcher
        self._settings = settings

    def ingest(
        self,
        buffer: bytes | None,
        filename: str,
        mime_type: str | None = None,
    ) -> UploadReceipt:
        """Parse an upload, record it as 'processing' and start summarization.

        Returns as soon as the record exists; the summary is filled in later.

        Raises:
            IngestionError: if the upload is rejected at the boundary.
            ParseError: if the content is malformed for its detected type.
        """
        content = check_upload(buffer, filename, mime_type, self._settings.max_upload_bytes)
        document = parse_file(content, filename, mime_type)
        metadata = Metadata.from_document(document, filename=filename, size_bytes=len(content))

        record_id = str(uuid.uuid4())
        self._store.create(record_id, metadata, document.to_json_data())
        Log.info(f"Created record {record_id} for {filename} ({document.description})")

        self._dispatcher.submit(record_id)
        return UploadReceipt(
            id=record_id,
            status=ProcessingStatus.PROCESSING.value,
            metadata=metadata,
            file_type_description=document.description,
        )

    def resummarize(self, record_id: str, timeout: float | None = None) -> ProcessingRecord:
        """Re-drive a record through summarization and wait for the outcome.

        Joins an in-flight run for the same record rather than starting another.

        Raises:
            RecordNotFoundError: if the record does not exist.
        """
        if self._store.get(record_id) is None:
            raise RecordNotFoundError(f"Record {record_id} not found")
        future = self._dispatcher.submit(record_id)
        try:
            future.result(timeout=timeout)
        except FutureTimeoutError:
            Log.warning(f"Re-summarization of {record_id} still running after {timeout}s")
        record = self._store.get(record_id)
        if record is None:
            raise RecordNotFoundError(f"Record {record_id} not found")
        return record

    def get(self, record_id: str) -> ProcessingRecord:
        record = self._store.get(record_id)
        if record is None:
            raise RecordNotFoundError(f"Record {record_id} not found")
        return record

    def list_records(self) -> list[ProcessingRecord]:
        return self._store.list_all()

    def delete(self, record_id: str) -> bool:
        deleted = self._store.delete(record_id)
        if deleted:
            Log.info(f"Deleted record {record_id}")
        return deleted
