import threading
from concurrent.futures import Future, ThreadPoolExecutor

from app.logging.logger import Log
from app.worker.state_machine import ProcessingStatus
from app.worker.summary_runner import SummaryRunner


class SummaryDispatcher:
    """Run summarizations in the background, at most one per record at a time.

    Submitting an id that is already in flight returns the in-flight future
    instead of starting a second run that would race on the same row.
    """

    def __init__(self, runner: SummaryRunner, max_workers: int = 4) -> None:
        self._runner = runner
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="summary"
        )
        self._in_flight: dict[str, Future[ProcessingStatus | None]] = {}
        self._lock = threading.Lock()

    def submit(self, record_id: str) -> "Future[ProcessingStatus | None]":
        with self._lock:
            existing = self._in_flight.get(record_id)
            if existing is not None:
                Log.info(f"Record {record_id} already being summarized; joining")
                return existing
            future = self._executor.submit(self._run, record_id)
            self._in_flight[record_id] = future
        return future

    def is_in_flight(self, record_id: str) -> bool:
        with self._lock:
            return record_id in self._in_flight

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _run(self, record_id: str) -> ProcessingStatus | None:
        try:
            return self._runner.run(record_id)
        except Exception as exc:
            Log.exception(f"Unexpected error summarizing record {record_id}: {exc}")
            return None
        finally:
            with self._lock:
                self._in_flight.pop(record_id, None)
