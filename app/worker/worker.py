import time

from app.config.settings import Settings
from app.database.repositories.base import BaseRecordStore
from app.logging.logger import Log
from app.worker.dispatcher import SummaryDispatcher


class Worker:
    """Poll loop: find records stuck in 'processing' -> resubmit -> sleep.

    Background summarizations live only in process memory; this picks up the
    ones lost to a restart.
    """

    def __init__(
        self,
        store: BaseRecordStore,
        dispatcher: SummaryDispatcher,
        settings: Settings,
    ) -> None:
        self._store = store
        self._dispatcher = dispatcher
        self._settings = settings

    def run(self, max_cycles: int | None = None) -> None:
        """Sweep forever until interrupted.

        If max_cycles is set, stop after that many sweeps (for testing).
        """
        Log.info("Worker started, sweeping for stale records")
        cycles = 0
        try:
            while max_cycles is None or cycles < max_cycles:
                resubmitted = self.sweep_once()
                cycles += 1
                if not resubmitted:
                    Log.debug("No stale records, sleeping")
                    time.sleep(self._settings.sweep_interval_seconds)
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")

    def sweep_once(self) -> int:
        """Resubmit stale records. Store errors are logged and retried next cycle."""
        try:
            record_ids = self._store.find_stale_processing(
                self._settings.stale_processing_seconds
            )
        except Exception as exc:
            Log.warning(f"Database error, will retry: {exc}")
            return 0

        submitted = 0
        for record_id in record_ids:
            if self._dispatcher.is_in_flight(record_id):
                continue
            Log.info(f"Resubmitting stale record {record_id}")
            self._dispatcher.submit(record_id)
            submitted += 1
        return submitted
