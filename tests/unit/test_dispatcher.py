import threading
from unittest.mock import MagicMock

from app.worker.dispatcher import SummaryDispatcher
from app.worker.state_machine import ProcessingStatus


class TestSummaryDispatcher:
    def test_runs_in_background(self) -> None:
        runner = MagicMock()
        runner.run.return_value = ProcessingStatus.COMPLETED
        dispatcher = SummaryDispatcher(runner, max_workers=2)

        future = dispatcher.submit("r1")

        assert future.result(timeout=5) is ProcessingStatus.COMPLETED
        runner.run.assert_called_once_with("r1")
        assert not dispatcher.is_in_flight("r1")
        dispatcher.shutdown()

    def test_second_submit_joins_in_flight_run(self) -> None:
        release = threading.Event()
        started = threading.Event()
        runner = MagicMock()

        def slow_run(record_id: str) -> ProcessingStatus:
            started.set()
            release.wait(timeout=5)
            return ProcessingStatus.COMPLETED

        runner.run.side_effect = slow_run
        dispatcher = SummaryDispatcher(runner, max_workers=2)

        first = dispatcher.submit("r1")
        assert started.wait(timeout=5)
        second = dispatcher.submit("r1")
        assert dispatcher.is_in_flight("r1")
        release.set()

        assert second is first
        assert first.result(timeout=5) is ProcessingStatus.COMPLETED
        assert runner.run.call_count == 1
        dispatcher.shutdown()

    def test_distinct_ids_run_separately(self) -> None:
        runner = MagicMock()
        runner.run.return_value = ProcessingStatus.COMPLETED
        dispatcher = SummaryDispatcher(runner, max_workers=2)

        futures = [dispatcher.submit("r1"), dispatcher.submit("r2")]
        for future in futures:
            future.result(timeout=5)

        assert sorted(call.args[0] for call in runner.run.call_args_list) == ["r1", "r2"]
        dispatcher.shutdown()

    def test_runner_exception_is_contained(self) -> None:
        runner = MagicMock()
        runner.run.side_effect = RuntimeError("boom")
        dispatcher = SummaryDispatcher(runner, max_workers=1)

        assert dispatcher.submit("r1").result(timeout=5) is None
        assert not dispatcher.is_in_flight("r1")
        dispatcher.shutdown()
