"""Reporter turning screenplay failures into pytest outcomes."""

from typing import TYPE_CHECKING

import pytest

from pytest_screenplay.reporting import CollectingReporter

if TYPE_CHECKING:
    from threading import Event

    from pytest_screenplay.errors import ScreenplayError


class PytestReporter(CollectingReporter):
    """Reporter bound to a single pytest test.

    Fatal failures fail the test immediately, together with every failure
    reported before, and set the cancellation event so that actors still
    running in other threads stop before their next activity. Non-fatal
    failures are only collected; the plugin raises them after the test
    body has finished.
    """

    def __init__(self, nodeid: str = '', *, cancel: 'Event | None' = None) -> None:
        """Initialize a reporter for a test.

        Args:
            nodeid: Identifier of the test the failures belong to.
            cancel: Cancellation event set on the first fatal failure.
        """
        super().__init__()

        self.nodeid = nodeid
        self.cancel = cancel

    def report_fatal_and_stop(self, error: 'ScreenplayError') -> None:
        """Record a failure, cancel the stage and fail the test.

        Args:
            error: Reported error.

        Raises:
            pytest.fail.Exception: Always.
        """
        self.record(error)

        if self.cancel is not None:
            self.cancel.set()

        pytest.fail(self.summary(), pytrace=False)
