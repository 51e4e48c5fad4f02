"""Failure and step reporting sinks.

A reporter is consulted by the actor sequencing loop around every
activity it performs:

- `on_activity_start` before the activity runs;
- `on_activity_finish` with the outcome and duration once it has run;

and, when the activity fails, at exactly one point per failure mode:

- `report_fatal_and_stop` for fail-fast activities;
- `report_non_fatal` for activities that may fail without stopping;
- `log` for ignored failures and informational traces.
"""

from enum import StrEnum
from logging import DEBUG, getLogger
from os import linesep
from threading import Lock
from typing import TYPE_CHECKING, Protocol

from pydantic import Field, InstanceOf

from pytest_screenplay.models import SchemaModel

if TYPE_CHECKING:
    from pytest_screenplay.errors import ScreenplayError

logger = getLogger(__name__)


class StepStatus(StrEnum):
    """Outcome of a performed activity."""

    PASSED = 'passed'
    FAILED = 'failed'


class StepResult(SchemaModel):
    """Record of one performed activity."""

    name: str = Field(
        title='Name',
        description='Activity description rendered for the actor.',
    )
    actor: str = Field(
        title='Actor',
        description='Name of the actor who performed the activity.',
    )
    status: StepStatus = Field(
        title='Status',
        description='Whether the activity raised.',
    )
    duration: float = Field(
        ge=0,
        title='Duration',
        description='Time spent in the activity, in seconds.',
    )
    error: InstanceOf[Exception] | None = Field(
        default=None,
        title='Error',
        description='Exception raised by the activity, if any.',
    )

    @property
    def passed(self) -> bool:
        """Whether the activity completed without raising."""
        return self.status is StepStatus.PASSED


class Reporter(Protocol):
    """Failure and step sink contract."""

    def on_activity_start(self, description: str) -> None:
        """Mark the beginning of an activity."""

    def on_activity_finish(self, result: StepResult) -> None:
        """Record the outcome of an activity."""

    def report_non_fatal(self, error: 'ScreenplayError') -> None:
        """Record a failure and keep the test running."""

    def report_fatal_and_stop(self, error: 'ScreenplayError') -> None:
        """Record a failure and abort the remaining work of the batch."""

    def log(self, message: str, level: int = DEBUG) -> None:
        """Emit an informational trace with no failure implication."""


class CollectingReporter:
    """Reporter collecting failures and step results in memory.

    Non-fatal failures are stored and logged. Fatal failures are stored
    and the error is raised, which stops the batch and propagates to the
    caller of `attempts_to`.
    """

    def __init__(self) -> None:
        """Initialize an empty reporter."""
        self.failures: list['ScreenplayError'] = []
        self.steps: list[StepResult] = []
        self._lock = Lock()

    @property
    def failed(self) -> bool:
        """Whether any failure has been reported."""
        return bool(self.failures)

    def record(self, error: 'ScreenplayError') -> None:
        """Store a failure.

        Args:
            error: Reported error.
        """
        with self._lock:
            self.failures.append(error)

    def on_activity_start(self, description: str) -> None:
        """Trace the beginning of an activity.

        Args:
            description: Activity description rendered for the actor.
        """
        logger.debug('Starting %s', description)

    def on_activity_finish(self, result: StepResult) -> None:
        """Store the outcome of an activity.

        Args:
            result: Step record.
        """
        logger.debug('Finished %s: %s in %.3fs', result.name, result.status, result.duration)

        with self._lock:
            self.steps.append(result)

    def report_non_fatal(self, error: 'ScreenplayError') -> None:
        """Record a failure and keep the test running.

        Args:
            error: Reported error.
        """
        logger.warning('%s', error)
        self.record(error)

    def report_fatal_and_stop(self, error: 'ScreenplayError') -> None:
        """Record a failure and raise it.

        Args:
            error: Reported error.

        Raises:
            ScreenplayError: Always, the reported error itself.
        """
        logger.error('%s', error)
        self.record(error)

        raise error

    def log(self, message: str, level: int = DEBUG) -> None:
        """Emit a trace through the module logger.

        Args:
            message: Message to log.
            level: Logging level.
        """
        logger.log(level, '%s', message)

    def summary(self) -> str:
        """Render every recorded failure as one numbered message."""
        with self._lock:
            failures = tuple(self.failures)

        if len(failures) == 1:
            return f'{failures[0]}'

        lines = [f'{len(failures)} failures reported:']
        lines.extend(
            f'{num}) {failure}'
            for num, failure in enumerate(failures, start=1)
        )

        return linesep.join(lines)
