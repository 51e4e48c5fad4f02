"""Actors and the activity sequencing loop.

An actor holds a name and a list of abilities, and performs batches of
activities. The sequencing loop executes activities strictly in order on
the calling thread and consults the failure mode of each failing activity
to decide whether the batch stops, continues, or ignores the failure.
"""

from logging import getLogger
from threading import Event, Lock
from time import perf_counter
from typing import TYPE_CHECKING, Any, Self
from warnings import warn

from pytest_screenplay.errors import (
    AbilityError,
    AbilityWarning,
    ActivityError,
    ErrorContext,
    MissingAbilityError,
    QuestionError,
    ScreenplayError,
)
from pytest_screenplay.reporting import CollectingReporter, StepResult, StepStatus
from pytest_screenplay.schema.modes import FailureMode
from pytest_screenplay.settings import ScreenplaySettings

if TYPE_CHECKING:
    from pytest_screenplay.reporting import Reporter
    from pytest_screenplay.schema import Activity, Question

logger = getLogger(__name__)


class Actor:
    """An entity performing activities and answering questions.

    Abilities are opaque objects matched by their concrete class. The
    ability list is guarded by a lock, so configuring an actor from several
    threads is safe. Two batches running concurrently on the same actor
    are not isolated from each other.
    """

    def __init__(self, name: str, *,
                 reporter: 'Reporter | None' = None,
                 settings: ScreenplaySettings | None = None,
                 cancel: Event | None = None) -> None:
        """Initialize an actor.

        Args:
            name: Actor name used in descriptions and reports.
            reporter: Failure sink; collects failures in memory by default.
            settings: Runtime settings; resolved from the environment
                by default.
            cancel: Optional event; once set, the next activity of any
                batch is not started and the batch is reported as cancelled.
        """
        self.name = name
        self.reporter: 'Reporter' = reporter if reporter is not None else CollectingReporter()
        self.settings = settings if settings is not None else ScreenplaySettings()
        self.cancel = cancel

        self._abilities: list[Any] = []
        self._lock = Lock()

    def __repr__(self) -> str:
        """String representation."""
        return f'{type(self).__name__}({self.name!r})'

    @property
    def abilities(self) -> tuple[Any, ...]:
        """Snapshot of the abilities in the order they were added."""
        with self._lock:
            return tuple(self._abilities)

    def who_can(self, *abilities: Any) -> Self:  # noqa: ANN401
        """Give abilities to the actor.

        Abilities are appended after the existing ones. An ability whose
        class is already held can never be returned by `ability_to`; this
        is reported as a warning, or as an error in strict mode.

        Args:
            abilities: Ability instances.

        Returns:
            The actor itself, for chaining.

        Raises:
            AbilityError: If an ability is shadowed in strict mode.
        """
        with self._lock:
            held = {type(ability) for ability in self._abilities}

            for ability in abilities:
                kind = type(ability)
                if kind in held:
                    message = (
                        f'Ability {kind.__qualname__!r} of actor {self.name!r} '
                        'is shadowed by an existing'
                    )
                    if self.settings.strict:
                        raise AbilityError(message)
                    warn(message, category=AbilityWarning, stacklevel=2)
                held.add(kind)

            self._abilities.extend(abilities)

        return self

    def ability_to[A](self, kind: type[A]) -> A:
        """Find an ability by its concrete class.

        Subclasses do not match: two abilities shaped the same way but
        declared as different classes are distinct.

        Args:
            kind: Ability class.

        Returns:
            The first ability of exactly this class that was added.

        Raises:
            MissingAbilityError: If the actor holds no such ability.
        """
        with self._lock:
            for ability in self._abilities:
                if type(ability) is kind:
                    return ability

        raise MissingAbilityError(self.name, kind)

    def attempts_to(self, *activities: 'Activity') -> None:
        """Perform activities in order.

        On failure the activity failure mode decides:
        - fail fast: the failure is reported as fatal and the remaining
          activities of this call are not started;
        - error but continue: the failure is reported and the next
          activity runs;
        - ignore: the failure is only logged.

        Args:
            activities: Activities to perform.
        """
        for activity_num, activity in enumerate(activities):
            description = activity.describe_for(self)
            location = ErrorContext(
                actor=self.name,
                activity_num=activity_num,
                activity=description,
            )

            if self.cancel is not None and self.cancel.is_set():
                self.reporter.report_fatal_and_stop(ActivityError(
                    f'cancelled before activity {description!r}',
                    context=location,
                ))
                return

            logger.debug('%s attempts to %s', self.name, description)
            self.reporter.on_activity_start(description)
            started = perf_counter()

            try:
                activity.perform_as(self)
            except Exception as base:  # noqa: BLE001
                self.reporter.on_activity_finish(StepResult(
                    name=description,
                    actor=self.name,
                    status=StepStatus.FAILED,
                    duration=perf_counter() - started,
                    error=base,
                ))
                error = ActivityError(
                    f'failed to perform activity {description!r}',
                    cause=base,
                    context=ErrorContext(**location, values=self._failure_values(base)),
                )
                if not self._handle_failure(FailureMode(activity.failure_mode), error):
                    return
            else:
                self.reporter.on_activity_finish(StepResult(
                    name=description,
                    actor=self.name,
                    status=StepStatus.PASSED,
                    duration=perf_counter() - started,
                ))

    def answers_to[T](self, question: 'Question[T]', default: T | None = None) -> T | None:
        """Answer a question directly.

        A failure is reported as non-fatal and the default is returned.

        Args:
            question: Question to answer.
            default: Value returned when the question fails.

        Returns:
            The answer, or the default.
        """
        try:
            return question.answered_by(self)
        except Exception as base:  # noqa: BLE001
            self.reporter.report_non_fatal(QuestionError(
                f'failed to answer question {question.describe_for(self)!r}',
                cause=base,
                context=ErrorContext(actor=self.name),
            ))

        return default

    def _handle_failure(self, failure_mode: FailureMode, error: ActivityError) -> bool:
        """Route a failure to the reporter.

        Args:
            failure_mode: Failure mode of the failed activity.
            error: Wrapped activity error.

        Returns:
            True if the batch may continue.
        """
        match failure_mode:
            case FailureMode.FAIL_FAST:
                self.reporter.report_fatal_and_stop(error)
                return False
            case FailureMode.ERROR_BUT_CONTINUE:
                self.reporter.report_non_fatal(error)
            case FailureMode.IGNORE:
                self.reporter.log(f'Ignored failure: {error}', self.settings.ignored_levelno)

        return True

    @staticmethod
    def _failure_values(error: Exception) -> dict[str, Any] | None:
        """Extract runtime values attached to a wrapped error."""
        if isinstance(error, ScreenplayError) and error.context:
            return error.context.get('values')

        return None
