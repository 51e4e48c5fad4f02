"""Built-in activities: atomic interactions and composed tasks."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import Field

from pytest_screenplay.errors import ScreenplayError, TaskError
from pytest_screenplay.schema import Activity, FailureMode, FailureModeMixin

if TYPE_CHECKING:
    from pytest_screenplay.actors import Actor

#: The runner receives the actor performing the interaction and raises
#: on failure. Its return value is ignored.
type InteractionRunner = Callable[[Any], Any]


class Interaction(FailureModeMixin, Activity):
    """Low-level atomic activity backed by a callable."""

    perform: InteractionRunner = Field(
        title='Perform function',
        description=(
            'Callable implementing the interaction. Receives the actor '
            'and raises to signal a failure.'
        ),
    )

    def perform_as(self, actor: 'Actor') -> None:
        """Call the perform function.

        Args:
            actor: Actor performing the interaction.
        """
        self.perform(actor)


class Task(Activity):
    """High-level activity composed of ordered sub-activities.

    A task always fails fast: the first failing sub-activity aborts the
    remaining ones regardless of its own failure mode, and the task itself
    surfaces as failed.
    """

    failure_mode: ClassVar[FailureMode] = FailureMode.FAIL_FAST

    activities: tuple[Activity, ...] = Field(
        default=(),
        title='Activities',
        description='Sub-activities performed in order.',
    )

    def perform_as(self, actor: 'Actor') -> None:
        """Perform every sub-activity in order.

        Args:
            actor: Actor performing the task.

        Raises:
            TaskError: At the first failing sub-activity.
        """
        for activity in self.activities:
            try:
                activity.perform_as(actor)
            except Exception as base:  # noqa: BLE001
                raise TaskError(
                    f'task {self.describe_for(actor)!r} failed during '
                    f'activity {activity.describe_for(actor)!r}',
                    cause=base,
                    context=base.context if isinstance(base, ScreenplayError) else None,
                ) from base


def do(description: str, perform: InteractionRunner, *,
       failure_mode: FailureMode = FailureMode.FAIL_FAST) -> Interaction:
    """Create an interaction from a callable.

    Args:
        description: Human-readable description.
        perform: Callable receiving the actor.
        failure_mode: Policy applied when the callable raises.

    Returns:
        A new interaction.
    """
    return Interaction(
        description=description,
        perform=perform,
        failure_mode=failure_mode,
    )


def task_where(description: str, *activities: Activity) -> Task:
    """Create a task composed of activities.

    Args:
        description: Human-readable description.
        activities: Sub-activities performed in order.

    Returns:
        A new task.
    """
    return Task(description=description, activities=activities)
