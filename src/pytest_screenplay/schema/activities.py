"""Base activity definitions.

An activity represents a single executable step performed by an actor.
Activities are immutable command objects: they carry a description and a
failure mode, and every call to `perform_as` must be independently safe.

This module is declarative and does not implement sequencing or failure
handling, which belong to the actor.
"""

from abc import abstractmethod
from typing import TYPE_CHECKING, Self

from pydantic import Field

from pytest_screenplay.models import DescribedMixin

from .modes import FailureMode

if TYPE_CHECKING:
    from pytest_screenplay.actors import Actor


class Activity(DescribedMixin):
    """Base class for executable activities.

    Subclasses must expose a `failure_mode` attribute, either as a field
    (`FailureModeMixin`) or as a class constant for activities whose policy
    never varies.
    """

    @abstractmethod
    def perform_as(self, actor: 'Actor') -> None:
        """Perform the activity on behalf of an actor.

        Args:
            actor: Actor performing the activity.

        Raises:
            Exception: Any failure; the actor decides what to do with it
                according to the failure mode.
        """


class FailureModeMixin(Activity):
    """Mixin for activities with a failure mode chosen at construction."""

    failure_mode: FailureMode = Field(
        default=FailureMode.FAIL_FAST,
        title='Failure mode',
        description='Policy applied by the actor when the activity fails.',
    )

    def with_failure_mode(self, failure_mode: FailureMode) -> Self:
        """Return a copy of the activity with another failure mode.

        Args:
            failure_mode: New failure mode.

        Returns:
            A new activity; the original one is left unchanged.
        """
        return self.model_copy(update={
            'failure_mode': FailureMode(failure_mode),
        })
