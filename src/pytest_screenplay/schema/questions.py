"""Base question definitions.

A question is a typed query: given an actor, it produces an answer of
type `T` or raises. The type argument is carried as a Pydantic generic
parameter and resolved at runtime, so a `Question[int]` can be checked
against the expectations it is paired with.
"""

from abc import abstractmethod
from typing import TYPE_CHECKING, Any

from pytest_screenplay.models import DescribedMixin, resolve_type_argument

if TYPE_CHECKING:
    from pytest_screenplay.actors import Actor


class Question[T](DescribedMixin):
    """Base class for questions.

    A single call to `answered_by` must not affect the future answers of
    unrelated questions beyond what the actor abilities already mutate.
    The core imposes no caching.
    """

    @abstractmethod
    def answered_by(self, actor: 'Actor') -> T:
        """Answer the question on behalf of an actor.

        Args:
            actor: Actor whose abilities may be used to find the answer.

        Returns:
            The answer.
        """

    @property
    def answer_type(self) -> Any:  # noqa: ANN401
        """Type of the answer, or `Any` when unconstrained."""
        return resolve_type_argument(self, Question)
