"""Built-in questions.

- `value_of` answers a literal value;
- `result_of` answers whatever a callable returns for the actor.

The answer type of `value_of` is the type of the value; the answer type
of `result_of` is the return annotation of the callable, if any.
"""

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import Field, model_validator

from pytest_screenplay.generics import return_type
from pytest_screenplay.schema import Question
from pytest_screenplay.values import describe_value

if TYPE_CHECKING:
    from pytest_screenplay.actors import Actor

#: The runner receives the actor asking the question and returns the answer.
type QuestionRunner = Callable[[Any], Any]


class FunctionQuestion[T](Question[T]):
    """Question answered by a callable."""

    ask: QuestionRunner = Field(
        title='Ask function',
        description=(
            'Callable computing the answer. Receives the actor and '
            'raises if the answer is unavailable.'
        ),
    )

    def answered_by(self, actor: 'Actor') -> T:
        """Call the ask function.

        Args:
            actor: Actor asking the question.

        Returns:
            The answer.
        """
        return self.ask(actor)


class ValueQuestion[T](Question[T]):
    """Question answering a literal value, whoever asks."""

    value: Any = Field(
        title='Answer',
        description='Value returned as the answer.',
    )

    @model_validator(mode='before')
    @classmethod
    def _default_description(cls, data: Any) -> Any:  # noqa: ANN401
        if isinstance(data, Mapping) and 'description' not in data:
            return {**data, 'description': describe_value(data.get('value'))}

        return data

    def answered_by(self, actor: 'Actor') -> T:  # noqa: ARG002
        """Return the value.

        Args:
            actor: Actor asking the question (unused).

        Returns:
            The value.
        """
        return self.value


def value_of[T](value: T) -> ValueQuestion[T]:
    """Create a question answering a literal value.

    Args:
        value: Value to answer.

    Returns:
        A question parametrized with the type of the value.
    """
    return ValueQuestion[type(value)](value=value)


def result_of(description: str, fn: Callable[[Any], Any]) -> FunctionQuestion[Any]:
    """Create a question answered by a callable.

    Args:
        description: Human-readable description of what is asked.
        fn: Callable receiving the actor and returning the answer.

    Returns:
        A question parametrized with the return annotation of the callable.

    Raises:
        TypeError: If `fn` is not callable.
    """
    if not callable(fn):
        raise TypeError(f'{fn!r} is not callable')

    return FunctionQuestion[return_type(fn)](description=description, ask=fn)


question_about = result_of
