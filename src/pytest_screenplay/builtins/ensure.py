"""Ensure activity: asks a question and checks the answer."""

from typing import TYPE_CHECKING, Any

from pydantic import Field, InstanceOf

from pytest_screenplay.errors import AssertionFailed, BindingError, ErrorContext, QuestionError
from pytest_screenplay.generics import is_compatible, type_repr
from pytest_screenplay.models import ACTOR_PLACEHOLDER
from pytest_screenplay.schema import Activity, Expectation, FailureMode, FailureModeMixin, Question

if TYPE_CHECKING:
    from pytest_screenplay.actors import Actor


class Ensure(FailureModeMixin, Activity):
    """Assertion activity binding a question to an expectation.

    The answer type of the question must be compatible with the type the
    expectation evaluates; the pair is checked once, when the activity is
    built. The description is derived from both parts.
    """

    failure_mode: FailureMode = Field(
        default=FailureMode.ERROR_BUT_CONTINUE,
        title='Failure mode',
        description='Policy applied by the actor when the assertion fails.',
    )

    question: InstanceOf[Question] = Field(
        title='Question',
        description='Question asked to obtain the actual value.',
    )
    expectation: InstanceOf[Expectation] = Field(
        title='Expectation',
        description='Expectation evaluated against the answer.',
    )

    def __init__(self, question: Question[Any], expectation: Expectation[Any], *,
                 failure_mode: FailureMode = FailureMode.ERROR_BUT_CONTINUE) -> None:
        """Bind a question to an expectation.

        Args:
            question: Question to ask.
            expectation: Expectation to evaluate the answer against.
            failure_mode: Policy applied when the assertion fails.

        Raises:
            BindingError: If the answer type of the question can not
                satisfy the expectation.
        """
        answer_type = question.answer_type
        expected_type = expectation.expected_type

        if not is_compatible(answer_type, expected_type):
            raise BindingError(
                f'question {question.description!r} answers {type_repr(answer_type)}, '
                f'but expectation {expectation.description!r} '
                f'evaluates {type_repr(expected_type)}',
            )

        super().__init__(
            description=(
                f'{ACTOR_PLACEHOLDER} ensures that '
                f'{question.description} {expectation.description}'
            ),
            question=question,
            expectation=expectation,
            failure_mode=failure_mode,
        )

    def perform_as(self, actor: 'Actor') -> None:
        """Ask the question and evaluate the answer.

        Args:
            actor: Actor asking the question.

        Raises:
            QuestionError: If the question could not be answered.
            AssertionFailed: If the answer does not meet the expectation.
        """
        question = self.question.describe_for(actor)

        try:
            actual = self.question.answered_by(actor)
        except Exception as base:  # noqa: BLE001
            raise QuestionError(
                f'failed to answer question {question!r}',
                cause=base,
            ) from base

        try:
            self.expectation.evaluate(actual)
        except Exception as base:  # noqa: BLE001
            raise AssertionFailed(
                f'assertion failed for {question!r}',
                cause=base,
                context=ErrorContext(values={'answer': actual}),
            ) from base


def ensure_that[T](question: Question[T], expectation: Expectation[T], *,
                   failure_mode: FailureMode = FailureMode.ERROR_BUT_CONTINUE) -> Ensure:
    """Create an ensure activity.

    Args:
        question: Question to ask.
        expectation: Expectation to evaluate the answer against.
        failure_mode: Policy applied when the assertion fails.

    Returns:
        A new ensure activity.

    Raises:
        BindingError: If the question and the expectation are incompatible.
    """
    return Ensure(question, expectation, failure_mode=failure_mode)
