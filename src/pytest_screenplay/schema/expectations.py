"""Base expectation definitions.

An expectation is a typed predicate over an answer. Evaluation returns
normally when the answer is satisfying and raises otherwise; the text of
the raised error is the diagnostic shown to the user.

Expectations never access the actor, which allows the same expectation
to be reused against different questions.
"""

from abc import abstractmethod
from collections.abc import Mapping
from typing import Any

from pydantic import model_validator

from pytest_screenplay.models import DescribedMixin, resolve_type_argument


class Expectation[T](DescribedMixin):
    """Base class for expectations.

    Built-in expectations derive their description from their own
    parameters via `describe`; it is only used when no explicit
    description is given.
    """

    @model_validator(mode='before')
    @classmethod
    def _default_description(cls, data: Any) -> Any:  # noqa: ANN401
        if isinstance(data, Mapping) and 'description' not in data:
            return {**data, 'description': cls.describe(data)}

        return data

    @classmethod
    def describe(cls, params: Mapping[str, Any]) -> str:
        """Build a description from raw expectation parameters.

        Args:
            params: Parameters the expectation is being built with.

        Returns:
            Human-readable description.
        """
        return cls.__name__

    @abstractmethod
    def evaluate(self, actual: T) -> None:
        """Evaluate the expectation against an answer.

        Args:
            actual: Value answered by a question.

        Raises:
            ExpectationNotMet: If the value does not satisfy the expectation.
            ExpectationUsageError: If the value has an unsupported shape.
        """

    @property
    def expected_type(self) -> Any:  # noqa: ANN401
        """Type of the evaluated value, or `Any` when unconstrained."""
        return resolve_type_argument(self, Expectation)
