"""Built-in expectation catalog.

This module defines the core expectations used in ensure activities:
equality, substring and key containment, emptiness, length, ordering
comparisons, and an open-ended `satisfies` escape hatch.

Applying an expectation to a value of an unsupported shape is a usage
error: it fails the assertion step with `ExpectationUsageError` rather
than reporting the value as not satisfying.
"""

from collections.abc import Callable, Mapping
from operator import gt, lt
from typing import Any, ClassVar

from pydantic import Field

from pytest_screenplay.errors import ExpectationNotMet, ExpectationUsageError, ScreenplayError
from pytest_screenplay.generics import argument_type
from pytest_screenplay.schema import Expectation
from pytest_screenplay.values import (
    LENGTHS,
    MAPPINGS,
    SIZED,
    RuntimeValue,
    deep_equal,
    describe_value,
    to_float,
    type_name,
)

#: The checker receives the actual value and raises on failure.
#: Returning `False` is also a failure.
type CheckRunner = Callable[[Any], Any]


class Equals[T](Expectation[T]):
    """Deep equality.

    The actual value must be of the same class as the expected one;
    containers and plain objects are compared recursively.
    """

    expected: Any = Field(
        title='Expected value',
        description='Value the actual value must be equal to.',
    )

    @classmethod
    def describe(cls, params: Mapping[str, Any]) -> str:
        """Describe the expectation."""
        return f'equals {params.get('expected')!r}'

    def evaluate(self, actual: T) -> None:
        """Compare the actual value with the expected one.

        Raises:
            ExpectationNotMet: If the values differ.
        """
        if deep_equal(actual, self.expected):
            return

        if type(actual) is not type(self.expected):
            raise ExpectationNotMet(
                f'expected {describe_value(self.expected)}, '
                f'but got {describe_value(actual)}',
            )

        raise ExpectationNotMet(f'expected {self.expected!r}, but got {actual!r}')


class Contains(Expectation[str]):
    """Substring containment.

    The empty substring is contained in every string, including the empty
    one; any other substring is absent from the empty string.
    """

    substring: str = Field(
        title='Substring',
        description='Text the actual string must contain.',
    )

    @classmethod
    def describe(cls, params: Mapping[str, Any]) -> str:
        """Describe the expectation."""
        return f'contains {params.get('substring')!r}'

    def evaluate(self, actual: str) -> None:
        """Look for the substring.

        Raises:
            ExpectationUsageError: If the actual value is not a string.
            ExpectationNotMet: If the substring is absent.
        """
        if not isinstance(actual, str):
            raise ExpectationUsageError(
                f'contains expectation only works with strings, but got {type_name(actual)}',
            )

        if not actual and self.substring:
            raise ExpectationNotMet(
                f'expected string to contain {self.substring!r}, but got empty string',
            )

        if self.substring not in actual:
            raise ExpectationNotMet(
                f'expected string to contain {self.substring!r}, but got {actual!r}',
            )


class ContainsKey(Expectation[Any]):
    """Mapping key containment."""

    key: Any = Field(
        title='Key',
        description='Key the actual mapping must contain.',
    )

    @classmethod
    def describe(cls, params: Mapping[str, Any]) -> str:
        """Describe the expectation."""
        return f'contains key {params.get('key')!r}'

    def evaluate(self, actual: RuntimeValue) -> None:
        """Look for the key.

        Raises:
            ExpectationUsageError: If the actual value is not a mapping.
            ExpectationNotMet: If the key is absent.
        """
        if not isinstance(actual, MAPPINGS):
            raise ExpectationUsageError(f'expected a mapping, but got {type_name(actual)}')

        if self.key not in actual:
            raise ExpectationNotMet(f'expected mapping to contain key {self.key!r}')


class IsEmpty(Expectation[Any]):
    """Emptiness of strings, sequences, sets and mappings."""

    @classmethod
    def describe(cls, params: Mapping[str, Any]) -> str:  # noqa: ARG003
        """Describe the expectation."""
        return 'is empty'

    def evaluate(self, actual: RuntimeValue) -> None:
        """Check the size of the value.

        Raises:
            ExpectationUsageError: If the value has no meaningful size.
            ExpectationNotMet: If the value is not empty.
        """
        if not isinstance(actual, SIZED):
            raise ExpectationUsageError(
                'is empty expectation only works with strings, sequences, '
                f'sets and mappings, but got {type_name(actual)}',
            )

        if isinstance(actual, str) and actual:
            raise ExpectationNotMet(f'expected string to be empty, but got {actual!r}')

        if size := len(actual):
            raise ExpectationNotMet(
                f'expected {type_name(actual)} to be empty, but got {size} elements',
            )


class ArrayLengthEquals(Expectation[Any]):
    """Exact length of a sequence or a string."""

    length: int = Field(
        ge=0,
        title='Expected length',
        description='Number of elements the actual value must have.',
    )

    @classmethod
    def describe(cls, params: Mapping[str, Any]) -> str:
        """Describe the expectation."""
        return f'has length {params.get('length')}'

    def evaluate(self, actual: RuntimeValue) -> None:
        """Compare the length of the value.

        Raises:
            ExpectationUsageError: If the value is not a sequence or a string.
            ExpectationNotMet: If the length differs.
        """
        if not isinstance(actual, LENGTHS):
            raise ExpectationUsageError(
                'array length expectation only works with sequences and strings, '
                f'but got {type_name(actual)}',
            )

        if (size := len(actual)) != self.length:
            raise ExpectationNotMet(f'expected length to be {self.length}, but got {size}')


class _Comparison(Expectation[Any]):
    """Base implementation for numeric comparisons."""

    #: Comparison operator applied as ``operator(actual, bound)``.
    operator: ClassVar[Callable[[float, float], bool]]
    #: Words used in descriptions and messages.
    relation: ClassVar[str]

    bound: Any = Field(
        title='Bound',
        description='Number the actual value is compared with.',
    )

    @classmethod
    def describe(cls, params: Mapping[str, Any]) -> str:
        """Describe the expectation."""
        return f'is {cls.relation} {params.get('bound')!r}'

    def evaluate(self, actual: RuntimeValue) -> None:
        """Compare the actual value with the bound.

        Raises:
            ExpectationUsageError: If either operand is not a number.
            ExpectationNotMet: If the comparison does not hold.
        """
        try:
            actual_value = to_float(actual)
        except TypeError as base:
            raise ExpectationUsageError('cannot compare actual value', cause=base) from base

        try:
            bound_value = to_float(self.bound)
        except TypeError as base:
            raise ExpectationUsageError('cannot compare expected value', cause=base) from base

        if not type(self).operator(actual_value, bound_value):
            raise ExpectationNotMet(
                f'expected value to be {self.relation} {self.bound!r}, but got {actual!r}',
            )


class IsGreaterThan(_Comparison):
    """Strictly greater numeric value."""

    operator: ClassVar[Callable[[float, float], bool]] = staticmethod(gt)
    relation: ClassVar[str] = 'greater than'


class IsLessThan(_Comparison):
    """Strictly lower numeric value."""

    operator: ClassVar[Callable[[float, float], bool]] = staticmethod(lt)
    relation: ClassVar[str] = 'less than'


class Satisfies[T](Expectation[T]):
    """Arbitrary user check with a user-supplied description."""

    check: CheckRunner = Field(
        title='Checker function',
        description=(
            'Callable receiving the actual value. Raises to signal a '
            'failure; returning `False` is also a failure.'
        ),
    )

    def evaluate(self, actual: T) -> None:
        """Call the check function.

        Raises:
            ExpectationNotMet: If the check raises or returns `False`.
        """
        try:
            result = self.check(actual)
        except ScreenplayError:
            raise
        except Exception as base:  # noqa: BLE001
            raise ExpectationNotMet(
                f'expected value to satisfy {self.description!r}',
                cause=base,
            ) from base

        if result is False:
            raise ExpectationNotMet(f'expected value to satisfy {self.description!r}, but got {actual!r}')


def equals[T](expected: T) -> Equals[T]:
    """Expect a value of the same class, deeply equal to `expected`."""
    return Equals[type(expected)](expected=expected)


def contains(substring: str) -> Contains:
    """Expect a string containing `substring`."""
    return Contains(substring=substring)


def contains_key(key: Any) -> ContainsKey:  # noqa: ANN401
    """Expect a mapping containing `key`."""
    return ContainsKey(key=key)


def is_empty() -> IsEmpty:
    """Expect an empty string, sequence, set or mapping."""
    return IsEmpty()


def array_length_equals(length: int) -> ArrayLengthEquals:
    """Expect a sequence or a string of exactly `length` elements."""
    return ArrayLengthEquals(length=length)


def is_greater_than(bound: Any) -> IsGreaterThan:  # noqa: ANN401
    """Expect a number strictly greater than `bound`."""
    return IsGreaterThan(bound=bound)


def is_less_than(bound: Any) -> IsLessThan:  # noqa: ANN401
    """Expect a number strictly lower than `bound`."""
    return IsLessThan(bound=bound)


def satisfies[T](description: str, check: Callable[[T], Any]) -> Satisfies[T]:
    """Expect a value accepted by a user function.

    Args:
        description: Human-readable description of the check.
        check: Callable raising (or returning `False`) on failure.

    Returns:
        An expectation parametrized with the annotation of the first
        parameter of the check, if any.
    """
    return Satisfies[argument_type(check)](description=description, check=check)
