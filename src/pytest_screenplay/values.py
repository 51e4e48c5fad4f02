"""Core value shapes and helpers shared by questions and expectations.

This module groups runtime value categories used when expectations
inspect an answer, and helpers converting answers into numbers or
human-readable text.
"""

from collections.abc import Mapping, Sequence, Set
from datetime import date, datetime, timedelta
from typing import Any

#: A value in runtime represents any Python object answered by a question
#: prior to inspection by an expectation.
type RuntimeValue = Any

MAPPINGS = (Mapping,)
SCALARS = (date, datetime, timedelta, str, bytes, int, float, bool)
SEQUENCES = (list, tuple, set, frozenset)

#: Shapes that have a meaningful length for emptiness checks.
SIZED = (str, bytes, Sequence, Set, Mapping)

#: Shapes that have a meaningful length for length checks.
LENGTHS = (str, bytes, Sequence)

NUMBERS = (int, float)


def is_number(value: RuntimeValue) -> bool:
    """Check that a value can be compared as a float.

    Booleans are integers in Python but are not numbers for
    comparison purposes.
    """
    return isinstance(value, NUMBERS) and not isinstance(value, bool)


def to_float(value: RuntimeValue) -> float:
    """Convert a numeric value to float.

    Args:
        value: Value to convert.

    Returns:
        The value as a float.

    Raises:
        TypeError: If the value type is not numeric.
    """
    if not is_number(value):
        raise TypeError(f'unsupported numeric type: {type(value).__name__}')

    return float(value)


def type_name(value: RuntimeValue) -> str:
    """Return a short type name for a value."""
    return type(value).__name__


def describe_value(value: RuntimeValue) -> str:
    """Describe a literal value with its type.

    Args:
        value: Any value.

    Returns:
        ``"<repr> (<type>)"``, or ``"error <text> (error)"`` for exceptions.
    """
    if isinstance(value, BaseException):
        return f'error {value} (error)'

    return f'{value!r} ({type_name(value)})'


def _defines_eq(value: RuntimeValue) -> bool:
    """Check that the class of a value overrides `object` equality."""
    return type(value).__eq__ is not object.__eq__


def deep_equal(actual: RuntimeValue, expected: RuntimeValue) -> bool:
    """Recursively compare two values, including their types.

    Values of different classes are never equal, so ``True`` differs from
    ``1`` and ``1`` differs from ``1.0``. Mappings are compared key by
    key and lists and tuples item by item. Objects whose class does not
    define equality are compared by their attributes.

    Args:
        actual: Actual value.
        expected: Expected value.

    Returns:
        True if values are deeply equal.
    """
    if type(actual) is not type(expected):
        return False

    if isinstance(expected, MAPPINGS):
        return actual.keys() == expected.keys() and all(
            deep_equal(actual[key], item)
            for key, item in expected.items()
        )

    if isinstance(expected, (list, tuple)):
        return len(actual) == len(expected) and all(
            deep_equal(actual_item, expected_item)
            for actual_item, expected_item in zip(actual, expected, strict=True)
        )

    if _defines_eq(expected):
        return actual == expected

    if hasattr(expected, '__dict__'):
        return actual is expected or deep_equal(vars(actual), vars(expected))

    return actual is expected
