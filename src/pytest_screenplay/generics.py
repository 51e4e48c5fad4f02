"""Runtime resolution of question and expectation type arguments.

Questions and expectations are Pydantic generics. Pairing them in an
ensure activity is checked at construction time: the answer type of the
question must satisfy the type the expectation evaluates.
"""

from collections.abc import Callable
from inspect import Parameter, signature
from types import NoneType, UnionType
from typing import Any, Union, get_args, get_origin, get_type_hints

#: Parameter kinds able to receive the evaluated value.
POSITIONAL = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)


def _hints(fn: Callable[..., Any]) -> dict[str, Any]:
    """Resolve the annotations of a callable.

    Unannotated callables, and callables whose annotations can not be
    resolved, have no hints.
    """
    try:
        return get_type_hints(fn)
    except (NameError, TypeError):
        return {}


def return_type(fn: Callable[..., Any]) -> Any:  # noqa: ANN401
    """Return annotation of a callable, or `Any`."""
    return _hints(fn).get('return', Any)


def argument_type(fn: Callable[..., Any]) -> Any:  # noqa: ANN401
    """Annotation of the first positional parameter of a callable, or `Any`."""
    try:
        parameters = signature(fn).parameters.values()
    except (TypeError, ValueError):
        return Any

    for parameter in parameters:
        if parameter.kind in POSITIONAL:
            return _hints(fn).get(parameter.name, Any)

    return Any


def _origin(value: Any) -> Any:  # noqa: ANN401
    """Unwrap parametrized generics (`list[int]` to `list`)."""
    if value is None:
        return NoneType

    return get_origin(value) or value


def _is_union(value: Any) -> bool:  # noqa: ANN401
    return get_origin(value) in (Union, UnionType)


def is_compatible(answer: Any, expected: Any) -> bool:  # noqa: ANN401
    """Check that answers of one type can be evaluated as another type.

    `Any` on either side is unconstrained. Unions on the answer side must
    be compatible member-wise; unions on the expected side accept any
    compatible member. Parametrized generics are compared by origin.

    Args:
        answer: Answer type of a question.
        expected: Type evaluated by an expectation.

    Returns:
        True if the pair is compatible.
    """
    if answer is Any or expected is Any:
        return True

    if _is_union(answer):
        return all(is_compatible(member, expected) for member in get_args(answer))

    if _is_union(expected):
        return any(is_compatible(answer, member) for member in get_args(expected))

    answer_origin = _origin(answer)
    expected_origin = _origin(expected)

    if isinstance(answer_origin, type) and isinstance(expected_origin, type):
        return issubclass(answer_origin, expected_origin)

    return answer == expected


def type_repr(value: Any) -> str:  # noqa: ANN401
    """Short human-readable name of a type argument."""
    if isinstance(value, type) and not get_args(value):
        return value.__qualname__

    return f'{value}'.replace('typing.', '')
