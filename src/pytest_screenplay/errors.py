"""Core exception hierarchy.

This module defines base error and warning types used across the library
to report missing abilities, question and expectation failures, misuse of
expectations and failed activities in a structured and extensible way.

Every layer wraps the error it receives with one additional message
instead of replacing it, so the final text reads as a chain:
``<activity>: <assertion>: <root cause>``.
"""

from os import linesep
from typing import Any, TypedDict

from yaml import dump

from pytest_screenplay.values import MAPPINGS, SCALARS, SEQUENCES

SNIPPET_ELLIPSIS = f' ...{linesep}'
SNIPPET_INDENT = 2

FORMAT_REPLACER = '<runtime object>'
FORMAT_INDENT = 4


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Name of the actor performing the failed element.
    actor: str | None

    #: Position of the activity within an `attempts_to` batch.
    activity_num: int | None
    #: Description of the activity.
    activity: str | None

    #: Runtime values available at the moment of failure.
    values: dict[str, Any] | None


class ErrorFormatter:
    """Utility class for formatting screenplay errors.

    This formatter is responsible for producing human-readable
    error messages with optional location and YAML-based
    contextual snippets.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location and data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        location = cls.get_location_string(context, indent=FORMAT_INDENT)
        snippet = cls.get_snippet_string(context, indent=FORMAT_INDENT * 2)
        if not location and not snippet:
            return message

        return f'{message}{linesep}{location}{snippet}'

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format actor and batch position information.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string, or an empty string.
        """
        indent = cls._ensure_indent(indent)
        message = ''

        if actor := context.get('actor'):
            message += f'{indent}performed by "{actor}"{linesep}'

        if (activity_num := context.get('activity_num')) is not None:
            activity_num += 1
            message += f'{indent}on activity {activity_num}'
            if activity := context.get('activity'):
                message += f' ({activity})'
            message += linesep

        return message

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: str | int | None = None) -> str:
        """Generate a formatted snippet illustrating the failure values.

        Args:
            context: Error context containing runtime values.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted multi-line snippet string, or an empty string
            if no snippet data is available.
        """
        indent = cls._ensure_indent(indent)

        if not (values := context.get('values')):
            return ''

        snippet = f'{indent}{SNIPPET_ELLIPSIS}'
        snippet += cls._make_yaml(values, indent)
        snippet += linesep

        return snippet

    @classmethod
    def _filter_unsafe(cls, value: Any) -> Any:  # noqa: ANN401
        """Recursively sanitize values for safe YAML serialization.

        Non-scalar and non-container objects are replaced with
        a placeholder.

        Args:
            value: Arbitrary value to sanitize.

        Returns:
            A YAML-safe representation of the value.
        """
        if value is None or isinstance(value, SCALARS):
            return value

        if isinstance(value, MAPPINGS):
            return {
                f'{key}': cls._filter_unsafe(item)
                for key, item in value.items()
            }

        if isinstance(value, SEQUENCES):
            return [
                cls._filter_unsafe(item)
                for item in value
            ]

        return FORMAT_REPLACER

    @classmethod
    def _make_yaml(cls, value: Any, indent: str = '') -> str:  # noqa: ANN401
        """Serialize a value to a YAML-formatted string.

        Args:
            value: Arbitrary value to serialize.
            indent: Optional indentation prefix.

        Returns:
            A YAML-formatted string representation of the value.
        """
        data = dump(
            cls._filter_unsafe(value),
            indent=SNIPPET_INDENT,
            sort_keys=False,
            allow_unicode=True,
        )

        return cls._make_indent(data, indent)

    @staticmethod
    def _make_indent(value: str, indent: str) -> str:
        """Apply indentation to a multi-line string.

        Empty or whitespace-only lines are omitted.
        """
        if not indent:
            return value

        return linesep.join(
            f'{indent}{line}'
            for line in value.splitlines()
            if line.strip()
        )

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation input."""
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class AbilityWarning(UserWarning):
    """Warning emitted when an ability is added but can never be reached.

    Abilities are looked up by class and the first one added wins, so a
    second ability of the same class is shadowed.
    """


class ScreenplayError(Exception, ErrorFormatter):
    """Base exception for all pytest-screenplay errors.

    All custom exceptions raised by the library inherit from this class
    to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 cause: BaseException | None = None,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            cause: Underlying error this one wraps.
            context: Error context containing optional runtime values.
        """
        self.message = message
        self.cause = cause
        self.context = context

        super().__init__(message)

        if cause is not None:
            self.__cause__ = cause

    @property
    def chain(self) -> str:
        """Message followed by the text of every wrapped cause."""
        if self.cause is None:
            return self.message

        if isinstance(self.cause, ScreenplayError):
            reason = self.cause.chain
        else:
            reason = f'{self.cause}' or type(self.cause).__name__

        return f'{self.message}: {reason}'

    def __str__(self) -> str:
        """String representation."""
        return self.format(self.chain, self.context)


class MissingAbilityError(ScreenplayError, LookupError):
    """Error raised when an actor lacks the ability an element needs."""

    def __init__(self, actor: str, kind: type) -> None:
        """Initialize a missing ability error.

        Args:
            actor: Name of the actor.
            kind: Requested ability class.
        """
        self.actor = actor
        self.kind = kind

        super().__init__(f'actor {actor!r} does not have ability {kind.__qualname__}')


class AbilityError(ScreenplayError):
    """Error raised for an invalid ability registration in strict mode."""


class QuestionError(ScreenplayError):
    """Error raised when a question could not produce an answer."""


class ExpectationNotMet(ScreenplayError, AssertionError):
    """Error raised when a value does not satisfy an expectation."""


class ExpectationUsageError(ScreenplayError, TypeError):
    """Error raised when an expectation is applied to an unsupported value.

    This is a failure of the assertion step, not a crash of the test run.
    """


class AssertionFailed(ScreenplayError, AssertionError):
    """Error raised by an ensure activity whose expectation failed."""


class TaskError(ScreenplayError):
    """Error raised when one of the activities composing a task fails."""


class ActivityError(ScreenplayError):
    """Error describing a failed activity within an actor batch.

    This is the error handed to reporters by the sequencing loop.
    """


class BindingError(ScreenplayError, TypeError):
    """Error raised when a question and an expectation can not be paired.

    Raised at construction time when the answer type of the question
    can not satisfy the type the expectation evaluates.
    """
