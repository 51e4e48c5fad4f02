"""Built-in activities, questions and expectations."""

from .ensure import Ensure, ensure_that
from .expectations import (
    ArrayLengthEquals,
    Contains,
    ContainsKey,
    Equals,
    IsEmpty,
    IsGreaterThan,
    IsLessThan,
    Satisfies,
    array_length_equals,
    contains,
    contains_key,
    equals,
    is_empty,
    is_greater_than,
    is_less_than,
    satisfies,
)
from .interactions import Interaction, Task, do, task_where
from .questions import FunctionQuestion, ValueQuestion, question_about, result_of, value_of

__all__ = (
    'ArrayLengthEquals',
    'Contains',
    'ContainsKey',
    'Ensure',
    'Equals',
    'FunctionQuestion',
    'Interaction',
    'IsEmpty',
    'IsGreaterThan',
    'IsLessThan',
    'Satisfies',
    'Task',
    'ValueQuestion',
    'array_length_equals',
    'contains',
    'contains_key',
    'do',
    'ensure_that',
    'equals',
    'is_empty',
    'is_greater_than',
    'is_less_than',
    'question_about',
    'result_of',
    'satisfies',
    'task_where',
    'value_of',
)
