"""Declarative base-schema for screenplay elements.

Defines immutable Pydantic models describing activities, questions and
expectations. Concrete behavior is provided by the builtins package and
by user code.
"""

from .activities import Activity, FailureModeMixin
from .expectations import Expectation
from .modes import FailureMode, critical, non_critical, optional
from .questions import Question

__all__ = (
    'Activity',
    'Expectation',
    'FailureMode',
    'FailureModeMixin',
    'Question',
    'critical',
    'non_critical',
    'optional',
)
