"""Failure modes of activities.

A failure mode is declared per activity and fixed at construction. It
governs how an actor batch reacts when that specific activity fails.
"""

from enum import StrEnum


class FailureMode(StrEnum):
    """Policy applied by an actor when an activity fails."""

    #: Report the failure as fatal and stop the remaining batch.
    FAIL_FAST = 'fail_fast'
    #: Report the failure, mark the test failed, and keep going.
    ERROR_BUT_CONTINUE = 'error_but_continue'
    #: Log the failure at a diagnostic level and keep going.
    IGNORE = 'ignore'


def critical() -> FailureMode:
    """Failure mode for steps the rest of a batch depends on."""
    return FailureMode.FAIL_FAST


def non_critical() -> FailureMode:
    """Failure mode for steps whose failure should not hide later ones."""
    return FailureMode.ERROR_BUT_CONTINUE


def optional() -> FailureMode:
    """Failure mode for best-effort steps."""
    return FailureMode.IGNORE
