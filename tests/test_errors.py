"""Tests for error chaining and formatting."""

from datetime import date
from os import linesep

import pytest

from pytest_screenplay.errors import (
    ActivityError,
    AssertionFailed,
    ErrorContext,
    ErrorFormatter,
    ExpectationNotMet,
    MissingAbilityError,
    ScreenplayError,
)


class Opaque:
    """Object without a YAML representation."""


def test_plain_message() -> None:
    """Test an error without cause nor context."""
    error = ScreenplayError('something failed')

    assert f'{error}' == 'something failed'
    assert error.chain == 'something failed'
    assert error.__cause__ is None


def test_chain() -> None:
    """Test every layer adds one message to the chain."""
    root = KeyError('token')
    assertion = AssertionFailed('assertion failed for \'token\'', cause=ExpectationNotMet(
        'expected mapping to contain key \'token\'',
        cause=root,
    ))
    error = ActivityError('failed to perform activity \'login\'', cause=assertion)

    assert error.chain == (
        "failed to perform activity 'login': "
        "assertion failed for 'token': "
        "expected mapping to contain key 'token': "
        "'token'"
    )
    assert error.__cause__ is assertion


def test_chain_with_silent_cause() -> None:
    """Test causes without a message are named by their type."""
    error = ScreenplayError('failed', cause=RuntimeError())

    assert f'{error}' == 'failed: RuntimeError'


def test_location() -> None:
    """Test the location block."""
    context = ErrorContext(actor='Alice', activity_num=2, activity='Alice logs in')

    assert ErrorFormatter.get_location_string(context, indent=2) == (
        f'  performed by "Alice"{linesep}'
        f'  on activity 3 (Alice logs in){linesep}'
    )


def test_location_without_activity() -> None:
    """Test the location block for errors outside of a batch."""
    context = ErrorContext(actor='Alice')

    assert ErrorFormatter.get_location_string(context) == f'performed by "Alice"{linesep}'
    assert ErrorFormatter.format('failed', ErrorContext()) == 'failed'


def test_snippet() -> None:
    """Test runtime values are rendered as YAML."""
    context = ErrorContext(values={
        'answer': {'id': 1, 'tags': ('a', 'b')},
        'when': date(2024, 1, 2),
        'client': Opaque(),
    })

    snippet = ErrorFormatter.get_snippet_string(context, indent='> ')

    assert snippet.splitlines() == [
        '>  ...',
        '> answer:',
        '>   id: 1',
        '>   tags:',
        '>   - a',
        '>   - b',
        '> when: 2024-01-02',
        "> client: <runtime object>",
    ]


def test_full_format() -> None:
    """Test the complete error text."""
    error = ActivityError(
        'failed to perform activity \'Alice checks\'',
        cause=ExpectationNotMet('expected 2, but got 1'),
        context=ErrorContext(
            actor='Alice',
            activity_num=0,
            activity='Alice checks',
            values={'answer': 1},
        ),
    )

    assert f'{error}'.splitlines() == [
        "failed to perform activity 'Alice checks': expected 2, but got 1",
        '    performed by "Alice"',
        '    on activity 1 (Alice checks)',
        '         ...',
        '        answer: 1',
    ]


def test_missing_ability_error() -> None:
    """Test missing ability errors keep the lookup details."""
    error = MissingAbilityError('Alice', Opaque)

    assert error.actor == 'Alice'
    assert error.kind is Opaque
    assert f'{error}' == "actor 'Alice' does not have ability Opaque"


@pytest.mark.parametrize('indent, expected', (
    pytest.param(None, '', id='none'),
    pytest.param(0, '', id='zero'),
    pytest.param(3, '   ', id='int'),
    pytest.param('\t', '\t', id='str'),
))
def test_indent(indent: str | int | None, expected: str) -> None:
    """Test indentation normalization."""
    assert ErrorFormatter._ensure_indent(indent) == expected  # noqa: SLF001
