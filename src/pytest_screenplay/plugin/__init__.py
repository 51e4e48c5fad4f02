"""Pytest plugin exposing a screenplay stage to tests.

This module integrates the screenplay runtime with pytest by:
- registering custom command-line options;
- resolving runtime settings once per session;
- providing a per-test `stage` fixture with its own reporter;
- failing a test whose body finished with non-fatal failures reported.
"""

from threading import Event
from typing import TYPE_CHECKING

import pytest

from pytest_screenplay.settings import ScreenplaySettings
from pytest_screenplay.stage import Stage

from .reporter import PytestReporter

if TYPE_CHECKING:
    from collections.abc import Generator

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.config.argparsing import Parser
    from _pytest.fixtures import FixtureRequest

STAGE_KEY = pytest.StashKey[Stage]()


def pytest_addoption(parser: 'Parser') -> None:
    """Register pytest command-line options for pytest-screenplay.

    Args:
        parser: Pytest argument parser.
    """
    group = parser.getgroup('screenplay')
    group.addoption(
        '--screenplay-strict',
        action='store_true',
        dest='screenplay_strict',
        default=None,
        help=(
            'Fail instead of warning when an actor is given an ability '
            'of a class it already holds.'
        ),
    )
    group.addoption(
        '--screenplay-ignored-level',
        action='store',
        dest='screenplay_ignored_level',
        default=None,
        metavar='LEVEL',
        help=(
            'Logging level for failures of activities declared with the '
            '`ignore` failure mode (DEBUG by default).'
        ),
    )


def pytest_configure(config: 'Config') -> None:
    """Resolve screenplay settings.

    Command-line options take precedence over ``SCREENPLAY_*``
    environment variables. The result is attached to the pytest
    configuration object as `config.screenplay_settings`.

    Args:
        config: Pytest configuration object.
    """
    overrides = {
        'strict': config.getoption('screenplay_strict', default=None),
        'ignored_level': config.getoption('screenplay_ignored_level', default=None),
    }

    config.screenplay_settings = ScreenplaySettings(**{  # type: ignore[attr-defined]
        name: value
        for name, value in overrides.items()
        if value is not None
    })


@pytest.fixture
def screenplay_settings(request: 'FixtureRequest') -> ScreenplaySettings:
    """Runtime settings resolved for the session."""
    settings = getattr(request.config, 'screenplay_settings', None)
    if settings is None:
        settings = ScreenplaySettings()

    return settings


@pytest.fixture
def stage(request: 'FixtureRequest',
          screenplay_settings: ScreenplaySettings) -> 'Generator[Stage, None, None]':
    """Provide the actor registry of the current test.

    Failures reported by actors on the stage are bound to the test:
    fail-fast failures fail it at once and cancel the stage, others fail
    it after the body.
    """
    cancel = Event()
    reporter = PytestReporter(request.node.nodeid, cancel=cancel)

    with Stage(reporter, screenplay_settings, cancel=cancel) as current:
        request.node.stash[STAGE_KEY] = current
        yield current


@pytest.hookimpl(wrapper=True)
def pytest_runtest_call(item: pytest.Item) -> 'Generator[None, None, None]':
    """Fail a test whose body finished with non-fatal failures reported.

    Args:
        item: Test item being run.

    Raises:
        AssertionError: With every collected failure.
    """
    result = yield

    current = item.stash.get(STAGE_KEY, None)
    if current is None:
        return result

    reporter = current.reporter
    if isinstance(reporter, PytestReporter) and reporter.failed:
        raise AssertionError(reporter.summary())

    return result
