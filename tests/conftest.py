"""Tests configurations and fixtures."""

from typing import TYPE_CHECKING

import pytest

from pytest_screenplay.actors import Actor
from pytest_screenplay.builtins import do
from pytest_screenplay.reporting import CollectingReporter
from pytest_screenplay.schema import FailureMode
from pytest_screenplay.settings import ScreenplaySettings

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from pytest_screenplay.builtins import Interaction


@pytest.fixture
def settings() -> ScreenplaySettings:
    """Provide default settings isolated from the environment."""
    return ScreenplaySettings(strict=False, ignored_level='DEBUG')


@pytest.fixture
def reporter() -> CollectingReporter:
    """Provide an empty in-memory reporter."""
    return CollectingReporter()


@pytest.fixture
def actor(reporter: CollectingReporter, settings: ScreenplaySettings) -> Actor:
    """Provide an actor reporting to the `reporter` fixture."""
    return Actor('Alice', reporter=reporter, settings=settings)


@pytest.fixture
def performed() -> list[str]:
    """Provide the journal of performed steps."""
    return []


@pytest.fixture
def step(performed: list[str]) -> 'Callable[..., Interaction]':
    """Provide a factory of journaling interactions.

    Each interaction appends its name to the `performed` journal and
    then raises `RuntimeError` if asked to fail.
    """
    def make(name: str, *, fail: bool = False,
             failure_mode: FailureMode = FailureMode.FAIL_FAST) -> 'Interaction':
        """Create a journaling interaction.

        Args:
            name: Step name recorded in the journal.
            fail: Raise after recording.
            failure_mode: Failure mode of the interaction.

        Returns:
            A new interaction.
        """
        def perform(actor: Actor) -> None:  # noqa: ARG001
            performed.append(name)
            if fail:
                raise RuntimeError(f'{name} is broken')

        return do(f'#actor performs {name}', perform, failure_mode=failure_mode)

    return make
