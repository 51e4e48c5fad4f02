"""Tests for actors and the activity sequencing loop."""

from logging import DEBUG, INFO
from threading import Event, Thread
from typing import TYPE_CHECKING

import pytest

from pytest_screenplay.actors import Actor
from pytest_screenplay.builtins import do, result_of, value_of
from pytest_screenplay.errors import (
    AbilityError,
    AbilityWarning,
    ActivityError,
    MissingAbilityError,
    QuestionError,
)
from pytest_screenplay.reporting import StepStatus
from pytest_screenplay.schema import FailureMode
from pytest_screenplay.settings import ScreenplaySettings

if TYPE_CHECKING:
    from collections.abc import Callable

    from pytest_mock import MockerFixture

    from pytest_screenplay.builtins import Interaction
    from pytest_screenplay.reporting import CollectingReporter


class BrowseTheWeb:
    """Ability stub."""

    def __init__(self, url: str = 'http://localhost') -> None:
        self.url = url


class CallAnApi:
    """Ability stub."""


class CallAnotherApi(CallAnApi):
    """Ability stub derived from another one."""


def test_activities_run_in_order(actor: Actor, performed: list[str],
                                 step: 'Callable[..., Interaction]') -> None:
    """Test activities are performed in the order they are given."""
    actor.attempts_to(step('first'), step('second'), step('third'))

    assert performed == ['first', 'second', 'third']


def test_empty_batch(actor: Actor, reporter: 'CollectingReporter') -> None:
    """Test an empty batch does nothing and reports nothing."""
    actor.attempts_to()

    assert not reporter.failed


def test_fail_fast_stops_batch(actor: Actor, reporter: 'CollectingReporter',
                               performed: list[str],
                               step: 'Callable[..., Interaction]') -> None:
    """Test a failing fail-fast activity stops the remaining ones."""
    with pytest.raises(ActivityError, match=r"^failed to perform activity 'Alice performs broken'"):
        actor.attempts_to(
            step('first'),
            step('broken', fail=True),
            step('never'),
        )

    assert performed == ['first', 'broken']
    assert len(reporter.failures) == 1


def test_error_but_continue_reports_and_continues(
    actor: Actor, reporter: 'CollectingReporter', performed: list[str],
    step: 'Callable[..., Interaction]',
) -> None:
    """Test a non-critical failure is reported and the batch goes on."""
    actor.attempts_to(
        step('broken', fail=True, failure_mode=FailureMode.ERROR_BUT_CONTINUE),
        step('after'),
    )

    assert performed == ['broken', 'after']
    assert len(reporter.failures) == 1

    error = reporter.failures[0]

    assert isinstance(error, ActivityError)
    assert isinstance(error.cause, RuntimeError)
    assert error.context is not None
    assert error.context['actor'] == 'Alice'
    assert error.context['activity_num'] == 0
    assert 'broken is broken' in f'{error}'


def test_ignore_reports_nothing(actor: Actor, reporter: 'CollectingReporter',
                                performed: list[str],
                                step: 'Callable[..., Interaction]',
                                caplog: pytest.LogCaptureFixture) -> None:
    """Test an ignored failure is only logged."""
    with caplog.at_level(DEBUG, logger='pytest_screenplay'):
        actor.attempts_to(
            step('broken', fail=True, failure_mode=FailureMode.IGNORE),
            step('after'),
        )

    assert performed == ['broken', 'after']
    assert not reporter.failed
    assert any(
        record.levelno == DEBUG and record.getMessage().startswith('Ignored failure')
        for record in caplog.records
    )


def test_ignored_failures_level(reporter: 'CollectingReporter',
                                step: 'Callable[..., Interaction]',
                                caplog: pytest.LogCaptureFixture) -> None:
    """Test ignored failures are logged at the configured level."""
    actor = Actor(
        'Bob',
        reporter=reporter,
        settings=ScreenplaySettings(ignored_level='info'),
    )

    with caplog.at_level(DEBUG, logger='pytest_screenplay'):
        actor.attempts_to(step('broken', fail=True, failure_mode=FailureMode.IGNORE))

    ignored = [
        record
        for record in caplog.records
        if record.getMessage().startswith('Ignored failure')
    ]

    assert len(ignored) == 1
    assert ignored[0].levelno == INFO


def test_mixed_failure_modes(actor: Actor, reporter: 'CollectingReporter',
                             performed: list[str],
                             step: 'Callable[..., Interaction]') -> None:
    """Test every failure mode within a single batch."""
    with pytest.raises(ActivityError, match=r'performs critical'):
        actor.attempts_to(
            step('optional', fail=True, failure_mode=FailureMode.IGNORE),
            step('non-critical', fail=True, failure_mode=FailureMode.ERROR_BUT_CONTINUE),
            step('critical', fail=True),
            step('never'),
        )

    assert performed == ['optional', 'non-critical', 'critical']
    assert [error.context['activity_num'] for error in reporter.failures] == [1, 2]


def test_batches_are_independent(actor: Actor, performed: list[str],
                                 step: 'Callable[..., Interaction]') -> None:
    """Test a stopped batch does not prevent later batches."""
    with pytest.raises(ActivityError):
        actor.attempts_to(step('broken', fail=True), step('skipped'))

    actor.attempts_to(step('next'))

    assert performed == ['broken', 'next']


def test_description_placeholder(actor: Actor) -> None:
    """Test the actor placeholder is substituted in descriptions."""
    activity = do('#actor opens the door', lambda actor: None)

    assert activity.describe_for(actor) == 'Alice opens the door'
    assert activity.description == '#actor opens the door'


def test_activity_reused_across_actors(reporter: 'CollectingReporter') -> None:
    """Test the same activity can be performed by several actors."""
    names = []
    activity = do('#actor signs in', lambda actor: names.append(actor.name))

    Actor('Alice', reporter=reporter).attempts_to(activity)
    Actor('Bob', reporter=reporter).attempts_to(activity, activity)

    assert names == ['Alice', 'Bob', 'Bob']


def test_missing_ability(actor: Actor) -> None:
    """Test asking for an ability the actor does not hold."""
    with pytest.raises(MissingAbilityError, match=r"^actor 'Alice' does not have ability BrowseTheWeb$"):
        actor.ability_to(BrowseTheWeb)


def test_missing_ability_is_lookup_error(actor: Actor) -> None:
    """Test missing abilities can be handled as lookup errors."""
    with pytest.raises(LookupError):
        actor.ability_to(BrowseTheWeb)


def test_single_ability(actor: Actor) -> None:
    """Test finding the only ability of a class."""
    browser = BrowseTheWeb()

    assert actor.who_can(browser) is actor
    assert actor.ability_to(BrowseTheWeb) is browser


def test_ability_lookup_by_exact_class(actor: Actor) -> None:
    """Test derived ability classes do not match their base."""
    actor.who_can(CallAnotherApi())

    with pytest.raises(MissingAbilityError):
        actor.ability_to(CallAnApi)


def test_first_ability_wins(actor: Actor) -> None:
    """Test the first ability of a class is returned when shadowed."""
    first = BrowseTheWeb('http://first')
    second = BrowseTheWeb('http://second')

    with pytest.warns(AbilityWarning, match=r'is shadowed by an existing$'):
        actor.who_can(first, CallAnApi(), second)

    assert actor.ability_to(BrowseTheWeb) is first
    assert len(actor.abilities) == 3


def test_strict_ability_shadowing(reporter: 'CollectingReporter') -> None:
    """Test ability shadowing in strict mode."""
    actor = Actor('Alice', reporter=reporter, settings=ScreenplaySettings(strict=True))
    actor.who_can(BrowseTheWeb())

    with pytest.raises(AbilityError, match=r'is shadowed by an existing$'):
        actor.who_can(BrowseTheWeb())

    assert len(actor.abilities) == 1


def test_missing_ability_in_activity(actor: Actor, reporter: 'CollectingReporter') -> None:
    """Test a missing ability fails the activity that needs it."""
    activity = do(
        '#actor browses',
        lambda actor: actor.ability_to(BrowseTheWeb),
        failure_mode=FailureMode.ERROR_BUT_CONTINUE,
    )

    actor.attempts_to(activity)

    assert isinstance(reporter.failures[0].cause, MissingAbilityError)


def test_cancelled_batch(reporter: 'CollectingReporter', performed: list[str],
                         step: 'Callable[..., Interaction]') -> None:
    """Test a set cancellation event stops the batch before the next activity."""
    cancel = Event()
    actor = Actor('Alice', reporter=reporter, cancel=cancel)

    def stop(actor: Actor) -> None:  # noqa: ARG001
        cancel.set()

    with pytest.raises(ActivityError, match=r"^cancelled before activity 'Alice performs never'"):
        actor.attempts_to(step('first'), do('#actor stops', stop), step('never'))

    assert performed == ['first']


def test_answers_to(actor: Actor) -> None:
    """Test answering a question directly."""
    assert actor.answers_to(value_of(42)) == 42
    assert actor.answers_to(result_of('the actor name', lambda actor: actor.name)) == 'Alice'


def test_answers_to_failure(actor: Actor, reporter: 'CollectingReporter') -> None:
    """Test a failing question reports a non-fatal error and answers the default."""
    def broken(actor: Actor) -> int:  # noqa: ARG001
        raise KeyError('status')

    answer = actor.answers_to(result_of('the status', broken), default=-1)

    assert answer == -1
    assert len(reporter.failures) == 1
    assert isinstance(reporter.failures[0], QuestionError)
    assert f'{reporter.failures[0]}'.startswith("failed to answer question 'the status'")


def test_step_results(actor: Actor, reporter: 'CollectingReporter',
                      step: 'Callable[..., Interaction]') -> None:
    """Test every performed activity is recorded with its outcome."""
    with pytest.raises(ActivityError):
        actor.attempts_to(
            step('first'),
            step('optional', fail=True, failure_mode=FailureMode.IGNORE),
            step('non-critical', fail=True, failure_mode=FailureMode.ERROR_BUT_CONTINUE),
            step('critical', fail=True),
            step('never'),
        )

    assert [result.name for result in reporter.steps] == [
        'Alice performs first',
        'Alice performs optional',
        'Alice performs non-critical',
        'Alice performs critical',
    ]
    assert [result.status for result in reporter.steps] == [
        StepStatus.PASSED,
        StepStatus.FAILED,
        StepStatus.FAILED,
        StepStatus.FAILED,
    ]
    assert all(result.actor == 'Alice' for result in reporter.steps)
    assert all(result.duration >= 0 for result in reporter.steps)
    assert reporter.steps[0].error is None
    assert isinstance(reporter.steps[3].error, RuntimeError)
    assert reporter.failures[-1].cause is reporter.steps[3].error


def test_step_hooks_order(actor: Actor, mocker: 'MockerFixture',
                          step: 'Callable[..., Interaction]') -> None:
    """Test each activity is announced before its outcome is recorded."""
    manager = mocker.Mock()
    mocker.patch.object(actor.reporter, 'on_activity_start', manager.start)
    mocker.patch.object(actor.reporter, 'on_activity_finish', manager.finish)

    actor.attempts_to(step('first'), step('second'))

    assert [call[0] for call in manager.mock_calls] == ['start', 'finish', 'start', 'finish']
    assert manager.start.call_args_list == [
        mocker.call('Alice performs first'),
        mocker.call('Alice performs second'),
    ]
    assert [call.args[0].passed for call in manager.finish.call_args_list] == [True, True]


def test_cancelled_activity_not_recorded(reporter: 'CollectingReporter',
                                         step: 'Callable[..., Interaction]') -> None:
    """Test activities skipped by cancellation leave no step record."""
    cancel = Event()
    cancel.set()
    actor = Actor('Alice', reporter=reporter, cancel=cancel)

    with pytest.raises(ActivityError):
        actor.attempts_to(step('never'))

    assert reporter.steps == []


def test_concurrent_abilities(actor: Actor) -> None:
    """Test abilities are added and looked up from several threads."""
    kinds = [type(f'Ability{num}', (), {}) for num in range(40)]
    errors = []

    def add(kind: type) -> None:
        try:
            actor.who_can(kind())
        except Exception as error:  # noqa: BLE001
            errors.append(error)

    def lookup(kind: type) -> None:
        try:
            for _ in range(50):
                try:
                    actor.ability_to(kind)
                except MissingAbilityError:
                    continue
        except Exception as error:  # noqa: BLE001
            errors.append(error)

    threads = [Thread(target=add, args=(kind,)) for kind in kinds]
    threads.extend(Thread(target=lookup, args=(kind,)) for kind in kinds)

    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(actor.abilities) == len(kinds)
    assert {type(ability) for ability in actor.abilities} == set(kinds)
    assert all(isinstance(actor.ability_to(kind), kind) for kind in kinds)
