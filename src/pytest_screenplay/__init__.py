"""Screenplay pattern runtime and pytest plugin.

The `pytest_screenplay` package lets tests be written as actors with
abilities performing activities and asking questions, instead of as
flat sequences of calls and assertions.

Key features:
- ordered activity batches with per-activity failure modes;
- typed questions and expectations paired by ensure activities;
- structured, chained error messages with runtime value snippets;
- a per-test stage of actors exposed as a pytest fixture.

Typical usage::

    from pytest_screenplay.builtins import do, ensure_that, equals, value_of

    def test_greeting(stage):
        alice = stage.actor_called('Alice')
        alice.attempts_to(
            do('#actor greets', lambda actor: None),
            ensure_that(value_of('hello'), equals('hello')),
        )
"""
