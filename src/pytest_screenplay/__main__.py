"""CLI utilities for pytest-screenplay.

Prints reference information about the built-in expectation catalog and
the failure modes activities can be declared with.
"""

from inspect import getdoc, signature
from typing import TYPE_CHECKING, Any

from click import Choice, echo, group, option
from yaml import dump

from pytest_screenplay.builtins import expectations
from pytest_screenplay.generics import type_repr
from pytest_screenplay.models import resolve_class_argument
from pytest_screenplay.schema import Expectation, FailureMode

if TYPE_CHECKING:
    from collections.abc import Callable

#: Factories listed by the catalog command, in display order.
FACTORIES: tuple['Callable[..., Expectation[Any]]', ...] = (
    expectations.equals,
    expectations.contains,
    expectations.contains_key,
    expectations.is_empty,
    expectations.array_length_equals,
    expectations.is_greater_than,
    expectations.is_less_than,
    expectations.satisfies,
)

MODE_NOTES = {
    FailureMode.FAIL_FAST: 'Report as fatal and stop the remaining activities.',
    FailureMode.ERROR_BUT_CONTINUE: 'Report the failure and run the next activity.',
    FailureMode.IGNORE: 'Log the failure only.',
}


def _summary(obj: Any) -> str:  # noqa: ANN401
    """First line of a docstring."""
    doc = getdoc(obj) or ''

    return doc.partition('\n')[0]


def describe_factory(factory: 'Callable[..., Expectation[Any]]') -> dict[str, Any]:
    """Describe an expectation factory.

    Args:
        factory: Expectation factory function.

    Returns:
        Mapping with the call signature, the summary and the evaluated type.
    """
    model = signature(factory).return_annotation
    evaluates = resolve_class_argument(model, Expectation)

    return {
        'call': f'{factory.__name__}({", ".join(signature(factory).parameters)})',
        'summary': _summary(factory),
        'evaluates': 'any' if evaluates is Any else type_repr(evaluates),
    }


def build_catalog() -> dict[str, Any]:
    """Collect the catalog of expectations and failure modes."""
    return {
        'expectations': {
            factory.__name__: describe_factory(factory)
            for factory in FACTORIES
        },
        'failure_modes': {
            mode.value: MODE_NOTES[mode]
            for mode in FailureMode
        },
    }


@group(help='Command-line utilities for pytest-screenplay.')
def cli() -> None:
    """Root CLI group for pytest-screenplay tools."""
    return None


@cli.command(
    name='catalog',
    help='Print the built-in expectations and failure modes as YAML.',
)
@option(
    '-s', '--section',
    type=Choice(['expectations', 'failure_modes']),
    default=None,
    help='Print a single section of the catalog.',
)
def print_catalog(section: str | None) -> None:
    """Generate and print the catalog."""
    catalog = build_catalog()
    if section is not None:
        catalog = {section: catalog[section]}

    echo(dump(catalog, sort_keys=False, allow_unicode=True), nl=False)


if __name__ == '__main__':
    cli()
