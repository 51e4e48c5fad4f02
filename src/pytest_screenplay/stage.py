"""Per-test actor registry.

A stage creates actors by name and disposes of them when the test ends.
It is owned by the test (see the `stage` pytest fixture) rather than
living in a module-level map, so parallel tests never share actors.
"""

from threading import Event, Lock
from typing import TYPE_CHECKING, Self

from pytest_screenplay.actors import Actor
from pytest_screenplay.reporting import CollectingReporter
from pytest_screenplay.settings import ScreenplaySettings

if TYPE_CHECKING:
    from types import TracebackType

    from pytest_screenplay.reporting import Reporter


class Stage:
    """Registry of the actors taking part in one test.

    All actors on a stage share its reporter, settings and cancellation
    event. The stage never sets the event itself: it is set by the owner
    of the stage, or by a reporter given the same event (the `stage`
    pytest fixture does so on the first fail-fast failure).
    """

    def __init__(self, reporter: 'Reporter | None' = None,
                 settings: ScreenplaySettings | None = None, *,
                 cancel: Event | None = None) -> None:
        """Initialize an empty stage.

        Args:
            reporter: Failure sink shared by the actors.
            settings: Runtime settings shared by the actors.
            cancel: Cancellation event shared by the actors; a new one
                by default.
        """
        self.reporter: 'Reporter' = reporter if reporter is not None else CollectingReporter()
        self.settings = settings if settings is not None else ScreenplaySettings()
        self.cancel = cancel if cancel is not None else Event()

        self._actors: dict[str, Actor] = {}
        self._lock = Lock()

    def __enter__(self) -> Self:
        """Enter the stage context."""
        return self

    def __exit__(self, exc_type: type[BaseException] | None,
                 exc_value: BaseException | None,
                 traceback: 'TracebackType | None') -> None:
        """Dismiss every actor on exit."""
        self.dismiss()

    @property
    def actors(self) -> tuple[Actor, ...]:
        """Actors currently on the stage."""
        with self._lock:
            return tuple(self._actors.values())

    def actor_called(self, name: str) -> Actor:
        """Return the actor with a name, creating it on first use.

        Args:
            name: Actor name.

        Returns:
            The same actor instance for the same name until forgotten.
        """
        with self._lock:
            if (actor := self._actors.get(name)) is None:
                actor = Actor(
                    name,
                    reporter=self.reporter,
                    settings=self.settings,
                    cancel=self.cancel,
                )
                self._actors[name] = actor

        return actor

    def forget(self, name: str) -> None:
        """Remove an actor; the next call with this name creates a new one.

        Args:
            name: Actor name.
        """
        with self._lock:
            self._actors.pop(name, None)

    def dismiss(self) -> None:
        """Remove every actor from the stage."""
        with self._lock:
            self._actors.clear()
