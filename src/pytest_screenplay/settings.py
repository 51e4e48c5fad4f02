"""Runtime configuration.

Settings are resolved from environment variables prefixed with
``SCREENPLAY_`` and may be overridden by pytest command-line options.
"""

from logging import getLevelNamesMapping

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from pytest_screenplay.models import SettingsModel


class ScreenplaySettings(SettingsModel):
    """Screenplay runtime settings."""

    model_config = SettingsConfigDict(
        env_prefix='SCREENPLAY_',
        frozen=True,
        extra='ignore',
    )

    strict: bool = Field(
        default=False,
        title='Strict mode',
        description=(
            'Raise instead of warning when an actor is given an ability '
            'of a class it already holds.'
        ),
    )

    ignored_level: str = Field(
        default='DEBUG',
        title='Ignored failures log level',
        description=(
            'Logging level used to record failures of activities '
            'declared with the `ignore` failure mode.'
        ),
    )

    @field_validator('ignored_level')
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in getLevelNamesMapping():
            raise ValueError(f'unknown logging level {value!r}')

        return level

    @property
    def ignored_levelno(self) -> int:
        """Numeric logging level for ignored failures."""
        return getLevelNamesMapping()[self.ignored_level]
