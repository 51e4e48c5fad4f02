"""Base Pydantic models for screenplay elements.

This module defines the foundational model classes used by activities,
questions and expectations. It enforces immutability and strict schema
validation so that a step, once built, can be performed any number of
times with the same meaning.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

#: Placeholder substituted with the actor name in descriptions.
ACTOR_PLACEHOLDER = '#actor'


class SchemaModel(BaseModel):
    """Base immutable model for all screenplay elements.

    Design principles enforced by this model:
        - Immutability: elements cannot be modified after creation.
          Activities, questions and expectations are one-shot command
          objects and must not carry execution state.
        - Strict schema validation: unknown or extra fields are rejected
          to avoid silent errors caused by typos.

    All screenplay models must inherit from this class.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra='forbid',
    )


class DescribedMixin(SchemaModel):
    """Mixin providing element self-documentation.

    The description is the human sentence shown in reports and failure
    messages. It does not affect execution semantics.
    """

    description: str = Field(
        title='Description',
        description='Human-readable description of the element.',
    )

    def describe_for(self, actor: Any) -> str:  # noqa: ANN401
        """Render the description on behalf of an actor.

        Args:
            actor: Actor (or anything with a `name`) performing the element.

        Returns:
            Description with the actor placeholder substituted.
        """
        name = getattr(actor, 'name', None) or f'{actor}'

        return self.description.replace(ACTOR_PLACEHOLDER, name)


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Design principles enforced by this model:
        - Immutability: resolved settings cannot be modified after creation.
        - Tolerant schema handling: unknown or extra fields are ignored.
          This allows the surrounding environment to contain unrelated
          variables without breaking configuration resolution.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )


def resolve_type_argument(instance: Any, base: type) -> Any:  # noqa: ANN401
    """Resolve the first generic argument an instance was built with.

    Args:
        instance: A generic model instance.
        base: Generic base class the argument belongs to.

    Returns:
        The type argument, or `Any` when unparametrized.
    """
    return resolve_class_argument(type(instance), base)


def resolve_class_argument(model: type, base: type) -> Any:  # noqa: ANN401
    """Resolve the first generic argument of a model class.

    Walks the MRO of the class looking for a parametrized
    Pydantic generic derived from `base`, so that both `ValueQuestion[int]`
    and `class StatusCode(Question[int])` resolve to `int`.

    Args:
        model: A generic model class.
        base: Generic base class the argument belongs to.

    Returns:
        The type argument, or `Any` when unparametrized.
    """
    for klass in model.__mro__:
        metadata = getattr(klass, '__pydantic_generic_metadata__', None)
        if not metadata or not metadata['args']:
            continue

        origin = metadata['origin']
        if origin is None or not issubclass(origin, base):
            continue

        argument = metadata['args'][0]
        if isinstance(argument, TypeVar):
            return Any

        return argument

    return Any
