"""A minimal entity-component system."""

from __future__ import annotations

import logging
from typing import TypeVar

logger = logging.getLogger(__name__)

C = TypeVar("C", bound="Component")


class ComponentNotFoundError(LookupError):
    """Raised when an entity has no component of the requested type."""


class Component:
    """Base class for behaviour attached to an entity."""

    entity: Entity | None = None

    def init(self) -> None:
        """Called once after the component is attached to its entity."""

    def update(self) -> None:
        """Advance the component by one frame."""

    def draw(self) -> None:
        """Render the component."""


class Entity:
    """A container of components that can be marked for removal."""

    def __init__(self) -> None:
        self._active = True
        self._components: list[Component] = []

    @property
    def active(self) -> bool:
        return self._active

    @property
    def components(self) -> tuple[Component, ...]:
        return tuple(self._components)

    def update(self) -> None:
        for component in self._components:
            component.update()

    def draw(self) -> None:
        for component in self._components:
            component.draw()

    def destroy(self) -> None:
        """Mark the entity as inactive; the manager drops it on refresh."""
        self._active = False

    def add_component(self, component: C) -> C:
        """Attach a component, initialise it and return it."""
        component.entity = self
        self._components.append(component)
        component.init()
        return component

    def get_component(self, component_type: type[C]) -> C:
        """Return the first component that is an instance of the given type."""
        for component in self._components:
            if isinstance(component, component_type):
                return component
        raise ComponentNotFoundError(f"Component not found: {component_type.__name__}")

    def has_component(self, component_type: type[Component]) -> bool:
        return any(isinstance(c, component_type) for c in self._components)


class Manager:
    """Owns entities and drives their update and draw passes."""

    def __init__(self) -> None:
        self.entities: list[Entity] = []

    def update(self) -> None:
        for entity in self.entities:
            if entity.active:
                entity.update()
            else:
                logger.debug("Inactive entity")

    def draw(self) -> None:
        for entity in self.entities:
            if entity.active:
                entity.draw()

    def refresh(self) -> None:
        """Drop every entity that has been destroyed."""
        self.entities = [e for e in self.entities if e.active]

    def add_entity(self) -> Entity:
        entity = Entity()
        self.entities.append(entity)
        return entity