"""
Active Entity Sets
===================
Ordered entity containers with two-phase removal.

Systems never remove entities while iterating. They call destroy(),
which marks the entity dead, and process_dead() compacts the container
at the end of the pass. Iteration skips marked entities, so an entity
destroyed earlier in the same pass cannot be matched again.
"""

from typing import Generic, Iterator, List, Optional, TypeVar


# Entity type. Anything with a mutable boolean `alive` attribute.
E = TypeVar('E')


class EntitySet(Generic[E]):
    """
    Common interface for the single player slot and the unbounded swarms.

    Subclasses store entities in insertion order and decide capacity.
    """

    def __init__(self):
        self._entities: List[E] = []
        self._dead_count: int = 0

    @property
    def capacity(self) -> Optional[int]:
        """Maximum live entities, or None for unbounded."""
        return None

    def has_room(self) -> bool:
        return self.capacity is None or len(self._entities) < self.capacity

    def add(self, entity: E) -> bool:
        """Add an entity. Returns False when the set is full."""
        if not self.has_room():
            return False
        self._entities.append(entity)
        return True

    def destroy(self, entity: E) -> None:
        """Mark an entity for removal (processed by process_dead)."""
        if entity.alive:
            entity.alive = False
            self._dead_count += 1

    def process_dead(self) -> None:
        """Remove all marked entities, keeping survivors in order."""
        if self._dead_count:
            self._entities = [e for e in self._entities if e.alive]
            self._dead_count = 0

    def clear(self) -> None:
        self._entities = []
        self._dead_count = 0

    def __iter__(self) -> Iterator[E]:
        """Yield live entities in insertion order. Safe to destroy() while iterating."""
        for entity in list(self._entities):
            if entity.alive:
                yield entity

    def __reversed__(self) -> Iterator[E]:
        """Yield live entities newest first. Safe to destroy() while iterating."""
        for entity in list(reversed(self._entities)):
            if entity.alive:
                yield entity

    def __len__(self) -> int:
        """Number of live entities."""
        return sum(1 for e in self._entities if e.alive)

    def __bool__(self) -> bool:
        return any(e.alive for e in self._entities)

    def as_list(self) -> List[E]:
        return [e for e in self._entities if e.alive]


class Swarm(EntitySet[E]):
    """Unbounded set: enemy missiles, interceptors, explosions."""


class SingleSlot(EntitySet[E]):
    """Capacity-one set holding the keyboard-steered missile."""

    @property
    def capacity(self) -> Optional[int]:
        return 1

    @property
    def occupant(self) -> Optional[E]:
        """The live entity in the slot, or None."""
        for entity in self._entities:
            if entity.alive:
                return entity
        return None

    def has_room(self) -> bool:
        # A dead occupant still holds the slot until process_dead()
        return not self._entities
