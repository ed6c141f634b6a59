"""
Named slots holding either configuration or a live object.

Storages keep their buckets and hubs keep their storages in a
``SlotRegistry``. A slot starts ``Unresolved`` (configuration only) and is
replaced by a ``Resolved`` slot the first time it is requested; from then on
the same instance is returned for that name.
"""
import threading
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, TypeVar, Union

from filestorage.storage.exceptions import NotFoundError

T = TypeVar("T")


@dataclass(frozen=True)
class Unresolved:
    """Slot holding configuration which has not been instantiated yet."""

    config: Any


@dataclass(frozen=True)
class Resolved(Generic[T]):
    """Slot holding a live instance."""

    instance: T


Slot = Union[Unresolved, Resolved]


class SlotRegistry(Generic[T]):
    """
    Thread-safe ordered mapping of names to slots.

    Args:
        factory: Callable building an instance from ``(name, config)``
        not_found: Callable building the exception raised for unknown names
    """

    def __init__(
        self,
        factory: Callable[[str, Any], T],
        not_found: Callable[[str], NotFoundError],
    ):
        self._factory = factory
        self._not_found = not_found
        self._slots: dict[str, Slot] = {}
        self._lock = threading.RLock()

    def set_slot(self, name: str, slot: Slot) -> None:
        with self._lock:
            self._slots[name] = slot

    def get_slot(self, name: str) -> Slot:
        try:
            return self._slots[name]
        except KeyError:
            raise self._not_found(name) from None

    def has(self, name: str) -> bool:
        return name in self._slots

    def names(self) -> list[str]:
        return list(self._slots)

    def clear(self) -> None:
        with self._lock:
            self._slots.clear()

    def resolve(self, name: str) -> T:
        """
        Return the instance for the name, creating it on first access.

        Raises:
            NotFoundError: If no slot is registered under the name
        """
        slot = self.get_slot(name)
        if isinstance(slot, Resolved):
            return slot.instance

        with self._lock:
            # Another thread may have resolved the slot meanwhile
            slot = self.get_slot(name)
            if isinstance(slot, Resolved):
                return slot.instance
            instance = self._factory(name, slot.config)
            self._slots[name] = Resolved(instance)
            return instance

    def resolve_all(self) -> dict[str, T]:
        return {name: self.resolve(name) for name in self.names()}

    def __contains__(self, name: object) -> bool:
        return name in self._slots

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._slots)
