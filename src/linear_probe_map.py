import logging
from typing import TypeVar, Generic, List, Iterator, Optional, Tuple

from bucket_array import BucketArray
from hash_contract import KeyHasher, default_hasher

K = TypeVar('K')
V = TypeVar('V')

logger = logging.getLogger(__name__)

INITIAL_CAPACITY = 15
GROWTH_FACTOR = 2


class KeyNotFoundError(KeyError):
    pass


class InvalidCapacityError(ValueError):
    pass


class LinearProbeMap(Generic[K, V]):
    """Open-addressing hash table with linear probing.

    Every key lives on the probe sequence that starts at
    ``hasher(key) % capacity`` and steps forward by one slot, wrapping around.
    Capacity doubles only when an insert probes the whole array without
    finding its key or a free slot. Removal uses backward-shift deletion, so
    slots are either occupied or free and no tombstones are kept.
    """

    def __init__(self, capacity: int = INITIAL_CAPACITY,
                 hasher: KeyHasher = default_hasher) -> None:
        if not isinstance(capacity, int) or capacity <= 0:
            raise InvalidCapacityError("capacity must be a positive integer")
        self._hasher = hasher
        self._slots: BucketArray[K, V] = BucketArray(capacity)

    @classmethod
    def with_capacity(cls, capacity: int,
                      hasher: KeyHasher = default_hasher) -> 'LinearProbeMap[K, V]':
        return cls(capacity, hasher)

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def _home(self, key: K) -> int:
        return self._hasher(key) % len(self._slots)

    def _find(self, slots: BucketArray[K, V], key: K) -> Optional[int]:
        """Index of the slot holding ``key`` or of the first free slot on its
        probe sequence; None once the sequence wraps back to the home slot."""
        capacity = len(slots)
        index = self._hasher(key) % capacity
        for _ in range(capacity):
            slot = slots[index]
            if not slot.occupied or slot.key == key:
                return index
            index = (index + 1) % capacity
        return None

    def _locate(self, key: K) -> Optional[int]:
        index = self._find(self._slots, key)
        if index is None or not self._slots[index].occupied:
            return None
        return index

    def _grow(self) -> None:
        old_capacity = len(self._slots)
        new_slots = self._slots.allocate(old_capacity * GROWTH_FACTOR)
        for slot in self._slots.occupied():
            index = self._find(new_slots, slot.key)
            new_slots[index].fill(slot.key, slot.value)
        self._slots = new_slots
        logger.info("Grew table from %d to %d slots", old_capacity, len(new_slots))

    def insert(self, key: K, value: V) -> Optional[V]:
        """Store ``value`` under ``key``; return the value it replaced, if any."""
        while True:
            index = self._find(self._slots, key)
            if index is not None:
                break
            self._grow()

        slot = self._slots[index]
        if slot.occupied:
            old_value = slot.value
            slot.value = value
            return old_value
        slot.fill(key, value)
        return None

    def get(self, key: K) -> Optional[V]:
        index = self._locate(key)
        if index is None:
            return None
        return self._slots[index].value

    def get_or(self, key: K, default: V) -> V:
        index = self._locate(key)
        if index is None:
            return default
        return self._slots[index].value

    def remove(self, key: K) -> Tuple[K, V]:
        """Remove ``key`` and return the ``(key, value)`` pair it held.

        Raises KeyNotFoundError when the key is absent; the table is left
        unchanged in that case.
        """
        index = self._locate(key)
        if index is None:
            logger.debug("Remove of missing key %r", key)
            raise KeyNotFoundError(key)

        removed = self._slots[index]
        pair = (removed.key, removed.value)
        removed.clear()
        self._close_gap(index)
        return pair

    def _close_gap(self, gap: int) -> None:
        # Pull later members of the cluster back so no probe chain crosses a free slot.
        capacity = len(self._slots)
        current = gap
        while True:
            current = (current + 1) % capacity
            slot = self._slots[current]
            if not slot.occupied:
                return
            home = self._home(slot.key)
            if gap <= current:
                reachable = gap < home <= current
            else:
                reachable = home > gap or home <= current
            if reachable:
                continue
            self._slots[gap].fill(slot.key, slot.value)
            slot.clear()
            gap = current

    def extend(self, additional: int) -> None:
        """Reserve room for ``additional`` slots without touching the layout."""
        if not isinstance(additional, int) or additional < 0:
            raise InvalidCapacityError("additional must be a non-negative integer")
        self._slots.reserve(additional)

    def contains(self, key: K) -> bool:
        return self._locate(key) is not None

    def probe_index(self, key: K) -> Optional[int]:
        return self._locate(key)

    def size(self) -> int:
        return sum(1 for _ in self._slots.occupied())

    def is_empty(self) -> bool:
        return next(self._slots.occupied(), None) is None

    def load_factor(self) -> float:
        return self.size() / len(self._slots)

    def clear(self) -> None:
        for slot in self._slots:
            slot.clear()

    def keys(self) -> List[K]:
        return [slot.key for slot in self._slots.occupied()]

    def values(self) -> List[V]:
        return [slot.value for slot in self._slots.occupied()]

    def items(self) -> List[Tuple[K, V]]:
        return [(slot.key, slot.value) for slot in self._slots.occupied()]

    def copy(self) -> 'LinearProbeMap[K, V]':
        """Create a copy with the same capacity and hasher.

        Note: values are shared, not copied.
        """
        clone: LinearProbeMap[K, V] = LinearProbeMap(len(self._slots), self._hasher)
        for slot in self._slots.occupied():
            clone.insert(slot.key, slot.value)
        return clone

    def dump(self) -> List[str]:
        lines = []
        for index, slot in enumerate(self._slots):
            if slot.occupied:
                lines.append(f"{slot.key!r}: {slot.value!r}   index: {index}")
            else:
                lines.append("---")
        return lines

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __contains__(self, key: K) -> bool:
        return self.contains(key)

    def __getitem__(self, key: K) -> V:
        index = self._locate(key)
        if index is None:
            raise KeyNotFoundError(key)
        return self._slots[index].value

    def __setitem__(self, key: K, value: V) -> None:
        self.insert(key, value)

    def __delitem__(self, key: K) -> None:
        self.remove(key)

    def __iter__(self) -> Iterator[K]:
        for slot in self._slots.occupied():
            yield slot.key

    def __repr__(self) -> str:
        pairs = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"LinearProbeMap({{{pairs}}})"

    def __str__(self) -> str:
        return f"LinearProbeMap(size={self.size()}, capacity={len(self._slots)})"
