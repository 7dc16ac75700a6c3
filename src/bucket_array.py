from typing import TypeVar, Generic, List, Iterator, Optional

K = TypeVar('K')
V = TypeVar('V')


class Slot(Generic[K, V]):
    def __init__(self) -> None:
        self.key: Optional[K] = None
        self.value: Optional[V] = None
        self.occupied: bool = False

    def fill(self, key: K, value: V) -> None:
        self.key = key
        self.value = value
        self.occupied = True

    def clear(self) -> None:
        self.key = None
        self.value = None
        self.occupied = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Slot):
            return NotImplemented
        return (self.occupied == other.occupied
                and self.key == other.key
                and self.value == other.value)

    def __repr__(self) -> str:
        if not self.occupied:
            return "Slot()"
        return f"Slot({self.key!r}, {self.value!r})"


class BucketArray(Generic[K, V]):
    """Fixed-length run of slots backing a table at one capacity.

    The length never changes after construction. ``reserve`` only builds a
    pool of spare empty slots that ``allocate`` hands to the next, larger
    array, so the slots of this array are untouched.
    """

    def __init__(self, capacity: int, spare: Optional[List[Slot[K, V]]] = None) -> None:
        if not isinstance(capacity, int) or capacity <= 0:
            raise ValueError("capacity must be a positive integer")
        pool = spare if spare is not None else []
        # the donor keeps its pool until this array replaces it
        reused = pool[:capacity]
        for slot in reused:
            slot.clear()
        self._slots: List[Slot[K, V]] = reused + [Slot() for _ in range(capacity - len(reused))]
        self._spare: List[Slot[K, V]] = pool[capacity:]

    def allocate(self, capacity: int) -> 'BucketArray[K, V]':
        """Build a fresh, empty array, drawing on this array's spare pool."""
        return BucketArray(capacity, self._spare)

    def reserve(self, additional: int) -> None:
        if additional < 0:
            raise ValueError("additional must be a non-negative integer")
        self._spare.extend(Slot() for _ in range(additional))

    @property
    def reserved(self) -> int:
        return len(self._spare)

    def occupied(self) -> Iterator[Slot[K, V]]:
        for slot in self._slots:
            if slot.occupied:
                yield slot

    def __len__(self) -> int:
        return len(self._slots)

    def __getitem__(self, index: int) -> Slot[K, V]:
        return self._slots[index]

    def __iter__(self) -> Iterator[Slot[K, V]]:
        return iter(self._slots)

    def __repr__(self) -> str:
        return f"BucketArray({self._slots})"

    def __str__(self) -> str:
        return f"BucketArray(capacity={len(self._slots)})"
