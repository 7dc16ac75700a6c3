"""Hash functions that map table keys to non-negative integers.

A key type takes part in the contract in one of three ways: it is an ``int``
(Fibonacci hashing), a ``str`` or ``bytes`` (djb2), or it defines its own
``probe_hash()`` method. Anything else is rejected by ``default_hasher``.
"""

from typing import Protocol, TypeVar, Union, runtime_checkable

K_contra = TypeVar('K_contra', contravariant=True)

GOLDEN_RATIO_32 = 2654435769
DJB2_SEED = 5381
MASK_64 = (1 << 64) - 1
MASK_32 = (1 << 32) - 1


@runtime_checkable
class SupportsProbeHash(Protocol):
    def probe_hash(self) -> int:
        ...


class KeyHasher(Protocol[K_contra]):
    def __call__(self, key: K_contra) -> int:
        ...


def fibonacci_hash(key: int) -> int:
    """Multiplicative hash of an integer key.

    The product is wrapped to 64 bits and its two 32-bit halves are folded
    together, so small keys (where the high half is still zero) do not all
    land on the same index.
    """
    product = (key * GOLDEN_RATIO_32) & MASK_64
    return (product >> 32) ^ (product & MASK_32)


def djb2_hash(data: Union[str, bytes]) -> int:
    if isinstance(data, str):
        data = data.encode('utf-8')
    h = DJB2_SEED
    for c in data:
        h = ((h << 5) + h + c) & MASK_64
    return h


def default_hasher(key: object) -> int:
    probe_hash = getattr(key, "probe_hash", None)
    if probe_hash is not None:
        return probe_hash()
    # bool is an int subclass; it hashes like 0 and 1
    if isinstance(key, int):
        return fibonacci_hash(key)
    if isinstance(key, (str, bytes)):
        return djb2_hash(key)
    raise TypeError(f"no probe hash for key type {type(key).__name__!r}")
