"""Object pools and simple allocators for reusing objects and buffer space."""

from __future__ import annotations

import threading
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


class MemoryPool(Generic[T]):
    """Hands out objects built by ``factory``, tracked in fixed-size blocks of slots.

    The pool keeps a reference to every live object until it is deallocated.
    Freed slots are reused before the pool grows by another block.
    """

    def __init__(self, factory: Callable[..., T], block_size: int = 1024) -> None:
        if block_size < 1:
            raise ValueError("block_size must be positive")
        self._factory = factory
        self._block_size = block_size
        self._blocks = 1
        self._slots: list[T | None] = []
        self._free_slots: list[int] = []
        self._live: dict[int, int] = {}
        self._allocated = 0
        self._deallocated = 0
        self._lock = threading.Lock()

    def allocate(self, *args: Any, **kwargs: Any) -> T:
        """Build an object with the factory and place it in a free slot."""
        obj = self._factory(*args, **kwargs)
        with self._lock:
            if self._free_slots:
                slot = self._free_slots.pop()
                self._slots[slot] = obj
            else:
                slot = len(self._slots)
                if slot >= self._blocks * self._block_size:
                    self._blocks += 1
                self._slots.append(obj)
            self._live[id(obj)] = slot
            self._allocated += 1
        return obj

    def deallocate(self, obj: T | None) -> None:
        """Return ``obj`` to the pool; ``None`` is ignored."""
        if obj is None:
            return
        with self._lock:
            slot = self._live.get(id(obj))
            if slot is None or self._slots[slot] is not obj:
                raise ValueError("object was not allocated from this pool")
            del self._live[id(obj)]
            self._slots[slot] = None
            self._free_slots.append(slot)
            self._deallocated += 1

    def allocated_count(self) -> int:
        """Total number of allocations made."""
        with self._lock:
            return self._allocated

    def deallocated_count(self) -> int:
        """Total number of deallocations made."""
        with self._lock:
            return self._deallocated

    def utilization(self) -> float:
        """Fraction of the pool's slot capacity currently holding live objects."""
        with self._lock:
            capacity = self._blocks * self._block_size
            return len(self._live) / capacity if capacity else 0.0


class ObjectPool(Generic[T]):
    """A stack of ready-made objects that are handed out and taken back."""

    def __init__(self, factory: Callable[..., T], initial_size: int = 100) -> None:
        if initial_size < 0:
            raise ValueError("initial_size must not be negative")
        self._factory = factory
        self._available: list[T] = [factory() for _ in range(initial_size)]
        self._lock = threading.Lock()

    def acquire(self, *args: Any, **kwargs: Any) -> T:
        """Take a pooled object, or build a new one from the arguments if none is left."""
        with self._lock:
            if self._available:
                return self._available.pop()
        return self._factory(*args, **kwargs)

    def release(self, obj: T | None) -> None:
        """Put ``obj`` back into the pool; ``None`` is ignored."""
        if obj is None:
            return
        with self._lock:
            self._available.append(obj)

    def available_count(self) -> int:
        with self._lock:
            return len(self._available)


class StackAllocator:
    """Bump allocator over a fixed byte buffer; allocations return byte offsets."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("size must be positive")
        self._size = size
        self.memory = bytearray(size)
        self._current = 0

    def allocate(self, item_size: int, alignment: int = 1, count: int = 1) -> int:
        """Reserve ``count`` items of ``item_size`` bytes aligned to ``alignment``.

        Returns the offset of the reserved region; raises MemoryError when it
        does not fit.
        """
        if alignment < 1 or alignment & (alignment - 1):
            raise ValueError("alignment must be a positive power of two")
        if item_size < 0 or count < 0:
            raise ValueError("item_size and count must not be negative")
        needed = item_size * count
        aligned = (self._current + alignment - 1) & ~(alignment - 1)
        if aligned + needed > self._size:
            raise MemoryError(
                f"cannot allocate {needed} bytes: {self.bytes_available()} available"
            )
        self._current = aligned + needed
        return aligned

    def reset(self) -> None:
        self._current = 0

    def bytes_used(self) -> int:
        return self._current

    def bytes_available(self) -> int:
        return self._size - self._current

    def utilization(self) -> float:
        return self._current / self._size


class FixedSizeAllocator(Generic[T]):
    """A fixed number of slots handed out as integer handles, most recently freed first."""

    def __init__(self, factory: Callable[..., T], capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self._factory = factory
        self._capacity = capacity
        self._storage: list[T | None] = [None] * capacity
        self._in_use = [False] * capacity
        self._free_indices = list(range(capacity))

    def allocate(self, *args: Any, **kwargs: Any) -> int:
        """Build an object in a free slot and return its handle."""
        if not self._free_indices:
            raise MemoryError("no free slots left")
        index = self._free_indices.pop()
        self._storage[index] = self._factory(*args, **kwargs)
        self._in_use[index] = True
        return index

    def deallocate(self, handle: int) -> None:
        """Release the slot behind ``handle``."""
        if not 0 <= handle < self._capacity or not self._in_use[handle]:
            raise ValueError(f"handle {handle} is not allocated")
        self._storage[handle] = None
        self._in_use[handle] = False
        self._free_indices.append(handle)

    def __getitem__(self, handle: int) -> T:
        if not 0 <= handle < self._capacity or not self._in_use[handle]:
            raise KeyError(handle)
        return self._storage[handle]  # type: ignore[return-value]

    def capacity(self) -> int:
        return self._capacity

    def available(self) -> int:
        return len(self._free_indices)

    def used(self) -> int:
        return self._capacity - self.available()