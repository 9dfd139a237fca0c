from __future__ import annotations

from collections.abc import Iterator

import numpy as np


class RingBuffer:
    """
    Fixed-size ring buffer of float samples.
    Overwrites the oldest entries when full.
    """

    __slots__ = ("_data", "_head", "_count")

    def __init__(self, capacity: int, dtype: np.dtype | type = np.float64) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._data = np.zeros(int(capacity), dtype=dtype)
        self._head = 0  # next write
        self._count = 0

    @property
    def capacity(self) -> int:
        return int(self._data.shape[0])

    @property
    def count(self) -> int:
        return self._count

    @property
    def is_full(self) -> bool:
        return self._count == self._data.shape[0]

    def push(self, value: float) -> None:
        cap = self._data.shape[0]
        self._data[self._head] = value
        self._head = (self._head + 1) % cap
        if self._count < cap:
            self._count += 1

    def copy_to(self, dst: np.ndarray) -> None:
        """
        Copy the logical contents, oldest first, into ``dst[:count]``.

        Raises
        ------
        ValueError
            If ``dst`` cannot hold ``count`` samples.
        """
        count = self._count
        if len(dst) < count:
            raise ValueError(f"dst too small: need {count} samples, got {len(dst)}")
        cap = self._data.shape[0]
        start = (self._head - count) % cap
        if start + count <= cap:
            dst[:count] = self._data[start : start + count]
        else:
            first = cap - start
            dst[:first] = self._data[start:]
            dst[first:count] = self._data[: count - first]

    def snapshot(self) -> np.ndarray:
        """Return a fresh array with the logical contents in chronological order."""
        out = np.empty(self._count, dtype=self._data.dtype)
        self.copy_to(out)
        return out

    def clear(self) -> None:
        self._data.fill(0)
        self._head = 0
        self._count = 0

    def __len__(self) -> int:  # pragma: no cover - trivial
        return self._count

    def __getitem__(self, index: int) -> float:
        """Support buf[i] and buf[-1] indexing over the *logical* contents."""
        size = self._count
        if size == 0:
            raise IndexError("RingBuffer is empty")

        if index < 0:
            index += size

        if index < 0 or index >= size:
            raise IndexError("RingBuffer index out of range")

        cap = self._data.shape[0]
        physical = (self._head - size + index) % cap
        return float(self._data[physical])

    def __iter__(self) -> Iterator[float]:
        cap = self._data.shape[0]
        start = (self._head - self._count) % cap
        for i in range(self._count):
            yield float(self._data[(start + i) % cap])
