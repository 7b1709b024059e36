"""
Per-geometry memoization cache.

A geometry is immutable once built, so any quantity derived from it can be
computed once and shared. :class:`Memoizer` is the only mutable state a
geometry carries; it publishes each value at most once per key, even when
several threads ask for the same key at the same time.
"""

import functools
import threading
import time
from collections import Counter
from typing import Any, Callable, Hashable, TypeVar

from polygeom.core.logging import get_logger

_logger = get_logger(__name__)

T = TypeVar("T")


class Memoizer:
    """
    Thread-safe compute-or-fetch store keyed by computation identity.

    Values are never evicted; they live as long as the owning object.

    Example:
        >>> cache = Memoizer()
        >>> cache.get_or_compute("answer", lambda: 42)
        42
        >>> cache.computations("answer")
        1
    """

    def __init__(self) -> None:
        self._values: dict[Hashable, Any] = {}
        self._locks: dict[Hashable, threading.Lock] = {}
        self._guard = threading.Lock()
        self._computed: Counter = Counter()

    def get_or_compute(self, key: Hashable, compute: Callable[[], T]) -> T:
        """
        Return the value published under ``key``, computing it if absent.

        The first caller runs ``compute`` while holding a lock private to
        ``key``; concurrent callers for the same key wait and then read the
        published value. If ``compute`` raises, nothing is published and the
        next caller tries again.

        Args:
            key: Hashable computation identity.
            compute: Zero-argument pure function producing the value.

        Returns:
            The published value (the identical object on every call).
        """
        try:
            return self._values[key]
        except KeyError:
            pass

        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())

        with lock:
            if key in self._values:
                return self._values[key]
            start = time.perf_counter()
            value = compute()
            self._values[key] = value
            self._computed[key] += 1

        _logger.debug(
            "cache_computed",
            key=repr(key),
            duration_ms=round((time.perf_counter() - start) * 1000.0, 3),
        )
        return value

    def computations(self, key: Hashable) -> int:
        """Number of times ``key`` has been computed (0 or 1 in practice)."""
        return self._computed[key]

    def __contains__(self, key: Hashable) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)


def memoized(method: Callable[..., T]) -> Callable[..., T]:
    """
    Cache a method's result in ``self.cache`` (a :class:`Memoizer`).

    The cache key is the method name followed by its positional arguments,
    which must therefore be hashable.
    """
    name = method.__name__

    @functools.wraps(method)
    def wrapper(self, *args: Hashable) -> T:
        return self.cache.get_or_compute((name, *args), lambda: method(self, *args))

    return wrapper
