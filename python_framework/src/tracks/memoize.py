"""
memoize — cache a function's results keyed strictly by input equality.

    @memoize
    def adapter_for(target_type: type) -> TypeAdapter: ...

    adapter_for(Employee) is adapter_for(Employee)   # True, built once

The cache is unbounded and never evicts. Keys are the positional arguments
plus the keyword arguments (order-insensitive). Hashable keys use a dict;
unhashable keys fall back to a linear equality scan, so they still hit.

Lookup and insert happen under a re-entrant lock, so concurrent callers never
compute the same key twice and a memoized function may call itself.
"""

from __future__ import annotations

import functools
import threading
from typing import Any, Callable, Generic, ParamSpec, TypeVar

P = ParamSpec("P")
T = TypeVar("T")

_MISSING = object()


class Memoized(Generic[P, T]):
    """Callable wrapper returned by memoize(); exposes cache_size() and cache_clear()."""

    def __init__(self, fn: Callable[P, T]) -> None:
        self._fn = fn
        self._lock = threading.RLock()
        self._hashed: dict[Any, T] = {}
        self._unhashable: list[tuple[Any, T]] = []
        functools.update_wrapper(self, fn)

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> T:
        key = (args, tuple(sorted(kwargs.items())))
        with self._lock:
            cached = self._lookup(key)
            if cached is not _MISSING:
                return cached  # type: ignore[return-value]
            value = self._fn(*args, **kwargs)
            self._store(key, value)
            return value

    def cache_size(self) -> int:
        with self._lock:
            return len(self._hashed) + len(self._unhashable)

    def cache_clear(self) -> None:
        with self._lock:
            self._hashed.clear()
            self._unhashable.clear()

    def _lookup(self, key: Any) -> Any:
        try:
            return self._hashed.get(key, _MISSING)
        except TypeError:
            for stored_key, value in self._unhashable:
                if stored_key == key:
                    return value
            return _MISSING

    def _store(self, key: Any, value: T) -> None:
        try:
            self._hashed[key] = value
        except TypeError:
            self._unhashable.append((key, value))

    def __repr__(self) -> str:
        return f"memoize({self._fn!r})"


def memoize(fn: Callable[P, T]) -> Memoized[P, T]:
    """Wrap fn so each distinct input is computed at most once."""
    return Memoized(fn)
