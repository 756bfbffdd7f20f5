from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Dict, Generic, List, TypeVar, cast

from domain.ports.pool import ReusableElement

T = TypeVar("T")


class ReusePool(Generic[T]):
    """Free list of display elements of one kind."""

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._storage: List[T] = []

    def acquire(self) -> T:
        if self._storage:
            return self._storage.pop()
        return self._factory()

    def release(self, elements: Iterable[T]) -> None:
        for element in elements:
            if isinstance(element, ReusableElement):
                element.prepare_for_reuse()
            self._storage.append(element)

    def __len__(self) -> int:
        return len(self._storage)


class ReusePoolRegistry:
    def __init__(self) -> None:
        self._pools: Dict[type, ReusePool[Any]] = {}

    def pool_for(self, kind: type[T], factory: Callable[[], T] | None = None) -> ReusePool[T]:
        pool = self._pools.get(kind)
        if pool is None:
            pool = ReusePool(factory or kind)
            self._pools[kind] = pool
        return cast(ReusePool[T], pool)

    def release(self, elements: Iterable[Any]) -> None:
        for element in elements:
            self.pool_for(type(element)).release([element])
