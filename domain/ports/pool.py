from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class ReusableElement(Protocol):
    def prepare_for_reuse(self) -> None: ...


class ElementPool(Protocol[T]):
    def acquire(self) -> T: ...

    def release(self, elements: Iterable[T]) -> None: ...
