from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator
from typing import final
from typing import Generic
from typing import TypeVar

T = TypeVar("T")
D = TypeVar("D")

################################################################################


@final
class empty_t:
    pass


empty = empty_t()


################################################################################


@dataclass
class Cell(Generic[T]):
    _value: T | empty_t = empty

    @contextmanager
    def bind(self, val: T) -> Iterator[T]:
        old = self._value
        self._value = val
        try:
            yield val
        finally:
            self._value = old

    def get(self, default: D = None) -> T | D:
        if not isinstance(self._value, empty_t):
            return self._value
        return default

    def set(self, val: T | empty_t = empty):
        self._value = val

    @property
    def value(self) -> T:
        assert not isinstance(self._value, empty_t)
        return self._value

    @value.setter
    def value(self, val: T):
        self.set(val)

    def __bool__(self) -> bool:
        return bool(self.get(False))


################################################################################


def index_by_id(x: T, xs: list[T] | tuple[T, ...]) -> int:
    for i, y in enumerate(xs):
        if y is x:
            return i
    raise ValueError(f"{x!r} is not in list")
