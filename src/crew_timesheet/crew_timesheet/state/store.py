from __future__ import annotations

from typing import Callable, Generic, TypeVar

S = TypeVar("S")
A = TypeVar("A")


class Store(Generic[S, A]):
    """Holds one state value and replaces it through a pure reducer."""

    def __init__(self, reducer: Callable[[S, A], S], initial: S):
        self._reducer = reducer
        self._state = initial

    @property
    def state(self) -> S:
        return self._state

    def dispatch(self, action: A) -> S:
        self._state = self._reducer(self._state, action)
        return self._state
