"""
Sample implementation and proxy types used across the test suite.
"""
from typing import Optional

from hotclass import constructor


class Counter:
    """Counter(), Counter(int)."""

    def __init__(self, start: int = 0):
        self.value = start
        self.count = 0

    def increment(self) -> int:
        self.count += 1
        self.value += 1
        return self.value


class FastCounter:
    """Steps by two; takes its state over explicitly."""

    def __init__(self, start: int):
        self.value = start
        self.count = 0
        self.step = 2

    def increment(self) -> int:
        self.count += 1
        self.value += self.step
        return self.value

    def transfer_state(self, previous):
        self.value = previous.value
        self.count = previous.count


class Fragile:
    """Refuses to take over negative state."""

    def __init__(self, start: int):
        self.value = start

    def transfer_state(self, previous):
        if previous.value < 0:
            raise ValueError("negative state")
        self.value = previous.value


class Shape:
    """Overloads: Shape(int), Shape.from_name(str), Shape.from_pair(int, int)."""

    def __init__(self, size: int):
        self.width = size
        self.height = size
        self.name = None

    @constructor
    @classmethod
    def from_name(cls, name: str):
        shape = cls(1)
        shape.name = name
        return shape

    @constructor
    def from_pair(cls, width: int, height: int):
        shape = cls(width)
        shape.height = height
        return shape


class Labelled:
    """Accepts None for its label only."""

    def __init__(self, label: Optional[str], size: int):
        self.label = label
        self.size = size


class Exploding:
    def __init__(self, value: int):
        raise RuntimeError(f"cannot build from {value}")


class PlainProxy:
    """Zero-arg proxy: built first, target installed afterwards."""

    def __init__(self):
        self.target = None

    def get_reload_target(self):
        return self.target

    def set_reload_target(self, target):
        self.target = target


class GetterOnlyProxy:
    def __init__(self, target=None):
        self.target = target

    def get_reload_target(self):
        return self.target
