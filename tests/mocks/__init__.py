"""Mock module initialization."""
from tests.mocks.sample_types import (
    Counter,
    Exploding,
    FastCounter,
    Fragile,
    GetterOnlyProxy,
    Labelled,
    PlainProxy,
    Shape,
)

__all__ = [
    'Counter',
    'Exploding',
    'FastCounter',
    'Fragile',
    'GetterOnlyProxy',
    'Labelled',
    'PlainProxy',
    'Shape',
]
