"""
Constructor Catalogue - constructors of one implementation type grouped by arity.

Built fresh for every update() and never mutated afterwards.
"""
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

from hotclass.utils.reflect import ConstructorDescriptor, describe_constructors, first_assignable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ConstructorCatalogue:
    """Arity -> constructors of ``implement_class`` in declaration order."""
    implement_class: type
    groups: Mapping[int, tuple[ConstructorDescriptor, ...]]

    def __eq__(self, other):
        if not isinstance(other, ConstructorCatalogue):
            return NotImplemented
        return self.implement_class is other.implement_class and dict(self.groups) == dict(other.groups)

    __hash__ = None

    def arities(self) -> list[int]:
        return list(self.groups)

    def group(self, arity: int) -> tuple[ConstructorDescriptor, ...]:
        return self.groups.get(arity, ())

    def match(self, args: Sequence[Any]) -> Optional[ConstructorDescriptor]:
        """
        Resolve the constructor for ``args``.

        Zero arguments return the first zero-arg entry without any type
        check. Otherwise the group for len(args) is scanned in order and
        the first constructor accepting every argument wins; the rest of
        the group is not looked at.
        """
        candidates = self.groups.get(len(args))
        if not candidates:
            return None
        if not args:
            return candidates[0]
        return first_assignable(candidates, args)

    def describe(self) -> dict[int, list[str]]:
        return {arity: [repr(d) for d in group] for arity, group in self.groups.items()}


def collect_constructors(cls: type) -> ConstructorCatalogue:
    """Group the constructors of ``cls`` by arity, keeping declaration order."""
    grouped: dict[int, list[ConstructorDescriptor]] = {}
    for descriptor in describe_constructors(cls):
        grouped.setdefault(descriptor.arity, []).append(descriptor)

    catalogue = ConstructorCatalogue(
        implement_class=cls,
        groups=MappingProxyType({arity: tuple(group) for arity, group in grouped.items()}),
    )
    logger.debug(f"[Catalogue] collect_constructors({cls.__qualname__}) -> {catalogue.describe()}")
    return catalogue
