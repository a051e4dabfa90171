"""
Reflection utilities - construction, assignability and state merge.

Everything the class manager needs to know about arbitrary Python types
lives here: which constructors a class offers, whether a runtime argument
type fits a declared parameter type, and how to copy instance state from
one object to another.
"""
import inspect
import logging
import types
import typing
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Sequence

from hotclass.core.exceptions import ConstructionError, MergeError

logger = logging.getLogger(__name__)

CONSTRUCTOR_MARKER = "__hotclass_constructor__"

_NONE_TYPE = type(None)
_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)
# PEP 484 numeric promotion
_PROMOTIONS = {
    float: (int,),
    complex: (int, float),
}


@dataclass(frozen=True)
class ConstructorDescriptor:
    """One callable way of building an instance, fixed to a single arity."""
    owner: type
    name: str
    factory: Callable[..., Any]
    param_types: tuple

    @property
    def arity(self) -> int:
        return len(self.param_types)

    def accepts(self, arg_types: Sequence[type]) -> bool:
        return match_assignable_types(self.param_types, arg_types)

    def __repr__(self) -> str:
        params = ", ".join(_type_name(t) for t in self.param_types)
        if self.name == "__init__":
            return f"{self.owner.__qualname__}({params})"
        return f"{self.owner.__qualname__}.{self.name}({params})"


def _type_name(declared: Any) -> str:
    if declared is inspect.Parameter.empty:
        return "?"
    return getattr(declared, "__qualname__", None) or repr(declared)


# -------------------------------------------------------------------------
# Assignability
# -------------------------------------------------------------------------

def is_assignable(declared: Any, runtime_type: type) -> bool:
    """
    True if a value whose type is ``runtime_type`` fits a parameter
    declared as ``declared``.

    None arguments arrive here as NoneType: they fit unannotated, Any,
    object, None and Optional[...] slots only.
    """
    if declared is inspect.Parameter.empty or declared is Any or declared is object:
        return True
    if declared is None or declared is _NONE_TYPE:
        return runtime_type is _NONE_TYPE

    if isinstance(declared, typing.TypeVar):
        if declared.__bound__ is not None:
            return is_assignable(declared.__bound__, runtime_type)
        if declared.__constraints__:
            return any(is_assignable(c, runtime_type) for c in declared.__constraints__)
        return True

    origin = typing.get_origin(declared)
    if origin is typing.Union or origin is types.UnionType:
        return any(is_assignable(member, runtime_type) for member in typing.get_args(declared))
    if origin is typing.Literal:
        return any(type(value) is runtime_type for value in typing.get_args(declared))
    if origin is typing.Annotated:
        return is_assignable(typing.get_args(declared)[0], runtime_type)
    if origin is not None:
        declared = origin

    if not isinstance(declared, type):
        return False

    if runtime_type in _PROMOTIONS.get(declared, ()):
        return True
    try:
        return issubclass(runtime_type, declared)
    except TypeError:
        # Protocols without @runtime_checkable and similar
        return False


def match_assignable_types(declared_types: Sequence[Any], arg_types: Sequence[type]) -> bool:
    """True iff every declared parameter type accepts the matching argument type."""
    if len(declared_types) != len(arg_types):
        return False
    return all(is_assignable(d, a) for d, a in zip(declared_types, arg_types))


def runtime_types(args: Iterable[Any]) -> tuple:
    return tuple(type(arg) for arg in args)


def first_assignable(
    candidates: Sequence[ConstructorDescriptor],
    args: Sequence[Any],
) -> Optional[ConstructorDescriptor]:
    """First candidate, in order, whose parameters accept ``args``."""
    arg_types = runtime_types(args)
    for candidate in candidates:
        if candidate.accepts(arg_types):
            return candidate
    return None


# -------------------------------------------------------------------------
# Constructor discovery
# -------------------------------------------------------------------------

def constructor(func):
    """
    Mark a classmethod factory as an additional constructor.

    Usage:
        class Counter:
            def __init__(self, start: int = 0): ...

            @constructor
            @classmethod
            def from_text(cls, text: str): ...

    A bare function is wrapped in classmethod, so ``@constructor`` alone
    works too.
    """
    if isinstance(func, classmethod):
        setattr(func.__func__, CONSTRUCTOR_MARKER, True)
        return func
    if isinstance(func, staticmethod):
        raise TypeError("@constructor expects a classmethod factory, not a staticmethod")
    setattr(func, CONSTRUCTOR_MARKER, True)
    return classmethod(func)


def _resolve_hints(func: Callable) -> dict:
    try:
        return typing.get_type_hints(func, include_extras=True)
    except Exception as e:
        logger.debug(f"[reflect] Could not resolve annotations of {func!r}: {e}")
        return {}


def _expand_signature(
    owner: type,
    name: str,
    factory: Callable,
    signature: inspect.Signature,
    hints: dict,
) -> list[ConstructorDescriptor]:
    params = list(signature.parameters.values())
    for param in params:
        if param.kind is inspect.Parameter.KEYWORD_ONLY and param.default is param.empty:
            logger.debug(f"[reflect] {owner.__qualname__}.{name} needs keyword '{param.name}', skipped")
            return []

    positional = [p for p in params if p.kind in _POSITIONAL]
    required = sum(1 for p in positional if p.default is p.empty)
    declared = []
    for param in positional:
        annotation = hints.get(param.name, param.annotation)
        if isinstance(annotation, str):
            annotation = inspect.Parameter.empty
        declared.append(annotation)

    return [
        ConstructorDescriptor(owner, name, factory, tuple(declared[:arity]))
        for arity in range(required, len(positional) + 1)
    ]


def _init_signature(cls: type) -> Optional[inspect.Signature]:
    if cls.__init__ is object.__init__ and cls.__new__ is object.__new__:
        return inspect.Signature()
    try:
        return inspect.signature(cls)
    except (TypeError, ValueError) as e:
        logger.debug(f"[reflect] No signature for {cls.__qualname__}: {e}")
        return None


def describe_constructors(cls: type) -> list[ConstructorDescriptor]:
    """
    List every constructor of ``cls`` in declaration order.

    The class call (``__init__``) comes first, followed by classmethod
    factories marked with @constructor in class body order, base classes
    first. Inherited factories are included and bound to ``cls``; an
    override keeps the base position, and redefining the name without the
    marker removes it. A signature with defaults yields one descriptor per
    callable arity.
    """
    if not isinstance(cls, type):
        raise TypeError(f"Expected a class, got {cls!r}")

    descriptors: list[ConstructorDescriptor] = []

    signature = _init_signature(cls)
    if signature is not None:
        init = cls.__init__ if cls.__init__ is not object.__init__ else cls.__new__
        descriptors.extend(_expand_signature(cls, "__init__", cls, signature, _resolve_hints(init)))

    factories: dict[str, Callable] = {}
    for klass in reversed(cls.__mro__):
        for name, member in vars(klass).items():
            if isinstance(member, classmethod) and getattr(member.__func__, CONSTRUCTOR_MARKER, False):
                factories[name] = member.__func__
            else:
                factories.pop(name, None)

    for name, func in factories.items():
        bound = getattr(cls, name)
        try:
            signature = inspect.signature(bound)
        except (TypeError, ValueError) as e:
            logger.debug(f"[reflect] No signature for {cls.__qualname__}.{name}: {e}")
            continue
        descriptors.extend(_expand_signature(cls, name, bound, signature, _resolve_hints(func)))

    return descriptors


# -------------------------------------------------------------------------
# Construction
# -------------------------------------------------------------------------

def invoke_constructor(descriptor: ConstructorDescriptor, args: Sequence[Any]) -> Any:
    """Call one constructor, wrapping any failure in ConstructionError."""
    try:
        return descriptor.factory(*args)
    except Exception as e:
        raise ConstructionError(
            descriptor.owner.__qualname__,
            f"{descriptor!r} raised {type(e).__name__}",
            original_error=e,
        ) from e


def create_instance(cls: type, *args: Any) -> Any:
    """
    Build an instance of ``cls`` with the first constructor accepting ``args``.

    Raises:
        ConstructionError: no constructor matches, or the chosen one fails
    """
    candidates = [d for d in describe_constructors(cls) if d.arity == len(args)]
    descriptor = first_assignable(candidates, args)
    if descriptor is None:
        raise ConstructionError(
            cls.__qualname__,
            f"no constructor accepts {[t.__name__ for t in runtime_types(args)]}",
        )
    return invoke_constructor(descriptor, args)


# -------------------------------------------------------------------------
# State merge
# -------------------------------------------------------------------------

def are_related(a: type, b: type) -> bool:
    """Same class, subclass either way, or the same class reloaded."""
    if issubclass(a, b) or issubclass(b, a):
        return True
    return (a.__module__, a.__qualname__) == (b.__module__, b.__qualname__)


def _slot_names(cls: type) -> list[str]:
    names = []
    for klass in cls.__mro__:
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if s not in ("__dict__", "__weakref__"))
    return names


def merge_object(source: Any, destination: Any) -> None:
    """
    Copy instance-level state from ``source`` into ``destination``.

    Both ``__dict__`` entries and ``__slots__`` values are copied
    (shallow). Fields only the destination has are left untouched.

    Raises:
        MergeError: types are unrelated or a field cannot be written
    """
    src_type, dst_type = type(source), type(destination)
    if not are_related(src_type, dst_type):
        raise MergeError(
            f"Cannot merge {src_type.__qualname__} into {dst_type.__qualname__}",
            details={"source": src_type.__qualname__, "destination": dst_type.__qualname__},
        )

    try:
        for name in _slot_names(src_type):
            if hasattr(source, name):
                setattr(destination, name, getattr(source, name))
        source_dict = getattr(source, "__dict__", None)
        if source_dict:
            for name, value in source_dict.items():
                setattr(destination, name, value)
    except (AttributeError, TypeError) as e:
        raise MergeError(
            f"Cannot write state into {dst_type.__qualname__}: {e}",
            details={"destination": dst_type.__qualname__},
        ) from e
