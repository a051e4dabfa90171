"""
ReloadProxy - ready-made forwarding proxy.

Attribute access, calls and the common container protocols are forwarded
to whatever backing object is currently installed, so holders of the proxy
see the new implementation as soon as update() reaches it.
"""
from typing import Any

_TARGET = "_hotclass_target"


class ReloadProxy:
    """
    Example:
        >>> manager = ClassManager(ReloadProxy)
        >>> manager.update(Counter)
        >>> counter = manager.create_instance(5)
        >>> counter.increment()      # forwarded to Counter
        >>> manager.update(FastCounter)
        >>> counter.increment()      # forwarded to FastCounter
    """

    __slots__ = (_TARGET, "__weakref__")

    def __init__(self, target: Any = None):
        object.__setattr__(self, _TARGET, target)

    def get_reload_target(self) -> Any:
        return object.__getattribute__(self, _TARGET)

    def set_reload_target(self, target: Any) -> None:
        object.__setattr__(self, _TARGET, target)

    def __getattr__(self, name: str) -> Any:
        return getattr(object.__getattribute__(self, _TARGET), name)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(object.__getattribute__(self, _TARGET), name, value)

    def __delattr__(self, name: str) -> None:
        delattr(object.__getattribute__(self, _TARGET), name)

    def __repr__(self) -> str:
        return f"<ReloadProxy -> {object.__getattribute__(self, _TARGET)!r}>"

    def __str__(self) -> str:
        return str(object.__getattribute__(self, _TARGET))

    def __call__(self, *args, **kwargs):
        return object.__getattribute__(self, _TARGET)(*args, **kwargs)

    def __bool__(self) -> bool:
        return bool(object.__getattribute__(self, _TARGET))

    def __len__(self) -> int:
        return len(object.__getattribute__(self, _TARGET))

    def __iter__(self):
        return iter(object.__getattribute__(self, _TARGET))

    def __getitem__(self, key):
        return object.__getattribute__(self, _TARGET)[key]

    def __contains__(self, item) -> bool:
        return item in object.__getattribute__(self, _TARGET)
