"""
Puerto (Interface) para proxies recargables.

Any type that wants its instances to survive an implementation swap
exposes these two hooks. The manager checks the contract structurally,
so proxies do not need to inherit from anything.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ReloadableProxy(Protocol):
    """
    Stable handle whose backing object can be replaced in place.

    Implementaciones: ReloadProxy (hotclass.core.proxy), or any user type
    with the same two methods.
    """

    def get_reload_target(self) -> Any:
        """Return the backing object currently fulfilling this proxy."""
        ...

    def set_reload_target(self, target: Any) -> None:
        """Install a new backing object."""
        ...


@runtime_checkable
class StateTransfer(Protocol):
    """
    Optional hook on implementation types.

    When a freshly built backing object provides it, the sweep calls
    ``new.transfer_state(old)`` instead of the generic field merge.
    """

    def transfer_state(self, previous: Any) -> None:
        ...
