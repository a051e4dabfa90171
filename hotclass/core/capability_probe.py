"""
Capability Probe - decides once whether a proxy type can take part in hot-swap.

A failed probe is not an error: the manager simply runs without proxies.
"""
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from hotclass.core.exceptions import ConstructionError
from hotclass.domain.ports import ReloadableProxy

logger = logging.getLogger(__name__)

_SENTINEL = object()


@dataclass(frozen=True)
class ProxyCapability:
    """Hooks and construction path of a proxy type that passed the probe."""
    proxy_type: type
    get_target: Callable[[Any], Any]
    set_target: Callable[[Any, Any], None]
    wraps_on_construction: bool  # True: Proxy(target); False: Proxy() + set_target

    def wrap(self, target: Any) -> Any:
        """Build a new proxy around ``target``."""
        try:
            if self.wraps_on_construction:
                return self.proxy_type(target)
            proxy = self.proxy_type()
            self.set_target(proxy, target)
            return proxy
        except Exception as e:
            raise ConstructionError(
                self.proxy_type.__qualname__,
                f"proxy construction raised {type(e).__name__}",
                original_error=e,
            ) from e

    def read(self, proxy: Any) -> Any:
        return self.get_target(proxy)

    def write(self, proxy: Any, target: Any) -> None:
        self.set_target(proxy, target)


def _binds(func: Callable, *args: Any) -> bool:
    if isinstance(func, type) and func.__init__ is object.__init__ and func.__new__ is object.__new__:
        return not args
    try:
        inspect.signature(func).bind(*args)
    except (TypeError, ValueError):
        return False
    return True


def probe_proxy_type(proxy_type: Any) -> Optional[ProxyCapability]:
    """
    Check ``proxy_type`` against the reload contract.

    Returns:
        ProxyCapability on success, None when the type cannot be used
    """
    if not isinstance(proxy_type, type):
        logger.info(f"[Probe] {proxy_type!r} is not a class, proxying disabled")
        return None

    name = proxy_type.__qualname__
    if not issubclass(proxy_type, ReloadableProxy):
        logger.info(f"[Probe] {name} lacks get_reload_target/set_reload_target, proxying disabled")
        return None

    get_target = inspect.getattr_static(proxy_type, "get_reload_target")
    set_target = inspect.getattr_static(proxy_type, "set_reload_target")
    if not (inspect.isfunction(get_target) and inspect.isfunction(set_target)):
        logger.info(f"[Probe] {name} reload hooks must be plain methods, proxying disabled")
        return None
    setter_takes_one = (
        _binds(set_target, _SENTINEL, _SENTINEL)
        and not _binds(set_target, _SENTINEL, _SENTINEL, _SENTINEL)
    )
    if not _binds(get_target, _SENTINEL) or not setter_takes_one:
        logger.info(f"[Probe] {name} reload hooks have unexpected signatures, proxying disabled")
        return None

    if not proxy_type.__weakrefoffset__:
        logger.info(f"[Probe] {name} instances are not weak-referenceable, proxying disabled")
        return None

    if _binds(proxy_type, _SENTINEL):
        wraps_on_construction = True
    elif _binds(proxy_type):
        wraps_on_construction = False
    else:
        logger.info(f"[Probe] {name} cannot be constructed with zero or one argument, proxying disabled")
        return None

    capability = ProxyCapability(
        proxy_type=proxy_type,
        get_target=get_target,
        set_target=set_target,
        wraps_on_construction=wraps_on_construction,
    )
    logger.info(
        f"[Probe] {name} accepted "
        f"({'Proxy(target)' if wraps_on_construction else 'Proxy() + set_reload_target'})"
    )
    return capability
