"""Exports de todos los puertos del dominio."""

from .reload_port import ReloadableProxy, StateTransfer

__all__ = [
    "ReloadableProxy",
    "StateTransfer",
]
