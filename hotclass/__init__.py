"""
hotclass - live replacement of the implementation behind stable proxies.
"""
from hotclass.core.config import HotclassSettings, configure_logging, settings
from hotclass.core.exceptions import ConstructionError, HotclassError, MergeError
from hotclass.utils.reflect import ConstructorDescriptor, constructor, merge_object
from hotclass.core.catalogue import ConstructorCatalogue, collect_constructors
from hotclass.core.capability_probe import ProxyCapability, probe_proxy_type
from hotclass.core.instance_registry import InstanceRegistry
from hotclass.core.proxy import ReloadProxy
from hotclass.core.class_manager import ClassManager
from hotclass.domain.models import SwapFailure, UpdateReport
from hotclass.domain.ports import ReloadableProxy, StateTransfer

__version__ = "0.1.0"

__all__ = [
    "ClassManager",
    "ConstructionError",
    "ConstructorCatalogue",
    "ConstructorDescriptor",
    "HotclassError",
    "HotclassSettings",
    "InstanceRegistry",
    "MergeError",
    "ProxyCapability",
    "ReloadProxy",
    "ReloadableProxy",
    "StateTransfer",
    "SwapFailure",
    "UpdateReport",
    "collect_constructors",
    "configure_logging",
    "constructor",
    "merge_object",
    "probe_proxy_type",
    "settings",
]
