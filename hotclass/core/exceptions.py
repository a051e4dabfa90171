"""
Hotclass Custom Exceptions.

Defines the exception hierarchy for the class manager and its
introspection facility. Routine "not configured" states never surface
these to callers of ClassManager; they are raised by the lower layers
and absorbed (or reported per proxy) by the manager.
"""


class HotclassError(Exception):
    """Base exception for all hotclass-specific errors."""
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class ConstructionError(HotclassError):
    """Raised when an object of a type cannot be built from the given arguments."""
    def __init__(self, type_name: str, message: str, original_error: Exception | None = None):
        details = {"type": type_name}
        if original_error:
            details["original_error"] = str(original_error)
        super().__init__(f"{type_name}: {message}", code="CONSTRUCTION_ERROR", details=details)


class MergeError(HotclassError):
    """Raised when state cannot be carried from one backing object to another."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, code="MERGE_ERROR", details=details)
