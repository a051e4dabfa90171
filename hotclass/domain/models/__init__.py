from .sweep_report import SwapFailure, UpdateReport

__all__ = ["SwapFailure", "UpdateReport"]
