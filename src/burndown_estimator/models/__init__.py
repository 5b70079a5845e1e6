from .burndown import BurndownHeader, BurndownInput, BurndownParameters
from .processed import (
    ErrorKind,
    ProcessedBurndown,
    ProcessingError,
    ProcessingStage,
    ResampleMode,
)
from .state import BurndownConfig

__all__ = [
    "BurndownConfig",
    "BurndownHeader",
    "BurndownInput",
    "BurndownParameters",
    "ErrorKind",
    "ProcessedBurndown",
    "ProcessingError",
    "ProcessingStage",
    "ResampleMode",
]
