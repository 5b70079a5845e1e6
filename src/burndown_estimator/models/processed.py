from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel


class ProcessingStage(str, Enum):
    VALIDATE = "validate"
    INTERPOLATE = "interpolate"
    SURVIVAL = "survival"
    RESAMPLE = "resample"
    LABEL = "label"


class ErrorKind(str, Enum):
    EMPTY_MATRIX = "empty_matrix"
    INVALID_PARAMETER = "invalid_parameter"
    TOO_LOOSE = "too_loose"


class ProcessingError(BaseModel):
    stage: ProcessingStage
    error_type: ErrorKind
    recoverable: bool
    message: str
    details: dict[str, Any] = {}


class ResampleMode(str, Enum):
    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    NO = "no"
    RAW = "raw"

    @property
    def is_raw(self) -> bool:
        return self in (ResampleMode.NO, ResampleMode.RAW)


class ProcessedBurndown(BaseModel):
    name: str
    matrix: list[list[float]]
    date_range: list[datetime]
    labels: list[str]
    granularity: int
    sampling: int
    resample_mode: ResampleMode
    warnings: list[str] = []
    survival_report: list[str] = []
