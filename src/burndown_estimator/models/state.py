from datetime import datetime

from pydantic import BaseModel

from burndown_estimator import config


class BurndownConfig(BaseModel):
    resample: str = config.DEFAULT_RESAMPLE
    report_survival: bool = True

    # Optional window applied to the output date axis
    start_date: datetime | None = None
    end_date: datetime | None = None
