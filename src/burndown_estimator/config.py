# Resampling
DEFAULT_RESAMPLE = "year"

# Aliases accepted for resample modes (pandas-style offset names)
RESAMPLE_ALIASES = {
    "a": "year",
    "y": "year",
    "m": "month",
    "w": "week",
    "d": "day",
}

# Next finer mode tried when a resampling is too loose
RESAMPLE_FALLBACKS = {
    "year": "month",
    "month": "day",
    "week": "day",
}

# Time units
SECONDS_PER_DAY = 86400
DEFAULT_TICK_SIZE = float(SECONDS_PER_DAY)

# Raw mode label count above which resampling is suggested
MAX_RAW_LABELS = 18

# Label formats
DATE_LABEL_FORMAT = "%Y-%m-%d"
MONTH_LABEL_FORMAT = "%Y %B"
RAW_LABEL_TEMPLATE = "{start} - {end}"

# Survival report
SURVIVAL_REPORT_HEADER = "           Ratio of survived lines"
SURVIVAL_LINE_TEMPLATE = "{days} days\t{ratio:.6f}"

# Logging
LOGGER_NAME = "burndown_estimator"
