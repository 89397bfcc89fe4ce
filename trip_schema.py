# Column names and label tables for Divvy trip data

RIDE_ID       = "ride_id"
RIDEABLE_TYPE = "rideable_type"
STARTED_AT    = "started_at"
ENDED_AT      = "ended_at"
MEMBER_CASUAL = "member_casual"

REQUIRED_COLUMNS = [RIDE_ID, RIDEABLE_TYPE, STARTED_AT, ENDED_AT, MEMBER_CASUAL]

# derived columns
DURATION      = "duration_min"
DAY_OF_WEEK   = "day_of_week"
END_DAY       = "end_day_of_week"
HOUR          = "hour"
MONTH         = "month"
SEASON        = "season"

TIME_FMT = "%Y-%m-%d %H:%M:%S"

RIDER_TYPES = ["member", "casual"]

DAY_NAMES = [
    "Monday", "Tuesday", "Wednesday", "Thursday",
    "Friday", "Saturday", "Sunday",
]

SEASONS = {
    "Winter": (12, 1, 2),
    "Spring": (3, 4, 5),
    "Summer": (6, 7, 8),
    "Fall":   (9, 10, 11),
}
SEASON_ORDER = list(SEASONS)
UNKNOWN_SEASON = "Unknown"


class SchemaError(ValueError):
    """Raised when a trip table is missing required columns."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Trips CSV missing required columns: {', '.join(self.missing)}")


class ParseError(ValueError):
    """Raised when timestamp text does not match TIME_FMT."""

    def __init__(self, column, n_bad, example=None):
        self.column = column
        self.n_bad = n_bad
        self.example = example
        msg = f"{n_bad} value(s) in '{column}' do not match {TIME_FMT}"
        if example is not None:
            msg += f" (e.g. {example!r})"
        super().__init__(msg)
