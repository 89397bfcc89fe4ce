import matplotlib
matplotlib.use("Agg")

import pandas as pd
import pytest

import trip_schema as S

SAMPLE_ROWS = [
    # ride_id, rideable_type, started_at, ended_at, member_casual
    ("A1", "classic_bike",  "2023-01-02 08:00:00", "2023-01-02 08:10:00", "member"),
    ("A2", "electric_bike", "2023-01-02 17:30:00", "2023-01-02 17:45:30", "member"),
    ("A3", "classic_bike",  "2023-01-07 12:00:00", "2023-01-07 12:40:00", "casual"),
    ("A4", "electric_bike", "2023-01-08 14:00:00", "2023-01-08 14:20:00", "casual"),
    ("A5", "docked_bike",   "2023-01-08 15:00:00", "2023-01-08 16:30:00", "casual"),
    ("A6", "classic_bike",  "2023-01-03 08:15:00", "2023-01-03 08:27:00", "member"),
]


def make_trips(rows):
    return pd.DataFrame(rows, columns=S.REQUIRED_COLUMNS)


@pytest.fixture
def sample_trips():
    return make_trips(SAMPLE_ROWS)


@pytest.fixture
def sample_csv(tmp_path, sample_trips):
    path = tmp_path / "202301-divvy-tripdata.csv"
    sample_trips.to_csv(path, index=False)
    return path
