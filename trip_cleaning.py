from dataclasses import dataclass
from typing import Optional
import pandas as pd

import trip_schema as S
from trip_loader import parse_timestamps

# Outlier fence for ride duration using IQR
IQR_FACTOR = 1.5


@dataclass
class OutlierBounds:
    q1: float
    q3: float
    iqr: float
    lower: float
    upper: float


@dataclass
class CleaningReport:
    trips: pd.DataFrame
    missing_counts: pd.Series
    rows_dropped: int
    duplicate_count: int
    unparsed_rows: int
    bounds: Optional[OutlierBounds]
    outliers: pd.DataFrame


def drop_missing(df):
    """Returns (table without any row holding a null, per-column null counts)."""
    missing_counts = df.isna().sum()
    return df.dropna(how="any").copy(), missing_counts


def count_duplicates(df):
    # rows repeating an earlier row; a pair of identical rows counts once
    return int(df.duplicated(keep="first").sum())


def add_duration(df, errors="raise"):
    out = df.copy()
    out[S.STARTED_AT] = parse_timestamps(out[S.STARTED_AT], errors=errors, column=S.STARTED_AT)
    out[S.ENDED_AT] = parse_timestamps(out[S.ENDED_AT], errors=errors, column=S.ENDED_AT)
    # no clamping: ended_at before started_at gives a negative duration
    out[S.DURATION] = (out[S.ENDED_AT] - out[S.STARTED_AT]).dt.total_seconds() / 60.0
    return out


def outlier_bounds(durations, factor=IQR_FACTOR):
    durations = pd.Series(durations, dtype="float64").dropna()
    if durations.empty:
        raise ValueError("cannot compute outlier bounds of an empty duration column")

    q1, q3 = durations.quantile([0.25, 0.75])
    iqr = q3 - q1
    return OutlierBounds(
        q1=float(q1),
        q3=float(q3),
        iqr=float(iqr),
        lower=float(q1 - factor * iqr),
        upper=float(q3 + factor * iqr),
    )


def find_outliers(df, bounds=None, factor=IQR_FACTOR):
    if bounds is None:
        bounds = outlier_bounds(df[S.DURATION], factor=factor)
    mask = ~df[S.DURATION].between(bounds.lower, bounds.upper)
    return df[mask]


def clean_trips(df, on_parse_error="raise", remove_outliers=False, factor=IQR_FACTOR):
    """
    Null-drop, duplicate count, duration and outlier detection, in that order.

    on_parse_error decides what happens to rows whose timestamps do not parse:
    "raise" stops with ParseError, "drop" removes them and reports the count.
    Outliers are only reported unless remove_outliers is set. An empty table
    after dropping skips outlier detection and reports bounds=None.
    """
    if on_parse_error not in ("raise", "drop"):
        raise ValueError("on_parse_error must be 'raise' or 'drop'")

    print("🧹 Dropping rows with missing values…")
    trips, missing_counts = drop_missing(df)
    rows_dropped = len(df) - len(trips)
    for col, n in missing_counts[missing_counts > 0].items():
        print(f"    {col}: {n} missing")
    print(f"    Dropped {rows_dropped} rows, {len(trips)} remain")

    duplicate_count = count_duplicates(trips)
    print(f"    Duplicate rows: {duplicate_count}")

    print("⏱️ Computing ride durations…")
    if on_parse_error == "raise":
        trips = add_duration(trips)
        unparsed_rows = 0
    else:
        trips = add_duration(trips, errors="coerce")
        unparsed = trips[S.DURATION].isna()
        unparsed_rows = int(unparsed.sum())
        trips = trips[~unparsed]
        if unparsed_rows:
            print(f"    Dropped {unparsed_rows} rows with unparseable timestamps")

    if trips.empty:
        bounds = None
        outliers = trips.iloc[0:0]
        print("    No rows left for outlier detection")
    else:
        bounds = outlier_bounds(trips[S.DURATION], factor=factor)
        outliers = find_outliers(trips, bounds)
        print(
            f"    Duration IQR bounds: [{bounds.lower:.2f}, {bounds.upper:.2f}] min, "
            f"{len(outliers)} outliers"
        )
    if remove_outliers:
        trips = trips.drop(index=outliers.index)
        print(f"    Removed outliers, {len(trips)} remain")

    return CleaningReport(
        trips=trips,
        missing_counts=missing_counts,
        rows_dropped=rows_dropped,
        duplicate_count=duplicate_count,
        unparsed_rows=unparsed_rows,
        bounds=bounds,
        outliers=outliers,
    )
