import numpy as np
import pandas as pd

import trip_schema as S
from trip_loader import parse_timestamps


def season_for_month(month):
    for season, months in S.SEASONS.items():
        if month in months:
            return season
    return S.UNKNOWN_SEASON


def day_name(weekday):
    # weekday index as in datetime.weekday(): 0=Monday
    return S.DAY_NAMES[int(weekday)]


def _day_names(timestamps):
    weekday = timestamps.dt.dayofweek
    names = np.array(S.DAY_NAMES, dtype=object)[weekday.fillna(0).astype(int).to_numpy()]
    names[weekday.isna().to_numpy()] = None
    return pd.Categorical(names, categories=S.DAY_NAMES, ordered=True)


def _seasons(months):
    conditions = [months.isin(m).to_numpy() for m in S.SEASONS.values()]
    labels = np.select(conditions, S.SEASON_ORDER, default=S.UNKNOWN_SEASON).astype(object)
    labels[months.isna().to_numpy()] = None
    return pd.Categorical(labels, categories=S.SEASON_ORDER + [S.UNKNOWN_SEASON], ordered=True)


def add_time_features(df, errors="coerce"):
    """
    Adds day_of_week, end_day_of_week, hour, month and season to a copy of df.

    Text timestamps are parsed first; with the default errors="coerce" a value
    that does not match TIME_FMT becomes NaT and its derived fields are null.
    """
    out = df.copy()
    out[S.STARTED_AT] = parse_timestamps(out[S.STARTED_AT], errors=errors, column=S.STARTED_AT)
    out[S.ENDED_AT] = parse_timestamps(out[S.ENDED_AT], errors=errors, column=S.ENDED_AT)

    start = out[S.STARTED_AT]
    out[S.DAY_OF_WEEK] = _day_names(start)
    out[S.END_DAY] = _day_names(out[S.ENDED_AT])
    out[S.HOUR] = start.dt.hour.astype("Int64")
    out[S.MONTH] = start.dt.month.astype("Int64")
    out[S.SEASON] = _seasons(start.dt.month)
    return out
