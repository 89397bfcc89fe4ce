import os
import pandas as pd

import trip_schema as S

# Default input: one month of Divvy trips
TRIP_CSV = os.path.join("data", "202301-divvy-tripdata.csv")


def load_trips(path=TRIP_CSV):
    """
    Load a Divvy trip CSV into a DataFrame.

    Row order is preserved and started_at / ended_at stay as text until
    parse_timestamps() converts them. Raises SchemaError when any of the
    required columns is absent; unreadable paths raise the OSError from
    pandas.
    """
    df = pd.read_csv(path, dtype={S.STARTED_AT: str, S.ENDED_AT: str})
    df.columns = df.columns.str.strip()

    missing = [c for c in S.REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise S.SchemaError(missing)

    return df


def parse_timestamps(values, errors="raise", column=None):
    """
    Convert timestamp text in TIME_FMT to datetime64.

    errors="raise" fails with ParseError on the first column holding text that
    does not match; errors="coerce" turns such text into NaT.
    """
    if errors not in ("raise", "coerce"):
        raise ValueError("errors must be 'raise' or 'coerce'")
    if pd.api.types.is_datetime64_any_dtype(values):
        return values

    parsed = pd.to_datetime(values, format=S.TIME_FMT, errors="coerce")
    bad = parsed.isna() & values.notna()
    if errors == "raise" and bad.any():
        raise S.ParseError(
            column or values.name,
            int(bad.sum()),
            example=values[bad].iloc[0],
        )
    return parsed
