import trip_schema as S

# Summary tables comparing member and casual riders. Every function reads the
# cleaned + featured trip table and returns a new DataFrame.


def _rides_and_duration(df, keys):
    return (
        df.groupby(keys, observed=True, sort=True)
          .agg(total_rides=(S.DURATION, "size"),
               avg_duration_min=(S.DURATION, "mean"))
          .reset_index()
    )


def rides_by_rider(df):
    return _rides_and_duration(df, [S.MEMBER_CASUAL])


def rides_by_rider_and_hour(df):
    return _rides_and_duration(df, [S.MEMBER_CASUAL, S.HOUR])


def rides_by_rider_and_day(df):
    return _rides_and_duration(df, [S.MEMBER_CASUAL, S.DAY_OF_WEEK])


def rides_by_rider_and_season(df):
    return _rides_and_duration(df, [S.MEMBER_CASUAL, S.SEASON])


def bike_type_share_by_rider(df):
    """Ride counts per bike type, with percentages that sum to 100 within each rider category."""
    counts = (
        df.groupby([S.MEMBER_CASUAL, S.RIDEABLE_TYPE], observed=True)
          .size()
          .rename("total_rides")
          .reset_index()
    )
    group_totals = counts.groupby(S.MEMBER_CASUAL)["total_rides"].transform("sum")
    counts["percentage"] = counts["total_rides"] / group_totals * 100.0
    return counts


def describe_durations(df):
    return df.groupby(S.MEMBER_CASUAL)[S.DURATION].describe().reset_index()


def build_summaries(df):
    return {
        "rides_by_rider": rides_by_rider(df),
        "rides_by_rider_hour": rides_by_rider_and_hour(df),
        "rides_by_rider_day": rides_by_rider_and_day(df),
        "rides_by_rider_season": rides_by_rider_and_season(df),
        "bike_type_share": bike_type_share_by_rider(df),
    }
