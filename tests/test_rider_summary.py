import pytest

import trip_schema as S
from trip_cleaning import clean_trips
from trip_features import add_time_features
from rider_summary import (
    bike_type_share_by_rider,
    build_summaries,
    describe_durations,
    rides_by_rider,
    rides_by_rider_and_day,
    rides_by_rider_and_hour,
    rides_by_rider_and_season,
)


@pytest.fixture
def trips(sample_trips):
    return add_time_features(clean_trips(sample_trips).trips)


def test_rides_by_rider(trips):
    table = rides_by_rider(trips).set_index(S.MEMBER_CASUAL)

    assert table["total_rides"].sum() == len(trips)
    assert table.loc["casual", "total_rides"] == 3
    assert table.loc["casual", "avg_duration_min"] == pytest.approx(50.0)
    assert table.loc["member", "avg_duration_min"] == pytest.approx(12.5)


def test_rides_by_rider_and_hour(trips):
    table = rides_by_rider_and_hour(trips)
    row = table[(table[S.MEMBER_CASUAL] == "member") & (table[S.HOUR] == 8)].iloc[0]

    assert row["total_rides"] == 2
    assert row["avg_duration_min"] == pytest.approx(11.0)
    assert table["total_rides"].sum() == len(trips)
    # only observed combinations
    assert len(table) == 5


def test_rides_by_rider_and_day_is_ordered(trips):
    table = rides_by_rider_and_day(trips)
    member = table[table[S.MEMBER_CASUAL] == "member"]
    casual = table[table[S.MEMBER_CASUAL] == "casual"]

    assert member[S.DAY_OF_WEEK].astype(str).tolist() == ["Monday", "Tuesday"]
    assert member["total_rides"].tolist() == [2, 1]
    assert casual[S.DAY_OF_WEEK].astype(str).tolist() == ["Saturday", "Sunday"]
    assert casual["avg_duration_min"].tolist() == pytest.approx([40.0, 55.0])


def test_rides_by_rider_and_season(trips):
    table = rides_by_rider_and_season(trips)

    assert table[S.SEASON].astype(str).unique().tolist() == ["Winter"]
    assert table["total_rides"].tolist() == [3, 3]


def test_bike_type_share_sums_to_100_within_rider(trips):
    table = bike_type_share_by_rider(trips)

    for _, group in table.groupby(S.MEMBER_CASUAL):
        assert group["percentage"].sum() == pytest.approx(100.0)

    member = table[table[S.MEMBER_CASUAL] == "member"].set_index(S.RIDEABLE_TYPE)
    assert member.loc["classic_bike", "total_rides"] == 2
    assert member.loc["classic_bike", "percentage"] == pytest.approx(200 / 3)


def test_describe_durations(trips):
    stats = describe_durations(trips).set_index(S.MEMBER_CASUAL)

    assert stats.loc["casual", "max"] == 90.0
    assert stats.loc["member", "min"] == 10.0
    assert stats.loc["member", "50%"] == 12.0


def test_build_summaries_has_every_table(trips):
    tables = build_summaries(trips)

    assert set(tables) == {
        "rides_by_rider",
        "rides_by_rider_hour",
        "rides_by_rider_day",
        "rides_by_rider_season",
        "bike_type_share",
    }
    for name in ("rides_by_rider_hour", "rides_by_rider_day", "rides_by_rider_season"):
        assert tables[name]["total_rides"].sum() == len(trips)
