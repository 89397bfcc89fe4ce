import os

import pandas as pd

import trip_schema as S
import generate_bike_sharing_report as latex
from dataset_summary import summarize_dataset
from heatmap_analysis import hourly_weekday_pivot
from member_casual_report import run_report, table_titles
from trip_cleaning import clean_trips


def test_run_report_writes_tables_charts_and_html(sample_csv, tmp_path, capsys):
    out_dir = tmp_path / "output"

    result = run_report(sample_csv, output_dir=str(out_dir))

    printed = capsys.readouterr().out
    assert "Duplicate rows: 0" in printed
    assert "avg_duration_min" in printed
    # duration description by rider type
    assert "50%" in printed and "std" in printed

    assert result["cleaning"].duplicate_count == 0
    assert len(result["trips"]) == 6
    for path in result["csv_paths"] + result["images"]:
        assert os.path.exists(path)
    assert {"rides_by_rider.csv", "bike_type_share.csv", "heatmap_hourly_dayofweek.png"} <= set(os.listdir(out_dir))

    by_rider = pd.read_csv(out_dir / "rides_by_rider.csv")
    assert by_rider["total_rides"].sum() == 6

    outliers = pd.read_csv(out_dir / "duration_outliers.csv")
    assert outliers[S.RIDE_ID].tolist() == ["A5"]

    html = open(result["html"], encoding="utf-8").read()
    assert "Bike Type Share by Rider Type" in html
    assert '<img src="rides_by_hour.png"' in html
    assert "Duration Outliers (not removed)" in html


def test_dataset_summary_metrics(sample_trips):
    trips = clean_trips(sample_trips).trips
    summary = summarize_dataset(trips, source="data/202301-divvy-tripdata.csv").set_index("metric")["value"]

    assert summary["source_file"] == "202301-divvy-tripdata.csv"
    assert summary["start_date"] == "2023-01-02"
    assert summary["end_date"] == "2023-01-08"
    assert summary["days_covered"] == 4
    assert summary["total_rides"] == 6
    assert summary["avg_rides_per_day"] == 1.5
    assert summary["avg_rides_per_hour"] == round(6 / 4 / 24, 2)
    assert summary["member_share_pct"] == 50.0


def test_hourly_weekday_pivot_shape(sample_trips):
    trips = clean_trips(sample_trips).trips
    heat = hourly_weekday_pivot(trips[trips[S.MEMBER_CASUAL] == "member"])

    assert heat.shape == (24, 7)
    assert list(heat.columns) == S.DAY_NAMES
    assert heat.loc[8, "Monday"] == 1.0
    assert heat.loc[17, "Monday"] == 1.0
    assert heat.loc[3, "Tuesday"] == 0.0
    assert pd.isna(heat.loc[3, "Monday"])


def test_latex_report_is_written_without_pdflatex(sample_csv, tmp_path, monkeypatch):
    out_dir = str(tmp_path / "output")
    result = run_report(sample_csv, output_dir=out_dir)

    tex_path = latex.write_latex_report(result["tables"], result["images"], output_dir=out_dir)
    tex = open(tex_path, encoding="utf-8").read()
    assert r"\begin{document}" in tex
    assert r"member\_casual" in tex
    assert r"\includegraphics[width=0.85\textwidth]{duration_box.png}" in tex

    monkeypatch.setattr(latex.shutil, "which", lambda name: None)
    assert latex.compile_pdf(tex_path, output_dir=out_dir) is None


def test_escape_latex():
    assert latex.escape_latex("50% of a_b & c") == r"50\% of a\_b \& c"


def test_run_report_drops_bad_rows_and_removes_outliers(tmp_path, sample_trips):
    df = sample_trips.copy()
    df.loc[1, S.ENDED_AT] = "2023/01/02 17:45"
    path = tmp_path / "trips.csv"
    df.to_csv(path, index=False)
    out_dir = tmp_path / "output"

    result = run_report(path, output_dir=str(out_dir), on_parse_error="drop", remove_outliers=True)

    trips = result["trips"]
    assert result["cleaning"].unparsed_rows == 1
    assert result["cleaning"].outliers[S.RIDE_ID].tolist() == ["A5"]
    assert set(trips[S.RIDE_ID]) == {"A1", "A3", "A4", "A6"}
    assert trips[S.DAY_OF_WEEK].notna().all()

    by_rider = pd.read_csv(out_dir / "rides_by_rider.csv")
    assert by_rider["total_rides"].sum() == len(trips)
    by_day = pd.read_csv(out_dir / "rides_by_rider_day.csv")
    assert by_day["total_rides"].sum() == len(trips)
    assert os.path.exists(out_dir / "heatmap_hourly_dayofweek.png")

    html = open(result["html"], encoding="utf-8").read()
    assert "Duration Outliers (removed)" in html


def test_table_titles_follow_outlier_flag():
    assert table_titles()["duration_outliers"] == "Duration Outliers (not removed)"
    assert table_titles(remove_outliers=True)["duration_outliers"] == "Duration Outliers (removed)"
    assert table_titles()["rides_by_rider"] == "Rides and Average Duration by Rider Type"
