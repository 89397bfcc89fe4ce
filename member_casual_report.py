import os
import sys
import pandas as pd

import trip_schema as S
from trip_loader import TRIP_CSV, load_trips
from trip_cleaning import clean_trips
from trip_features import add_time_features
from rider_summary import build_summaries, describe_durations
from rider_plots import OUTPUT_DIR, plot_all
from heatmap_analysis import rider_heatmaps
from dataset_summary import summarize_dataset

TABLE_TITLES = {
    "dataset_summary": "Dataset Summary",
    "duration_stats": "Ride Duration by Rider Type (min)",
    "rides_by_rider": "Rides and Average Duration by Rider Type",
    "rides_by_rider_hour": "Rides by Rider Type and Hour of Day",
    "rides_by_rider_day": "Rides by Rider Type and Day of Week",
    "rides_by_rider_season": "Rides by Rider Type and Season",
    "bike_type_share": "Bike Type Share by Rider Type",
}


def table_titles(remove_outliers=False):
    titles = dict(TABLE_TITLES)
    state = "removed" if remove_outliers else "not removed"
    titles["duration_outliers"] = f"Duration Outliers ({state})"
    return titles


def write_html_report(tables, images, output_dir=OUTPUT_DIR, title="Member vs Casual Riders", titles=None):
    titles = table_titles() if titles is None else titles
    html = ['<!DOCTYPE html>', f'<html><head><meta charset="UTF-8"><title>{title}</title></head><body>']
    html.append(f'<h1>{title}</h1>')
    for name, table in tables.items():
        html.append(f'<h2>{titles.get(name, name)}</h2>')
        html.append(table.to_html(index=False, float_format=lambda x: f"{x:.2f}"))
    for path in images:
        fname = os.path.basename(path)
        html.append(f'<h2>{os.path.splitext(fname)[0].replace("_", " ").title()}</h2>')
        html.append(f'<img src="{fname}" style="max-width:800px;">')
    html.append('</body></html>')

    out_path = os.path.join(output_dir, 'index.html')
    with open(out_path, 'w', encoding='utf-8') as f:
        f.write('\n'.join(html))
    return out_path


def run_report(trip_csv=TRIP_CSV, output_dir=OUTPUT_DIR, on_parse_error="raise", remove_outliers=False):
    """
    Runs load -> clean -> features -> summaries -> charts over one trip file.

    Every summary table is written as CSV and embedded, with the charts, in
    output_dir/index.html. Returns the cleaning report, the featured trip table,
    the summary tables and the saved file paths.
    """
    os.makedirs(output_dir, exist_ok=True)

    print(f"📚 Loading trips from {trip_csv}…")
    raw = load_trips(trip_csv)
    print(f"    Loaded {len(raw)} rows, {len(raw.columns)} columns")

    report = clean_trips(raw, on_parse_error=on_parse_error, remove_outliers=remove_outliers)

    print("⚙️ Deriving day, hour and season fields…")
    trips = add_time_features(report.trips)

    print("🔢 Summarizing by rider type…")
    tables = {
        "dataset_summary": summarize_dataset(trips, source=trip_csv),
        "duration_stats": describe_durations(trips),
    }
    tables.update(build_summaries(trips))
    outlier_cols = [S.RIDE_ID, S.MEMBER_CASUAL, S.RIDEABLE_TYPE, S.STARTED_AT, S.ENDED_AT, S.DURATION]
    tables["duration_outliers"] = report.outliers[outlier_cols].sort_values(S.DURATION, ascending=False)

    print(tables["rides_by_rider"].to_string(index=False))
    print(tables["duration_stats"].to_string(index=False))

    csv_paths = []
    for name, table in tables.items():
        path = os.path.join(output_dir, f"{name}.csv")
        table.to_csv(path, index=False)
        csv_paths.append(path)
    print(f"    Saved {len(csv_paths)} summary tables to {output_dir}")

    print("📈 Plotting comparisons…")
    images = plot_all(trips, tables, output_dir)
    _, heatmap_path = rider_heatmaps(trips, output_dir)
    images.append(heatmap_path)

    print("📝 Writing HTML report…")
    titles = table_titles(remove_outliers)
    html_path = write_html_report(tables, images, output_dir, titles=titles)
    print(f"✅ Report at {html_path}")

    return {
        "cleaning": report,
        "trips": trips,
        "tables": tables,
        "titles": titles,
        "csv_paths": csv_paths,
        "images": images,
        "html": html_path,
    }


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    trip_csv = argv[0] if argv else TRIP_CSV
    run_report(trip_csv)


if __name__ == "__main__":
    pd.set_option("display.width", 120)
    main()
