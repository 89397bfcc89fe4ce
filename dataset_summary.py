import os
import sys
import pandas as pd

import trip_schema as S
from trip_loader import TRIP_CSV, load_trips
from trip_cleaning import clean_trips
from rider_plots import OUTPUT_DIR

# Basic metrics of one month of cleaned trips, saved as a metric/value table


def summarize_dataset(trips, source=None):
    start = trips[S.STARTED_AT]
    start_date = start.min().date()
    end_date = start.max().date()
    days_covered = start.dt.normalize().nunique()
    total_rides = len(trips)
    member_share = (trips[S.MEMBER_CASUAL] == "member").mean() * 100 if total_rides else 0.0

    rides_per_day = total_rides / days_covered if days_covered else 0.0
    avg_rides_per_day = round(rides_per_day, 2)
    avg_rides_per_hour = round(rides_per_day / 24, 2)

    return pd.DataFrame({
        'metric': [
            'source_file',
            'start_date',
            'end_date',
            'days_covered',
            'total_rides',
            'avg_rides_per_day',
            'avg_rides_per_hour',
            'member_share_pct'
        ],
        'value': [
            os.path.basename(source) if source else '',
            start_date.strftime('%Y-%m-%d'),
            end_date.strftime('%Y-%m-%d'),
            days_covered,
            total_rides,
            avg_rides_per_day,
            avg_rides_per_hour,
            round(member_share, 2)
        ]
    })


def main(trip_csv=TRIP_CSV, output_dir=OUTPUT_DIR):
    os.makedirs(output_dir, exist_ok=True)

    trips = clean_trips(load_trips(trip_csv)).trips
    summary = summarize_dataset(trips, source=trip_csv)

    out_path = os.path.join(output_dir, 'dataset_summary.csv')
    summary.to_csv(out_path, index=False)
    print(f'Dataset summary saved to {out_path}')

if __name__ == '__main__':
    main(*sys.argv[1:2])
