import os
import sys
import matplotlib.pyplot as plt
import seaborn as sns

import trip_schema as S
from trip_loader import TRIP_CSV, load_trips
from trip_cleaning import clean_trips
from rider_plots import OUTPUT_DIR, save_fig


def hourly_weekday_pivot(trips):
    """Average rides per hour for each (hour of day, weekday) cell."""
    bikes = trips.set_index(S.STARTED_AT).sort_index()
    hourly = bikes[S.RIDE_ID].resample("h").count().rename("ride_count")
    heat = hourly.to_frame().pivot_table(
        values="ride_count",
        index=hourly.index.hour,
        columns=hourly.index.dayofweek,
        aggfunc="mean"
    )
    heat = heat.reindex(index=range(24), columns=range(7))
    heat.index.name = S.HOUR
    heat.columns = S.DAY_NAMES
    return heat


def rider_heatmaps(trips, output_dir=OUTPUT_DIR):
    """Saves one pivot CSV per rider type and a side-by-side heatmap figure."""
    riders = [r for r in S.RIDER_TYPES if r in set(trips[S.MEMBER_CASUAL])]
    os.makedirs(output_dir, exist_ok=True)

    pivots = {}
    for rider in riders:
        heat = hourly_weekday_pivot(trips[trips[S.MEMBER_CASUAL] == rider])
        heat.to_csv(os.path.join(output_dir, f"heatmap_hourly_dayofweek_{rider}.csv"))
        pivots[rider] = heat

    fig, axes = plt.subplots(1, max(len(riders), 1), figsize=(8 * max(len(riders), 1), 6), squeeze=False)
    for ax, rider in zip(axes[0], riders):
        sns.heatmap(pivots[rider], cmap="coolwarm", ax=ax)
        ax.set_xlabel("Day of Week")
        ax.set_ylabel("Hour of Day")
        ax.set_title(f"Average Rides/hour: {rider}")
    path = save_fig("heatmap_hourly_dayofweek.png", output_dir)
    return pivots, path


def main(trip_csv=TRIP_CSV, output_dir=OUTPUT_DIR):
    print("📚 Loading bike trip file…")
    trips = clean_trips(load_trips(trip_csv)).trips

    print("📈 Creating heatmaps…")
    _, path = rider_heatmaps(trips, output_dir)
    print(f"✅ Saved {path}")


if __name__ == "__main__":
    main(*sys.argv[1:2])
