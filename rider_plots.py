import os
import matplotlib.pyplot as plt
import seaborn as sns

import trip_schema as S

# Configuration
OUTPUT_DIR = "output"

sns.set(style="whitegrid")
plt.rcParams.update({"figure.dpi": 120})


def save_fig(fname, output_dir=OUTPUT_DIR):
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, fname)
    plt.tight_layout()
    plt.savefig(path)
    plt.close()
    return path


def plot_duration_box(trips, output_dir=OUTPUT_DIR):
    plt.figure(figsize=(6,5))
    sns.boxplot(y=trips[S.DURATION])
    plt.ylabel("Ride duration (min)")
    plt.title("Ride Duration")
    return save_fig("duration_box.png", output_dir)


def plot_duration_by_rider(trips, output_dir=OUTPUT_DIR):
    plt.figure(figsize=(7,5))
    sns.boxplot(data=trips, x=S.MEMBER_CASUAL, y=S.DURATION, order=_riders(trips))
    plt.xlabel("Rider type")
    plt.ylabel("Ride duration (min)")
    plt.title("Ride Duration by Rider Type")
    return save_fig("duration_by_rider_box.png", output_dir)


def plot_total_rides(by_rider, output_dir=OUTPUT_DIR):
    plt.figure(figsize=(6,5))
    sns.barplot(data=by_rider, x=S.MEMBER_CASUAL, y="total_rides")
    plt.xlabel("Rider type")
    plt.ylabel("Total rides")
    plt.title("Total Rides by Rider Type")
    return save_fig("total_rides_by_rider.png", output_dir)


def plot_bike_type_share(share, output_dir=OUTPUT_DIR):
    pivot = share.pivot_table(
        index=S.MEMBER_CASUAL,
        columns=S.RIDEABLE_TYPE,
        values="percentage",
        fill_value=0,
    )
    ax = pivot.plot(kind="bar", stacked=True, figsize=(8,5))
    ax.set_xlabel("Rider type")
    ax.set_ylabel("Share of rides (%)")
    ax.set_title("Bike Type Share by Rider Type")
    ax.legend(title="Bike type", loc="upper right")
    plt.xticks(rotation=0)
    return save_fig("bike_type_share_by_rider.png", output_dir)


def plot_rides_by_hour(by_hour, output_dir=OUTPUT_DIR):
    data = by_hour.assign(**{S.HOUR: by_hour[S.HOUR].astype(int)})
    plt.figure(figsize=(10,5))
    sns.lineplot(data=data, x=S.HOUR, y="total_rides", hue=S.MEMBER_CASUAL, marker="o")
    plt.xticks(range(24))
    plt.xlabel("Hour of day")
    plt.ylabel("Total rides")
    plt.title("Rides by Hour of Day")
    return save_fig("rides_by_hour.png", output_dir)


def plot_rides_by_day(by_day, output_dir=OUTPUT_DIR):
    return _grouped_bar(by_day, S.DAY_OF_WEEK, S.DAY_NAMES, "Day of week",
                        "Rides by Day of Week", "rides_by_day.png", output_dir)


def plot_rides_by_season(by_season, output_dir=OUTPUT_DIR):
    return _grouped_bar(by_season, S.SEASON, S.SEASON_ORDER + [S.UNKNOWN_SEASON], "Season",
                        "Rides by Season", "rides_by_season.png", output_dir)


def _grouped_bar(summary, column, label_order, xlabel, title, fname, output_dir):
    data = summary.assign(**{column: summary[column].astype(str)})
    order = [label for label in label_order if label in set(data[column])]
    plt.figure(figsize=(9,5))
    sns.barplot(data=data, x=column, y="total_rides", hue=S.MEMBER_CASUAL, order=order)
    plt.xlabel(xlabel)
    plt.ylabel("Total rides")
    plt.title(title)
    return save_fig(fname, output_dir)


def _riders(trips):
    present = set(trips[S.MEMBER_CASUAL])
    return [r for r in S.RIDER_TYPES if r in present] + sorted(present - set(S.RIDER_TYPES))


def plot_all(trips, summaries, output_dir=OUTPUT_DIR):
    """Renders every comparison chart and returns the saved image paths."""
    return [
        plot_duration_box(trips, output_dir),
        plot_duration_by_rider(trips, output_dir),
        plot_total_rides(summaries["rides_by_rider"], output_dir),
        plot_bike_type_share(summaries["bike_type_share"], output_dir),
        plot_rides_by_hour(summaries["rides_by_rider_hour"], output_dir),
        plot_rides_by_day(summaries["rides_by_rider_day"], output_dir),
        plot_rides_by_season(summaries["rides_by_rider_season"], output_dir),
    ]
