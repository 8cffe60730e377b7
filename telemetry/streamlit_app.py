from __future__ import annotations

import argparse
import time
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import streamlit as st

from grid_rover.world import GridWorld, trail_extent
from telemetry.logger import read_records


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--log-path",
        type=str,
        default="telemetry_logs/mission.jsonl",
        help="Path to telemetry JSONL log file.",
    )
    parser.add_argument(
        "--map-path",
        type=str,
        default=None,
        help="Optional JSON map drawn under the rover path.",
    )
    return parser.parse_args()


def load_telemetry(path: str, max_rows: int = 2000) -> pd.DataFrame:
    records = read_records(path)
    if not records:
        return pd.DataFrame()
    df = pd.json_normalize(records)
    return df.tail(max_rows)


def landed_path(df: pd.DataFrame) -> pd.DataFrame:
    """Rows that carry a pose, in log order."""
    if "state.landed" not in df.columns:
        return pd.DataFrame()
    return df[df["state.landed"] == True]  # noqa: E712


def draw_path(df: pd.DataFrame, world: Optional[GridWorld]) -> plt.Figure:
    fig, ax = plt.subplots()
    path = landed_path(df)
    trail = list(zip(path["state.x"].astype(int), path["state.y"].astype(int))) if not path.empty else []

    if world is not None:
        area = trail_extent(world, trail)
        grid = world.occupancy(area)
        ax.imshow(
            np.where(grid, 1.0, 0.0),
            cmap="Greys",
            origin="upper",
            extent=(area.xmin - 0.5, area.xmax + 0.5, area.ymin - 0.5, area.ymax + 0.5),
            vmin=0.0,
            vmax=1.0,
        )

    if trail:
        xs = [p[0] for p in trail]
        ys = [p[1] for p in trail]
        ax.plot(xs, ys, "-y", label="Path")
        ax.scatter([xs[-1]], [ys[-1]], c="b", label="Rover")
        stopped = path[path["state.stopped"] == True]  # noqa: E712
        if not stopped.empty:
            ax.scatter(stopped["state.x"], stopped["state.y"], c="r", marker="x", label="Stopped")
        ax.legend(loc="upper right")
    ax.set_aspect("equal", adjustable="box")
    ax.set_xlabel("x [cell]")
    ax.set_ylabel("y [cell]")
    ax.set_title("Rover Path")
    return fig


def main() -> None:
    args = parse_args()

    st.set_page_config(page_title="Grid Rover Telemetry", layout="wide")
    st.title("Grid Rover Telemetry Dashboard")

    world = GridWorld.from_map_file(args.map_path) if args.map_path else None

    status_placeholder = st.empty()
    col1, col2 = st.columns(2)
    map_fig = col1.empty()
    events_table = col2.empty()
    stats_placeholder = st.empty()

    refresh_interval = st.sidebar.slider("Refresh interval (s)", 0.5, 5.0, 1.0, 0.5)

    while True:
        df = load_telemetry(args.log_path)
        if df.empty:
            status_placeholder.info(f"Waiting for telemetry at '{args.log_path}'...")
            time.sleep(refresh_interval)
            continue

        status_placeholder.success(f"Streaming from '{args.log_path}' ({len(df)} records)")

        with map_fig.container():
            fig = draw_path(df, world)
            map_fig.pyplot(fig)
            plt.close(fig)

        cols = [c for c in ("seq", "event", "instructions", "failure", "state.x", "state.y",
                            "state.orientation", "state.stopped") if c in df.columns]
        events_table.dataframe(df[cols].iloc[::-1].head(50))

        batches = df[df["event"] == "execute"] if "event" in df.columns else pd.DataFrame()
        stats_text = "Mission stats:\n"
        stats_text += f"- Batches executed: {len(batches)}\n"
        if not batches.empty and "failure" in batches.columns:
            counts = batches["failure"].fillna("none").value_counts()
            for name, count in counts.items():
                stats_text += f"- {name}: {count}\n"
        stats_placeholder.text(stats_text)

        time.sleep(refresh_interval)


if __name__ == "__main__":
    main()
