"""Visualization utilities for simulation results."""

import matplotlib.pyplot as plt
import seaborn as sns
import pandas as pd
from pathlib import Path
from typing import List, Sequence

from .io import snapshots_to_frame

sns.set_style("whitegrid")
sns.set_palette("husl")


def plot_results(rows: Sequence, output_dir: Path) -> List[Path]:
    """Generate all visualization plots for one run.

    Args:
        rows: Snapshot rows of a run
        output_dir: Directory to save plots

    Returns:
        Paths of the written images
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    frame = snapshots_to_frame(rows)
    if frame.empty:
        return []

    paths = [output_dir / "tank_loads.png", output_dir / "statistics.png"]
    plot_tank_loads(frame, paths[0])
    plot_statistics(frame, paths[1])
    return paths


def _tank_ids(frame: pd.DataFrame) -> List[int]:
    return sorted(
        int(column.split('_')[1])
        for column in frame.columns
        if column.startswith('tank_') and column.endswith('_remaining_load')
    )


def plot_tank_loads(frame: pd.DataFrame, output_path: Path) -> None:
    """Plot the load of every tank over simulated time.

    Args:
        frame: Snapshot frame from ``snapshots_to_frame``
        output_path: Output file path
    """
    fig, ax = plt.subplots(figsize=(12, 6))

    for tank_id in _tank_ids(frame):
        ax.step(
            frame['clock_time'],
            frame[f'tank_{tank_id}_remaining_load'],
            where='post',
            label=f'Tank {tank_id}',
        )

    ax.set_xlabel('Time (h)')
    ax.set_ylabel('Load (t)')
    ax.set_title('Coastal Tank Loads')
    ax.legend(loc='upper right')

    plt.tight_layout()
    plt.savefig(output_path, dpi=150)
    plt.close(fig)


def plot_statistics(frame: pd.DataFrame, output_path: Path) -> None:
    """Plot cumulative tonnage and maximum queue length over time.

    Args:
        frame: Snapshot frame from ``snapshots_to_frame``
        output_path: Output file path
    """
    fig, axes = plt.subplots(2, 1, figsize=(12, 8), sharex=True)

    axes[0].plot(frame['clock_time'], frame['total_discharged_tonnage'], color='steelblue')
    axes[0].set_ylabel('Tonnage (t)')
    axes[0].set_title('Total Discharged Tonnage')

    axes[1].step(frame['clock_time'], frame['max_queue_length'], where='post', color='coral')
    axes[1].set_xlabel('Time (h)')
    axes[1].set_ylabel('Ships')
    axes[1].set_title('Maximum Queue Length')

    plt.tight_layout()
    plt.savefig(output_path, dpi=150)
    plt.close(fig)
