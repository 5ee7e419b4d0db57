"""
Plotting script for Wave Defender training runs.
Generates learning curves from the MetricsCallback CSVs.

Usage:
    python -m rl.plot_results --log-dir ./logs --algos ppo dqn
"""

import os
import argparse
from typing import List, Optional

import pandas as pd
import numpy as np
import matplotlib.pyplot as plt


def load_metrics(log_dir: str, algo: str) -> Optional[pd.DataFrame]:
    """Load metrics CSV for an algorithm."""
    for csv_path in (
        os.path.join(log_dir, algo, f"{algo}_metrics.csv"),
        os.path.join(log_dir, f"{algo}_metrics.csv"),
    ):
        if os.path.exists(csv_path):
            return pd.read_csv(csv_path)
    return None


def smooth(data: np.ndarray, window: int = 10) -> np.ndarray:
    """Apply rolling average smoothing."""
    if len(data) < window:
        return data
    kernel = np.ones(window) / window
    return np.convolve(data, kernel, mode="valid")


def plot_learning_curve(df: pd.DataFrame, algo: str, output_dir: str, window: int = 50) -> str:
    """Reward, score, wave reached and kills against timesteps."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"{algo.upper()} Learning Curves", fontsize=16, fontweight="bold")

    panels = [
        (axes[0, 0], "reward", "Episode Reward", None),
        (axes[0, 1], "score", "Final Score", "orange"),
        (axes[1, 0], "wave", "Wave Reached", "green"),
        (axes[1, 1], "kills", "Enemies Killed", "red"),
    ]
    timesteps = df["timestep"].values

    for ax, column, label, color in panels:
        if column not in df.columns:
            ax.set_visible(False)
            continue
        smoothed = smooth(df[column].values.astype(float), window)
        ax.plot(timesteps[:len(smoothed)], smoothed, linewidth=2, color=color)
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(label)
        ax.set_title(f"{label} vs Timesteps")
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, f"{algo}_learning_curve.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved {algo} learning curve to {save_path}")
    return save_path


def plot_comparison(frames: dict, output_dir: str, window: int = 50) -> str:
    """Smoothed score curves of several algorithms on one axis."""
    fig, ax = plt.subplots(figsize=(10, 6))
    for algo, df in frames.items():
        smoothed = smooth(df["score"].values.astype(float), window)
        ax.plot(df["timestep"].values[:len(smoothed)], smoothed, linewidth=2, label=algo.upper())

    ax.set_xlabel("Timesteps")
    ax.set_ylabel("Final Score")
    ax.set_title("Score Comparison")
    ax.legend()
    ax.grid(True, alpha=0.3)

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, "score_comparison.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved comparison plot to {save_path}")
    return save_path


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Plot Wave Defender training curves")
    parser.add_argument("--log-dir", type=str, default="./logs", help="Metrics directory (default: ./logs)")
    parser.add_argument("--output-dir", type=str, default="./figures", help="Where to save plots (default: ./figures)")
    parser.add_argument("--algos", nargs="+", default=["ppo", "dqn"], help="Algorithms to plot")
    parser.add_argument("--window", type=int, default=50, help="Smoothing window in episodes (default: 50)")
    args = parser.parse_args(argv)

    frames = {}
    for algo in args.algos:
        df = load_metrics(args.log_dir, algo)
        if df is None or df.empty:
            print(f"No metrics found for {algo} in {args.log_dir}")
            continue
        frames[algo] = df
        plot_learning_curve(df, algo, args.output_dir, args.window)

    if len(frames) > 1:
        plot_comparison(frames, args.output_dir, args.window)


if __name__ == "__main__":
    main()
