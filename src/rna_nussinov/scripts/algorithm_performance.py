#!/usr/bin/env python3
"""
Performance evaluation script for the Nussinov folding algorithm.

Benchmarks runtime and peak memory of the $O(N^{3})$ table fill plus traceback
across a range of sequence lengths, estimates the empirical complexity
exponent, and plots the results.
"""

import argparse
import time
import tracemalloc
import random
from pathlib import Path
from typing import Optional

import numpy as np
import matplotlib.pyplot as plt

from rna_nussinov.api import predict
from rna_nussinov.folding import NussinovFoldingConfig

THEORETICAL_EXPONENT = 3.0


def generate_random_sequence(length: int, seed: Optional[int] = None) -> str:
    """
    Generate a random RNA sequence of a given length.

    Parameters
    ----------
    length : int
        The desired length of the RNA sequence ($N$).
    seed : int, optional
        Seed for a private random generator, for reproducibility.

    Returns
    -------
    str
        A random sequence over 'A', 'C', 'G', 'U'.
    """
    rng = random.Random(seed)
    return ''.join(rng.choices(['A', 'C', 'G', 'U'], k=length))


def benchmark_runtime(sequence_lengths: list[int], num_trials: int = 3) -> dict:
    """
    Benchmark the mean runtime of `predict` for each sequence length ($N$).

    Returns
    -------
    dict
        'lengths', 'mean_times', 'std_times' (seconds) and 'scores' (base
        pairs of the last trial per length).
    """
    config = NussinovFoldingConfig(verbose=False)
    results = {
        'lengths': sequence_lengths,
        'mean_times': [],
        'std_times': [],
        'scores': []
    }

    for n in sequence_lengths:
        print(f"\nBenchmarking N={n}...")
        trial_times = []

        for trial in range(num_trials):
            seq = generate_random_sequence(n, seed=42 + trial)

            start = time.perf_counter()
            prediction = predict(seq, config)
            elapsed = time.perf_counter() - start

            trial_times.append(elapsed)
            print(f"  Trial {trial + 1}/{num_trials}: {elapsed:.3f}s")

        results['mean_times'].append(float(np.mean(trial_times)))
        results['std_times'].append(float(np.std(trial_times)))
        results['scores'].append(prediction.score)

        print(f"  Mean: {results['mean_times'][-1]:.3f}s ± {results['std_times'][-1]:.3f}s")
        print(f"  Base pairs: {results['scores'][-1]}")

    return results


def benchmark_memory(sequence_lengths: list[int]) -> dict:
    """
    Benchmark peak memory of one prediction per length, via `tracemalloc`.

    Returns
    -------
    dict
        'lengths' and 'peak_memory_mb'.
    """
    config = NussinovFoldingConfig(verbose=False)
    results = {
        'lengths': sequence_lengths,
        'peak_memory_mb': []
    }

    for n in sequence_lengths:
        print(f"\nMeasuring memory for N={n}...")
        seq = generate_random_sequence(n, seed=42)

        tracemalloc.start()
        predict(seq, config)
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

        peak_mb = peak / 1024 ** 2
        results['peak_memory_mb'].append(peak_mb)
        print(f"  Peak memory: {peak_mb:.2f} MB")

    return results


def analyze_complexity(lengths: list[int], times: list[float]) -> tuple[float, np.ndarray]:
    """
    Fit $T \\propto N^{k}$ by linear regression in log-log space.

    Returns
    -------
    tuple of (float, numpy.ndarray)
        The estimated exponent $k$ and the fitted times.
    """
    log_n = np.log(lengths)
    log_time = np.log(times)

    k, c = np.polyfit(log_n, log_time, 1)
    fitted_times = np.exp(c) * np.array(lengths, dtype=float) ** k

    print(f"\n{'=' * 60}")
    print("COMPLEXITY ANALYSIS")
    print(f"{'=' * 60}")
    print(f"Empirical complexity: O(N^{k:.2f})")
    print(f"Theoretical:          O(N^{THEORETICAL_EXPONENT:.0f})")
    print(f"{'=' * 60}\n")

    return float(k), fitted_times


def plot_results(runtime_results: dict, memory_results: dict, fitted_times: np.ndarray,
                 complexity_k: float, output_dir: Path, show: bool = False) -> Path:
    """
    Save runtime and memory plots (log-log) to `output_dir`.

    Returns
    -------
    Path
        Path of the saved PNG.
    """
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    ax1 = axes[0]
    lengths = runtime_results['lengths']
    ax1.errorbar(lengths, runtime_results['mean_times'], yerr=runtime_results['std_times'],
                 fmt='o-', capsize=5, label='Measured', linewidth=2, markersize=8)
    ax1.plot(lengths, fitted_times, '--',
             label=f'Fitted $O(N^{{{complexity_k:.2f}}})$', linewidth=2, alpha=0.7)
    ax1.set_xlabel('Sequence Length ($N$)', fontsize=12)
    ax1.set_ylabel('Runtime (seconds)', fontsize=12)
    ax1.set_title('Runtime Performance (Log-Log)', fontsize=14, fontweight='bold')
    ax1.legend(fontsize=10)
    ax1.grid(True, alpha=0.3)
    ax1.set_yscale('log')
    ax1.set_xscale('log')

    ax2 = axes[1]
    ax2.plot(lengths, memory_results['peak_memory_mb'], 's-', linewidth=2, markersize=8, color='orange')
    ax2.set_xlabel('Sequence Length ($N$)', fontsize=12)
    ax2.set_ylabel('Peak Memory (MB)', fontsize=12)
    ax2.set_title('Memory Usage (Log-Log)', fontsize=14, fontweight='bold')
    ax2.grid(True, alpha=0.3)
    ax2.set_yscale('log')
    ax2.set_xscale('log')

    fig.tight_layout()

    output_dir.mkdir(parents=True, exist_ok=True)
    out_path = output_dir / 'performance_analysis.png'
    fig.savefig(out_path, dpi=300, bbox_inches='tight')
    print(f"\nPlot saved to: {out_path}")

    if show:
        plt.show()
    plt.close(fig)
    return out_path


def generate_markdown_table(runtime_results: dict, memory_results: dict) -> str:
    """
    Build the results as a Markdown table.
    """
    lines = [
        "| Sequence Length ($N$) | Runtime (s) | Peak Memory (MB) | Base Pairs |",
        "|-----------------------|-------------|------------------|------------|",
    ]
    for i, n in enumerate(runtime_results['lengths']):
        time_mean = runtime_results['mean_times'][i]
        time_std = runtime_results['std_times'][i]
        memory = memory_results['peak_memory_mb'][i]
        score = runtime_results['scores'][i]
        lines.append(f"| {n:21d} | {time_mean:5.3f} ± {time_std:.3f} | {memory:16.2f} | {score:10d} |")
    return "\n".join(lines)


def main(argv=None) -> int:
    """
    Runs the runtime and memory benchmarks, fits the exponent, plots and
    prints the Markdown table.
    """
    parser = argparse.ArgumentParser(description="Benchmark Nussinov folding runtime and memory.")
    parser.add_argument("--lengths", type=int, nargs="+", default=[50, 100, 150, 200, 250],
                        help="Sequence lengths to benchmark.")
    parser.add_argument("--trials", type=int, default=3, help="Runs per length for averaging.")
    parser.add_argument("--output-dir", default="performance_results", help="Directory for the plot.")
    parser.add_argument("--show", action="store_true", help="Open the plot window after saving.")
    cli_args = parser.parse_args(argv)

    print("=" * 60)
    print("RNA NUSSINOV FOLDING - PERFORMANCE EVALUATION")
    print("=" * 60)
    print(f"\nSequence lengths to test: {cli_args.lengths}")
    print(f"Trials per length: {cli_args.trials}")

    runtime_results = benchmark_runtime(cli_args.lengths, cli_args.trials)
    memory_results = benchmark_memory(cli_args.lengths)

    complexity_k, fitted_times = analyze_complexity(
        runtime_results['lengths'],
        runtime_results['mean_times']
    )

    plot_results(runtime_results, memory_results, fitted_times, complexity_k,
                 Path(cli_args.output_dir), show=cli_args.show)

    print("\n" + generate_markdown_table(runtime_results, memory_results) + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
