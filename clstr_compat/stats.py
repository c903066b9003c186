#!/usr/bin/env python3
"""
Cluster-size statistics for CD-HIT .clstr reports.

Usage:
    python -m clstr_compat.stats \
        --input tr0_cdhit95.clstr \
        --input tr0_cdhit90.clstr \
        --stats_out clstr_stats.json \
        --plot_out cluster_sizes.png

The plot (if requested) is drawn for the first input only.
"""

import argparse
import json
import os
import sys
from dataclasses import asdict, dataclass
from typing import Dict, List

import numpy as np
from tqdm import tqdm

from clstr_compat.config import Config
from clstr_compat.reader import read_clusters


@dataclass
class ClusterSummary:
    n_clusters: int
    n_sequences: int
    n_singletons: int
    min_size: int
    max_size: int
    mean_size: float
    median_size: float


def name_to_cluster(clusters: List[List[str]]) -> Dict[str, int]:
    """
    Map each sequence name to the 0-based index of its cluster.

    Indices follow discovery order, not the `>Cluster N` numbers in the file.
    A name listed in several clusters maps to the last one.
    """
    mapping = {}
    for cluster_idx, cluster in enumerate(clusters):
        for name in cluster:
            mapping[name] = cluster_idx
    return mapping


def representatives(clusters: List[List[str]]) -> List[str]:
    """First member of every cluster."""
    return [cluster[0] for cluster in clusters if cluster]


def summarize_clusters(clusters: List[List[str]]) -> ClusterSummary:
    sizes = np.array([len(cluster) for cluster in clusters], dtype=np.int64)

    if sizes.size == 0:
        return ClusterSummary(0, 0, 0, 0, 0, 0.0, 0.0)

    return ClusterSummary(
        n_clusters=int(sizes.size),
        n_sequences=int(sizes.sum()),
        n_singletons=int((sizes == 1).sum()),
        min_size=int(sizes.min()),
        max_size=int(sizes.max()),
        mean_size=float(sizes.mean()),
        median_size=float(np.median(sizes))
    )


def plot_size_histogram(clusters: List[List[str]], save_path: str, title: str = None):
    """
    Save a histogram of cluster sizes.

    :param clusters: parsed partition
    :param save_path: output image path (.png)
    :param title: optional figure title
    """
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    sizes = np.array([len(cluster) for cluster in clusters], dtype=np.int64)
    max_size = int(sizes.max()) if sizes.size else 1
    bins = np.arange(1, max_size + 2) - 0.5

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.hist(sizes, bins=bins, color="steelblue", edgecolor="black")
    ax.set_xlabel("Cluster size (members)")
    ax.set_ylabel("Number of clusters")
    ax.set_yscale("log" if sizes.size and max_size > 20 else "linear")
    ax.set_title(title or f"Cluster sizes (n={sizes.size})")

    out_dir = os.path.dirname(save_path)
    if out_dir and not os.path.exists(out_dir):
        os.makedirs(out_dir)

    fig.tight_layout()
    fig.savefig(save_path, dpi=150)
    plt.close(fig)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog='clstr-stats',
        description='Summarize cluster sizes of CD-HIT .clstr files',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--input', action='append', required=True,
                        help='Input .clstr file (can be specified multiple times)')
    parser.add_argument('--stats_out', default=None,
                        help='Output JSON file for statistics')
    parser.add_argument('--plot_out', default=None,
                        help='Output PNG with the size histogram of the first input')

    args = parser.parse_args(argv)

    results = {}
    first_clusters = None
    for path in tqdm(args.input, desc="Reading", unit="file", disable=len(args.input) < 2):
        try:
            clusters = read_clusters(path)
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error reading {path}: {e}", file=sys.stderr)
            return Config.EXIT_ERROR

        if first_clusters is None:
            first_clusters = clusters
        results[path] = asdict(summarize_clusters(clusters))

    print("=" * 50)
    print("Cluster Summary")
    print("=" * 50)
    for path, summary in results.items():
        print(f"{path}:")
        print(f"  Clusters: {summary['n_clusters']}")
        print(f"  Sequences: {summary['n_sequences']}")
        print(f"  Singletons: {summary['n_singletons']}")
        print(f"  Size min/max: {summary['min_size']}/{summary['max_size']}")
        print(f"  Size mean/median: {summary['mean_size']:.2f}/{summary['median_size']:.1f}")
    print("=" * 50)

    if args.stats_out:
        with open(args.stats_out, 'w') as f:
            json.dump(results, f, indent=2)
        print(f"Stats written to: {args.stats_out}")

    if args.plot_out:
        plot_size_histogram(first_clusters, args.plot_out, title=os.path.basename(args.input[0]))
        print(f"Plot written to: {args.plot_out}")

    return Config.EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
