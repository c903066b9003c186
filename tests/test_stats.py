#!/usr/bin/env python3
"""
Tests for cluster statistics and the clstr-stats command.
"""

import json
import os
import subprocess
import sys
import tempfile

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from clstr_compat.stats import (
    name_to_cluster,
    plot_size_histogram,
    representatives,
    summarize_clusters,
)

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

CLUSTERS = [
    ["bpRNA_CRW_15639", "bpRNA_CRW_15847"],
    ["bpRNA_CRW_15871"],
    ["bpRNA_CRW_15994", "bpRNA_CRW_16021", "bpRNA_CRW_16100"],
]


def _write_clstr(path):
    with open(path, 'w') as f:
        f.write(">Cluster 0\n")
        f.write("0\t119nt, >bpRNA_CRW_15639... *\n")
        f.write("1\t125nt, >bpRNA_CRW_15847... at 94.5%\n")
        f.write(">Cluster 1\n")
        f.write("0\t123nt, >bpRNA_CRW_15871... *\n")
        f.write(">Cluster 2\n")
        f.write("0\t120nt, >bpRNA_CRW_15994... *\n")
        f.write("1\t122nt, >bpRNA_CRW_16021... at 93.2%\n")
        f.write("2\t118nt, >bpRNA_CRW_16100... at 92.0%\n")


def test_name_to_cluster():
    """Every name maps to its cluster index"""
    print("Test: name -> cluster mapping")

    mapping = name_to_cluster(CLUSTERS)
    expected = {
        'bpRNA_CRW_15639': 0,
        'bpRNA_CRW_15847': 0,
        'bpRNA_CRW_15871': 1,
        'bpRNA_CRW_15994': 2,
        'bpRNA_CRW_16021': 2,
        'bpRNA_CRW_16100': 2,
    }
    assert mapping == expected, f"Got {mapping}"

    print(f"  ✓ {len(mapping)} names mapped")


def test_representatives():
    assert representatives(CLUSTERS) == ["bpRNA_CRW_15639", "bpRNA_CRW_15871", "bpRNA_CRW_15994"]
    assert representatives([]) == []


def test_summarize_clusters():
    print("\nTest: Size summary")

    summary = summarize_clusters(CLUSTERS)
    assert summary.n_clusters == 3
    assert summary.n_sequences == 6
    assert summary.n_singletons == 1
    assert summary.min_size == 1
    assert summary.max_size == 3
    assert abs(summary.mean_size - 2.0) < 1e-9
    assert summary.median_size == 2.0

    print(f"  ✓ {summary}")


def test_summarize_empty():
    summary = summarize_clusters([])
    assert summary.n_clusters == 0
    assert summary.n_sequences == 0
    assert summary.mean_size == 0.0


def test_plot_size_histogram():
    with tempfile.TemporaryDirectory() as tmpdir:
        out = os.path.join(tmpdir, "plots", "sizes.png")
        plot_size_histogram(CLUSTERS, out)
        assert os.path.exists(out)
        assert os.path.getsize(out) > 0


def test_cli_stats_out():
    """clstr-stats writes a JSON summary per input"""
    print("\nTest: clstr-stats command")

    with tempfile.TemporaryDirectory() as tmpdir:
        clstr_file = os.path.join(tmpdir, "clusters.clstr")
        _write_clstr(clstr_file)
        stats_out = os.path.join(tmpdir, "stats.json")

        result = subprocess.run(
            [sys.executable, "-m", "clstr_compat.stats",
             "--input", clstr_file,
             "--stats_out", stats_out],
            capture_output=True,
            text=True,
            cwd=REPO_ROOT
        )
        assert result.returncode == 0, result.stderr

        with open(stats_out) as f:
            stats = json.load(f)
        assert stats[clstr_file]["n_clusters"] == 3
        assert stats[clstr_file]["n_sequences"] == 6

    print("  ✓ JSON summary written")


def test_cli_missing_input():
    with tempfile.TemporaryDirectory() as tmpdir:
        missing = os.path.join(tmpdir, "missing.clstr")
        result = subprocess.run(
            [sys.executable, "-m", "clstr_compat.stats", "--input", missing],
            capture_output=True,
            text=True,
            cwd=REPO_ROOT
        )
        assert result.returncode == 2
        assert "Error reading" in result.stderr


def run_tests():
    """Run all stats tests"""
    print("=" * 60)
    print("Running stats tests")
    print("=" * 60)

    try:
        test_name_to_cluster()
        test_representatives()
        test_summarize_clusters()
        test_summarize_empty()
        test_plot_size_histogram()
        test_cli_stats_out()
        test_cli_missing_input()

        print("\n" + "=" * 60)
        print("All stats tests passed! ✓")
        print("=" * 60)
        return 0
    except Exception as e:
        print(f"\n✗ Test failed: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(run_tests())
