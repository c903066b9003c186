#!/usr/bin/env python3
"""
Semantic diff of two CD-HIT .clstr reports.

Two reports are equal when they describe the same partition of sequence
names: cluster order, cluster numbering, member order, representative
markers and length annotations are all ignored.

Usage:
    python -m clstr_compat.diff orig.clstr new.clstr

Exit codes:
    0  partitions are equal
    1  partitions differ (report on stderr)
    2  usage error or unreadable file
"""

import argparse
import json
import sys
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List

from clstr_compat.config import Config
from clstr_compat.reader import read_clusters


@dataclass
class PartitionDiff:
    only_a: List[List[str]] = field(default_factory=list)
    only_b: List[List[str]] = field(default_factory=list)

    @property
    def equal(self) -> bool:
        return not self.only_a and not self.only_b


def to_set_of_sets(clusters: Iterable[Iterable[str]]) -> FrozenSet[FrozenSet[str]]:
    """Reduce a partition to its membership sets."""
    return frozenset(frozenset(cluster) for cluster in clusters)


def _sorted_clusters(clusters) -> List[List[str]]:
    # Lexicographic over sorted members, so output doesn't depend on hash order
    return sorted(sorted(cluster) for cluster in clusters)


def diff_partitions(a, b) -> PartitionDiff:
    """
    Compare two partitions as sets of sets.

    Args:
        a: Partition (list of clusters) or canonical set of sets
        b: Partition (list of clusters) or canonical set of sets

    Returns:
        PartitionDiff with the clusters present in only one side. A cluster
        that differs by a single member counts as missing in full.
    """
    sa = to_set_of_sets(a)
    sb = to_set_of_sets(b)

    if sa == sb:
        return PartitionDiff()

    return PartitionDiff(
        only_a=_sorted_clusters(sa - sb),
        only_b=_sorted_clusters(sb - sa)
    )


def _format_cluster(cluster: List[str]) -> str:
    return "{" + ", ".join(json.dumps(name, ensure_ascii=False) for name in cluster) + "}"


def _format_side(heading: str, clusters: List[List[str]], limit: int) -> List[str]:
    lines = [f"{heading} ({len(clusters)} clusters):"]
    for i, cluster in enumerate(clusters[:limit]):
        lines.append(f"  [{i}] {_format_cluster(cluster)}")
    if len(clusters) > limit:
        lines.append(f"  ... ({len(clusters) - limit} more)")
    return lines


def format_report(diff: PartitionDiff, limit: int = Config.REPORT_LIMIT) -> List[str]:
    """Render a difference report, at most `limit` clusters per side."""
    if diff.equal:
        return ["OK: cluster partitions are semantically equal."]

    lines = ["Differences found."]
    if diff.only_a:
        lines.extend(_format_side("--- present only in A", diff.only_a, limit))
    if diff.only_b:
        lines.extend(_format_side("+++ present only in B", diff.only_b, limit))
    return lines


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog='clstr-diff',
        description='Compare two CD-HIT .clstr files as partitions (sets of clusters)'
    )
    parser.add_argument('orig', help='First .clstr file (A)')
    parser.add_argument('new', help='Second .clstr file (B)')

    # argparse exits with code 2 on usage errors
    args = parser.parse_args(argv)

    partitions = []
    for path in (args.orig, args.new):
        try:
            partitions.append(read_clusters(path))
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error reading {path}: {e}", file=sys.stderr)
            return Config.EXIT_ERROR

    diff = diff_partitions(partitions[0], partitions[1])

    if diff.equal:
        for line in format_report(diff):
            print(line)
        return Config.EXIT_OK

    for line in format_report(diff):
        print(line, file=sys.stderr)
    return Config.EXIT_DIFFERENT


if __name__ == '__main__':
    sys.exit(main())
