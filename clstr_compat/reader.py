"""
Reader for CD-HIT .clstr cluster reports.
This module has no heavy dependencies (no numpy, matplotlib).
"""

from typing import List

from clstr_compat.config import Config


def _extract_member_id(line: str):
    """Return the identifier of a member line, or None if the line has no '>'."""
    start = line.find('>')
    if start < 0:
        return None

    name_part = line[start + 1:]
    # Annotations ("at 95%", "*") live after the terminator
    dots = name_part.find(Config.ID_TERMINATOR)
    if dots >= 0:
        name_part = name_part[:dots]

    return name_part.strip().rstrip(',')


def parse_clusters_from_reader(stream) -> List[List[str]]:
    """
    Parse clusters from an open stream.

    Args:
        stream: Binary or text stream positioned at the start of a .clstr report.
            Byte lines are decoded as strict UTF-8; invalid bytes raise
            UnicodeDecodeError rather than altering identifiers.

    Returns:
        List of clusters, where each cluster is a list of sequence names
        in file order (the representative is normally first).

    Example .clstr format:
        >Cluster 0
        0	150nt, >seqA... *
        1	140nt, >seqB... at 95%
        >Cluster 1
        0	>seqC... *

    Malformed text never raises: lines without '>' are dropped and a
    '>Cluster' header with no members before it produces no cluster.
    """
    clusters = []
    current_cluster = []

    for line in stream:
        if isinstance(line, bytes):
            line = line.decode(Config.ENCODING, errors=Config.DECODE_ERRORS)
        line = line.rstrip('\n').rstrip('\r')
        if not line:
            continue

        if line.startswith(Config.CLUSTER_HEADER):
            if current_cluster:
                clusters.append(current_cluster)
                current_cluster = []
            continue

        name = _extract_member_id(line)
        if name is not None:
            current_cluster.append(name)

    # Add last cluster
    if current_cluster:
        clusters.append(current_cluster)

    return clusters


def read_clusters(clstr_path) -> List[List[str]]:
    """
    Read clusters from a .clstr file.

    Raises:
        OSError: if the file cannot be opened or read.
        UnicodeDecodeError: if the file is not valid UTF-8.
    """
    with open(clstr_path, 'rb') as f:
        return parse_clusters_from_reader(f)
