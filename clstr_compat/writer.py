"""
CD-HIT compatible .clstr writer.

Emits the minimal fields most downstream tools need:
- a `>Cluster {id}` header per cluster
- one member line per sequence, with an optional `150nt, ` / `300aa, ` prefix
- the `*` marker on the first member (the representative)
"""

from enum import Enum
from typing import Optional, Sequence

from clstr_compat.config import Config


class ClstrUnit(Enum):
    NT = "nt"
    AA = "aa"
    NONE = "none"

    @property
    def suffix(self) -> Optional[str]:
        if self is ClstrUnit.NONE:
            return None
        return self.value


class ClstrWriter:
    """
    Append-only writer for .clstr reports.

    Call `finish()` (or use the writer as a context manager) when done,
    otherwise buffered lines may never reach the file.
    """

    def __init__(self, out, owns_stream: bool = False):
        self.out = out
        self.owns_stream = owns_stream
        self.finished = False

    @classmethod
    def create(cls, path) -> "ClstrWriter":
        """Create (or truncate) `path` and return a writer that owns it."""
        f = open(path, 'w', encoding=Config.ENCODING, newline='\n')
        return cls(f, owns_stream=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if not self.finished:
            self.finish()
        return False

    def _check_open(self):
        if self.finished:
            raise ValueError("ClstrWriter is already finished")

    @staticmethod
    def _length_at(lengths, idx):
        if lengths is None or not 0 <= idx < len(lengths):
            return None
        length = lengths[idx]
        if length is None:
            return None
        return int(length)

    def write_cluster(
        self,
        cluster_id: int,
        members: Sequence[int],
        headers: Sequence[str],
        lengths: Optional[Sequence[int]] = None,
        unit=ClstrUnit.NONE
    ):
        """
        Write a single cluster block.

        Args:
            cluster_id: Number printed on the header line, used verbatim
            members: Indices into `headers` (and `lengths`), representative first
            headers: Per-sequence names printed after '>'
            lengths: Optional sequence lengths aligned with `headers`
            unit: ClstrUnit (or "nt" / "aa" / "none") for the length prefix

        Example output:
            >Cluster 0
            0	150nt, >seqA... *
            1	140nt, >seqB...
        """
        self._check_open()
        unit = ClstrUnit(unit)
        suffix = unit.suffix

        self.out.write(f"{Config.CLUSTER_HEADER} {cluster_id}\n")

        for pos, idx in enumerate(members):
            rep_mark = Config.REP_MARKER if pos == 0 else ""
            name = headers[idx]

            length = self._length_at(lengths, idx)
            if length is not None and suffix is not None:
                prefix = f"{length}{suffix}, "
            else:
                prefix = ""

            self.out.write(f"{pos}\t{prefix}>{name}{Config.ID_TERMINATOR}{rep_mark}\n")

    def write_partition(
        self,
        clusters: Sequence[Sequence[int]],
        headers: Sequence[str],
        lengths: Optional[Sequence[int]] = None,
        unit=ClstrUnit.NONE,
        start_id: int = 0
    ):
        """Write every cluster in order, numbering headers from `start_id`."""
        for offset, members in enumerate(clusters):
            self.write_cluster(start_id + offset, members, headers, lengths, unit)

    def finish(self):
        """Flush output and release the stream. The writer can't be used afterwards."""
        self._check_open()
        self.finished = True
        try:
            self.out.flush()
        finally:
            if self.owns_stream:
                self.out.close()
