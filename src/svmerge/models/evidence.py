"""Structural-variant evidence records.

All records are immutable. Point evidence (BAF, split reads, locus depth)
sits at a single position, so ``start == end``; read-depth evidence covers an
interval and carries one count per sample.
"""

from __future__ import annotations

from dataclasses import dataclass

MISSING_DATA = -1


@dataclass(frozen=True)
class BafEvidence:
    """B-allele frequency of one sample at one site."""
    sample: str
    contig: str
    position: int
    value: float

    @property
    def start(self) -> int:
        return self.position

    @property
    def end(self) -> int:
        return self.position


@dataclass(frozen=True)
class SplitReadEvidence:
    """Count of split reads clipped on one side of a position.

    ``strand`` is True for right-clipped reads and False for left-clipped.
    """
    sample: str
    contig: str
    position: int
    count: int
    strand: bool

    @property
    def start(self) -> int:
        return self.position

    @property
    def end(self) -> int:
        return self.position

    @property
    def strand_name(self) -> str:
        return "right" if self.strand else "left"


@dataclass(frozen=True)
class LocusDepth:
    """Per-base read depth of one sample at one site."""
    sample: str
    contig: str
    position: int
    ref_call: str
    depth_a: int
    depth_c: int
    depth_g: int
    depth_t: int

    @property
    def start(self) -> int:
        return self.position

    @property
    def end(self) -> int:
        return self.position


@dataclass(frozen=True)
class DepthEvidence:
    """Read counts over an interval, one slot per sample (MISSING_DATA if unknown)."""
    contig: str
    start: int
    end: int
    counts: tuple[int, ...]

    @property
    def n_missing(self) -> int:
        return sum(1 for c in self.counts if c == MISSING_DATA)
