"""Locus comparison under a sequence dictionary."""

from __future__ import annotations

from typing import Protocol

from svmerge.exceptions import UnknownContig
from svmerge.models.dictionary import SequenceDictionary


class Locatable(Protocol):
    @property
    def contig(self) -> str: ...

    @property
    def start(self) -> int: ...

    @property
    def end(self) -> int: ...


def contig_index(dictionary: SequenceDictionary, contig: str, source: str = "") -> int:
    idx = dictionary.index_of(contig)
    if idx is None:
        raise UnknownContig(contig, source)
    return idx


def locus_key(feature: Locatable, dictionary: SequenceDictionary, source: str = "") -> tuple[int, int, int]:
    """Sort key of a feature: contig ordinal, then start, then end."""
    return (contig_index(dictionary, feature.contig, source), feature.start, feature.end)


def compare_loci(a: Locatable, b: Locatable, dictionary: SequenceDictionary) -> int:
    """Three-way comparison of two loci: negative, zero or positive."""
    key_a = locus_key(a, dictionary)
    key_b = locus_key(b, dictionary)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def format_locus(feature: Locatable) -> str:
    if feature.start == feature.end:
        return f"{feature.contig}:{feature.start}"
    return f"{feature.contig}:{feature.start}-{feature.end}"
