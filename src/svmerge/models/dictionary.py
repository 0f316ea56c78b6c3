"""Sequence dictionary: the ordered set of contigs that defines locus order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from svmerge.exceptions import ReconciliationError


@dataclass(frozen=True)
class SequenceRecord:
    name: str
    length: int


class SequenceDictionary:
    """Ordered, immutable collection of contigs.

    The position of a contig in ``sequences`` is its ordinal, and loci are
    compared by that ordinal before their offsets.
    """

    __slots__ = ("_sequences", "_index")

    def __init__(self, sequences: Iterable[SequenceRecord]):
        self._sequences = tuple(sequences)
        index: dict[str, int] = {}
        for idx, rec in enumerate(self._sequences):
            if rec.name in index:
                raise ReconciliationError(f"Duplicate contig {rec.name} in sequence dictionary")
            index[rec.name] = idx
        self._index = index

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, int]]) -> SequenceDictionary:
        return cls(SequenceRecord(name, int(length)) for name, length in pairs)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> SequenceDictionary:
        """Dictionary with unknown (zero) lengths, for when only order matters."""
        return cls(SequenceRecord(name, 0) for name in names)

    @property
    def sequences(self) -> tuple[SequenceRecord, ...]:
        return self._sequences

    @property
    def names(self) -> list[str]:
        return [rec.name for rec in self._sequences]

    def index_of(self, name: str) -> int | None:
        return self._index.get(name)

    def get(self, name: str) -> SequenceRecord | None:
        idx = self._index.get(name)
        return None if idx is None else self._sequences[idx]

    def __len__(self) -> int:
        return len(self._sequences)

    def __iter__(self) -> Iterator[SequenceRecord]:
        return iter(self._sequences)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SequenceDictionary):
            return NotImplemented
        return self._sequences == other._sequences

    def __hash__(self) -> int:
        return hash(self._sequences)

    def __repr__(self) -> str:
        return f"SequenceDictionary({len(self._sequences)} contigs)"
