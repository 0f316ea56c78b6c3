"""K-way merge of sorted feature sources.

A min-heap holds at most one record per source. Each pop refills the heap
from the popped record's source, and the refill is checked against the popped
record: a source that goes backwards is unsorted, which the merge cannot
repair.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Generic, Iterable, Iterator, TypeVar

from svmerge.exceptions import ExhaustedSource, OutOfOrderInput
from svmerge.models.dictionary import SequenceDictionary
from svmerge.models.header import SourceHeader
from svmerge.models.locus import locus_key
from svmerge.engine.sources import FeatureSource

logger = logging.getLogger(__name__)

F = TypeVar("F")


@dataclass(order=True)
class MergeEntry(Generic[F]):
    """A heap slot: a record and the source it was drawn from."""
    key: tuple[int, int, int]
    seq: int
    feature: F = field(compare=False)
    source: FeatureSource[F] = field(compare=False)

    @property
    def header(self) -> SourceHeader | None:
        return self.source.header


class MergingIterator(Generic[F]):
    """Yields the records of all sources in dictionary order.

    Single pass and not restartable. Use as a context manager (or call
    close()) so every source is released, drained or not.
    """

    def __init__(self, dictionary: SequenceDictionary, sources: Iterable[FeatureSource[F]]):
        self.dictionary = dictionary
        self.sources = list(sources)
        self._heap: list[MergeEntry[F]] = []
        self._counter = itertools.count()
        try:
            for source in self.sources:
                self._add_entry(source)
        except BaseException:
            self.close()
            raise
        logger.debug("Merging %d sources (%d non-empty)", len(self.sources), len(self._heap))

    def _add_entry(self, source: FeatureSource[F]) -> MergeEntry[F] | None:
        if not source.has_next():
            return None
        feature = source.next()
        entry = MergeEntry(
            key=locus_key(feature, self.dictionary, source.name),
            seq=next(self._counter),
            feature=feature,
            source=source,
        )
        heapq.heappush(self._heap, entry)
        return entry

    def has_next(self) -> bool:
        return bool(self._heap)

    def next_entry(self) -> MergeEntry[F]:
        if not self._heap:
            raise ExhaustedSource("merge iterator is exhausted")
        entry = heapq.heappop(self._heap)
        new_entry = self._add_entry(entry.source)
        if new_entry is not None and new_entry.key < entry.key:
            feature = new_entry.feature
            raise OutOfOrderInput(feature.contig, feature.start, entry.source.name)
        return entry

    def entries(self) -> Iterator[MergeEntry[F]]:
        while self._heap:
            yield self.next_entry()

    def __iter__(self) -> Iterator[F]:
        return self

    def __next__(self) -> F:
        if not self._heap:
            raise StopIteration
        return self.next_entry().feature

    def close(self) -> None:
        self._heap.clear()
        for source in self.sources:
            source.close()

    def __enter__(self) -> MergingIterator[F]:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
