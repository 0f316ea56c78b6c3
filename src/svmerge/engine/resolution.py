"""Same-locus resolution.

The merge orders records by locus only; records that share a locus arrive in
heap order, which is not deterministic. SameLocusMerger buffers each run of
same-locus records and hands it to a resolution strategy, which imposes a
secondary order and either forwards the records or combines them.

There are two strategies, and each record kind picks one:

* RejectDuplicates -- point evidence keyed by sample (and sometimes strand).
  Records are forwarded in key order; two records with the same key fail.
* FieldwiseUnion -- vector evidence with one slot per sample. The group is
  folded into one record slot by slot; two non-missing values for the same
  slot fail.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Sequence, TypeVar, Union

from svmerge.exceptions import (
    ConflictingSlotValue,
    DuplicateLocusRecord,
    SchemaMismatch,
    SinkClosedError,
    UnsortedInput,
)
from svmerge.models.dictionary import SequenceDictionary
from svmerge.models.evidence import MISSING_DATA
from svmerge.models.locus import compare_loci, format_locus
from svmerge.engine.sinks import FeatureSink

logger = logging.getLogger(__name__)

F = TypeVar("F")


@dataclass(frozen=True)
class RejectDuplicates(Generic[F]):
    """Forward same-locus records ordered by ``key``; equal keys are an error."""
    key: Callable[[F], Any]
    describe: Callable[[F], str] = repr

    def resolve(self, group: Sequence[F], sink: FeatureSink[F]) -> None:
        if not group:
            return
        ordered = sorted(group, key=self.key)
        last = ordered[0]
        last_key = self.key(last)
        for feature in ordered[1:]:
            feature_key = self.key(feature)
            if feature_key == last_key:
                raise DuplicateLocusRecord(
                    f"Two instances of {type(feature).__name__} for "
                    f"{self.describe(feature)} at {format_locus(feature)}"
                )
            sink.write(last)
            last, last_key = feature, feature_key
        sink.write(last)


@dataclass(frozen=True)
class FieldwiseUnion(Generic[F]):
    """Fold same-locus vector records into one record, slot by slot.

    ``slots`` reads a record's slot vector and ``rebuild`` makes a new record
    from a template record and a merged vector. The inputs are not modified.
    """
    slots: Callable[[F], Sequence[Any]]
    rebuild: Callable[[F, tuple], F]
    missing: Any = MISSING_DATA

    def merge(self, group: Sequence[F]) -> F:
        first = group[0]
        merged = list(self.slots(first))
        for feature in group[1:]:
            values = self.slots(feature)
            if len(values) != len(merged):
                raise SchemaMismatch(
                    f"All records at {format_locus(first)} ought to have the same sample "
                    f"list, but found {len(merged)} and {len(values)} slots"
                )
            for idx, value in enumerate(values):
                if value == self.missing:
                    continue
                if merged[idx] == self.missing:
                    merged[idx] = value
                else:
                    raise ConflictingSlotValue(idx, format_locus(first))
        return self.rebuild(first, tuple(merged))

    def resolve(self, group: Sequence[F], sink: FeatureSink[F]) -> None:
        if not group:
            return
        sink.write(self.merge(group))


Resolution = Union[RejectDuplicates, FieldwiseUnion]


class MergerState(enum.StrEnum):
    EMPTY = "empty"
    ACCUMULATING = "accumulating"
    RESOLVING = "resolving"
    CLOSED = "closed"


class SameLocusMerger(Generic[F]):
    """A sink that resolves each same-locus group before passing it on.

    Input must arrive in non-decreasing locus order. close() flushes the last
    group and closes the downstream sink; the merger cannot be used after.
    """

    def __init__(
        self,
        dictionary: SequenceDictionary,
        resolution: Resolution,
        output_sink: FeatureSink[F],
    ):
        self.dictionary = dictionary
        self.resolution = resolution
        self.output_sink = output_sink
        self.state = MergerState.EMPTY
        self._group: list[F] = []
        self._current: F | None = None
        self.groups_resolved = 0

    def write(self, feature: F) -> None:
        if self.state == MergerState.CLOSED:
            raise SinkClosedError("write() called on a closed same-locus merger")
        if self._current is not None:
            cmp = compare_loci(self._current, feature, self.dictionary)
            if cmp > 0:
                raise UnsortedInput(
                    f"features not presented in dictionary order: {format_locus(feature)} "
                    f"after {format_locus(self._current)}"
                )
            if cmp < 0:
                self._resolve_group()
        if not self._group:
            self._current = feature
        self._group.append(feature)
        self.state = MergerState.ACCUMULATING

    def _resolve_group(self) -> None:
        if not self._group:
            return
        self.state = MergerState.RESOLVING
        group, self._group = self._group, []
        self.resolution.resolve(group, self.output_sink)
        self.groups_resolved += 1
        self._current = None

    def close(self) -> None:
        if self.state == MergerState.CLOSED:
            raise SinkClosedError("close() called on a closed same-locus merger")
        self._resolve_group()
        self.state = MergerState.CLOSED
        self.output_sink.close()
        logger.debug("Same-locus merger closed after %d groups", self.groups_resolved)
