"""Tests for same-locus resolution."""

import itertools

import pytest

from svmerge.engine.merging import MergingIterator
from svmerge.engine.resolution import MergerState, SameLocusMerger
from svmerge.engine.sinks import ListSink
from svmerge.engine.sources import FeatureSource
from svmerge.exceptions import (
    ConflictingSlotValue,
    DuplicateLocusRecord,
    SchemaMismatch,
    SinkClosedError,
    UnsortedInput,
)
from svmerge.kinds import BAF, READ_DEPTH, SPLIT_READ
from svmerge.models.evidence import MISSING_DATA, BafEvidence, DepthEvidence, SplitReadEvidence

MISS = MISSING_DATA


def resolve(dictionary, kind, features):
    sink = ListSink()
    merger = SameLocusMerger(dictionary, kind.resolution, sink)
    for f in features:
        merger.write(f)
    merger.close()
    return sink


def test_two_samples_same_locus_in_sample_order(dictionary):
    sources = [
        FeatureSource([BafEvidence("S2", "chr1", 100, 0.7)], dictionary),
        FeatureSource([BafEvidence("S1", "chr1", 100, 0.3)], dictionary),
    ]
    sink = ListSink()
    merger = SameLocusMerger(dictionary, BAF.resolution, sink)
    with MergingIterator(dictionary, sources) as merged:
        for feature in merged:
            merger.write(feature)
    merger.close()

    assert sink.features == [
        BafEvidence("S1", "chr1", 100, 0.3),
        BafEvidence("S2", "chr1", 100, 0.7),
    ]
    assert sink.closed


def test_distinct_keys_pass_through_unchanged(dictionary):
    group = [BafEvidence(s, "chr2", 7, v) for s, v in (("C", 0.1), ("A", 0.2), ("B", 0.3))]
    sink = resolve(dictionary, BAF, group)
    assert sink.features == sorted(group, key=lambda f: f.sample)
    assert set(sink.features) == set(group)


def test_duplicate_sample_at_locus(dictionary):
    group = [BafEvidence("S1", "chr1", 100, 0.3), BafEvidence("S1", "chr1", 100, 0.4)]
    with pytest.raises(DuplicateLocusRecord, match="sample S1 at chr1:100"):
        resolve(dictionary, BAF, group)


def test_same_sample_at_different_loci_is_fine(dictionary):
    group = [BafEvidence("S1", "chr1", 100, 0.3), BafEvidence("S1", "chr1", 101, 0.4)]
    assert len(resolve(dictionary, BAF, group).features) == 2


def test_split_reads_order_left_before_right(dictionary):
    right = SplitReadEvidence("S1", "chr1", 500, 3, True)
    left = SplitReadEvidence("S1", "chr1", 500, 4, False)
    other = SplitReadEvidence("S0", "chr1", 500, 1, True)
    sink = resolve(dictionary, SPLIT_READ, [right, left, other])
    assert sink.features == [other, left, right]


def test_split_read_duplicate_strand(dictionary):
    group = [SplitReadEvidence("S1", "chr1", 500, 3, True), SplitReadEvidence("S1", "chr1", 500, 9, True)]
    with pytest.raises(DuplicateLocusRecord, match="right"):
        resolve(dictionary, SPLIT_READ, group)


def test_depth_union(dictionary):
    a = DepthEvidence("chr1", 100, 200, (5, MISS))
    b = DepthEvidence("chr1", 100, 200, (MISS, 9))
    sink = resolve(dictionary, READ_DEPTH, [a, b])
    assert sink.features == [DepthEvidence("chr1", 100, 200, (5, 9))]
    # inputs are untouched
    assert a.counts == (5, MISS)


def test_depth_union_is_order_independent(dictionary):
    group = [
        DepthEvidence("chr1", 100, 200, (1, MISS, MISS, MISS)),
        DepthEvidence("chr1", 100, 200, (MISS, 2, MISS, MISS)),
        DepthEvidence("chr1", 100, 200, (MISS, MISS, 3, MISS)),
    ]
    results = {
        tuple(resolve(dictionary, READ_DEPTH, list(perm)).features)
        for perm in itertools.permutations(group)
    }
    assert results == {(DepthEvidence("chr1", 100, 200, (1, 2, 3, MISS)),)}


@pytest.mark.parametrize("order", [0, 1])
def test_depth_conflict(dictionary, order):
    group = [
        DepthEvidence("chr1", 100, 200, (5, MISS)),
        DepthEvidence("chr1", 100, 200, (6, 9)),
    ]
    if order:
        group.reverse()
    with pytest.raises(ConflictingSlotValue, match="sample#1 at chr1:100-200") as exc_info:
        resolve(dictionary, READ_DEPTH, group)
    assert exc_info.value.slot == 0


def test_depth_slot_count_mismatch(dictionary):
    group = [DepthEvidence("chr1", 100, 200, (5, MISS)), DepthEvidence("chr1", 100, 200, (MISS,))]
    with pytest.raises(SchemaMismatch):
        resolve(dictionary, READ_DEPTH, group)


def test_one_record_per_depth_group(dictionary):
    features = [
        DepthEvidence("chr1", 100, 200, (1, MISS)),
        DepthEvidence("chr1", 100, 200, (MISS, 1)),
        DepthEvidence("chr1", 200, 300, (2, MISS)),
        DepthEvidence("chr2", 100, 200, (MISS, 3)),
    ]
    sink = resolve(dictionary, READ_DEPTH, features)
    assert [f.counts for f in sink.features] == [(1, 1), (2, MISS), (MISS, 3)]


def test_unsorted_input_to_merger(dictionary):
    sink = ListSink()
    merger = SameLocusMerger(dictionary, BAF.resolution, sink)
    merger.write(BafEvidence("S1", "chr2", 100, 0.3))
    with pytest.raises(UnsortedInput):
        merger.write(BafEvidence("S1", "chr1", 100, 0.3))


def test_state_machine(dictionary):
    sink = ListSink()
    merger = SameLocusMerger(dictionary, BAF.resolution, sink)
    assert merger.state == MergerState.EMPTY

    merger.write(BafEvidence("S1", "chr1", 1, 0.3))
    assert merger.state == MergerState.ACCUMULATING
    assert sink.features == []

    merger.write(BafEvidence("S1", "chr1", 2, 0.3))
    assert merger.state == MergerState.ACCUMULATING
    assert len(sink.features) == 1

    merger.close()
    assert merger.state == MergerState.CLOSED
    assert len(sink.features) == 2
    assert merger.groups_resolved == 2

    with pytest.raises(SinkClosedError):
        merger.write(BafEvidence("S1", "chr1", 3, 0.3))
    with pytest.raises(SinkClosedError):
        merger.close()


def test_close_with_nothing_written(dictionary):
    sink = resolve(dictionary, READ_DEPTH, [])
    assert sink.features == []
    assert sink.closed


def test_state_passes_through_resolving_between_groups(dictionary):
    class StateSink(ListSink):
        def write(self, feature):
            seen.append(merger.state)
            super().write(feature)

    seen = []
    sink = StateSink()
    merger = SameLocusMerger(dictionary, BAF.resolution, sink)
    merger.write(BafEvidence("S1", "chr1", 1, 0.3))
    merger.write(BafEvidence("S1", "chr1", 2, 0.3))
    assert seen == [MergerState.RESOLVING]
    assert merger.state == MergerState.ACCUMULATING
    merger.close()
    assert seen == [MergerState.RESOLVING, MergerState.RESOLVING]
