from svmerge.engine.merging import MergeEntry, MergingIterator
from svmerge.engine.reconcile import SampleAccumulator, best_dictionary, reconcile_dictionaries
from svmerge.engine.resolution import (
    FieldwiseUnion,
    MergerState,
    RejectDuplicates,
    Resolution,
    SameLocusMerger,
)
from svmerge.engine.sinks import FeatureSink, ListSink
from svmerge.engine.sources import FeatureSource

__all__ = [
    "FeatureSink",
    "FeatureSource",
    "FieldwiseUnion",
    "ListSink",
    "MergeEntry",
    "MergerState",
    "MergingIterator",
    "RejectDuplicates",
    "Resolution",
    "SameLocusMerger",
    "SampleAccumulator",
    "best_dictionary",
    "reconcile_dictionaries",
]
