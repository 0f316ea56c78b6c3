from svmerge.models.dictionary import SequenceDictionary, SequenceRecord
from svmerge.models.evidence import (
    MISSING_DATA,
    BafEvidence,
    DepthEvidence,
    LocusDepth,
    SplitReadEvidence,
)
from svmerge.models.header import SampleFilter, SourceHeader
from svmerge.models.locus import compare_loci, format_locus, locus_key

__all__ = [
    "SequenceDictionary",
    "SequenceRecord",
    "SampleFilter",
    "SourceHeader",
    "MISSING_DATA",
    "BafEvidence",
    "DepthEvidence",
    "LocusDepth",
    "SplitReadEvidence",
    "compare_loci",
    "format_locus",
    "locus_key",
]
