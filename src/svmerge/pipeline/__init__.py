from svmerge.pipeline.walker import (
    MergeSummary,
    collect_dictionary_and_samples,
    inspect_inputs,
    merge_evidence,
    merge_sources,
)

__all__ = [
    "MergeSummary",
    "collect_dictionary_and_samples",
    "inspect_inputs",
    "merge_evidence",
    "merge_sources",
]
