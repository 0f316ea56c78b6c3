"""Merge walker: many sorted evidence sources in, one sorted stream out.

Startup inspects every input: the sequence dictionaries are reconciled and
the sample names accumulated, both once and up front. Traversal then pulls
records through the k-way merge, narrows each one to the requested samples,
and writes it to the output, by default through a same-locus merger so that
records sharing a locus are ordered and deduplicated.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from pathlib import Path
from typing import Iterable, Sequence

from pydantic import BaseModel, Field

from svmerge.config import config
from svmerge.engine.merging import MergingIterator
from svmerge.engine.reconcile import SampleAccumulator, best_dictionary, reconcile_dictionaries
from svmerge.engine.resolution import SameLocusMerger
from svmerge.engine.sinks import FeatureSink
from svmerge.engine.sources import FeatureSource
from svmerge.exceptions import IncompatibleFeatureType
from svmerge.formats.codecs import FeatureReader, FeatureWriter
from svmerge.formats.dictionary_files import load_dictionary
from svmerge.kinds import FeatureKind
from svmerge.models.dictionary import SequenceDictionary
from svmerge.models.header import SampleFilter, SourceHeader
from svmerge.models.locus import format_locus
from svmerge.registry import find_kind_for_path

logger = logging.getLogger(__name__)


class MergeSummary(BaseModel):
    """Counts reported at the end of a merge."""
    kind: str
    inputs: int
    output: str = ""
    records_read: int = 0
    records_dropped: int = 0
    records_written: int = 0
    dictionary_size: int = 0
    samples: list[str] = Field(default_factory=list)


class TraversalStats(BaseModel):
    records_read: int = 0
    records_dropped: int = 0


def collect_dictionary_and_samples(
    headers: Iterable[SourceHeader | None],
    *,
    dictionary: SequenceDictionary | None = None,
    reference: SequenceDictionary | None = None,
) -> tuple[SequenceDictionary, tuple[str, ...]]:
    """Reconcile every known dictionary and gather every declared sample.

    The explicit dictionary is considered first, then the reference, then
    each source header in order.
    """
    accumulator = SampleAccumulator()
    current = best_dictionary(reference, dictionary)
    candidates: list[SequenceDictionary | None] = [current]
    for header in headers:
        if header is None:
            continue
        candidates.append(header.dictionary)
        accumulator.add(header.sample_names)
    return reconcile_dictionaries(candidates), accumulator.freeze()


def check_input_kinds(inputs: Sequence[str | Path], output_kind: FeatureKind) -> None:
    """Every input must produce the same kind of feature as the output."""
    for path in inputs:
        input_kind = find_kind_for_path(path)
        if input_kind.name != output_kind.name:
            raise IncompatibleFeatureType(
                f"Incompatible feature input {path} produces features of type "
                f"{input_kind.record_type.__name__} rather than features of type "
                f"{output_kind.record_type.__name__} as dictated by the output path"
            )


def merge_sources(
    dictionary: SequenceDictionary,
    sources: Sequence[FeatureSource],
    sink: FeatureSink,
    kind: FeatureKind,
    *,
    samples: SampleFilter | None = None,
    resolve_same_locus: bool = True,
    progress_interval: int | None = None,
) -> TraversalStats:
    """Merge already-opened sources into a sink, then close the sink.

    Sources are closed on every exit path. The sink is closed only when the
    merge succeeds, because closing flushes the last same-locus group.
    """
    output: FeatureSink = (
        SameLocusMerger(dictionary, kind.resolution, sink) if resolve_same_locus else sink
    )
    stats = TraversalStats()
    with MergingIterator(dictionary, sources) as iterator:
        for entry in iterator.entries():
            stats.records_read += 1
            feature = entry.feature
            if samples is not None:
                feature = kind.extract(feature, samples, entry.header)
                if feature is None:
                    stats.records_dropped += 1
                    continue
            output.write(feature)
            if progress_interval and stats.records_read % progress_interval == 0:
                logger.info(
                    "Processed %d %s records, at %s",
                    stats.records_read, kind.name, format_locus(entry.feature),
                )
    output.close()
    return stats


def inspect_inputs(
    inputs: Sequence[str | Path],
    *,
    dictionary_path: str | Path | None = None,
    reference_path: str | Path | None = None,
) -> tuple[SequenceDictionary, tuple[str, ...]]:
    """Read only the headers of the inputs and reconcile them."""
    explicit = load_dictionary(dictionary_path) if dictionary_path else None
    reference = load_dictionary(reference_path) if reference_path else None
    headers = []
    for path in inputs:
        with FeatureReader(path) as reader:
            headers.append(reader.header)
    return collect_dictionary_and_samples(headers, dictionary=explicit, reference=reference)


def _close_if_open(writer: FeatureWriter) -> None:
    if not writer.closed:
        writer.close()


def merge_evidence(
    inputs: Sequence[str | Path],
    output: str | Path,
    *,
    sample_names: Sequence[str] | None = None,
    dictionary_path: str | Path | None = None,
    reference_path: str | Path | None = None,
    compression_level: int | None = None,
    resolve_same_locus: bool | None = None,
) -> MergeSummary:
    """Merge sorted evidence files into one sorted output file.

    If ``sample_names`` is empty, every sample named in an input header is
    kept; if no header names any samples, records are not filtered at all.
    """
    if compression_level is None:
        compression_level = config.merge.compression_level
    if resolve_same_locus is None:
        resolve_same_locus = config.merge.resolve_same_locus

    kind = find_kind_for_path(output)
    check_input_kinds(inputs, kind)

    explicit = load_dictionary(dictionary_path) if dictionary_path else None
    reference = load_dictionary(reference_path) if reference_path else None

    with ExitStack() as stack:
        readers = [stack.enter_context(FeatureReader(path, kind)) for path in inputs]
        dictionary, header_samples = collect_dictionary_and_samples(
            (r.header for r in readers), dictionary=explicit, reference=reference,
        )
        requested = tuple(dict.fromkeys(sample_names)) if sample_names else header_samples
        samples = SampleFilter(requested) if requested else None
        logger.info(
            "Merging %d %s inputs over %d contigs, %d samples",
            len(readers), kind.name, len(dictionary), len(requested),
        )

        sources = [
            FeatureSource(reader, dictionary, reader.header, name=str(reader.path))
            for reader in readers
        ]
        writer = FeatureWriter(output, kind, dictionary, requested, compression_level)
        stack.callback(_close_if_open, writer)

        stats = merge_sources(
            dictionary, sources, writer, kind,
            samples=samples,
            resolve_same_locus=resolve_same_locus,
            progress_interval=config.merge.progress_interval,
        )

    summary = MergeSummary(
        kind=kind.name,
        inputs=len(inputs),
        output=str(output),
        records_read=stats.records_read,
        records_dropped=stats.records_dropped,
        records_written=writer.records_written,
        dictionary_size=len(dictionary),
        samples=list(requested),
    )
    logger.info(
        "Merged %d records into %d (%d dropped by sample selection)",
        summary.records_read, summary.records_written, summary.records_dropped,
    )
    return summary
