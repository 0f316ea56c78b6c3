"""Evidence kinds: what each record type needs from the merge engine.

A FeatureKind bundles, for one record type, the file suffix it is stored
under, how to pull a sample subset out of a record, how to resolve records
that share a locus, and how to read and write it as tab-delimited text.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Sequence

from svmerge.engine.resolution import FieldwiseUnion, RejectDuplicates, Resolution
from svmerge.exceptions import MissingSampleHeader
from svmerge.models.evidence import (
    MISSING_DATA,
    BafEvidence,
    DepthEvidence,
    LocusDepth,
    SplitReadEvidence,
)
from svmerge.models.header import SampleFilter, SourceHeader


@dataclass(frozen=True)
class FeatureKind:
    name: str
    record_type: type
    suffix: str
    resolution: Resolution
    extract: Callable[[Any, SampleFilter, SourceHeader | None], Any | None]
    decode: Callable[[list[str], SourceHeader], Any]
    encode: Callable[[Any], list[str]]
    description: str = ""
    version: str = "1.0"
    # columns line written after the header, given the output sample names
    column_header: Callable[[Sequence[str]], list[str]] | None = None


# ── Sample extraction ─────────────────────────────────────────────

def extract_by_sample(feature: Any, samples: SampleFilter, header: SourceHeader | None) -> Any | None:
    """Keep a single-sample record iff its sample was requested."""
    return feature if feature.sample in samples else None


def extract_depth(
    feature: DepthEvidence,
    samples: SampleFilter,
    header: SourceHeader | None,
) -> DepthEvidence:
    """Re-index counts into the requested sample order.

    Samples the source does not have get MISSING_DATA, so that records from
    different sources line up slot for slot.
    """
    if header is None or not header.sample_names:
        raise MissingSampleHeader(
            "DepthEvidence feature source without a header. We don't know which samples we have."
        )
    counts = []
    for name in samples.names:
        idx = header.sample_index(name)
        counts.append(MISSING_DATA if idx is None else feature.counts[idx])
    return replace(feature, counts=tuple(counts))


# ── Text columns ──────────────────────────────────────────────────

def _decode_baf(fields: list[str], header: SourceHeader) -> BafEvidence:
    contig, position, value, sample = fields
    return BafEvidence(sample=sample, contig=contig, position=int(position), value=float(value))


def _encode_baf(f: BafEvidence) -> list[str]:
    return [f.contig, str(f.position), repr(f.value), f.sample]


_STRANDS = {"right": True, "left": False}


def _decode_split_read(fields: list[str], header: SourceHeader) -> SplitReadEvidence:
    contig, position, strand, count, sample = fields
    if strand not in _STRANDS:
        raise ValueError(f"strand must be 'left' or 'right', got '{strand}'")
    return SplitReadEvidence(
        sample=sample,
        contig=contig,
        position=int(position),
        count=int(count),
        strand=_STRANDS[strand],
    )


def _encode_split_read(f: SplitReadEvidence) -> list[str]:
    return [f.contig, str(f.position), f.strand_name, str(f.count), f.sample]


def _decode_locus_depth(fields: list[str], header: SourceHeader) -> LocusDepth:
    contig, position, sample, ref_call, a, c, g, t = fields
    return LocusDepth(
        sample=sample,
        contig=contig,
        position=int(position),
        ref_call=ref_call,
        depth_a=int(a),
        depth_c=int(c),
        depth_g=int(g),
        depth_t=int(t),
    )


def _encode_locus_depth(f: LocusDepth) -> list[str]:
    return [
        f.contig, str(f.position), f.sample, f.ref_call,
        str(f.depth_a), str(f.depth_c), str(f.depth_g), str(f.depth_t),
    ]


def _decode_depth(fields: list[str], header: SourceHeader) -> DepthEvidence:
    if len(fields) < 3:
        raise ValueError(f"expected at least 3 columns, got {len(fields)}")
    counts = tuple(MISSING_DATA if c in (".", "NA") else int(c) for c in fields[3:])
    if header.sample_names is not None and len(counts) != len(header.sample_names):
        raise ValueError(
            f"expected {len(header.sample_names)} counts, got {len(counts)}"
        )
    return DepthEvidence(contig=fields[0], start=int(fields[1]), end=int(fields[2]), counts=counts)


def _encode_depth(f: DepthEvidence) -> list[str]:
    return [f.contig, str(f.start), str(f.end), *(str(c) for c in f.counts)]


def _depth_columns(sample_names: Sequence[str]) -> list[str]:
    return ["#Chr", "Start", "End", *sample_names]


# ── Built-in kinds ────────────────────────────────────────────────

BAF = FeatureKind(
    name="baf",
    record_type=BafEvidence,
    suffix=".baf.txt",
    resolution=RejectDuplicates(
        key=lambda f: f.sample,
        describe=lambda f: f"sample {f.sample}",
    ),
    extract=extract_by_sample,
    decode=_decode_baf,
    encode=_encode_baf,
    description="B-allele frequency",
)

SPLIT_READ = FeatureKind(
    name="sr",
    record_type=SplitReadEvidence,
    suffix=".sr.txt",
    resolution=RejectDuplicates(
        key=lambda f: (f.sample, f.strand),
        describe=lambda f: f"sample {f.sample} ({f.strand_name})",
    ),
    extract=extract_by_sample,
    decode=_decode_split_read,
    encode=_encode_split_read,
    description="Split-read counts",
)

LOCUS_DEPTH = FeatureKind(
    name="ld",
    record_type=LocusDepth,
    suffix=".ld.txt",
    resolution=RejectDuplicates(
        key=lambda f: f.sample,
        describe=lambda f: f"sample {f.sample}",
    ),
    extract=extract_by_sample,
    decode=_decode_locus_depth,
    encode=_encode_locus_depth,
    description="Per-base locus depth",
)

READ_DEPTH = FeatureKind(
    name="rd",
    record_type=DepthEvidence,
    suffix=".rd.txt",
    resolution=FieldwiseUnion(
        slots=lambda f: f.counts,
        rebuild=lambda f, counts: replace(f, counts=counts),
        missing=MISSING_DATA,
    ),
    extract=extract_depth,
    decode=_decode_depth,
    encode=_encode_depth,
    description="Binned read depth",
    column_header=_depth_columns,
)

BUILTIN_KINDS = (BAF, SPLIT_READ, LOCUS_DEPTH, READ_DEPTH)
