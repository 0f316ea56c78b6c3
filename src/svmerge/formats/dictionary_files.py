"""Load a sequence dictionary from a .dict file or a FASTA reference."""

from __future__ import annotations

import logging
from pathlib import Path

from Bio import SeqIO

from svmerge.exceptions import ParseError
from svmerge.formats.codecs import open_text
from svmerge.models.dictionary import SequenceDictionary, SequenceRecord
from svmerge.registry import strip_compression

logger = logging.getLogger(__name__)

FASTA_SUFFIXES = (".fa", ".fasta", ".fna", ".fas")
DICT_SUFFIXES = (".dict", ".sam")


def parse_sequence_dictionary(path: Path | str) -> SequenceDictionary:
    """Parse the @SQ lines of a SAM-style .dict file."""
    path = Path(path)
    if not path.exists():
        raise ParseError(f"File not found: {path}")

    sequences: list[SequenceRecord] = []
    with open_text(path, "rt") as fh:
        for lineno, line in enumerate(fh, start=1):
            if not line.startswith("@SQ"):
                continue
            tags = dict(
                field.split(":", 1) for field in line.rstrip("\r\n").split("\t")[1:] if ":" in field
            )
            if "SN" not in tags or "LN" not in tags:
                raise ParseError(f"Line {lineno}: @SQ line needs SN and LN tags")
            try:
                length = int(tags["LN"])
            except ValueError:
                raise ParseError(f"Line {lineno}: LN must be an integer, got '{tags['LN']}'")
            sequences.append(SequenceRecord(tags["SN"], length))

    if not sequences:
        raise ParseError(f"No @SQ lines in {path}")
    return SequenceDictionary(sequences)


def dictionary_from_fasta(path: Path | str) -> SequenceDictionary:
    """Build a dictionary from the record names and lengths of a FASTA file."""
    path = Path(path)
    if not path.exists():
        raise ParseError(f"File not found: {path}")

    with open_text(path, "rt") as fh:
        sequences = [SequenceRecord(record.id, len(record.seq)) for record in SeqIO.parse(fh, "fasta")]
    if not sequences:
        raise ParseError(f"No sequences in FASTA file {path}")
    logger.debug("Read %d contigs from reference %s", len(sequences), path)
    return SequenceDictionary(sequences)


def load_dictionary(path: Path | str) -> SequenceDictionary:
    """Load a dictionary from a .dict file or a FASTA reference, by suffix.

    For a FASTA reference, a sibling .dict file (ref.dict next to ref.fa) is
    preferred over reading the sequences.
    """
    path = Path(path)
    name, _ = strip_compression(path)
    if name.endswith(DICT_SUFFIXES):
        return parse_sequence_dictionary(path)
    if name.endswith(FASTA_SUFFIXES):
        base = path.name[: len(Path(name).name)]
        sibling = path.with_name(base.rsplit(".", 1)[0] + ".dict")
        if sibling.exists():
            return parse_sequence_dictionary(sibling)
        return dictionary_from_fasta(path)
    raise ParseError(f"Cannot load a sequence dictionary from {path}; expected .dict or FASTA")
