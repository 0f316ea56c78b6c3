"""Tab-delimited evidence files, optionally gzip-compressed.

A file starts with optional header lines, followed by one record per line:

    @HD	KD:baf	VN:1.0
    @SQ	SN:chr1	LN:248956422
    @SM	NA12878	NA12891
    chr1	10000	0.5	NA12878

``@SQ`` lines define the source's sequence dictionary and ``@SM`` lists its
samples. Read-depth files may instead name their samples in a
``#Chr	Start	End	<samples>`` column line. Other ``#`` lines are comments.
"""

from __future__ import annotations

import gzip
import logging
from pathlib import Path
from typing import IO, Any, Iterator, Sequence

from svmerge.exceptions import IncompatibleFeatureType, ParseError, SinkClosedError
from svmerge.kinds import FeatureKind
from svmerge.models.dictionary import SequenceDictionary, SequenceRecord
from svmerge.models.header import SourceHeader
from svmerge.registry import find_kind_for_path, strip_compression

logger = logging.getLogger(__name__)


def open_text(path: str | Path, mode: str = "rt", compression_level: int = 4) -> IO[str]:
    """Open a plain or gzip-compressed text file."""
    _, compressed = strip_compression(path)
    if compressed:
        if "w" in mode:
            return gzip.open(path, mode, compresslevel=compression_level)
        return gzip.open(path, mode)
    return open(path, mode.replace("t", ""))


def _tag_values(fields: list[str]) -> dict[str, str]:
    tags = {}
    for f in fields:
        if ":" in f:
            key, value = f.split(":", 1)
            tags[key] = value
    return tags


class FeatureReader:
    """Reads the header of an evidence file eagerly and its records lazily."""

    def __init__(self, path: str | Path, kind: FeatureKind | None = None):
        self.path = Path(path)
        if not self.path.exists():
            raise ParseError(f"File not found: {self.path}")
        self.kind = kind or find_kind_for_path(self.path)
        self._fh = open_text(self.path, "rt")
        self._lineno = 0
        self._pending: str | None = None
        self._closed = False
        try:
            self.header = self._read_header()
        except Exception:
            self.close()
            raise

    def _lines(self) -> Iterator[str]:
        try:
            for line in self._fh:
                self._lineno += 1
                yield line.rstrip("\r\n")
        except (UnicodeDecodeError, EOFError, OSError) as e:
            raise ParseError(f"{self.path}:{self._lineno + 1}: unreadable input: {e}") from e

    def _read_header(self) -> SourceHeader:
        kind_name = self.kind.name
        version = self.kind.version
        sequences: list[SequenceRecord] = []
        samples: list[str] | None = None

        for line in self._lines():
            if not line:
                continue
            fields = line.split("\t")
            if line.startswith("@HD"):
                tags = _tag_values(fields[1:])
                kind_name = tags.get("KD", kind_name)
                version = tags.get("VN", version)
            elif line.startswith("@SQ"):
                tags = _tag_values(fields[1:])
                try:
                    sequences.append(SequenceRecord(tags["SN"], int(tags.get("LN", "0"))))
                except (KeyError, ValueError) as e:
                    raise ParseError(f"{self.path}:{self._lineno}: bad @SQ line: {e}") from e
            elif line.startswith("@SM"):
                samples = (samples or []) + [s for s in fields[1:] if s]
            elif line.startswith("#Chr"):
                samples = [s for s in fields[3:] if s] or None
            elif line.startswith("#") or line.startswith("@"):
                continue
            else:
                self._pending = line
                break

        if kind_name != self.kind.name:
            raise IncompatibleFeatureType(
                f"{self.path} declares feature kind '{kind_name}' but its suffix "
                f"implies '{self.kind.name}'"
            )

        return SourceHeader(
            kind=kind_name,
            version=version,
            dictionary=SequenceDictionary(sequences) if sequences else None,
            sample_names=tuple(samples) if samples is not None else None,
        )

    def _decode(self, line: str) -> Any:
        try:
            return self.kind.decode(line.split("\t"), self.header)
        except (ValueError, IndexError) as e:
            raise ParseError(f"{self.path}:{self._lineno}: malformed {self.kind.name} record: {e}") from e

    def __iter__(self) -> Iterator[Any]:
        if self._pending is not None:
            line, self._pending = self._pending, None
            yield self._decode(line)
        for line in self._lines():
            if not line or line.startswith("#"):
                continue
            yield self._decode(line)

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._fh.close()

    def __enter__(self) -> FeatureReader:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class FeatureWriter:
    """Writes a header for the reconciled dictionary and samples, then records."""

    def __init__(
        self,
        path: str | Path,
        kind: FeatureKind,
        dictionary: SequenceDictionary,
        sample_names: Sequence[str] = (),
        compression_level: int = 4,
    ):
        self.path = Path(path)
        self.kind = kind
        self.records_written = 0
        self._closed = False
        self._fh = open_text(self.path, "wt", compression_level)
        try:
            self._write_header(dictionary, sample_names)
        except Exception:
            self._closed = True
            self._fh.close()
            raise

    def _write_header(self, dictionary: SequenceDictionary, sample_names: Sequence[str]) -> None:
        self._write_fields(["@HD", f"KD:{self.kind.name}", f"VN:{self.kind.version}"])
        for rec in dictionary:
            self._write_fields(["@SQ", f"SN:{rec.name}", f"LN:{rec.length}"])
        if self.kind.column_header is not None:
            self._write_fields(self.kind.column_header(sample_names))
        elif sample_names:
            self._write_fields(["@SM", *sample_names])

    def _write_fields(self, fields: list[str]) -> None:
        self._fh.write("\t".join(fields))
        self._fh.write("\n")

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, feature: Any) -> None:
        if self._closed:
            raise SinkClosedError(f"write() called on closed writer for {self.path}")
        self._write_fields(self.kind.encode(feature))
        self.records_written += 1

    def close(self) -> None:
        if self._closed:
            raise SinkClosedError(f"writer for {self.path} already closed")
        self._closed = True
        self._fh.close()
        logger.debug("Wrote %d %s records to %s", self.records_written, self.kind.name, self.path)
