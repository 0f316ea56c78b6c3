"""Source adapter: one sorted record stream plus its declared header."""

from __future__ import annotations

import logging
from typing import Generic, Iterable, TypeVar

from svmerge.exceptions import ExhaustedSource, UnknownContig
from svmerge.models.dictionary import SequenceDictionary
from svmerge.models.header import SourceHeader

logger = logging.getLogger(__name__)

F = TypeVar("F")

_END = object()


class FeatureSource(Generic[F]):
    """Wraps a sorted iterable of records with a single record of look-ahead.

    Contigs declared by the source's own header must all exist in the
    reconciled dictionary; that is checked here, once, rather than per record.
    """

    def __init__(
        self,
        records: Iterable[F],
        dictionary: SequenceDictionary,
        header: SourceHeader | None = None,
        name: str = "",
    ):
        self.dictionary = dictionary
        self.header = header
        self.name = name
        self._records = records
        self._iterator = iter(records)
        self._closed = False

        if header is not None and header.dictionary is not None:
            for rec in header.dictionary:
                if rec.name not in dictionary:
                    raise UnknownContig(rec.name, name)

        self._next = self._advance()

    def _advance(self):
        if self._closed:
            return _END
        return next(self._iterator, _END)

    def has_next(self) -> bool:
        return self._next is not _END

    def peek(self) -> F:
        if self._next is _END:
            raise ExhaustedSource(f"source {self.name or '<anonymous>'} is exhausted")
        return self._next

    def next(self) -> F:
        record = self.peek()
        self._next = self._advance()
        return record

    def __iter__(self):
        return self

    def __next__(self) -> F:
        if self._next is _END:
            raise StopIteration
        return self.next()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._next = _END
        closer = getattr(self._iterator, "close", None)
        if callable(closer):
            closer()
        if self._records is not self._iterator:
            closer = getattr(self._records, "close", None)
            if callable(closer):
                closer()
        logger.debug("Closed source %s", self.name)

    def __enter__(self) -> FeatureSource[F]:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
