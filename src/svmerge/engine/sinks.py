"""Output sink interface and an in-memory implementation."""

from __future__ import annotations

from typing import Generic, Protocol, TypeVar

from svmerge.exceptions import SinkClosedError

F = TypeVar("F")
F_contra = TypeVar("F_contra", contravariant=True)


class FeatureSink(Protocol[F_contra]):
    def write(self, feature: F_contra) -> None: ...

    def close(self) -> None: ...


class ListSink(Generic[F]):
    """Collects written features in a list."""

    def __init__(self) -> None:
        self.features: list[F] = []
        self.closed = False

    def write(self, feature: F) -> None:
        if self.closed:
            raise SinkClosedError("write() called on a closed sink")
        self.features.append(feature)

    def close(self) -> None:
        if self.closed:
            raise SinkClosedError("sink already closed")
        self.closed = True
