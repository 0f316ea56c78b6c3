"""Per-source header: the metadata a source declares about its records."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property

from pydantic import BaseModel, ConfigDict

from svmerge.models.dictionary import SequenceDictionary


class SourceHeader(BaseModel):
    """Dictionary and sample names declared by one input source."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: str = ""
    version: str = "1.0"
    dictionary: SequenceDictionary | None = None
    sample_names: tuple[str, ...] | None = None

    @cached_property
    def sample_positions(self) -> dict[str, int]:
        return {name: idx for idx, name in enumerate(self.sample_names or ())}

    def sample_index(self, name: str) -> int | None:
        return self.sample_positions.get(name)


@dataclass(frozen=True)
class SampleFilter:
    """An ordered selection of sample names with fast membership tests."""
    names: tuple[str, ...]
    _members: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_members", frozenset(self.names))

    def __contains__(self, name: object) -> bool:
        return name in self._members

    def __len__(self) -> int:
        return len(self.names)
