"""Sequence-dictionary reconciliation and sample accumulation.

Sources may each declare a sequence dictionary. Before any records can be
compared, those dictionaries are folded into one: the smaller of each pair
must appear, in order, inside the larger one, and the larger one wins. This
lets a source that only covers chr20/chr21 merge against a reference that
defines every contig, while rejecting dictionaries whose contig order would
silently misorder the merge.
"""

from __future__ import annotations

import logging
from typing import Iterable

from svmerge.exceptions import MissingCoordinateSystem, ReconciliationError
from svmerge.models.dictionary import SequenceDictionary

logger = logging.getLogger(__name__)


def best_dictionary(
    new_dict: SequenceDictionary | None,
    cur_dict: SequenceDictionary | None,
) -> SequenceDictionary | None:
    """Return whichever dictionary is a consistent superset of the other.

    Raises ReconciliationError if the smaller dictionary's contigs are not an
    order-preserving subsequence of the larger one's.
    """
    if cur_dict is None:
        return new_dict
    if new_dict is None:
        return cur_dict

    if len(new_dict) <= len(cur_dict):
        small, large = new_dict, cur_dict
    else:
        small, large = cur_dict, new_dict

    last_idx = -1
    for rec in small:
        idx = large.index_of(rec.name)
        if idx is None:
            raise ReconciliationError(
                f"Contig {rec.name} not found in the larger dictionary"
            )
        if idx <= last_idx:
            raise ReconciliationError(
                f"Contig {rec.name} not in same order as in larger dictionary"
            )
        last_idx = idx

    logger.debug("Reconciled dictionaries of %d and %d contigs", len(small), len(large))
    return large


def reconcile_dictionaries(
    candidates: Iterable[SequenceDictionary | None],
) -> SequenceDictionary:
    """Fold all candidate dictionaries into one, ignoring absent ones."""
    dictionary: SequenceDictionary | None = None
    for candidate in candidates:
        dictionary = best_dictionary(candidate, dictionary)
    if dictionary is None:
        raise MissingCoordinateSystem(
            "No dictionary found. Provide one with --sequence-dictionary or --reference."
        )
    return dictionary


class SampleAccumulator:
    """Collects sample names from source headers during startup.

    Call freeze() once every header has been seen; the frozen tuple is what
    the merge phase uses.
    """

    def __init__(self) -> None:
        self._samples: set[str] = set()
        self._frozen: tuple[str, ...] | None = None

    def add(self, sample_names: Iterable[str] | None) -> None:
        if self._frozen is not None:
            raise RuntimeError("SampleAccumulator is frozen")
        if sample_names:
            self._samples.update(sample_names)

    def freeze(self) -> tuple[str, ...]:
        if self._frozen is None:
            self._frozen = tuple(sorted(self._samples))
        return self._frozen

    def __len__(self) -> int:
        return len(self._samples)
