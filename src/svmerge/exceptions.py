"""svmerge exceptions.

Every error is terminal for the current run. None of them are retried or
downgraded to warnings.
"""


class SVMergeError(Exception):
    """Base exception for svmerge."""


class MissingCoordinateSystem(SVMergeError):
    """Raised when no input supplies a sequence dictionary."""


class ReconciliationError(SVMergeError):
    """Raised when two sequence dictionaries are mutually inconsistent."""


class UnknownContig(ReconciliationError):
    """Raised when a contig is absent from the reconciled dictionary."""

    def __init__(self, contig: str, source: str = ""):
        self.contig = contig
        self.source = source
        where = f" (source {source})" if source else ""
        super().__init__(f"Contig {contig} not found in the sequence dictionary{where}")


class OutOfOrderInput(SVMergeError):
    """Raised when a single source yields records that are not sorted."""

    def __init__(self, contig: str, position: int, source: str = ""):
        self.contig = contig
        self.position = position
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"inputs are not sorted at {contig}:{position}{where}")


class UnsortedInput(SVMergeError):
    """Raised when records reach a same-locus merger out of dictionary order."""


class DuplicateLocusRecord(SVMergeError):
    """Raised when two records share a locus and a secondary key."""


class ConflictingSlotValue(SVMergeError):
    """Raised when two records supply a value for the same slot at one locus."""

    def __init__(self, slot: int, locus: str):
        self.slot = slot
        self.locus = locus
        super().__init__(f"Multiple sources for count of sample#{slot + 1} at {locus}")


class SchemaMismatch(SVMergeError):
    """Raised when same-locus vector records disagree on their slot count."""


class ExhaustedSource(SVMergeError):
    """Raised when next() is called on a source with no remaining records."""


class SinkClosedError(SVMergeError):
    """Raised when a sink is used after it has been closed."""


class ParseError(SVMergeError):
    """Raised when an evidence or dictionary file cannot be parsed."""


class UnknownFeatureFormat(SVMergeError):
    """Raised when no registered feature kind handles a path."""


class IncompatibleFeatureType(SVMergeError):
    """Raised when an input produces a different feature kind than the output."""


class MissingSampleHeader(SVMergeError):
    """Raised when sample extraction needs a header the source does not have."""
