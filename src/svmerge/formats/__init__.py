from svmerge.formats.codecs import FeatureReader, FeatureWriter, open_text
from svmerge.formats.dictionary_files import (
    dictionary_from_fasta,
    load_dictionary,
    parse_sequence_dictionary,
)

__all__ = [
    "FeatureReader",
    "FeatureWriter",
    "open_text",
    "dictionary_from_fasta",
    "load_dictionary",
    "parse_sequence_dictionary",
]
