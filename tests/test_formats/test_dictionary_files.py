"""Tests for .dict and FASTA dictionary loading."""

import pytest

from svmerge.exceptions import ParseError
from svmerge.formats.dictionary_files import (
    dictionary_from_fasta,
    load_dictionary,
    parse_sequence_dictionary,
)

DICT_TEXT = (
    "@HD\tVN:1.6\n"
    "@SQ\tSN:chr20\tLN:64444167\tM5:abc\tUR:file:/ref.fa\n"
    "@SQ\tSN:chr21\tLN:46709983\n"
)


def test_parse_dict(tmp_path):
    path = tmp_path / "ref.dict"
    path.write_text(DICT_TEXT)
    d = parse_sequence_dictionary(path)
    assert d.names == ["chr20", "chr21"]
    assert d.get("chr21").length == 46709983


def test_dict_without_length(tmp_path):
    path = tmp_path / "bad.dict"
    path.write_text("@SQ\tSN:chr1\n")
    with pytest.raises(ParseError, match="SN and LN"):
        parse_sequence_dictionary(path)


def test_dict_without_sequences(tmp_path):
    path = tmp_path / "empty.dict"
    path.write_text("@HD\tVN:1.6\n")
    with pytest.raises(ParseError, match="No @SQ lines"):
        parse_sequence_dictionary(path)


def test_dictionary_from_fasta(tmp_path):
    path = tmp_path / "ref.fa"
    path.write_text(">chrA description\nACGTACGT\nACG\n>chrB\nGG\n")
    d = dictionary_from_fasta(path)
    assert d.names == ["chrA", "chrB"]
    assert [rec.length for rec in d] == [11, 2]


def test_load_dictionary_prefers_sibling_dict(tmp_path):
    (tmp_path / "ref.fasta").write_text(">chrA\nACGT\n")
    (tmp_path / "ref.dict").write_text(DICT_TEXT)
    assert load_dictionary(tmp_path / "ref.fasta").names == ["chr20", "chr21"]


def test_load_dictionary_from_fasta_without_sibling(tmp_path):
    (tmp_path / "ref.fa").write_text(">chrA\nACGT\n")
    assert load_dictionary(tmp_path / "ref.fa").names == ["chrA"]


def test_load_dictionary_unknown_suffix(tmp_path):
    path = tmp_path / "ref.txt"
    path.write_text("chr1\n")
    with pytest.raises(ParseError, match="expected .dict or FASTA"):
        load_dictionary(path)
