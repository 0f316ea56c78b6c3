"""CLI integration tests."""

import logging

from typer.testing import CliRunner

from svmerge.cli.main import app
from svmerge.formats.codecs import FeatureReader

runner = CliRunner()

REF_DICT = "@SQ\tSN:chr20\tLN:64444167\n@SQ\tSN:chr21\tLN:46709983\n"


def _write(path, text):
    path.write_text(text)
    return str(path)


def test_merge(tmp_path):
    ref = _write(tmp_path / "ref.dict", REF_DICT)
    a = _write(tmp_path / "a.baf.txt", "chr20\t10\t0.5\tS1\nchr21\t3\t0.1\tS1\n")
    b = _write(tmp_path / "b.baf.txt", "chr20\t10\t0.25\tS2\n")
    out = tmp_path / "out.baf.txt"

    result = runner.invoke(app, [
        "merge", "-F", a, "-F", b, "-O", str(out), "--sequence-dictionary", ref,
    ])
    assert result.exit_code == 0, result.output
    assert "Merged 3" in result.output

    with FeatureReader(out) as reader:
        assert [(r.contig, r.position, r.sample) for r in reader] == [
            ("chr20", 10, "S1"), ("chr20", 10, "S2"), ("chr21", 3, "S1"),
        ]


def test_merge_with_sample_list(tmp_path):
    ref = _write(tmp_path / "ref.dict", REF_DICT)
    a = _write(tmp_path / "a.baf.txt", "chr20\t10\t0.5\tS1\nchr20\t11\t0.5\tS2\n")
    samples = _write(tmp_path / "samples.list", "# keep\nS2\n")
    out = tmp_path / "out.baf.txt"

    result = runner.invoke(app, [
        "merge", "-F", a, "-O", str(out), "--sequence-dictionary", ref, "--sample-names", samples,
    ])
    assert result.exit_code == 0, result.output
    assert "dropped" in result.output
    with FeatureReader(out) as reader:
        assert [r.sample for r in reader] == ["S2"]


def test_merge_unsorted_input_fails(tmp_path):
    ref = _write(tmp_path / "ref.dict", REF_DICT)
    a = _write(tmp_path / "a.baf.txt", "chr20\t50\t0.5\tS1\nchr20\t40\t0.5\tS1\n")
    result = runner.invoke(app, ["merge", "-F", a, "-O", str(tmp_path / "o.baf.txt"), "--sequence-dictionary", ref])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_merge_without_dictionary_fails(tmp_path):
    a = _write(tmp_path / "a.baf.txt", "chr20\t50\t0.5\tS1\n")
    result = runner.invoke(app, ["merge", "-F", a, "-O", str(tmp_path / "o.baf.txt")])
    assert result.exit_code == 1
    assert "No dictionary found" in result.output


def test_dictionary_command(tmp_path):
    ref = _write(tmp_path / "ref.dict", REF_DICT)
    a = _write(tmp_path / "a.rd.txt", "#Chr\tStart\tEnd\tS1\tS2\nchr21\t0\t100\t1\t2\n")
    result = runner.invoke(app, ["dictionary", "-F", a, "--sequence-dictionary", ref])
    assert result.exit_code == 0, result.output
    assert "chr20" in result.output
    assert "chr21" in result.output
    assert "S1, S2" in result.output


def test_kinds_command():
    result = runner.invoke(app, ["kinds"])
    assert result.exit_code == 0
    assert ".baf.txt" in result.output
    assert "FieldwiseUnion" in result.output


def test_merge_undecodable_input_reports_error(tmp_path):
    ref = _write(tmp_path / "ref.dict", REF_DICT)
    a = tmp_path / "a.baf.txt"
    a.write_bytes(b"chr20\t10\t0.5\tS\xff\xfe1\n")
    result = runner.invoke(app, ["merge", "-F", str(a), "-O", str(tmp_path / "o.baf.txt"), "--sequence-dictionary", ref])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_debug_env_enables_debug_logging(monkeypatch):
    from svmerge.cli import main
    from svmerge.config import _build_config

    monkeypatch.setenv("DEBUG", "1")
    monkeypatch.setattr(main, "config", _build_config())
    levels = []
    monkeypatch.setattr(main.logging, "basicConfig", lambda **kw: levels.append(kw["level"]))
    main._setup_logging(verbose=False)
    assert levels == [logging.DEBUG]
