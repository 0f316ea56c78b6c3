import pytest

from svmerge.models.dictionary import SequenceDictionary


@pytest.fixture()
def dictionary() -> SequenceDictionary:
    return SequenceDictionary.from_pairs([
        ("chr1", 248956422),
        ("chr2", 242193529),
        ("chr9", 138394717),
        ("chr10", 133797422),
        ("chr20", 64444167),
        ("chr21", 46709983),
    ])


@pytest.fixture()
def write_lines(tmp_path):
    """Write tab-joined rows (or raw strings) to a file under tmp_path."""
    def _write(name: str, rows: list) -> str:
        path = tmp_path / name
        lines = [r if isinstance(r, str) else "\t".join(str(f) for f in r) for r in rows]
        path.write_text("\n".join(lines) + "\n")
        return str(path)
    return _write
