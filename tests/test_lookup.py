import gzip
from pathlib import Path

import pytest

from csq_annotate.data.lookup import KeyValueEntry, build_lookup_table, parse_table_lines
from csq_annotate.errors import TableLoadError


def _write_table(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_build_lookup_table_sorts_keys(tmp_path):
    table_file = _write_table(tmp_path / "genes.tsv", "C\t3\nA\t1\nB\t2\n")

    table = build_lookup_table(table_file)

    keys = table.keys.tolist()
    assert keys == ["A", "B", "C"]
    assert all(left <= right for left, right in zip(keys, keys[1:]))
    assert len(table) == 3


def test_lookup_finds_exact_matches_only():
    table = build_lookup_table(["A\t1\n", "B\t2\n", "C\t3\n"])

    assert table.find("B") == KeyValueEntry(key="B", value="2")
    assert table.find("Z") is None
    assert table.find("") is None
    assert table.get("C") == "3"
    assert "A" in table
    assert "AB" not in table


def test_parse_table_lines_skips_short_rows_and_collapses_tabs():
    entries, skipped = parse_table_lines(
        [
            "ENSG1\tvalue one\textra\n",
            "lonely\n",
            "\n",
            "ENSG2\t\tcollapsed\r\n",
            "\t\t\n",
        ]
    )

    assert entries == [
        KeyValueEntry(key="ENSG1", value="value one"),
        KeyValueEntry(key="ENSG2", value="collapsed"),
    ]
    assert skipped == 3


def test_duplicate_keys_resolve_to_first_occurrence():
    table = build_lookup_table(["K\tfirst\n", "A\tx\n", "K\tsecond\n", "K\tthird\n"])

    assert table.get("K") == "first"
    assert [entry.value for entry in table if entry.key == "K"] == ["first", "second", "third"]


def test_build_lookup_table_reads_gzip(tmp_path):
    table_file = tmp_path / "genes.tsv.gz"
    with gzip.open(table_file, "wt", encoding="utf-8") as handle:
        handle.write("ENSG1\tpLI=0.9\n")

    table = build_lookup_table(table_file)

    assert table.get("ENSG1") == "pLI=0.9"


def test_build_lookup_table_missing_file(tmp_path):
    missing = tmp_path / "missing.tsv"

    with pytest.raises(TableLoadError) as exc_info:
        build_lookup_table(missing)

    assert exc_info.value.path == str(missing)


def test_build_lookup_table_without_usable_rows(tmp_path):
    table_file = _write_table(tmp_path / "empty.tsv", "only-one-column\n\n")

    with pytest.raises(TableLoadError, match="no usable rows"):
        build_lookup_table(table_file)


def test_build_lookup_table_keeps_rows_with_undecodable_bytes(tmp_path):
    table_file = tmp_path / "latin1.tsv"
    table_file.write_bytes(b"ENSG1\tcaf\xe9\nENSG2\tok\n")

    table = build_lookup_table(table_file)

    assert table.get("ENSG2") == "ok"
    assert table.get("ENSG1").encode("utf-8", "surrogateescape") == b"caf\xe9"


def test_key_width_tracks_longest_key():
    table = build_lookup_table(["A\t1\n", "ENSG00000141510\t2\n"])

    assert table.key_width == len("ENSG00000141510")
