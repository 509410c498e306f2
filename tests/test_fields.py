import pytest

from csq_annotate.data.fields import FieldList, split_fields


def test_split_fields_keeps_empty_tokens():
    fields = split_fields(",a,,b,", ",")

    assert len(fields) == 5
    assert fields.tokens() == ["", "a", "", "b", ""]
    assert fields.span(1) == (1, 1)


def test_split_fields_without_delimiter_returns_whole_buffer():
    fields = split_fields("T1|x|y", ",")

    assert len(fields) == 1
    assert fields[0] == "T1|x|y"


def test_split_fields_on_empty_buffer_yields_one_empty_span():
    fields = split_fields("", "|")

    assert len(fields) == 1
    assert fields[0] == ""


@pytest.mark.parametrize("text", ["a", "a|b", "||", "a|b|c|d|e|f|g|h|i|j|k"])
def test_split_fields_token_count_is_delimiters_plus_one(text):
    assert len(split_fields(text, "|")) == text.count("|") + 1


def test_reused_field_list_only_exposes_latest_tokens():
    reuse: FieldList[str] = FieldList(capacity=2)

    first = split_fields("a|b|c|d|e", "|", reuse=reuse)
    assert first is reuse
    assert reuse.capacity >= 5
    grown = reuse.capacity

    split_fields("x|y", "|", reuse=reuse)

    assert len(reuse) == 2
    assert list(reuse) == ["x", "y"]
    assert reuse.capacity == grown  # never shrinks
    with pytest.raises(IndexError):
        reuse[2]


def test_split_fields_supports_bytes():
    fields = split_fields(b"GENE1\tANNOT", b"\t")

    assert fields.tokens() == [b"GENE1", b"ANNOT"]


def test_split_fields_rejects_multi_character_delimiter():
    with pytest.raises(ValueError):
        split_fields("a::b", "::")
