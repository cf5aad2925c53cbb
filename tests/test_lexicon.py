import pytest

from floresta.classify.lexicon import LexiconRecord, load, load_lexicon, read_records
from floresta.errors import LexiconFormatError

HEADER = "Attribute,Type,Class,ClassificationType\n"


def _write(tmp_path, body, name="lexico_v3.0.txt"):
    path = tmp_path / name
    path.write_text(body, encoding="utf-8")
    return path


def test_partitions_by_documented_polarity(tmp_path):
    path = _write(tmp_path, HEADER + "bom,ADJ,1,M\nruim,ADJ,-1,M\nnormal,ADJ,0,A\n")

    positive, neutral, negative = load(path)

    assert positive == ["bom"]
    assert neutral == ["normal"]
    assert negative == ["ruim"]


def test_header_only_lexicon_is_empty(tmp_path):
    path = _write(tmp_path, HEADER)

    assert load(path) == ([], [], [])
    assert load_lexicon(path).records == ()


def test_missing_lexicon_is_created_empty(tmp_path):
    path = tmp_path / "oplexicon_v3.0" / "lexico_v3.0.txt"

    assert load(path) == ([], [], [])
    assert path.is_file()
    assert path.stat().st_size == 0


def test_missing_lexicon_can_be_fatal(tmp_path):
    path = tmp_path / "nope.txt"

    with pytest.raises(FileNotFoundError):
        load_lexicon(path, create_missing=False)
    assert not path.exists()


def test_wrong_field_count_is_a_format_error(tmp_path):
    path = _write(tmp_path, HEADER + "bom,ADJ,1,M\nruim,ADJ,-1,M,extra\n")

    with pytest.raises(LexiconFormatError, match="expected 4 fields"):
        load(path)


def test_short_header_is_a_format_error(tmp_path):
    path = _write(tmp_path, "Attribute,Type\nbom,ADJ\n")

    with pytest.raises(LexiconFormatError):
        read_records(path)


def test_invalid_utf8_is_a_format_error(tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes(HEADER.encode() + "ação,ADJ,1,M\n".encode("latin-1"))

    with pytest.raises(LexiconFormatError):
        load(path)


def test_bare_quote_in_unquoted_field_is_a_format_error(tmp_path):
    path = _write(tmp_path, HEADER + "bom,ADJ,1,M\nbo\"m,ADJ,1,M\n")

    with pytest.raises(LexiconFormatError, match="bare"):
        load(path)


def test_text_after_closing_quote_is_a_format_error(tmp_path):
    path = _write(tmp_path, HEADER + "\"bom\"x,ADJ,1,M\n")

    with pytest.raises(LexiconFormatError):
        load(path)


def test_quoted_fields_are_accepted(tmp_path):
    path = _write(tmp_path, HEADER + "\"muito bom, mesmo\",ADJ,1,M\n\"diz \"\"oi\"\"\",VB,0,A\n")

    positive, neutral, _ = load(path)

    assert positive == ["muito bom, mesmo"]
    assert neutral == ['diz "oi"']


def test_unknown_class_and_blank_attribute_are_dropped(tmp_path):
    path = _write(tmp_path, HEADER + "talvez,ADV,2,M\n,ADJ,1,M\nlegal,ADJ,1,A\n\n")

    lexicon = load_lexicon(path)

    assert lexicon.training.as_tuple() == (["legal"], [], [])
    assert len(lexicon.records) == 3
    assert "" not in lexicon.index
    assert lexicon.index["talvez"].cls == "2"


def test_order_kept_and_last_duplicate_wins_in_index(tmp_path):
    path = _write(
        tmp_path,
        HEADER + "legal,ADJ,1,A\nfeio,ADJ,-1,M\nbom,ADJ,1,M\nbom,NOUN,0,A\nlindo,ADJ,1,A\n",
    )

    lexicon = load_lexicon(path)

    assert lexicon.training.positive == ["legal", "bom", "lindo"]
    assert lexicon.training.neutral == ["bom"]
    assert lexicon.training.negative == ["feio"]
    assert lexicon.index["bom"] == LexiconRecord("bom", "NOUN", "0", "A")


def test_named_header_columns_in_any_order(tmp_path):
    path = _write(tmp_path, "Class,attribute,ClassificationType,TYPE\n1,bom,M,ADJ\n-1,ruim,A,ADJ\n")

    lexicon = load_lexicon(path)

    assert lexicon.training.as_tuple() == (["bom"], [], ["ruim"])
    assert lexicon.index["bom"] == LexiconRecord("bom", "ADJ", "1", "M")


def test_every_recognised_record_lands_in_exactly_one_list(tmp_path):
    rows = [
        ("amor", "1"), ("odio", "-1"), ("mesa", "0"), ("xyz", "9"),
        ("alegria", "1"), ("tristeza", "-1"), ("cadeira", "0"), ("feliz", "1"),
    ]
    path = _write(tmp_path, HEADER + "".join(f"{a},N,{c},A\n" for a, c in rows))

    positive, neutral, negative = load(path)

    recognised = [a for a, c in rows if c in {"1", "0", "-1"}]
    assert sorted(positive + neutral + negative) == sorted(recognised)
    assert not set(positive) & set(neutral)
    assert not set(positive) & set(negative)
    assert not set(neutral) & set(negative)
    attributes = [a for a, _ in rows]
    for terms in (positive, neutral, negative):
        positions = [attributes.index(t) for t in terms]
        assert positions == sorted(positions)


def test_loading_twice_is_identical(tmp_path):
    path = _write(tmp_path, HEADER + "bom,ADJ,1,M\nruim,ADJ,-1,M\nnormal,ADJ,0,A\nbom,ADV,1,A\n")

    first = load_lexicon(path)
    second = load_lexicon(path)

    assert first.training == second.training
    assert first.records == second.records
    assert dict(first.index) == dict(second.index)


def test_index_is_read_only(tmp_path):
    lexicon = load_lexicon(_write(tmp_path, HEADER + "bom,ADJ,1,M\n"))

    with pytest.raises(TypeError):
        lexicon.index["novo"] = LexiconRecord("novo", "ADJ", "1", "M")
