import types

from tolerant_csv.lines import split_lines


def test_is_lazy():
    assert isinstance(split_lines("a\nb"), types.GeneratorType)


def test_mixed_line_endings():
    assert list(split_lines("a,b\r\nc,d\re,f\ng,h")) == ["a,b", "c,d", "e,f", "g,h"]


def test_quoted_newlines_stay_in_line():
    text = 'id,note\n1,"first\r\nsecond"\n2,plain\n'
    assert list(split_lines(text)) == ["id,note", '1,"first\r\nsecond"', "2,plain"]


def test_blank_lines_dropped_but_lines_not_trimmed():
    assert list(split_lines("\n  \n  a  \n\r\n")) == ["  a  "]


def test_escaped_quote_collapses():
    assert list(split_lines('"a""b"\nc')) == ['"a"b"', "c"]


def test_unterminated_quote_swallows_rest():
    assert list(split_lines('a\n"open\nb\nc')) == ["a", '"open\nb\nc']


def test_comments_and_delimiters_untouched():
    assert list(split_lines("# keep\nx;y")) == ["# keep", "x;y"]


def test_empty_input():
    assert list(split_lines("")) == []
