from __future__ import annotations

import pytest

from ppic_dashboard.sheet.tokenizer import tokenize


def test_tokenize_plain_rows():
    assert tokenize("a,b,c\n1,2,3\n") == [["a", "b", "c"], ["1", "2", "3"]]


GRID_CELLS = ["PO-1", "", "x y", "LIMIT", "0", "1234", "abc"]


def _grid(rows: int, cols: int, offset: int = 0) -> list[list[str]]:
    return [[GRID_CELLS[(offset + r * cols + c) % len(GRID_CELLS)] for c in range(cols)] for r in range(rows)]


@pytest.mark.parametrize(
    "grid",
    [
        _grid(1, 1),
        _grid(1, 5),
        _grid(6, 1),
        _grid(3, 4),
        _grid(10, 17, offset=3),
        [["", "", "a"], ["b", "", ""], ["", "c", ""]],
    ],
    ids=["1x1", "single-row", "single-col", "3x4", "10x17", "empty-cells"],
)
@pytest.mark.parametrize("terminator", ["\n", "\r\n"])
def test_tokenize_unquoted_grid_round_trip(grid: list[list[str]], terminator: str):
    # rows whose only cell is empty are written as blank lines, which emit nothing
    grid = [row for row in grid if row != [""]]
    text = terminator.join(",".join(row) for row in grid)
    assert tokenize(text) == grid


def test_tokenize_quoted_comma_is_single_field():
    assert tokenize('a,"b,c",d') == [["a", "b,c", "d"]]


def test_tokenize_quoted_line_break_does_not_split_row():
    rows = tokenize('a,"line1\nline2",c\nnext,row,here\n')
    assert len(rows) == 2
    assert rows[0] == ["a", "line1\nline2", "c"]


def test_tokenize_crlf_row_count_matches_lf():
    lf = "a,b\nc,d\ne,f\n"
    crlf = lf.replace("\n", "\r\n")
    assert len(tokenize(crlf)) == len(tokenize(lf)) == 3
    assert tokenize(crlf) == tokenize(lf)


def test_tokenize_mixed_line_endings():
    assert tokenize("a\r\nb\nc\rd") == [["a"], ["b"], ["c"], ["d"]]


def test_tokenize_trailing_content_without_newline():
    assert tokenize("a,b\nc,d") == [["a", "b"], ["c", "d"]]


def test_tokenize_trims_whitespace():
    assert tokenize("  a ,\tb\t,  \" c \" ") == [["a", "b", "c"]]


def test_tokenize_blank_lines_emit_nothing_but_empty_field_rows_are_kept():
    rows = tokenize("a\n\n\r\n,,\nb\n")
    assert rows == [["a"], ["", "", ""], ["b"]]


def test_tokenize_thousands_separator_in_quotes():
    assert tokenize('"1,234",5\n') == [["1,234", "5"]]


def test_tokenize_unterminated_quote_keeps_rest_as_content():
    rows = tokenize('a,"b,c\nd,e')
    assert rows == [["a", "b,c\nd,e"]]


@pytest.mark.parametrize("text", ["", "\n", "\r\n\r\n"])
def test_tokenize_empty_input(text: str):
    assert tokenize(text) == []
