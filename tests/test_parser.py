from __future__ import annotations

import pytest

from netprompt.errors import LexError, ParseError
from netprompt.grammar import (
    FilterInvocation,
    Segment,
    parse,
    parse_description,
    quote_word,
    unquote,
)


def test_single_statement_words() -> None:
    (statement,) = parse("show ip route")
    assert statement.words == ["show", "ip", "route"]
    assert statement.filters == ()
    assert statement.output_target is None


def test_multiple_statements_in_order() -> None:
    statements = parse("first; second a\nthird")
    assert [s.words for s in statements] == [["first"], ["second", "a"], ["third"]]


@pytest.mark.parametrize("line", ["", "   ", ";", ";;", "\n\n"])
def test_blank_input_has_no_statements(line: str) -> None:
    assert parse(line) == []


def test_empty_statements_are_skipped() -> None:
    assert [s.words for s in parse("a;;b;")] == [["a"], ["b"]]


def test_quoted_strings_become_literals() -> None:
    (statement,) = parse("""say "hello world" 'it\\'s' `tick`""")
    assert statement.words == ["say", "hello world", "it's", "tick"]
    assert all(segment.is_literal for segment in statement.segments)


def test_quoted_string_may_start_a_statement() -> None:
    (statement,) = parse('"show" version')
    assert statement.words == ["show", "version"]


def test_line_continuation_joins_physical_lines() -> None:
    (statement,) = parse("show \\\n version")
    assert statement.words == ["show", "version"]


def test_filters_and_output_target() -> None:
    (statement,) = parse("ls /tmp | grep -i foo | grep -v 'b r' > out.txt")
    assert statement.words == ["ls", "/tmp"]
    assert statement.filters == (
        FilterInvocation("grep", ("-i", "foo")),
        FilterInvocation("grep", ("-v", "b r")),
    )
    assert statement.output_target == "out.txt"


def test_redirect_then_next_statement() -> None:
    first, second = parse("a > x.txt; b")
    assert first.output_target == "x.txt"
    assert second.words == ["b"]


def test_description_placeholders() -> None:
    (statement,) = parse_description("move $1 $2:direction")
    assert statement.segments == (
        Segment.literal("move"),
        Segment.placeholder("1"),
        Segment.placeholder("2", "direction"),
    )
    assert statement.wildcard_position is None


def test_description_wildcard() -> None:
    (statement,) = parse_description("dump $*:file")
    wildcard = statement.segments[1]
    assert wildcard.is_wildcard
    assert wildcard.index is None
    assert wildcard.completion_type == "file"
    assert statement.wildcard_position == 1


@pytest.mark.parametrize(
    "line, message",
    [
        ("ls |", "expected word after |"),
        ("ls | ; b", "expected word after |"),
        ("ls >", "expected output filename"),
        ("ls > a > b", "cannot specify multiple output files"),
        ("> a", "unexpected OutputRedirect token '>'"),
        ("| grep", "unexpected Pipe token '|'"),
    ],
)
def test_parse_errors(line: str, message: str) -> None:
    with pytest.raises(ParseError) as excinfo:
        parse(line)
    assert str(excinfo.value) == message


@pytest.mark.parametrize(
    "description, message",
    [
        ("cmd $1 $1", "duplicate placeholder $1"),
        ("cmd $* $*", "duplicate placeholder $*"),
        ("$1 cmd", "unexpected Placeholder token '1'"),
        ("cmd $0", "placeholder index must be positive: $0"),
        ("cmd $00:name", "placeholder index must be positive: $00"),
    ],
)
def test_description_errors(description: str, message: str) -> None:
    with pytest.raises(ParseError, match=message.replace("$", r"\$").replace("*", r"\*")):
        parse_description(description)


def test_lexer_errors_surface_as_lex_error() -> None:
    with pytest.raises(LexError, match="unterminated quoted string"):
        parse('say "oops')


def test_first_error_aborts_whole_line() -> None:
    with pytest.raises(ParseError):
        parse("good; ls |")


def test_unquote_resolves_escapes() -> None:
    assert unquote(r'"a \" \\ b"') == 'a " \\ b'
    assert unquote("'keep \\n'") == "keep \\n"
    assert unquote('"joined \\\nline"') == "joined line"


@pytest.mark.parametrize(
    "word, expected",
    [("plain", "plain"), ("two words", '"two words"'), ("", '""'), ('say "hi"', '"say \\"hi\\""')],
)
def test_quote_word(word: str, expected: str) -> None:
    assert quote_word(word) == expected


def test_canonical_text_parses_back_to_same_statement() -> None:
    line = "say  'a b'  x|grep  -i  y >out.txt"
    (statement,) = parse(line)
    canonical = statement.as_user()
    assert canonical == 'say "a b" x | grep -i y > out.txt'
    assert parse(canonical) == [statement]
