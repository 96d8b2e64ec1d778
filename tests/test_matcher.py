from __future__ import annotations

import pytest

from netprompt.commands import CommandSet, MatchTier, extract_args, score, select
from netprompt.errors import RegistrationError

from conftest import Recorder, make_descriptor, make_statement


@pytest.mark.parametrize("description", ["show", "show ip route", "clear counters all"])
def test_literal_descriptions_match_only_identical_lines(description: str) -> None:
    descriptor = make_descriptor(description)
    assert score(make_statement(description), descriptor) is MatchTier.EXACT
    assert score(make_statement(description + " extra"), descriptor) is MatchTier.NONE
    words = description.split()
    if len(words) > 1:
        assert score(make_statement(" ".join(words[:-1])), descriptor) is MatchTier.NONE


def test_literal_mismatch_is_none() -> None:
    assert score(make_statement("show ip routes"), make_descriptor("show ip route")) is MatchTier.NONE


@pytest.mark.parametrize(
    "description, line, expected",
    [
        ("cmd $*", "cmd", MatchTier.NONE),
        ("cmd $*", "cmd a", MatchTier.WILDCARD),
        ("cmd $*", "cmd a b c", MatchTier.WILDCARD),
        ("cmd $1 $2", "cmd a b", MatchTier.SUBSTITUTION),
        ("cmd $1 $2", "cmd a", MatchTier.NONE),
        ("cmd $1 $2", "cmd a b c", MatchTier.NONE),
        ("cmd $1 foo", "cmd a foo", MatchTier.SUBSTITUTION),
        ("cmd $1 foo", "cmd a bar", MatchTier.NONE),
        ("cmd $1 $*", "cmd a b c", MatchTier.WILDCARD),
        ("other $*", "cmd a", MatchTier.NONE),
    ],
)
def test_score(description: str, line: str, expected: MatchTier) -> None:
    assert score(make_statement(line), make_descriptor(description)) is expected


def test_tiers_are_ordered() -> None:
    assert MatchTier.NONE < MatchTier.WILDCARD < MatchTier.SUBSTITUTION < MatchTier.EXACT


def test_select_prefers_stronger_tier_over_registration_order() -> None:
    command_set = CommandSet("default")
    wildcard = command_set.register("show $*", Recorder())
    substitution = command_set.register("show $1", Recorder())
    exact = command_set.register("show version", Recorder())

    assert select(make_statement("show version"), command_set) is exact
    assert select(make_statement("show clock"), command_set) is substitution
    assert select(make_statement("show clock detail"), command_set) is wildcard
    assert select(make_statement("hide clock"), command_set) is None


def test_tie_goes_to_first_registered(engine, sink) -> None:
    first, second = Recorder("first\n"), Recorder("second\n")
    root = engine.current_command_set()
    root.register("ping $1", first)
    root.register("ping $2", second)

    engine.evaluate("ping host")

    assert first.calls == [["host"]]
    assert second.calls == []
    assert sink.getvalue() == "first\n"


def test_argument_permutation() -> None:
    described = make_descriptor("cmd $3 $1 $2").segments
    assert extract_args(make_statement("cmd a b c").segments, described) == ["b", "c", "a"]


def test_arguments_reorder_pair() -> None:
    described = make_descriptor("go $2 $1").segments
    assert extract_args(make_statement("go a b").segments, described) == ["b", "a"]


def test_literals_contribute_no_arguments() -> None:
    described = make_descriptor("set interface $1 mtu $2").segments
    user = make_statement("set interface eth0 mtu 9000").segments
    assert extract_args(user, described) == ["eth0", "9000"]


def test_wildcard_captures_raw_words_in_order() -> None:
    described = make_descriptor("hello $*:name").segments
    user = make_statement("hello Todd and Ellen").segments
    assert extract_args(user, described) == ["Todd", "and", "Ellen"]


def test_numbered_arguments_precede_wildcard_capture() -> None:
    described = make_descriptor("copy $2 $1 $*").segments
    user = make_statement("copy x y p q").segments
    assert extract_args(user, described) == ["y", "x", "p", "q"]


def test_malformed_description_is_rejected() -> None:
    command_set = CommandSet("default")
    with pytest.raises(RegistrationError, match="invalid placeholder character"):
        command_set.register("foo $ bar", Recorder())
    assert len(command_set) == 0


@pytest.mark.parametrize(
    "description, message",
    [
        ("a; b", "expected a single command"),
        ("", "expected a single command"),
        ("show | grep x", "filters or output redirection"),
        ("show > file", "filters or output redirection"),
    ],
)
def test_description_shape_errors(description: str, message: str) -> None:
    with pytest.raises(RegistrationError, match=message):
        make_descriptor(description)


def test_decorator_registration() -> None:
    command_set = CommandSet("default")

    @command_set.command("reload $1")
    def reload(out, args):
        out.write("ok")

    (descriptor,) = list(command_set)
    assert descriptor.handler is reload
    assert descriptor.source == "reload $1"
    assert descriptor.has_substitution and not descriptor.is_wildcard
