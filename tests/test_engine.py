from __future__ import annotations

import pytest

from netprompt import Engine, OutcomeKind
from netprompt.commands import pop_command_set, push_command_set, push_command_set_arg
from netprompt.errors import RegistrationError, UnknownCommandSetError

from conftest import Recorder


def greet(out, args):
    out.write("Hello " + " and ".join(args) + "!\n")


def test_empty_line_is_a_noop(engine: Engine, sink) -> None:
    outcomes = engine.evaluate("   ")
    assert [o.kind for o in outcomes] == [OutcomeKind.NOOP]
    assert outcomes[0].text == ""
    assert sink.getvalue() == ""


def test_hello_wildcard_end_to_end(engine: Engine, sink) -> None:
    recorder = Recorder()
    engine.register_completer("name", lambda seed: [n for n in ("Todd", "Ellen") if n.startswith(seed)])
    engine.current_command_set().register("hello $*:name", recorder)

    outcomes = engine.evaluate("hello Todd and Ellen")

    assert recorder.calls == [["Todd", "and", "Ellen"]]
    assert [(o.kind, o.text) for o in outcomes] == [(OutcomeKind.EXECUTED, "hello Todd and Ellen")]
    assert outcomes[0].ok


def test_executed_outcome_carries_canonical_text(engine: Engine) -> None:
    engine.current_command_set().register("say $1", Recorder())
    (outcome,) = engine.evaluate("say   'two words'")
    assert outcome.text == 'say "two words"'


def test_statements_run_left_to_right(engine: Engine, sink) -> None:
    root = engine.current_command_set()
    root.register("one", Recorder("1\n"))
    root.register("two", Recorder("2\n"))
    outcomes = engine.evaluate("two; one\ntwo")
    assert sink.getvalue() == "2\n1\n2\n"
    assert [o.text for o in outcomes] == ["two", "one", "two"]


def test_command_not_found_stops_the_line(engine: Engine, sink) -> None:
    first, last = Recorder(), Recorder()
    root = engine.current_command_set()
    root.register("first", first)
    root.register("last", last)

    outcomes = engine.evaluate("first; bogus  cmd; last")

    assert [o.kind for o in outcomes] == [OutcomeKind.EXECUTED, OutcomeKind.NOT_FOUND]
    assert outcomes[1].text == "bogus cmd"
    assert first.calls == [[]]
    assert last.calls == []
    assert sink.getvalue() == "bogus cmd: command not found\n"


def test_parse_error_runs_nothing(engine: Engine, sink) -> None:
    recorder = Recorder()
    engine.current_command_set().register("ok", recorder)

    outcomes = engine.evaluate("ok; ok |")

    assert [(o.kind, o.text) for o in outcomes] == [(OutcomeKind.PARSE_ERROR, "expected word after |")]
    assert recorder.calls == []
    assert sink.getvalue() == "parse error: expected word after |\n"


def test_handler_exception_is_reported_and_engine_survives(engine: Engine, sink) -> None:
    def broken(out, args):
        raise ValueError("bad value")

    root = engine.current_command_set()
    root.register("broken", broken)
    root.register("fine", Recorder("fine\n"))

    (outcome,) = engine.evaluate("broken")
    assert outcome.kind is OutcomeKind.EXECUTED
    assert outcome.error == "[error] ValueError: bad value"
    assert not outcome.ok

    engine.evaluate("fine")
    assert sink.getvalue() == "[error] ValueError: bad value\nfine\n"


def test_system_exit_propagates(engine: Engine) -> None:
    def leave(out, args):
        raise SystemExit(0)

    engine.current_command_set().register("exit", leave)
    with pytest.raises(SystemExit):
        engine.evaluate("exit")


def test_menu_navigation(engine: Engine, sink) -> None:
    root = engine.current_command_set()
    names = engine.new_command_set("names-set")
    greeter = Recorder()
    names.register("hello $*", greeter)
    names.register("exit", pop_command_set(engine))
    root.register("names", push_command_set(engine, "names-set"))
    root.register("enter $1", push_command_set_arg(engine))

    engine.evaluate("hello x")
    assert greeter.calls == []

    engine.evaluate("names; hello x")
    assert greeter.calls == [["x"]]
    assert engine.current_command_set() is names

    engine.evaluate("exit")
    assert engine.current_command_set() is root

    engine.evaluate("enter names-set")
    assert engine.current_command_set() is names
    engine.evaluate("exit")

    engine.evaluate("enter nowhere")
    assert engine.current_command_set() is root
    assert "unknown command set: nowhere" in sink.getvalue()


def test_pop_handler_at_root_reports_error(engine: Engine, sink) -> None:
    engine.current_command_set().register("up", pop_command_set(engine))
    engine.evaluate("up")
    assert sink.getvalue() == "can't pop command set\n"


def test_duplicate_registrations(engine: Engine) -> None:
    engine.register_completer("name", lambda seed: [])
    with pytest.raises(RegistrationError, match="name is already registered"):
        engine.register_completer("name", lambda seed: [])

    engine.register_filter("grep", lambda source, sink, args: None)
    with pytest.raises(RegistrationError, match="filter grep is already registered"):
        engine.register_filter("grep", lambda source, sink, args: None)

    with pytest.raises(RegistrationError):
        engine.new_command_set("default")


def test_command_set_lookup(engine: Engine) -> None:
    assert engine.command_set("default") is engine.root_command_set()
    with pytest.raises(UnknownCommandSetError):
        engine.command_set("missing")


def test_engine_without_command_sets() -> None:
    bare = Engine()
    assert bare.current_command_set() is None
    assert bare.suggest("anything") == []


def test_engine_suggest_uses_active_set(engine: Engine) -> None:
    engine.register_completer("name", lambda seed: [n for n in ("Todd", "Ellen") if n.startswith(seed)])
    engine.current_command_set().register("hello $*:name", greet)
    engine.current_command_set().register("help", greet)
    assert engine.suggest("hel") == ["hello", "help"]
    assert engine.suggest("hello ") == ["hello Ellen", "hello Todd"]


def test_default_output_is_stdout_at_call_time(capsys) -> None:
    bare = Engine()
    bare.new_command_set("default").register("hi $*", greet)
    bare.evaluate("hi you")
    assert capsys.readouterr().out == "Hello you!\n"
