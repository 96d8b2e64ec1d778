from __future__ import annotations

import io
import os
from pathlib import Path

import pytest

from netprompt import Engine, OutcomeKind
from netprompt.interface import load_plugins
from plugins.fs.entrypoint import complete_file_or_dir
from plugins.names.entrypoint import format_greeting
from plugins.text.entrypoint import grep


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    (tmp_path / "alpha.txt").write_text("a\n", encoding="utf-8")
    (tmp_path / "alpine").mkdir()
    (tmp_path / "beta.log").write_text("b\n" * 10, encoding="utf-8")
    return tmp_path


@pytest.fixture
def booted() -> tuple[Engine, io.StringIO]:
    sink = io.StringIO()
    engine = Engine(output=sink)
    engine.new_command_set("default")
    load_plugins(engine, "plugins")
    return engine, sink


# ---------------- fileOrDir ----------------

def test_directory_seed_lists_its_entries(tree: Path) -> None:
    seed = str(tree) + os.sep
    assert complete_file_or_dir(seed) == [
        os.path.join(seed, "alpha.txt"),
        os.path.join(seed, "alpine") + os.sep,
        os.path.join(seed, "beta.log"),
    ]


def test_prefix_seed_filters_parent_entries(tree: Path) -> None:
    assert complete_file_or_dir(str(tree / "alp")) == [
        str(tree / "alpha.txt"),
        str(tree / "alpine") + os.sep,
    ]


def test_empty_seed_completes_working_directory(tree: Path, monkeypatch) -> None:
    monkeypatch.chdir(tree)
    assert os.path.join(os.getcwd(), "beta.log") in complete_file_or_dir("")


def test_relative_prefix(tree: Path, monkeypatch) -> None:
    monkeypatch.chdir(tree)
    assert complete_file_or_dir("be") == ["beta.log"]


def test_missing_directory_gives_nothing(tree: Path) -> None:
    assert complete_file_or_dir(str(tree / "nope" / "x")) == []


# ---------------- grep ----------------

def run_grep(text: str, *args: str) -> str:
    out = io.StringIO()
    grep(io.StringIO(text), out, list(args))
    return out.getvalue()


@pytest.mark.parametrize(
    "args, expected",
    [
        ((), "Foo\nbar\nfood\n"),
        (("foo",), "food\n"),
        (("-i", "foo"), "Foo\nfood\n"),
        (("-v", "foo"), "Foo\nbar\n"),
        (("-i", "-v", "foo"), "bar\n"),
        (("^b",), "bar\n"),
    ],
)
def test_grep_options(args, expected) -> None:
    assert run_grep("Foo\nbar\nfood\n", *args) == expected


def test_grep_bad_pattern() -> None:
    assert run_grep("x\n", "(").startswith("error compiling regexp: ")


# ---------------- names ----------------

@pytest.mark.parametrize(
    "names, expected",
    [
        (["Todd"], "Hello Todd!"),
        (["Todd", "Ellen"], "Hello Todd and Ellen!"),
        (["Todd", "Elizabeth", "Ellen"], "Hello Todd, Elizabeth and Ellen!"),
    ],
)
def test_greeting(names, expected) -> None:
    assert format_greeting(names) == expected


# ---------------- loader ----------------

def test_loader_sets_up_every_plugin(booted) -> None:
    engine, _ = booted
    assert set(engine.registry.names()) == {"default", "names-set", "list-files-set"}
    assert set(engine.completers) == {"fileOrDir", "name"}
    assert set(engine.filters) == {"grep"}
    assert engine.suggest("") == ["list-files", "names"]


def test_names_menu_session(booted) -> None:
    engine, sink = booted
    engine.evaluate("names")
    assert engine.current_command_set().name == "names-set"
    assert engine.suggest("hello El") == ["hello Eleanore", "hello Elizabeth", "hello Ellen"]

    engine.evaluate("hello Todd Ellen | grep Ellen")
    engine.evaluate("exit")

    assert sink.getvalue() == "Hello Todd and Ellen!\n"
    assert engine.current_command_set().name == "default"


def test_list_files_menu_session(booted, tree: Path) -> None:
    engine, sink = booted
    target = tree / "alpine" / "listing.txt"
    engine.evaluate("list-files")
    outcomes = engine.evaluate(f"ls {tree} | grep -v alpha > {target}")
    assert [o.kind for o in outcomes] == [OutcomeKind.EXECUTED]
    listing = target.read_text(encoding="utf-8")
    assert listing == "<alpine>\nbeta.log is 20.0 B\n"

    engine.evaluate(f"cat {tree / 'beta.log'} | grep -v b")
    assert sink.getvalue() == ""


def test_loader_rejects_plain_module() -> None:
    with pytest.raises(RuntimeError, match="must be a package"):
        load_plugins(Engine(), "plugins.text.entrypoint")
