from __future__ import annotations

import pytest

from netprompt.commands import CommandRegistry, CommandSetStack
from netprompt.errors import (
    CommandSetStackError,
    RegistrationError,
    UnknownCommandSetError,
)


@pytest.fixture
def stack() -> CommandSetStack:
    registry = CommandRegistry()
    for name in ("default", "names-set", "list-files-set"):
        registry.create(name)
    return CommandSetStack(registry)


def test_bottom_is_first_created_set(stack: CommandSetStack) -> None:
    assert stack.current().name == "default"
    assert stack.depth == 1
    assert stack.names() == ["default"]


def test_empty_registry_has_no_current_set() -> None:
    stack = CommandSetStack(CommandRegistry())
    assert stack.current() is None
    assert stack.depth == 0


def test_pop_at_depth_one_fails_and_leaves_stack_unchanged(stack: CommandSetStack) -> None:
    with pytest.raises(CommandSetStackError, match="can't pop command set"):
        stack.pop()
    assert stack.depth == 1
    assert stack.current().name == "default"


def test_push_unknown_fails_and_leaves_stack_unchanged(stack: CommandSetStack) -> None:
    stack.push("names-set")
    with pytest.raises(UnknownCommandSetError) as excinfo:
        stack.push("missing")
    assert str(excinfo.value) == "unknown command set: missing"
    assert isinstance(excinfo.value, KeyError)
    assert stack.names() == ["default", "names-set"]


@pytest.mark.parametrize("name", ["default", "names-set", "list-files-set"])
def test_push_and_pop_are_inverses(stack: CommandSetStack, name: str) -> None:
    before = (stack.depth, stack.current().name)
    pushed = stack.push(name)
    assert stack.current() is pushed
    assert stack.depth == before[0] + 1
    assert stack.pop() is pushed
    assert (stack.depth, stack.current().name) == before


def test_duplicate_command_set_name() -> None:
    registry = CommandRegistry()
    registry.create("default")
    with pytest.raises(RegistrationError, match="command set default is already registered"):
        registry.create("default")
    assert registry.names() == ["default"]


def test_registry_lookup() -> None:
    registry = CommandRegistry()
    created = registry.create("default")
    assert registry["default"] is created
    assert registry.get("missing") is None
    assert "default" in registry and "missing" not in registry
    with pytest.raises(KeyError):
        registry["missing"]
