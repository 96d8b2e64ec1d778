#!/usr/bin/env python3
# netprompt/interface/cli.py
from __future__ import annotations

"""
Interactive input frontends.

Selection order:
    1) prompt_toolkit (rich completion + history)
    2) readline / pyreadline3 (basic completion + history)
    3) plain input (last resort)

Completion always works on the whole line: every suggestion coming from
`Engine.suggest` is a complete replacement for the text before the cursor.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from netprompt.config import AppConfig
    from netprompt.engine import Engine


class BaseCLI:
    """
    Base interface for CLI frontends.

    Subclasses should implement:
        - setup()
        - get_line()
        - teardown()

    This base also provides context manager support to guarantee teardown.
    The base itself is the plain `input()` frontend.
    """

    def __init__(self, engine: "Engine", prompt: str = "> ", history_file: Optional[Path] = None) -> None:
        self.engine = engine
        self.prompt = prompt
        self.history_file = history_file

    def prompt_text(self) -> str:
        """Prompt prefixed with the active command set when inside a submenu."""
        names = self.engine.stack.names()
        if len(names) > 1:
            return f"({names[-1]}){self.prompt}"
        return self.prompt

    def setup(self) -> None:
        ...

    def get_line(self) -> str:
        return input(self.prompt_text())

    def teardown(self) -> None:
        ...

    # Context manager helpers
    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()


# ===== Preferred: prompt_toolkit =====
class PromptToolkitCLI(BaseCLI):
    """Rich line editor with history and live completion."""

    def __init__(
        self,
        engine: "Engine",
        prompt: str = "> ",
        history_file: Optional[Path] = None,
        *,
        enable_completion: bool = True,
    ) -> None:
        super().__init__(engine, prompt, history_file)
        from prompt_toolkit import prompt as pt_prompt
        from prompt_toolkit.completion import Completer, Completion
        from prompt_toolkit.history import FileHistory, InMemoryHistory
        from prompt_toolkit.key_binding import KeyBindings

        self._prompt = pt_prompt
        if history_file is not None:
            self._history = FileHistory(str(history_file))
        else:
            self._history = InMemoryHistory()

        suggest = engine.suggest

        class _Completer(Completer):
            def get_completions(self, document, complete_event):
                text_before_cursor = document.text_before_cursor
                for line in suggest(text_before_cursor):
                    # each suggestion replaces everything before the cursor
                    yield Completion(line, start_position=-len(text_before_cursor), display=line)

        self._completer = _Completer() if enable_completion else None

        # Key bindings to trigger completion when deleting characters.
        kb = KeyBindings()

        @kb.add("backspace")
        def _(event):
            b = event.app.current_buffer
            if b.read_only():
                return
            if b.selection_state:
                b.delete_selection()
            else:
                b.delete_before_cursor(1)
            if self._completer is not None:
                b.start_completion(select_first=False)

        self._key_bindings = kb

    def setup(self) -> None:
        if self.history_file is not None:
            self.history_file.parent.mkdir(parents=True, exist_ok=True)
            self.history_file.touch(exist_ok=True)

    def get_line(self) -> str:
        return self._prompt(
            self.prompt_text(),
            history=self._history,
            completer=self._completer,
            complete_while_typing=self._completer is not None,
            key_bindings=self._key_bindings,
        )

    def teardown(self) -> None:
        # prompt_toolkit flushes history automatically
        pass


# ===== Fallback: readline / pyreadline3 =====
class ReadlineCLI(BaseCLI):
    """Fallback editor with basic completion and history."""

    def __init__(
        self,
        engine: "Engine",
        prompt: str = "> ",
        history_file: Optional[Path] = None,
        *,
        enable_completion: bool = True,
    ) -> None:
        super().__init__(engine, prompt, history_file)
        import readline  # type: ignore[attr-defined]

        self.readline = readline
        self.enable_completion = enable_completion

    def setup(self) -> None:
        if self.history_file is not None:
            try:
                self.readline.read_history_file(str(self.history_file))  # type: ignore
            except OSError:
                pass

        if not self.enable_completion:
            return

        # the whole buffer is one completion fragment
        self.readline.set_completer_delims("")  # type: ignore

        def _complete(text_fragment: str, state_index: int) -> Optional[str]:
            matches = self.engine.suggest(self.readline.get_line_buffer())  # type: ignore
            return matches[state_index] if state_index < len(matches) else None

        self.readline.set_completer(_complete)  # type: ignore
        self.readline.parse_and_bind("tab: complete")  # type: ignore

    def teardown(self) -> None:
        if self.history_file is None:
            return
        try:
            self.readline.write_history_file(str(self.history_file))  # type: ignore
        except OSError:
            pass


def make_cli(engine: "Engine", config: "AppConfig") -> BaseCLI:
    """
    Factory to select the best available CLI frontend at runtime.
    """
    options = {"enable_completion": config.enable_completion}
    # Try prompt_toolkit first
    try:
        return PromptToolkitCLI(engine, config.prompt, config.history_file_path, **options)
    except ImportError:
        # Try readline/pyreadline3
        try:
            return ReadlineCLI(engine, config.prompt, config.history_file_path, **options)
        except ImportError:
            # Last resort: plain input with no completion or history
            return BaseCLI(engine, config.prompt, config.history_file_path)
