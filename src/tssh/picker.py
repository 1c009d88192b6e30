"""Numbered terminal menu."""

from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import IntPrompt


class PromptAborted(Exception):
    """The user cancelled the prompt or input ended."""


class RichPicker:
    """Shows a numbered list of choices and reads the user's pick.

    Invalid numbers are re-prompted by rich. Ctrl+C and end of input raise
    PromptAborted so callers can decide what cancelling means for them.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def select(self, message: str, choices: Sequence[str]) -> str:
        if not choices:
            raise ValueError("select() needs at least one choice")

        self.console.print()
        self.console.print(f"[bold]{escape(message)}[/bold]")
        for i, choice in enumerate(choices, start=1):
            self.console.print(f"  [cyan]{i:>2}.[/cyan] {escape(choice)}")

        try:
            index = IntPrompt.ask(
                f"Enter number (1-{len(choices)})",
                console=self.console,
                choices=[str(i) for i in range(1, len(choices) + 1)],
                show_choices=False,
            )
        except (KeyboardInterrupt, EOFError) as e:
            self.console.print()
            raise PromptAborted() from e

        return choices[index - 1]
