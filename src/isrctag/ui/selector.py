"""
Disambiguation selectors.

A selector picks one entry out of a list of human-readable labels. The
resolvers receive one as a collaborator and never prompt on their own, so the
interactive terminal prompt can be swapped for a scripted one in tests and
non-interactive runs.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from ..core.config import ERROR_MESSAGES
from ..core.exceptions import InputError

CANCEL_WORDS = ('q', 'quit', 'exit')


class Selector(ABC):
    """Chooses one label out of several."""

    @abstractmethod
    def choose(self, prompt: str, labels: Sequence[str]) -> int:
        """
        Choose one of ``labels``.

        Args:
            prompt: Question shown to whoever decides
            labels: Non-empty, ordered option labels

        Returns:
            Zero-based index into ``labels``

        Raises:
            InputError: If no choice could be made
        """


class InteractiveSelector(Selector):
    """Asks the user on the terminal with a numbered list."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def _render_options(self, labels: Sequence[str]) -> Table:
        options_table = Table(show_header=False, box=box.SIMPLE, padding=(0, 2))
        options_table.add_column("#", style="cyan", justify="right")
        options_table.add_column("Option", style="white")
        for number, label in enumerate(labels, 1):
            options_table.add_row(str(number), escape(label))
        return options_table

    def choose(self, prompt: str, labels: Sequence[str]) -> int:
        if not labels:
            raise InputError("Nothing to choose from")

        self.console.print(f"[bold blue]ℹ[/bold blue] {escape(prompt)}")
        self.console.print(self._render_options(labels))

        try:
            while True:
                choice = Prompt.ask(
                    f"[bold]Your choice[/bold] ([cyan]1-{len(labels)}[/cyan], or [red]'q'[/red] to cancel)",
                    console=self.console,
                    default="",
                    show_default=False,
                ).strip()

                if choice.lower() in CANCEL_WORDS:
                    raise InputError(ERROR_MESSAGES["SELECTION_CANCELLED"])

                try:
                    choice_num = int(choice)
                except ValueError:
                    self.console.print("[bold red]✗[/bold red] Please enter a valid number or 'q' to cancel")
                    continue

                if 1 <= choice_num <= len(labels):
                    self.console.print(f"[bold green]✓[/bold green] Selected: [white]{escape(labels[choice_num - 1])}[/white]")
                    return choice_num - 1

                self.console.print(f"[bold red]✗[/bold red] Please enter a number between 1 and {len(labels)}")
        except EOFError as e:
            raise InputError(f"{ERROR_MESSAGES['SELECTION_CANCELLED']}: input closed") from e
        except KeyboardInterrupt as e:
            raise InputError(f"{ERROR_MESSAGES['SELECTION_CANCELLED']}: interrupted") from e
        finally:
            self.console.file.flush()


class ScriptedSelector(Selector):
    """Answers with pre-programmed indices, in order, and records each call."""

    def __init__(self, choices: Iterable[int] = (0,)):
        self.choices: List[int] = list(choices)
        self.calls: List[Tuple[str, Tuple[str, ...]]] = []

    def choose(self, prompt: str, labels: Sequence[str]) -> int:
        self.calls.append((prompt, tuple(labels)))
        if not self.choices:
            raise InputError("No scripted choice left")
        # The last answer repeats once the script runs out
        if len(self.choices) > 1:
            return self.choices.pop(0)
        return self.choices[0]
