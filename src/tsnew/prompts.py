"""Interactive questions asked while resolving options."""

from typing import Protocol, Sequence

import click


class Prompter(Protocol):
    """Asks the user a question and returns the answer."""

    def ask_text(self, question: str) -> str:
        ...

    def ask_yes_no(self, question: str, default: bool) -> bool:
        ...

    def ask_choice(self, question: str, choices: Sequence[str], default: str) -> str:
        ...


class TerminalPrompter:
    """Prompter that reads answers from the terminal via click.

    click.confirm accepts y/yes/n/no in any case and re-asks on
    anything else. Choices are matched case-sensitively.
    """

    def ask_text(self, question: str) -> str:
        """Ask until a non-blank answer is given."""
        while True:
            answer = click.prompt(question, type=str).strip()
            if answer:
                return answer
            click.echo("Error: a value is required")

    def ask_yes_no(self, question: str, default: bool) -> bool:
        return click.confirm(question, default=default)

    def ask_choice(self, question: str, choices: Sequence[str], default: str) -> str:
        return click.prompt(
            question,
            type=click.Choice(list(choices), case_sensitive=True),
            default=default,
            show_choices=True,
        )
