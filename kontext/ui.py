"""Terminal output and interactive prompts for the kontext CLI"""
from typing import List, Optional, Sequence

import click

from kontext.errors import SelectionCancelled
from kontext.ordering import cursor_position

RULE = "───────────────────────────────────"


def _red(text: str) -> str:
    return click.style(text, fg="red", bold=True)


def _green(text: str) -> str:
    return click.style(text, fg="green", bold=True)


def _yellow(text: str) -> str:
    return click.style(text, fg="yellow", bold=True)


def _cyan(text: str) -> str:
    return click.style(text, fg="cyan", bold=True)


def _bold(text: str) -> str:
    return click.style(text, bold=True)


def _with_details(msg: str, details: Sequence[str]) -> str:
    return " ".join([msg] + [_cyan(d) for d in details])


def print_error(msg: str, err: Optional[Exception] = None):
    """Print a red error line; the caller decides whether to exit"""
    if err is not None:
        click.echo(f"{_red('✗')} {msg}: {err}")
    else:
        click.echo(f"{_red('✗')} {msg}")


def print_success(msg: str, *details: str):
    click.echo(f"{_green('✓')} {_with_details(msg, details)}")


def print_warning(msg: str, *details: str):
    click.echo(f"{_yellow('!')} {_with_details(msg, details)}")


def print_note(msg: str, *details: str):
    blue = click.style("ℹ Note:", fg="blue", bold=True)
    click.echo(f"{blue} {_with_details(msg, details)}")


def print_info(label: str, value: str):
    click.echo(f"{_bold(label + ':')} {value}")


def print_pointer(label: str, value: str):
    click.echo(f"{_green('→')} {label}: {_cyan(value)}")


def print_current_context(context_name: str):
    click.echo(f"{_green('→')} {_bold('Current context:')} {_cyan(context_name)}")


def print_current_namespace(context_name: str, namespace: str):
    click.echo(f"{_green('→')} {_bold(f'Context: {context_name} Namespace:')} {_cyan(namespace)}")


def print_context_list(context_names: Sequence[str], current_context: str):
    """Print contexts one per line, marking the current one.

    Available Kubernetes contexts:
    ───────────────────────────────────
      dev
    → production (current)
    """
    click.echo(_bold("Available Kubernetes contexts:"))
    click.echo(click.style(RULE, dim=True))
    for name in context_names:
        if name == current_context:
            click.echo(f"{_green('→')} {_cyan(name)} {_green('(current)')}")
        else:
            click.echo(f"  {name}")


def choose(ordered_names: List[str], highlight: str = "", label: str = "Select:") -> str:
    """Let the user pick one entry by number or by name.

    Pressing enter picks the highlighted entry. Raises SelectionCancelled on
    Ctrl-C/EOF or when there is nothing to pick.
    """
    if not ordered_names:
        raise SelectionCancelled("nothing to select")

    click.echo(_bold(label))
    for i, name in enumerate(ordered_names, 1):
        marker = f" {_green('(current)')}" if name == highlight else ""
        click.echo(f"  {i:>2}. {name}{marker}")
    click.echo(click.style(RULE, dim=True))

    default = str(cursor_position(ordered_names, highlight) + 1)
    while True:
        try:
            choice = click.prompt("Enter number or name", default=default, show_default=True).strip()
        except click.Abort:
            raise SelectionCancelled() from None

        if choice in ordered_names:
            return choice
        if choice.isdigit() and 1 <= int(choice) <= len(ordered_names):
            return ordered_names[int(choice) - 1]
        click.echo(f"No such entry: {choice}")


def confirm(message: str) -> bool:
    """Yes/no prompt, aborting counts as no"""
    try:
        return click.confirm(message, default=False)
    except click.Abort:
        return False
