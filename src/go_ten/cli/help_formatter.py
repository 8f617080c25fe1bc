"""Click command class that appends Rich usage examples to ``--help``."""

from __future__ import annotations

from collections.abc import Sequence
from io import StringIO
from typing import Any

import click
from rich.console import Console

from go_ten.cli.formatting import create_example_panel

HELP_WIDTH = 80


def render_examples(examples: Sequence[tuple[str, str]], width: int = HELP_WIDTH) -> str:
    """Render an examples panel to a string for Click's help output.

    Args:
        examples: Sequence of (description, command) tuples
        width: Terminal width the help text is wrapped to

    Returns:
        Panel text including ANSI styling
    """
    buffer = StringIO()
    console = Console(file=buffer, width=width, force_terminal=True)
    console.print(create_example_panel("Examples", examples, width=width - 2))
    return buffer.getvalue()


class RichCommand(click.Command):
    """Click command with an ``examples`` keyword.

    The examples, (description, command) tuples, are shown as a panel after
    the options and epilog. Options themselves keep Click's layout.
    """

    def __init__(
        self,
        *args: Any,
        examples: Sequence[tuple[str, str]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.examples = list(examples or [])

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_epilog(ctx, formatter)
        if not self.examples:
            return
        formatter.write_paragraph()
        formatter.write(render_examples(self.examples, min(formatter.width, HELP_WIDTH)))
