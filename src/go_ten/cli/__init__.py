"""CLI utilities for go-ten.

This module provides Rich-based formatting utilities for the CLI,
including the help command class, panels, tables and file trees.
"""

from go_ten.cli.formatting import (
    build_file_tree,
    create_example_panel,
    create_templates_table,
    format_error,
    format_success,
    format_warning,
)
from go_ten.cli.help_formatter import RichCommand, render_examples

__all__ = [
    "RichCommand",
    "build_file_tree",
    "create_example_panel",
    "create_templates_table",
    "format_error",
    "format_success",
    "format_warning",
    "render_examples",
]
