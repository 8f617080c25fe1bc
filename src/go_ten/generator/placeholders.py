"""Placeholder rendering for ``.tmpl`` template files.

Template files are Jinja2 templates whose context is
``ProjectConfig.placeholder_values()``, e.g. ``module {{ ProjectName }}``.
Rendering fails closed: a name outside the context, or a template that does
not parse, raises ``PlaceholderResolutionError`` instead of producing output.
"""

from __future__ import annotations

import traceback
from collections.abc import Mapping

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError, UndefinedError, meta, nodes

from go_ten.generator.errors import PlaceholderResolutionError

TEMPLATE_SUFFIX = ".tmpl"

# Generated files are source code, never HTML
environment = Environment(
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)


def is_template_path(path: str) -> bool:
    """Return True if the path carries the template marker suffix."""
    return path.endswith(TEMPLATE_SUFFIX)


def strip_template_suffix(path: str) -> str:
    """Remove the template marker suffix from a path, if present."""
    if is_template_path(path):
        return path[: -len(TEMPLATE_SUFFIX)]
    return path


def _syntax_error(error: TemplateSyntaxError, template: str) -> PlaceholderResolutionError:
    return PlaceholderResolutionError(
        template, error.message or "syntax error", error.lineno or 1, invalid=True
    )


def _parse(content: str, template: str) -> tuple[nodes.Template, set[str]]:
    """Parse a template and collect the context names it reads."""
    try:
        ast = environment.parse(content, name=template, filename=template)
        # Unknown filters and tests surface here as TemplateAssertionError
        names = meta.find_undeclared_variables(ast) - set(environment.globals)
    except TemplateSyntaxError as e:
        raise _syntax_error(e, template) from e
    return ast, names


def find_placeholders(content: str, template: str = "<template>") -> list[str]:
    """Return the sorted names a template reads from its context.

    Raises:
        PlaceholderResolutionError: If the template does not parse.
    """
    _, names = _parse(content, template)
    return sorted(names)


def _first_use(ast: nodes.Template, name: str) -> int:
    for node in ast.find_all(nodes.Name):
        if node.name == name and node.ctx == "load":
            return node.lineno
    return 1


def _error_line(error: Exception, template: str) -> int:
    # Jinja2 rewrites tracebacks so template frames carry the template line
    for frame in reversed(traceback.extract_tb(error.__traceback__)):
        if frame.filename == template and frame.lineno is not None:
            return frame.lineno
    return 1


def render_template(
    content: str,
    values: Mapping[str, str],
    template: str = "<template>",
) -> str:
    """Render ``content`` with ``values`` as the template context.

    Args:
        content: Template text
        values: Placeholder name to replacement value
        template: Template path, used in error messages

    Returns:
        The rendered text. A trailing newline is kept as written.

    Raises:
        PlaceholderResolutionError: If the template references a name that is
            not in ``values`` or is not valid Jinja2 syntax.
    """
    ast, names = _parse(content, template)

    unknown = names - set(values)
    if unknown:
        line, name = min((_first_use(ast, n), n) for n in unknown)
        raise PlaceholderResolutionError(template, f"{{{{{name}}}}}", line)

    try:
        code = environment.compile(ast, name=template, filename=template)
    except TemplateSyntaxError as e:
        raise _syntax_error(e, template) from e

    compiled = environment.template_class.from_code(
        environment, code, environment.make_globals(None)
    )
    try:
        return compiled.render(values)
    except UndefinedError as e:
        raise PlaceholderResolutionError(
            template, str(e), _error_line(e, template), invalid=True
        ) from e
