"""Contains utilities for rendering changelog templates with Jinja2.

Changelog templates use ``${{NAME}}`` placeholders. Block and comment tags get
``$``-prefixed delimiters as well, so plain Markdown such as ``{#anchor}`` or
``{% raw %}`` is rendered as text.
"""

from typing import Mapping

import jinja2
import structlog

from changelog_builder.utils.constants import PLACEHOLDER_FORMAT

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class PlaceholderUndefined(jinja2.Undefined):
    """Renders an unknown placeholder back as ``${{NAME}}``."""

    def __str__(self) -> str:
        if self._undefined_name is None:
            return ""
        return PLACEHOLDER_FORMAT.format(name=self._undefined_name)


def construct_jinja2_environment() -> jinja2.Environment:
    """Construct a Jinja2 environment for ``${{NAME}}`` placeholders."""
    jinja_env = jinja2.Environment(
        variable_start_string="${{",
        variable_end_string="}}",
        block_start_string="${%",
        block_end_string="%}",
        comment_start_string="${#",
        comment_end_string="#}",
        undefined=PlaceholderUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
    return jinja_env


def construct_jinja2_template_from_string(template_string: str, environment: jinja2.Environment | None = None) -> jinja2.Template:
    """Construct a Jinja2 template from a string."""
    if environment is None:
        environment = construct_jinja2_environment()
    try:
        return environment.from_string(template_string)
    except jinja2.TemplateSyntaxError as exc:
        logger.error("Invalid changelog template", template=template_string, error=str(exc))
        raise


def render_template(template: jinja2.Template, values: Mapping[str, str]) -> str:
    """Fill every placeholder of a compiled template in a single pass.

    Values are inserted verbatim, so placeholder text inside a value is never substituted again.
    """
    return template.render(values)
