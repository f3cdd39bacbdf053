"""Jinja2 template rendering for the ``$template`` operator.

Templates see the input data as ``input``; when the input is an object
its top-level keys are also available directly, so ``{{ name }}`` and
``{{ input.name }}`` are equivalent. StrictUndefined ensures missing
variables blow up immediately instead of silently rendering empty
strings.
"""

from __future__ import annotations

import functools
from typing import Any

import jinja2

_ENV = jinja2.Environment(
    undefined=jinja2.StrictUndefined,
    keep_trailing_newline=True,
)


@functools.lru_cache(maxsize=256)
def _compile(template_str: str) -> jinja2.Template:
    return _ENV.from_string(template_str)


def render_template(template_str: str, input_data: Any) -> str:
    """Render a Jinja2 template string against *input_data*.

    Raises:
        jinja2.TemplateSyntaxError: The template does not parse.
        jinja2.UndefinedError: The template references a variable that
            *input_data* does not provide.
    """
    variables: dict[str, Any] = dict(input_data) if isinstance(input_data, dict) else {}
    variables["input"] = input_data
    return _compile(template_str).render(variables)
