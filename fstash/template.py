# -*- coding: utf-8 -*-
"""Render restored files as templates."""

import logging
import re
from typing import Mapping, Optional

import fs as pyfs
import jinja2
from jinja2 import StrictUndefined
from jinja2.sandbox import SandboxedEnvironment

from .exceptions import TemplateError

logger = logging.getLogger(__name__)

TemplateData = Mapping[str, Mapping[str, str]]

# Go style ``{{ .Key }}`` placeholders.
DOTTED_PLACEHOLDER = re.compile(r"\{\{(-?)\s*\.([A-Za-z_][A-Za-z0-9_]*)\s*(-?)\}\}")

# Only ``{{ }}`` is live: block and comment tags use markers that never occur
# in real files, so text like ``${#items[@]}`` or ``{% raw %}`` passes through.
UNUSED_DELIMITERS = {
    "block_start_string": "\x00{%fstash",
    "block_end_string": "fstash%}\x00",
    "comment_start_string": "\x00{#fstash",
    "comment_end_string": "fstash#}\x00",
}


def template_key(filename: str) -> str:
    """Return the template data key of a file: its base name without the last
    extension.
    """
    return pyfs.path.splitext(pyfs.path.basename(filename))[0]


class TemplateRenderer(object):
    """Render file contents against per-file template data.

    Attributes:
        data: Mapping from a file's base name without extension to the
            variables used to render that file.
        encoding (str, optional): Encoding of template files. Defaults to
            ``'utf8'``.
    """

    def __init__(self, data: TemplateData, encoding: str = "utf8"):
        self.data = data
        self.encoding = encoding
        self.env = SandboxedEnvironment(undefined=StrictUndefined,
                                        keep_trailing_newline=True,
                                        autoescape=False,
                                        **UNUSED_DELIMITERS)

    def lookup(self, filename: str) -> Optional[Mapping[str, str]]:
        """Return the variables for `filename` or ``None`` when the file is not
        a template.
        """
        return self.data.get(template_key(filename))

    def render(self, filename: str, content: bytes, variables: Mapping[str, str]) -> bytes:
        """Render `content` with `variables`.

        Raises:
            TemplateError: If the content is not valid text, is not a valid
                template or references a variable missing from `variables`.
        """
        try:
            source = content.decode(self.encoding)
        except UnicodeDecodeError as error:
            raise TemplateError("template {0} is not {1} text".format(
                filename, self.encoding)) from error

        source = DOTTED_PLACEHOLDER.sub(r"{{\1 \2 \3}}", source)

        try:
            rendered = self.env.from_string(source).render(**variables)
        except jinja2.TemplateError as error:
            raise TemplateError("failed to render {0}: {1}".format(
                filename, error)) from error

        logger.debug("Rendered template %s", filename)
        return rendered.encode(self.encoding)

    def __call__(self, filename: str, content: bytes) -> bytes:
        """Render `content` when `filename` has template data, else return it
        unchanged.
        """
        variables = self.lookup(filename)
        if variables is None:
            return content

        return self.render(filename, content, variables)
