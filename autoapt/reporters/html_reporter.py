"""
HTML Reporter Module
====================

Wraps the text report in a minimal monospace HTML page for the web view.

The report text is HTML-escaped, so names and tags coming from the
account cannot inject markup into the page.

Example
-------
>>> reporter = HTMLReporter()
>>> page = reporter.render(report_text)
"""

from __future__ import annotations

import logging

import jinja2

logger = logging.getLogger(__name__)

PAGE_TITLE = "Automatic APT Results"
PAGE_STYLE = "body{font-family:monospace;white-space:pre;padding:20px;line-height:1.5}"

PAGE_TEMPLATE = (
    "<html><head><title>{{ title }}</title>"
    "<style>{{ style }}</style>"
    "</head><body>"
    "{{ report }}"
    "</body></html>"
)


class HTMLReporter:
    """
    Reporter rendering the text report as an HTML page.

    Parameters
    ----------
    title : str, default="Automatic APT Results"
        Page title.
    """

    def __init__(self, title: str = PAGE_TITLE) -> None:
        self.title = title
        env = jinja2.Environment(
            autoescape=jinja2.select_autoescape(
                enabled_extensions=("html",),
                default_for_string=True,
            )
        )
        self._template = env.from_string(PAGE_TEMPLATE)

    def render(self, report_text: str) -> str:
        """Return the full HTML page for ``report_text``."""
        return self._template.render(
            title=self.title,
            style=PAGE_STYLE,
            report=report_text,
        )

    def __repr__(self) -> str:
        return f"HTMLReporter(title={self.title!r})"
