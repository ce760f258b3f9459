"""
Web View Module
===============

Serves the written report as an HTML page.

Functions
---------
create_app
    Flask application factory.
serve
    Run the application with the Werkzeug development server.

Example
-------
>>> from autoapt.web import create_app
>>>
>>> app = create_app(report_text)
>>> app.run(host="0.0.0.0", port=3000)
"""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, Response

from autoapt.reporters.html_reporter import HTMLReporter

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


def create_app(
    report_text: str,
    html_reporter: Optional[HTMLReporter] = None,
) -> Flask:
    """
    Build the Flask application serving ``report_text`` on ``/``.

    The page is rendered once; the report does not change for the
    lifetime of the process.

    Parameters
    ----------
    report_text : str
        Content of the report file.
    html_reporter : HTMLReporter, optional
        Renderer for the page. Defaults to a new :class:`HTMLReporter`.

    Returns
    -------
    Flask
        The configured application.
    """
    app = Flask(__name__)
    page = (html_reporter or HTMLReporter()).render(report_text)

    @app.get("/")
    def index() -> Response:
        return Response(page, content_type="text/html; charset=utf-8")

    logger.debug(f"Web view ready ({len(report_text)} bytes of report)")
    return app


def serve(
    report_text: str,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> None:
    """
    Serve the report until interrupted.

    Request lines are emitted by Werkzeug's ``werkzeug`` logger.
    """
    app = create_app(report_text)
    logger.info(f"Serving report on http://{host}:{port}/")
    app.run(host=host, port=port, debug=False, use_reloader=False)
