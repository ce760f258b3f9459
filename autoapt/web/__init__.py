"""
Web View
========

Minimal Flask application serving the exposure report as HTML on ``/``.
"""

from autoapt.web.app import DEFAULT_HOST, DEFAULT_PORT, create_app, serve

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "create_app",
    "serve",
]
