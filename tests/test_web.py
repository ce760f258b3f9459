"""
Tests for the web view.
"""

import pytest

from autoapt.reporters.html_reporter import PAGE_TITLE, HTMLReporter
from autoapt.web.app import create_app

REPORT = (
    "RDS Start\n"
    "Region: us-east-1\n"
    "  No RDS instances found\n"
    "RDS End\n"
    "Instance Report!\n"
    "Instance ID: i-0abc\n"
    "Name: <b>web</b>\n"
    "----------\n"
)


@pytest.fixture
def client():
    app = create_app(REPORT)
    app.config["TESTING"] = True
    return app.test_client()


class TestWebView:
    """Tests for the report page."""

    def test_index_serves_report(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["Content-Type"] == "text/html; charset=utf-8"

        body = response.get_data(as_text=True)
        assert f"<title>{PAGE_TITLE}</title>" in body
        assert "font-family:monospace" in body
        assert "Instance ID: i-0abc\n" in body

    def test_report_is_escaped(self, client):
        body = client.get("/").get_data(as_text=True)

        assert "<b>web</b>" not in body
        assert "&lt;b&gt;web&lt;/b&gt;" in body

    def test_page_is_stable_across_requests(self, client):
        assert client.get("/").data == client.get("/").data

    def test_other_paths_not_found(self, client):
        assert client.get("/report.txt").status_code == 404

    def test_custom_renderer(self):
        app = create_app("hello\n", html_reporter=HTMLReporter(title="Audit"))
        body = app.test_client().get("/").get_data(as_text=True)

        assert "<title>Audit</title>" in body
        assert "hello" in body
