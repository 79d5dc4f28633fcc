"""Tests for postprint.web."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from postprint import __version__
from postprint.errors import ExtractionEmptyError, InvalidURLError
from postprint.pipeline import ConversionResult
from postprint.web import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def converter():
    converter = MagicMock()
    with patch("postprint.web.get_converter", return_value=converter):
        yield converter


class TestApiConvert:
    def test_returns_pdf(self, client, converter) -> None:
        converter.convert.return_value = ConversionResult(
            filename="tweet-20.pdf", pdf_bytes=b"%PDF-1.7 fake", html="<html></html>"
        )

        response = client.post(
            "/api/convert",
            json={"url": "https://x.com/jack/status/20", "csrfToken": "ct0value"},
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == 'attachment; filename="tweet-20.pdf"'
        assert response.content == b"%PDF-1.7 fake"
        converter.convert.assert_called_once_with(
            "https://x.com/jack/status/20", auth_token=None, csrf_token="ct0value"
        )

    def test_passes_auth_token(self, client, converter) -> None:
        converter.convert.return_value = ConversionResult(
            filename="article-1.pdf", pdf_bytes=b"%PDF", html=""
        )
        client.post(
            "/api/convert",
            json={"url": "https://x.com/i/article/1", "authToken": "secret"},
        )
        converter.convert.assert_called_once_with(
            "https://x.com/i/article/1", auth_token="secret", csrf_token=None
        )

    def test_missing_url_is_400(self, client, converter) -> None:
        response = client.post("/api/convert", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}
        converter.convert.assert_not_called()

    def test_malformed_body_is_400(self, client, converter) -> None:
        response = client.post(
            "/api/convert", content=b"not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.parametrize(
        "error",
        [
            InvalidURLError("Invalid Twitter/X URL."),
            ExtractionEmptyError("Could not extract article content."),
        ],
    )
    def test_request_errors_are_400(self, client, converter, error) -> None:
        converter.convert.side_effect = error
        response = client.post("/api/convert", json={"url": "https://x.com/i/article/1"})
        assert response.status_code == 400
        assert response.json() == {"error": str(error)}

    def test_unexpected_errors_are_500(self, client, converter) -> None:
        converter.convert.side_effect = RuntimeError("browser crashed")
        response = client.post("/api/convert", json={"url": "https://x.com/jack/status/20"})
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to convert to PDF: browser crashed"}


def test_home_page(client) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert "PostPrint" in response.text
    assert f"v{__version__}" in response.text


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "healthy", "version": __version__}
