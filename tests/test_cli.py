"""Tests for postprint.cli."""

from unittest.mock import patch

from typer.testing import CliRunner

from postprint import __version__
from postprint.cli import app
from postprint.errors import InvalidURLError
from postprint.pipeline import ConversionResult

runner = CliRunner()


@patch("postprint.cli.Converter")
def test_convert_writes_pdf(mock_converter, tmp_path) -> None:
    mock_converter.return_value.convert.return_value = ConversionResult(
        filename="tweet-20.pdf", pdf_bytes=b"%PDF-1.7 fake", html="<html>post</html>"
    )
    output = tmp_path / "out.pdf"
    html_out = tmp_path / "out.html"

    result = runner.invoke(
        app,
        [
            "convert",
            "https://x.com/jack/status/20",
            "--output", str(output),
            "--save-html", str(html_out),
        ],
    )

    assert result.exit_code == 0, result.output
    assert output.read_bytes() == b"%PDF-1.7 fake"
    assert html_out.read_text(encoding="utf-8") == "<html>post</html>"
    mock_converter.return_value.convert.assert_called_once_with(
        "https://x.com/jack/status/20", auth_token=None, csrf_token=None
    )


@patch("postprint.cli.Converter")
def test_convert_reads_tokens_from_environment(mock_converter, tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("POSTPRINT_AUTH_TOKEN", "secret")
    mock_converter.return_value.convert.return_value = ConversionResult(
        filename="article-1.pdf", pdf_bytes=b"%PDF", html=""
    )

    result = runner.invoke(
        app, ["convert", "https://x.com/i/article/1", "-o", str(tmp_path / "a.pdf")]
    )

    assert result.exit_code == 0, result.output
    mock_converter.return_value.convert.assert_called_once_with(
        "https://x.com/i/article/1", auth_token="secret", csrf_token=None
    )


@patch("postprint.cli.Converter")
def test_convert_reports_errors(mock_converter, tmp_path) -> None:
    mock_converter.return_value.convert.side_effect = InvalidURLError("Invalid Twitter/X URL.")

    result = runner.invoke(app, ["convert", "https://example.com", "-o", str(tmp_path / "x.pdf")])

    assert result.exit_code == 1
    assert "Invalid Twitter/X URL." in result.output


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"PostPrint v{__version__}" in result.output
