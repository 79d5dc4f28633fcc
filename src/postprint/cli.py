"""
PostPrint CLI - Convert X post and article URLs to PDFs.

Usage:
    postprint convert https://x.com/user/status/123
    postprint convert https://x.com/i/article/456 --auth-token TOKEN --output article.pdf
    postprint serve  # Start web interface
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from . import __version__
from .config import Settings
from .errors import PostPrintError
from .logging_setup import configure_logging
from .pipeline import Converter

app = typer.Typer(
    name="postprint",
    help="Convert X posts and articles into PDFs.",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"PostPrint v{__version__}")
        raise typer.Exit()


def do_convert(
    url: str,
    output: Optional[Path],
    auth_token: Optional[str],
    csrf_token: Optional[str],
    save_html: Optional[Path],
    verbose: bool,
):
    """Core conversion logic."""
    settings = Settings.from_env()
    configure_logging("DEBUG" if verbose else settings.log_level)

    console.print(f"\n[bold]PostPrint[/bold] v{__version__}")
    console.print(f"Converting: [cyan]{url}[/cyan]\n")

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Fetching, extracting and rendering...", total=None)
            result = Converter(settings).convert(
                url, auth_token=auth_token, csrf_token=csrf_token
            )
            progress.update(task, completed=True)

        if output is None:
            output_dir = Path("output")
            output_dir.mkdir(exist_ok=True)
            output = output_dir / result.filename

        output.write_bytes(result.pdf_bytes)
        if save_html is not None:
            save_html.write_text(result.html, encoding="utf-8")

        console.print(f"[green]Success![/green] PDF saved to: [bold]{output}[/bold]")
        console.print(f"  Size: {len(result.pdf_bytes):,} bytes")
        if save_html is not None:
            console.print(f"  HTML: {save_html}")
        console.print()

    except PostPrintError as e:
        console.print(f"\n[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"\n[red]Error:[/red] Failed to convert to PDF: {e}")
        if verbose:
            logger.exception("Conversion failed")
        raise typer.Exit(1)


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """Convert X posts and articles into PDFs."""


@app.command()
def convert(
    url: str = typer.Argument(
        ...,
        help="URL of the post (/<user>/status/<id>) or article (/i/article/<id>)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Output PDF filename (default: output/<tweet|article>-<id>.pdf)",
    ),
    auth_token: Optional[str] = typer.Option(
        None,
        "--auth-token",
        envvar="POSTPRINT_AUTH_TOKEN",
        help="auth_token cookie of a logged-in session (required for articles)",
    ),
    csrf_token: Optional[str] = typer.Option(
        None,
        "--csrf-token",
        envvar="POSTPRINT_CSRF_TOKEN",
        help="ct0 cookie of a logged-in session",
    ),
    save_html: Optional[Path] = typer.Option(
        None,
        "--save-html",
        help="Also write the composed HTML to this file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-V",
        help="Debug logging and tracebacks",
    ),
):
    """
    Convert an X post or article URL to a PDF.

    Example:
        postprint convert https://x.com/jack/status/20
    """
    do_convert(url, output, auth_token, csrf_token, save_html, verbose)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
):
    """
    Start the web interface for PostPrint.
    """
    import uvicorn

    configure_logging(Settings.from_env().log_level, rich_console=False)

    console.print(f"\n[bold]PostPrint[/bold] Web Interface")
    console.print(f"Starting server at [cyan]http://{host}:{port}[/cyan]\n")

    uvicorn.run(
        "postprint.web:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
