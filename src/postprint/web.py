"""
PostPrint Web Interface - Browser-based UI for post/article conversion.

A small FastAPI application: a form page and a JSON endpoint that
returns the PDF.
"""

import io
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, StreamingResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, Field

from . import __version__
from .errors import ConversionRequestError
from .pipeline import Converter

logger = logging.getLogger(__name__)


# Initialize FastAPI app
app = FastAPI(
    title="PostPrint",
    description="Convert X posts and articles into PDFs",
    version=__version__,
)

# Set up templates
templates_dir = Path(__file__).parent / "web_templates"
templates = Jinja2Templates(directory=str(templates_dir))


class ConversionRequest(BaseModel):
    """Request model for post/article conversion."""

    url: Optional[str] = None
    auth_token: Optional[str] = Field(default=None, alias="authToken")
    csrf_token: Optional[str] = Field(default=None, alias="csrfToken")


def get_converter() -> Converter:
    return Converter()


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return error_response("Invalid request body", 400)


@app.get("/", response_class=HTMLResponse)
async def home(request: Request):
    """Render the home page with conversion form."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"version": __version__},
    )


@app.post("/api/convert")
def api_convert(body: ConversionRequest):
    """
    Convert a post or article URL to PDF and return it for download.

    Runs in the threadpool: the browser is driven through Playwright's
    sync API.
    """
    if not body.url:
        return error_response("URL is required", 400)

    try:
        result = get_converter().convert(
            body.url,
            auth_token=body.auth_token,
            csrf_token=body.csrf_token,
        )
    except ConversionRequestError as e:
        logger.info("Rejected %s: %s", body.url, e)
        return error_response(str(e), 400)
    except Exception as e:
        logger.exception("PDF conversion error")
        return error_response(f"Failed to convert to PDF: {e}", 500)

    return StreamingResponse(
        io.BytesIO(result.pdf_bytes),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
            "Content-Length": str(len(result.pdf_bytes)),
        },
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
