"""
PDF Engine - Rasterize composed HTML to an A4 PDF.

WeasyPrint lays the page out and fetches remote images (post media,
avatars) while rendering.
"""

import io
import logging
from pathlib import Path
from typing import Optional, Union

from weasyprint import CSS, HTML
from weasyprint.text.fonts import FontConfiguration

logger = logging.getLogger(__name__)

# WeasyPrint warns about every unsupported CSS property
logging.getLogger("weasyprint").setLevel(logging.ERROR)
logging.getLogger("fontTools").setLevel(logging.ERROR)

PAGE_CSS = "@page { size: A4; margin: 20px; }"


class PDFRenderer:
    """HTML in, PDF out."""

    def __init__(self):
        self.font_config = FontConfiguration()
        self.page_css = CSS(string=PAGE_CSS, font_config=self.font_config)

    def render_html(
        self,
        html_content: str,
        output_path: Optional[Union[str, Path]] = None,
    ) -> Optional[bytes]:
        """
        Render an HTML document.

        Args:
            html_content: Complete HTML document
            output_path: Write the PDF here instead of returning it

        Returns:
            PDF bytes, or None when written to output_path
        """
        document = HTML(string=html_content, base_url=str(Path(__file__).parent))
        target = str(output_path) if output_path else io.BytesIO()

        document.write_pdf(
            target,
            stylesheets=[self.page_css],
            font_config=self.font_config,
        )
        if output_path:
            logger.debug("PDF written to %s", output_path)
            return None
        return target.getvalue()
