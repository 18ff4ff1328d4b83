"""Render a staged HTML document to PDF with WeasyPrint."""

import logging
from pathlib import Path
from typing import BinaryIO

from epub_pdf.config import ConversionOptions

log = logging.getLogger(__name__)

PdfTarget = str | Path | BinaryIO | None


def page_css(options: ConversionOptions) -> str:
    """Paged-media rules for the renderer: size, margins, page numbers."""
    footer = ""
    if options.include_page_numbers:
        footer = (
            "  @bottom-center {\n"
            '    content: counter(page) " / " counter(pages);\n'
            "    font-size: 10px;\n"
            "    color: #999;\n"
            "  }\n"
        )
    return (
        "@page {\n"
        f"  size: {options.page_size};\n"
        f"  margin: {options.margin_css};\n"
        f"{footer}"
        "}\n"
    )


def render_pdf(
    html_path: Path, options: ConversionOptions, target: PdfTarget = None
) -> bytes | None:
    """Render ``html_path`` to PDF.

    Args:
        html_path: Staged HTML file; relative asset references resolve
            against its directory
        options: Conversion options (page size, margin, page numbers)
        target: File path or writable binary stream; ``None`` returns bytes

    Returns:
        PDF bytes when ``target`` is None, otherwise None
    """
    from weasyprint import CSS, HTML
    from weasyprint.text.fonts import FontConfiguration

    font_config = FontConfiguration()
    document = HTML(filename=str(html_path), base_url=str(html_path.parent))
    stylesheet = CSS(string=page_css(options), font_config=font_config)

    log.info("Rendering %s", html_path.name)
    if isinstance(target, Path):
        target = str(target)
    return document.write_pdf(target, stylesheets=[stylesheet], font_config=font_config)
