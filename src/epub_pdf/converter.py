"""End-to-end conversion: extract, build, assemble, stage, render."""

import logging
import tempfile
from pathlib import Path
from typing import BinaryIO

from epub_pdf.config import ConversionOptions
from epub_pdf.core.archive import EpubSource, extract_epub
from epub_pdf.core.assembler import assemble_document
from epub_pdf.core.assets import stage_document
from epub_pdf.core.package import build_package_model
from epub_pdf.core.renderer import PdfTarget, render_pdf
from epub_pdf.models.assembly import AssembledDocument

log = logging.getLogger(__name__)


class EpubConverter:
    """Convert EPUB files to PDF (or a staged HTML document)."""

    def __init__(self, options: ConversionOptions | None = None):
        self.options = options or ConversionOptions()

    def assemble(self, source: EpubSource, workdir: Path) -> AssembledDocument:
        """Extract ``source`` under ``workdir`` and assemble its document."""
        extracted = extract_epub(source, workdir / "book")
        log.debug("Extracted EPUB to %s", extracted)
        model = build_package_model(extracted, self.options)
        return assemble_document(model, self.options)

    def convert(self, source: EpubSource, output: PdfTarget = None) -> bytes | None:
        """Convert an EPUB to PDF.

        Args:
            source: Path to the EPUB, its bytes, or a readable binary stream
            output: Destination path, writable binary stream, or None

        Returns:
            PDF bytes when ``output`` is None, otherwise None
        """
        with tempfile.TemporaryDirectory(prefix="epub-pdf-") as tmp:
            workdir = Path(tmp)
            document = self.assemble(source, workdir)
            html_path = stage_document(document, workdir / "staging")
            return render_pdf(html_path, self.options, output)

    def convert_to_bytes(self, source: EpubSource) -> bytes:
        """Convert an EPUB and return the PDF bytes."""
        return self.convert(source, None)

    def convert_to_stream(self, source: EpubSource, stream: BinaryIO) -> None:
        """Convert an EPUB and write the PDF to ``stream``."""
        self.convert(source, stream)

    def convert_to_html(self, source: EpubSource, output_dir: Path) -> Path:
        """Write the assembled HTML and its assets to ``output_dir``.

        Returns:
            Path to the HTML file
        """
        with tempfile.TemporaryDirectory(prefix="epub-pdf-") as tmp:
            document = self.assemble(source, Path(tmp))
            return stage_document(document, Path(output_dir))


def convert_epub_to_pdf(
    source: EpubSource,
    output: PdfTarget = None,
    options: ConversionOptions | None = None,
) -> bytes | None:
    """Convert an EPUB to PDF with a one-off converter."""
    return EpubConverter(options).convert(source, output)


def convert_epub_to_bytes(
    source: EpubSource, options: ConversionOptions | None = None
) -> bytes:
    """Convert an EPUB and return the PDF bytes."""
    return EpubConverter(options).convert_to_bytes(source)


def convert_epub_to_stream(
    source: EpubSource, stream: BinaryIO, options: ConversionOptions | None = None
) -> None:
    """Convert an EPUB and write the PDF to ``stream``."""
    EpubConverter(options).convert_to_stream(source, stream)
