"""Convert EPUB books into a single styled HTML document and render it to PDF."""

from epub_pdf.config import ConversionOptions
from epub_pdf.converter import (
    EpubConverter,
    convert_epub_to_bytes,
    convert_epub_to_pdf,
    convert_epub_to_stream,
)
from epub_pdf.core.assembler import assemble_document
from epub_pdf.core.package import build_package_model
from epub_pdf.errors import (
    DuplicateManifestId,
    EpubPdfError,
    MalformedPackage,
    ResourceUnreadable,
    SpineReferenceNotFound,
)

__version__ = "0.1.0"

__all__ = [
    "ConversionOptions",
    "EpubConverter",
    "convert_epub_to_pdf",
    "convert_epub_to_bytes",
    "convert_epub_to_stream",
    "build_package_model",
    "assemble_document",
    "EpubPdfError",
    "MalformedPackage",
    "DuplicateManifestId",
    "SpineReferenceNotFound",
    "ResourceUnreadable",
]
