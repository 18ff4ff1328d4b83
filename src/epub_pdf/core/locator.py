"""Locate the package document through the EPUB container pointer."""

import logging
from pathlib import Path

from lxml import etree

from epub_pdf.config import CONTAINER_PATH
from epub_pdf.core.resources import read_bytes
from epub_pdf.errors import MalformedPackage, ResourceUnreadable

log = logging.getLogger(__name__)

PACKAGE_MEDIA_TYPE = "application/oebps-package+xml"


def secure_parser() -> etree.XMLParser:
    """XML parser that never resolves entities or touches the network."""
    return etree.XMLParser(resolve_entities=False, no_network=True, recover=False)


def locate_package_document(extracted_root: str | Path) -> str:
    """Return the package document path, relative to the extracted root.

    Raises:
        MalformedPackage: If the container pointer is missing, is not
            well-formed XML, or declares no root file.
    """
    container_path = Path(extracted_root) / CONTAINER_PATH

    try:
        data = read_bytes(container_path)
    except ResourceUnreadable as e:
        raise MalformedPackage(
            f"Invalid EPUB: {CONTAINER_PATH} not found", path=str(container_path)
        ) from e

    try:
        root = etree.fromstring(data, parser=secure_parser())
    except etree.XMLSyntaxError as e:
        raise MalformedPackage(
            f"Invalid EPUB: {CONTAINER_PATH} is not well-formed ({e})",
            path=str(container_path),
        ) from e

    rootfiles = [
        rf for rf in root.iter("{*}rootfile") if rf.get("full-path", "").strip()
    ]
    if not rootfiles:
        raise MalformedPackage(
            f"Invalid EPUB: {CONTAINER_PATH} declares no root file",
            path=str(container_path),
        )

    # Prefer the OPF rendition when several root files are declared
    for rootfile in rootfiles:
        if rootfile.get("media-type") == PACKAGE_MEDIA_TYPE:
            chosen = rootfile
            break
    else:
        chosen = rootfiles[0]

    full_path = chosen.get("full-path").strip()
    log.debug("Package document: %s", full_path)
    return full_path
