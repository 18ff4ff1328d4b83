"""Extract an EPUB archive into a directory."""

import io
import logging
import os
import zipfile
from pathlib import Path
from typing import BinaryIO

from epub_pdf.errors import MalformedPackage

log = logging.getLogger(__name__)

EpubSource = str | Path | bytes | BinaryIO


def _open_archive(source: EpubSource) -> zipfile.ZipFile:
    if isinstance(source, (str, Path)):
        if not Path(source).exists():
            raise FileNotFoundError(f"File not found: {source}")
        return zipfile.ZipFile(source)
    if isinstance(source, (bytes, bytearray)):
        return zipfile.ZipFile(io.BytesIO(source))
    # Streams are buffered since ZipFile needs a seekable file
    return zipfile.ZipFile(io.BytesIO(source.read()))


def check_members(archive: zipfile.ZipFile, destination: Path) -> None:
    """Reject members that would land outside ``destination``."""
    root = os.path.abspath(destination)
    for name in archive.namelist():
        target = os.path.abspath(os.path.join(root, name))
        if name.startswith(("/", "\\")) or os.path.commonpath([target, root]) != root:
            raise MalformedPackage(
                f"Invalid EPUB: archive member escapes the extraction root: {name}",
                path=name,
            )


def extract_epub(source: EpubSource, destination: str | Path) -> Path:
    """Extract ``source`` (path, bytes or binary stream) into ``destination``.

    Raises:
        FileNotFoundError: If a path source does not exist
        MalformedPackage: If the source is not a zip archive or a member
            path escapes ``destination``
    """
    destination = Path(destination)
    destination.mkdir(parents=True, exist_ok=True)

    try:
        with _open_archive(source) as archive:
            check_members(archive, destination)
            archive.extractall(destination)
            log.debug("Extracted %d member(s) to %s", len(archive.namelist()), destination)
    except zipfile.BadZipFile as e:
        raise MalformedPackage(f"Invalid EPUB: not a zip archive ({e})") from e

    return destination
