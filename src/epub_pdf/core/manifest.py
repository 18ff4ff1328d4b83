"""Resolve manifest entries to typed, classified items."""

import os
import posixpath
from urllib.parse import unquote

from epub_pdf.core.opf_parser import RawManifestEntry
from epub_pdf.errors import DuplicateManifestId, MalformedPackage
from epub_pdf.models.package import ItemKind, ManifestItem

FONT_EXTENSIONS = (".ttf", ".otf")
CONTENT_MEDIA_TYPES = ("application/xhtml+xml", "text/html")


def classify_media_type(media_type: str, href: str = "") -> ItemKind:
    """Classify a manifest item by its media type.

    Fonts are also recognised by a ``.ttf``/``.otf`` extension, since many
    packages declare them as ``application/octet-stream``.
    """
    media_type = media_type.lower()
    path = href.split("#", 1)[0].split("?", 1)[0].lower()

    if "css" in media_type:
        return ItemKind.STYLESHEET
    if "font" in media_type or "opentype" in media_type:
        return ItemKind.FONT
    if media_type.startswith("image/"):
        return ItemKind.IMAGE
    if media_type in CONTENT_MEDIA_TYPES:
        return ItemKind.CONTENT_DOCUMENT
    if path.endswith(FONT_EXTENSIONS):
        return ItemKind.FONT
    return ItemKind.OTHER


def is_within(path: str, root: str) -> bool:
    """Whether ``path`` lies inside the directory ``root``."""
    root = os.path.abspath(root)
    return os.path.commonpath([os.path.abspath(path), root]) == root


def resolve_href(base_directory: str, href: str) -> str:
    """Filesystem path of ``href`` relative to the package document directory."""
    relative = unquote(href.split("#", 1)[0])
    return os.path.normpath(os.path.join(base_directory, *relative.split("/")))


def asset_basename(reference: str) -> str:
    """Basename of a URL reference, without query or fragment."""
    path = reference.split("#", 1)[0].split("?", 1)[0]
    return posixpath.basename(path.rstrip("/"))


def resolve_manifest(
    entries: tuple[RawManifestEntry, ...] | list[RawManifestEntry],
    base_directory: str,
    root: str | None = None,
) -> list[ManifestItem]:
    """Build manifest items in declaration order.

    When ``root`` is given, every resolved path must stay inside it.

    Raises:
        DuplicateManifestId: If two entries share an id.
        MalformedPackage: If an href resolves outside ``root``.
    """
    seen: set[str] = set()
    items = []

    for entry in entries:
        if entry.id in seen:
            raise DuplicateManifestId(entry.id)
        seen.add(entry.id)

        resolved_path = resolve_href(base_directory, entry.href)
        if root is not None and not is_within(resolved_path, root):
            raise MalformedPackage(
                f"Invalid EPUB: manifest item {entry.id!r} points outside"
                f" the package: {entry.href}",
                path=entry.href,
            )

        items.append(
            ManifestItem(
                id=entry.id,
                href=entry.href,
                media_type=entry.media_type,
                properties=entry.properties,
                resolved_path=resolved_path,
                kind=classify_media_type(entry.media_type, entry.href),
            )
        )

    return items
