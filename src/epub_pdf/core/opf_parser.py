"""Parse the package document into typed, validated structural nodes."""

import logging
from dataclasses import dataclass
from pathlib import Path

from lxml import etree

from epub_pdf.core.locator import secure_parser
from epub_pdf.core.resources import read_bytes
from epub_pdf.errors import MalformedPackage, ResourceUnreadable

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawMetadata:
    """Dublin Core fields as found in the document (None when absent)."""

    title: str | None = None
    creator: str | None = None
    language: str | None = None


@dataclass(frozen=True)
class RawManifestEntry:
    """One ``<item>`` of the manifest section."""

    id: str
    href: str
    media_type: str
    properties: frozenset[str] = frozenset()


@dataclass(frozen=True)
class RawSpineRef:
    """One ``<itemref>`` of the spine section."""

    idref: str
    linear: str | None = None  # raw attribute value


@dataclass(frozen=True)
class RawPackage:
    """Package document sections in declaration order."""

    metadata: RawMetadata
    manifest: tuple[RawManifestEntry, ...]
    spine: tuple[RawSpineRef, ...]


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def _first_text(section: etree._Element | None, name: str) -> str | None:
    """Text of the first child element with the given local name."""
    if section is None:
        return None
    for child in section:
        if isinstance(child.tag, str) and _local_name(child) == name:
            text = "".join(child.itertext()).strip()
            return text or None
    return None


def _find_section(root: etree._Element, name: str) -> etree._Element | None:
    for child in root:
        if isinstance(child.tag, str) and _local_name(child) == name:
            return child
    return None


def _parse_manifest(section: etree._Element, source: str) -> tuple[RawManifestEntry, ...]:
    entries = []
    for item in section.iter("{*}item"):
        item_id = (item.get("id") or "").strip()
        href = (item.get("href") or "").strip()
        if not item_id or not href:
            raise MalformedPackage(
                f"Invalid EPUB: manifest item without id or href in {source}",
                path=source,
            )
        entries.append(
            RawManifestEntry(
                id=item_id,
                href=href,
                media_type=(item.get("media-type") or "").strip(),
                properties=frozenset((item.get("properties") or "").split()),
            )
        )
    return tuple(entries)


def _parse_spine(section: etree._Element, source: str) -> tuple[RawSpineRef, ...]:
    refs = []
    for itemref in section.iter("{*}itemref"):
        idref = (itemref.get("idref") or "").strip()
        if not idref:
            raise MalformedPackage(
                f"Invalid EPUB: spine itemref without idref in {source}",
                path=source,
            )
        linear = itemref.get("linear")
        refs.append(RawSpineRef(idref=idref, linear=linear.strip() if linear else None))
    return tuple(refs)


def parse_package_document(path: str | Path) -> RawPackage:
    """Parse the package document at ``path``.

    The metadata section is optional (defaults are applied downstream);
    manifest and spine are required.

    Raises:
        MalformedPackage: If the file is unreadable, not well-formed XML,
            or lacks a manifest or spine section.
    """
    source = str(path)

    try:
        data = read_bytes(path)
    except ResourceUnreadable as e:
        raise MalformedPackage(
            f"Invalid EPUB: package document not found at {source}", path=source
        ) from e

    try:
        root = etree.fromstring(data, parser=secure_parser())
    except etree.XMLSyntaxError as e:
        raise MalformedPackage(
            f"Invalid EPUB: package document is not well-formed ({e})", path=source
        ) from e

    if _local_name(root) != "package":
        raise MalformedPackage(
            f"Invalid EPUB: expected <package> root, found <{_local_name(root)}>",
            path=source,
        )

    manifest = _find_section(root, "manifest")
    spine = _find_section(root, "spine")
    for name, section in (("manifest", manifest), ("spine", spine)):
        if section is None:
            raise MalformedPackage(
                f"Invalid EPUB: package document has no <{name}> section",
                path=source,
            )

    metadata_section = _find_section(root, "metadata")
    if metadata_section is None:
        log.warning("Package document %s has no <metadata> section", source)

    return RawPackage(
        metadata=RawMetadata(
            title=_first_text(metadata_section, "title"),
            creator=_first_text(metadata_section, "creator"),
            language=_first_text(metadata_section, "language"),
        ),
        manifest=_parse_manifest(manifest, source),
        spine=_parse_spine(spine, source),
    )
