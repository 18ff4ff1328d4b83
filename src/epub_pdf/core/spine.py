"""Order content documents according to the spine."""

import logging

from epub_pdf.core.opf_parser import RawSpineRef
from epub_pdf.errors import SpineReferenceNotFound
from epub_pdf.models.package import ManifestItem, SpineItem

log = logging.getLogger(__name__)


def linearize_spine(
    refs: tuple[RawSpineRef, ...] | list[RawSpineRef],
    manifest: list[ManifestItem],
) -> list[SpineItem]:
    """Resolve every spine reference against the manifest, keeping order.

    An item is non-linear only when its ``linear`` attribute is exactly
    ``"no"``.

    Raises:
        SpineReferenceNotFound: If an idref has no manifest entry.
    """
    by_id = {item.id: item for item in manifest}
    spine = []

    for ref in refs:
        item = by_id.get(ref.idref)
        if item is None:
            raise SpineReferenceNotFound(ref.idref)
        spine.append(SpineItem.from_manifest(item, linear=ref.linear != "no"))

    log.debug(
        "Spine: %d item(s), %d linear",
        len(spine),
        sum(1 for item in spine if item.linear),
    )
    return spine
