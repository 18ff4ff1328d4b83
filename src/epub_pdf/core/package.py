"""Build the package model from an extracted EPUB tree."""

import logging
import os
from pathlib import Path

from epub_pdf.config import ConversionOptions
from epub_pdf.core.locator import locate_package_document
from epub_pdf.core.manifest import is_within, resolve_manifest
from epub_pdf.core.opf_parser import RawMetadata, parse_package_document
from epub_pdf.core.spine import linearize_spine
from epub_pdf.core.styles import aggregate_styles
from epub_pdf.errors import MalformedPackage
from epub_pdf.models.package import ItemKind, PackageMetadata, PackageModel

log = logging.getLogger(__name__)


def build_metadata(raw: RawMetadata) -> PackageMetadata:
    """Apply defaults to whatever metadata the package declares."""
    defaults = PackageMetadata()
    return PackageMetadata(
        title=raw.title or defaults.title,
        creator=raw.creator or defaults.creator,
        language=raw.language or defaults.language,
    )


def build_package_model(
    extracted_root: str | Path, options: ConversionOptions | None = None
) -> PackageModel:
    """Interpret an extracted EPUB and return its package model.

    Args:
        extracted_root: Directory the EPUB archive was extracted into
        options: Options used for style aggregation (defaults if omitted)

    Returns:
        PackageModel for this conversion

    Raises:
        MalformedPackage: Container pointer or package document is invalid
        DuplicateManifestId: Two manifest entries share an id
        SpineReferenceNotFound: A spine idref has no manifest entry
    """
    options = options or ConversionOptions()
    root = Path(extracted_root)

    package_path = locate_package_document(root)
    opf_path = os.path.normpath(os.path.join(root, *package_path.split("/")))
    if not is_within(opf_path, str(root)):
        raise MalformedPackage(
            f"Invalid EPUB: package document outside the archive: {package_path}",
            path=package_path,
        )
    base_directory = os.path.dirname(opf_path)

    raw = parse_package_document(opf_path)
    manifest = resolve_manifest(raw.manifest, base_directory, str(root))
    spine = linearize_spine(raw.spine, manifest)

    stylesheets = [item for item in manifest if item.kind == ItemKind.STYLESHEET]
    aggregated_style = aggregate_styles(stylesheets, options)

    model = PackageModel(
        metadata=build_metadata(raw.metadata),
        manifest=tuple(manifest),
        spine=tuple(spine),
        aggregated_style=aggregated_style,
        base_directory=base_directory,
        options=options,
    )
    log.info(
        "Loaded %r: %d manifest item(s), %d spine item(s)",
        model.metadata.title,
        len(model.manifest),
        len(model.spine),
    )
    return model
