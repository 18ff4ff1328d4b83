"""Data models."""

from epub_pdf.models.assembly import AssembledDocument, RequiredAsset
from epub_pdf.models.package import (
    ItemKind,
    ManifestItem,
    PackageMetadata,
    PackageModel,
    SpineItem,
)

__all__ = [
    # Package models
    "ItemKind",
    "PackageMetadata",
    "ManifestItem",
    "SpineItem",
    "PackageModel",
    # Output models
    "RequiredAsset",
    "AssembledDocument",
]
