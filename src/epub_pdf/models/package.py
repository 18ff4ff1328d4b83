"""Data models for the EPUB package (metadata, manifest, spine)."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from epub_pdf.config import ConversionOptions


class ItemKind(str, Enum):
    """Role a manifest item plays in the assembled document."""

    STYLESHEET = "stylesheet"
    FONT = "font"
    IMAGE = "image"
    CONTENT_DOCUMENT = "content-document"
    OTHER = "other"


class PackageMetadata(BaseModel):
    """Book-level metadata from the package document."""

    model_config = ConfigDict(frozen=True)

    title: str = "Untitled"
    creator: str = "Unknown Author"
    language: str = "en"


class ManifestItem(BaseModel):
    """Single manifest declaration with its resolved location."""

    model_config = ConfigDict(frozen=True)

    id: str
    href: str  # relative to the package document directory
    media_type: str
    properties: frozenset[str] = Field(default_factory=frozenset)
    resolved_path: str
    kind: ItemKind = ItemKind.OTHER


class SpineItem(BaseModel):
    """Entry in the reading order, backed by a manifest item."""

    model_config = ConfigDict(frozen=True)

    idref: str
    linear: bool = True
    href: str
    resolved_path: str

    @classmethod
    def from_manifest(cls, item: ManifestItem, linear: bool = True) -> "SpineItem":
        """Build a spine item from the manifest item it references."""
        return cls(
            idref=item.id,
            linear=linear,
            href=item.href,
            resolved_path=item.resolved_path,
        )


class PackageModel(BaseModel):
    """Everything needed to assemble one EPUB into a single document."""

    model_config = ConfigDict(frozen=True)

    metadata: PackageMetadata
    manifest: tuple[ManifestItem, ...]
    spine: tuple[SpineItem, ...]
    aggregated_style: str
    base_directory: str
    options: ConversionOptions = Field(default_factory=ConversionOptions)

    def _of_kind(self, kind: ItemKind) -> list[ManifestItem]:
        return [item for item in self.manifest if item.kind == kind]

    @property
    def stylesheets(self) -> list[ManifestItem]:
        return self._of_kind(ItemKind.STYLESHEET)

    @property
    def font_assets(self) -> list[ManifestItem]:
        return self._of_kind(ItemKind.FONT)

    @property
    def image_assets(self) -> list[ManifestItem]:
        return self._of_kind(ItemKind.IMAGE)

    def get_item(self, item_id: str) -> ManifestItem | None:
        """Look up a manifest item by id."""
        for item in self.manifest:
            if item.id == item_id:
                return item
        return None
