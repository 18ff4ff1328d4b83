"""Data models for the assembled output document."""

from pydantic import BaseModel, ConfigDict, Field

from epub_pdf.config import ConversionOptions


class RequiredAsset(BaseModel):
    """A file that must be copied into the asset namespace before rendering."""

    model_config = ConfigDict(frozen=True)

    source_path: str
    destination_name: str  # basename under ASSET_DIR


class AssembledDocument(BaseModel):
    """Single HTML document plus the assets it references."""

    model_config = ConfigDict(frozen=True)

    html: str
    required_assets: tuple[RequiredAsset, ...] = ()
    title: str = "Untitled"
    options: ConversionOptions = Field(default_factory=ConversionOptions)
