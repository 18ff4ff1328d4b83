"""Conversion options and fixed names shared across the pipeline."""

from pydantic import BaseModel, ConfigDict, Field

# Flat directory that fonts and images are re-hosted under
ASSET_DIR = "assets"

# Class of the marker element inserted between spine documents
PAGE_BREAK_CLASS = "page-break"

# Well-known location of the container pointer inside an EPUB
CONTAINER_PATH = "META-INF/container.xml"


class ConversionOptions(BaseModel):
    """Options recognised by the style aggregator, assembler and renderer."""

    model_config = ConfigDict(frozen=True)

    margin: float = Field(default=0.5, ge=0)  # inches, all four sides
    include_page_numbers: bool = True
    custom_css: str = ""
    preserve_original_css: bool = True
    page_size: str = "A4"  # renderer only

    @property
    def margin_css(self) -> str:
        """Margin as a CSS length, e.g. ``0.5in``."""
        return f"{self.margin:g}in"

    def affects_style(self, other: "ConversionOptions") -> bool:
        """Whether switching to ``other`` changes the aggregated stylesheet."""
        return (
            self.margin != other.margin
            or self.custom_css != other.custom_css
            or self.preserve_original_css != other.preserve_original_css
        )
