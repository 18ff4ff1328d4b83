"""Assemble the spine into one HTML document."""

import logging
import warnings
from html import escape
from urllib.parse import unquote

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

from epub_pdf.config import ASSET_DIR, PAGE_BREAK_CLASS, ConversionOptions
from epub_pdf.core.manifest import asset_basename
from epub_pdf.core.resources import read_text
from epub_pdf.core.styles import aggregate_styles
from epub_pdf.errors import ResourceUnreadable
from epub_pdf.models.assembly import AssembledDocument, RequiredAsset
from epub_pdf.models.package import PackageModel

# Content documents are XHTML; they are parsed as HTML on purpose
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)

log = logging.getLogger(__name__)

PAGE_BREAK_MARKER = f'<div class="{PAGE_BREAK_CLASS}"></div>'

DOCUMENT_SHELL = """<!DOCTYPE html>
<html lang="{language}">
<head>
<meta charset="utf-8"/>
<title>{title}</title>
<style>
{style}
</style>
</head>
<body>{body}</body>
</html>
"""


def asset_reference(reference: str, asset_dir: str = ASSET_DIR) -> str:
    """Reference into the flat asset namespace for ``reference``."""
    return f"{asset_dir}/{asset_basename(reference)}"


# Attributes holding an image reference, per tag (SVG covers use <image href>)
IMAGE_ATTRIBUTES = {
    "img": ("src",),
    "image": ("href", "xlink:href"),
}


def _rewrite_images(tree: BeautifulSoup, asset_dir: str, only_foreign: bool) -> None:
    for tag in tree.find_all(list(IMAGE_ATTRIBUTES)):
        for attribute in IMAGE_ATTRIBUTES[tag.name]:
            reference = tag.get(attribute)
            if not reference:
                continue
            if only_foreign and reference.startswith(f"{asset_dir}/"):
                continue
            tag[attribute] = asset_reference(reference, asset_dir)


def extract_body(markup: str, asset_dir: str = ASSET_DIR) -> str:
    """Body contents of a content document with images re-pointed.

    Returns an empty string when the document has no body element.
    """
    tree = BeautifulSoup(markup, "lxml")
    if tree.body is None:
        return ""
    _rewrite_images(tree, asset_dir, only_foreign=False)
    return tree.body.decode_contents()


def normalize_image_sources(html: str, asset_dir: str = ASSET_DIR) -> str:
    """Final sweep over a combined document.

    Any image still pointing outside the asset namespace (absolute paths,
    unexpected relative forms) is re-pointed at it.
    """
    tree = BeautifulSoup(html, "lxml")
    _rewrite_images(tree, asset_dir, only_foreign=True)
    return str(tree)


def collect_required_assets(model: PackageModel) -> list[RequiredAsset]:
    """Fonts and images to copy into the asset namespace.

    Assets are keyed by basename only; when two share a basename the later
    one wins.
    """
    assets = []
    owners: dict[str, str] = {}

    for item in [*model.font_assets, *model.image_assets]:
        name = unquote(asset_basename(item.href))
        if name in owners:
            log.warning(
                "Asset name collision: %s and %s both map to %s/%s",
                owners[name],
                item.href,
                ASSET_DIR,
                name,
            )
        owners[name] = item.href
        assets.append(RequiredAsset(source_path=item.resolved_path, destination_name=name))

    return assets


def assemble_body(model: PackageModel) -> str:
    """Concatenate the body of every readable linear spine document."""
    sections: list[str] = []

    for item in model.spine:
        if not item.linear:
            log.debug("Skipping non-linear spine item %s", item.idref)
            continue
        try:
            markup = read_text(item.resolved_path)
        except ResourceUnreadable as e:
            log.warning("Skipping spine item %s: %s", item.idref, e)
            continue
        sections.append(extract_body(markup))

    return PAGE_BREAK_MARKER.join(sections)


def assemble_document(
    model: PackageModel, options: ConversionOptions | None = None
) -> AssembledDocument:
    """Produce the single HTML document for a package model.

    Args:
        model: Package model built by ``build_package_model``
        options: Conversion options; the model's own options if omitted

    Returns:
        AssembledDocument with the HTML text and the assets it references
    """
    options = options or model.options

    if model.options.affects_style(options):
        style = aggregate_styles(model.stylesheets, options)
    else:
        style = model.aggregated_style

    html = DOCUMENT_SHELL.format(
        language=escape(model.metadata.language),
        title=escape(model.metadata.title),
        style=style,
        body=assemble_body(model),
    )

    return AssembledDocument(
        html=normalize_image_sources(html),
        required_assets=tuple(collect_required_assets(model)),
        title=model.metadata.title,
        options=options,
    )
