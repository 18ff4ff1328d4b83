"""Aggregate package stylesheets, custom CSS and page layout rules."""

import logging
import re
from collections.abc import Iterable

from epub_pdf.config import ASSET_DIR, PAGE_BREAK_CLASS, ConversionOptions
from epub_pdf.core.manifest import asset_basename
from epub_pdf.core.resources import read_text
from epub_pdf.errors import ResourceUnreadable
from epub_pdf.models.package import ManifestItem

log = logging.getLogger(__name__)

CSS_URL_PATTERN = re.compile(r"""url\(\s*(['"]?)([^'")]+?)\1\s*\)""")


def engine_rules(options: ConversionOptions) -> str:
    """Page margin and page-break rules appended to every stylesheet."""
    return (
        "@page {\n"
        f"  margin: {options.margin_css};\n"
        "}\n"
        f".{PAGE_BREAK_CLASS} {{\n"
        "  page-break-after: always;\n"
        "}\n"
    )


def rewrite_css_urls(css: str, asset_dir: str = ASSET_DIR) -> str:
    """Point every ``url(...)`` reference at the flat asset namespace.

    Inline ``data:`` URIs and fragment-only references are left untouched.
    """

    def replace(match: re.Match) -> str:
        reference = match.group(2).strip()
        if reference.startswith(("data:", "#")):
            return match.group(0)
        return f"url('{asset_dir}/{asset_basename(reference)}')"

    return CSS_URL_PATTERN.sub(replace, css)


def aggregate_styles(
    stylesheets: Iterable[ManifestItem], options: ConversionOptions
) -> str:
    """Build the single stylesheet inlined into the assembled document.

    Unreadable stylesheets are skipped. The engine rules are always
    appended, so the result is well-formed even without source styles.
    """
    parts: list[str] = []

    if options.preserve_original_css:
        for stylesheet in stylesheets:
            try:
                text = read_text(stylesheet.resolved_path, encoding="utf-8-sig")
                parts.append(text + "\n")
            except ResourceUnreadable as e:
                log.warning("Skipping stylesheet %s: %s", stylesheet.href, e)

    if options.custom_css:
        parts.append(options.custom_css.rstrip("\n") + "\n")

    parts.append(engine_rules(options))

    return rewrite_css_urls("".join(parts))
