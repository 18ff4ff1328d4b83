"""Stage the assembled document and its assets on disk."""

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from epub_pdf.config import ASSET_DIR
from epub_pdf.models.assembly import AssembledDocument, RequiredAsset

log = logging.getLogger(__name__)

DOCUMENT_NAME = "combined.html"


def materialize_assets(assets: Iterable[RequiredAsset], staging_dir: Path) -> list[Path]:
    """Copy each asset to ``staging_dir/assets/<destination_name>``.

    Sources that do not exist are skipped with a warning.
    """
    asset_dir = staging_dir / ASSET_DIR
    asset_dir.mkdir(parents=True, exist_ok=True)

    copied = []
    for asset in assets:
        source = Path(asset.source_path)
        if not source.is_file():
            log.warning("Asset %s is missing, skipping", source)
            continue
        target = asset_dir / asset.destination_name
        shutil.copyfile(source, target)
        copied.append(target)

    return copied


def stage_document(document: AssembledDocument, staging_dir: Path) -> Path:
    """Write the HTML document and copy its assets next to it.

    Returns:
        Path to the written HTML file
    """
    staging_dir.mkdir(parents=True, exist_ok=True)
    materialize_assets(document.required_assets, staging_dir)

    html_path = staging_dir / DOCUMENT_NAME
    html_path.write_text(document.html, encoding="utf-8")
    return html_path
