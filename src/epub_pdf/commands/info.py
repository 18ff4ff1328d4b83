"""Info command implementation."""

import tempfile
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from epub_pdf.core.archive import extract_epub
from epub_pdf.core.package import build_package_model
from epub_pdf.models.package import PackageModel


def display_spine(model: PackageModel, console: Console) -> None:
    """Display the reading order."""
    table = Table(title="Spine", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Id", style="white")
    table.add_column("Href", style="white")
    table.add_column("Linear", justify="center")

    for i, item in enumerate(model.spine):
        linear = "[green]yes[/]" if item.linear else "[yellow]no[/]"
        table.add_row(str(i + 1), item.idref, item.href, linear)

    console.print(table)


def execute_info(book_path: Path, console: Console) -> PackageModel:
    """Execute the info command."""
    with tempfile.TemporaryDirectory(prefix="epub-pdf-") as tmp:
        extracted = extract_epub(book_path, Path(tmp))
        model = build_package_model(extracted)

    metadata = model.metadata
    info_lines = [
        f"[bold]{metadata.title}[/]",
        "",
        f"[dim]Author:[/] {metadata.creator}",
        f"[dim]Language:[/] {metadata.language}",
        f"[dim]Manifest items:[/] {len(model.manifest)}",
        f"[dim]Stylesheets:[/] {len(model.stylesheets)}",
        f"[dim]Fonts:[/] {len(model.font_assets)}",
        f"[dim]Images:[/] {len(model.image_assets)}",
    ]

    console.print()
    console.print(
        Panel(
            "\n".join(info_lines),
            title="Book Information",
            border_style="green",
        )
    )
    console.print()
    display_spine(model, console)
    console.print()
    return model
