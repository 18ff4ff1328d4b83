"""Convert command implementation."""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from epub_pdf.config import ConversionOptions
from epub_pdf.converter import EpubConverter


def get_default_output_path(book_path: Path) -> Path:
    """Default PDF path: the book's name with a .pdf suffix, next to it."""
    return book_path.with_suffix(".pdf")


def execute_convert(
    book_path: Path,
    output: Path | None,
    options: ConversionOptions,
    html_dir: Path | None,
    quiet: bool,
    console: Console,
) -> Path:
    """Execute the convert command. Returns the written file."""
    converter = EpubConverter(options)
    pdf_path = output or get_default_output_path(book_path)

    def run() -> Path:
        if html_dir is not None:
            return converter.convert_to_html(book_path, html_dir)
        converter.convert(book_path, pdf_path)
        return pdf_path

    if quiet:
        return run()

    description = "Assembling HTML..." if html_dir is not None else "Rendering PDF..."
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task(description, total=None)
        written = run()

    summary_lines = [
        f"[green]Converted {book_path.name}[/]",
        "",
        f"[dim]Output:[/] {written}",
        f"[dim]Margin:[/] {options.margin_css}",
    ]
    if html_dir is None:
        summary_lines.append(f"[dim]Page size:[/] {options.page_size}")
        summary_lines.append(
            f"[dim]Page numbers:[/] {'yes' if options.include_page_numbers else 'no'}"
        )

    console.print(
        Panel(
            "\n".join(summary_lines),
            title="Complete",
            border_style="green",
        )
    )
    return written
