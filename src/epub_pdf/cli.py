"""Main CLI application."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from epub_pdf.config import ConversionOptions
from epub_pdf.errors import EpubPdfError

app = typer.Typer(
    name="epub-pdf",
    help="Convert EPUB books into a single styled HTML document or a PDF.",
    add_completion=False,
)

console = Console()


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose", "-v",
            help="Show debug logging",
        ),
    ] = False,
) -> None:
    """Convert EPUB books into a single styled HTML document or a PDF."""
    configure_logging(verbose)


@app.command()
def convert(
    book_path: Annotated[
        Path,
        typer.Argument(
            help="Path to the EPUB file",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output PDF path (default: {book_name}.pdf)",
        ),
    ] = None,
    margin: Annotated[
        float,
        typer.Option(
            "--margin",
            "-m",
            help="Page margin in inches",
            min=0,
        ),
    ] = 0.5,
    no_page_numbers: Annotated[
        bool,
        typer.Option(
            "--no-page-numbers",
            help="Do not print page numbers in the footer",
        ),
    ] = False,
    css: Annotated[
        Optional[Path],
        typer.Option(
            "--css",
            help="Extra stylesheet appended after the book's own styles",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    no_original_css: Annotated[
        bool,
        typer.Option(
            "--no-original-css",
            help="Drop the stylesheets shipped inside the EPUB",
        ),
    ] = False,
    page_size: Annotated[
        str,
        typer.Option(
            "--page-size",
            help="Page size, e.g. A4, Letter or '6in 9in'",
        ),
    ] = "A4",
    html_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--html-dir",
            help="Write the assembled HTML and assets here instead of rendering a PDF",
            file_okay=False,
        ),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress progress output",
        ),
    ] = False,
) -> None:
    """Convert an EPUB file to PDF."""
    from epub_pdf.commands.convert import execute_convert

    options = ConversionOptions(
        margin=margin,
        include_page_numbers=not no_page_numbers,
        custom_css=css.read_text(encoding="utf-8") if css else "",
        preserve_original_css=not no_original_css,
        page_size=page_size,
    )

    try:
        execute_convert(
            book_path=book_path,
            output=output,
            options=options,
            html_dir=html_dir,
            quiet=quiet,
            console=console,
        )
    except (EpubPdfError, OSError) as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command()
def info(
    book_path: Annotated[
        Path,
        typer.Argument(
            help="Path to the EPUB file",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
) -> None:
    """Display book metadata and reading order."""
    from epub_pdf.commands.info import execute_info

    try:
        execute_info(book_path, console)
    except (EpubPdfError, OSError) as e:
        console.print(f"[red]Error reading file: {e}[/]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
