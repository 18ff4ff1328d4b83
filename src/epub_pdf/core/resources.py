"""Reading files out of an extracted package tree."""

from pathlib import Path

from epub_pdf.errors import ResourceUnreadable


def read_text(path: str | Path, encoding: str = "utf-8") -> str:
    """Read a text resource, raising ResourceUnreadable on any failure."""
    try:
        return Path(path).read_text(encoding=encoding)
    except FileNotFoundError:
        raise ResourceUnreadable(str(path), "not found") from None
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceUnreadable(str(path), str(e)) from e


def read_bytes(path: str | Path) -> bytes:
    """Read a binary resource, raising ResourceUnreadable on any failure."""
    try:
        return Path(path).read_bytes()
    except FileNotFoundError:
        raise ResourceUnreadable(str(path), "not found") from None
    except OSError as e:
        raise ResourceUnreadable(str(path), str(e)) from e
