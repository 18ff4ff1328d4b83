"""Exceptions raised while building and assembling an EPUB package."""


class EpubPdfError(Exception):
    """Base class for all conversion errors."""

    pass


class MalformedPackage(EpubPdfError):
    """Container pointer or package document is missing or unparsable."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(message)


class DuplicateManifestId(EpubPdfError):
    """Two manifest entries declare the same id."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Duplicate manifest id: {item_id!r}")


class SpineReferenceNotFound(EpubPdfError):
    """A spine itemref points at an id missing from the manifest."""

    def __init__(self, idref: str):
        self.idref = idref
        super().__init__(f"Spine item {idref!r} not found in manifest")


class ResourceUnreadable(EpubPdfError):
    """A file inside the extracted package could not be read."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Cannot read resource: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
