"""Exceptions raised by the page storage and rendering pipeline.

The core never turns these into user-facing messages; the HTTP layer in
``plainwiki.main`` decides how each one maps to a response.
"""


class WikiError(Exception):
    """Base exception for all wiki operations."""

    pass


class PageStoreError(WikiError):
    """Base exception for page storage failures."""

    pass


class InvalidTitleError(PageStoreError, ValueError):
    """Raised when a title is not a plain alphanumeric identifier.

    Attributes:
        title: The rejected title.
    """

    def __init__(self, title: str):
        super().__init__(f"invalid page title {title!r}")
        self.title = title


class PageNotFoundError(PageStoreError):
    """Raised when no body is stored for a title.

    Callers usually treat this as "page does not exist yet".
    """

    def __init__(self, title: str):
        super().__init__(f"page {title!r} not found")
        self.title = title


class StorageIOError(PageStoreError):
    """Raised when reading or writing a page file fails."""

    pass


class RootDirectoryError(PageStoreError):
    """Raised when the content root cannot be used.

    Either the path exists and is not a directory, or it could not be
    created. Fatal at startup.
    """

    pass


class RenderError(WikiError):
    """Raised when a template cannot be compiled or rendered."""

    pass
