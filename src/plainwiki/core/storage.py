"""Storage abstraction for wiki pages."""

import logging
import os
import re
from abc import ABC, abstractmethod
from pathlib import Path

from starlette.concurrency import run_in_threadpool

from plainwiki.core.errors import (
    InvalidTitleError,
    PageNotFoundError,
    RootDirectoryError,
    StorageIOError,
)
from plainwiki.core.models import Page

logger = logging.getLogger(__name__)

# Page titles are plain alphanumeric identifiers
TITLE_PATTERN = re.compile(r"[A-Za-z0-9]+")

ROOT_MODE = 0o700
FILE_MODE = 0o600


def is_valid_title(title: str) -> bool:
    """Check whether a title is a plain alphanumeric identifier."""
    return TITLE_PATTERN.fullmatch(title) is not None


def ensure_root(path: Path) -> Path:
    """Make sure the content root exists and is a directory.

    Creates the directory with owner-only permissions if it is missing.
    Calling it again on an existing directory is a no-op.

    Args:
        path: Directory that holds the page files.

    Returns:
        The same path.

    Raises:
        RootDirectoryError: If the path exists but is not a directory,
            or if it could not be created.
    """
    if path.exists():
        if not path.is_dir():
            raise RootDirectoryError(
                f"'{path}' path exists, but is not a directory"
            )
        return path

    logger.info("creating data directory '%s'", path)
    try:
        path.mkdir(mode=ROOT_MODE, parents=True, exist_ok=True)
    except OSError as exc:
        raise RootDirectoryError(f"unable to create data directory '{path}'") from exc
    return path


def _write_file(path: Path, body: bytes) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
    with os.fdopen(fd, "wb") as f:
        f.write(body)


class PageStore(ABC):
    """Abstract base class for page storage."""

    @abstractmethod
    async def load_page(self, title: str) -> Page:
        """Load a page by title. Raises PageNotFoundError if missing."""
        ...

    @abstractmethod
    async def save_page(self, title: str, body: bytes) -> Page:
        """Save a page, replacing any existing body."""
        ...


class FileStorage(PageStore):
    """File-based storage implementation.

    Each page is stored as ``<root>/<title>.txt`` holding the raw body
    bytes. Nothing is cached; every load reads the file again.
    """

    SUFFIX = ".txt"

    def __init__(self, base_path: Path):
        self.base_path = ensure_root(Path(base_path))

    def _title_to_filename(self, title: str) -> str:
        """Convert page title to filename."""
        return title + self.SUFFIX

    def _get_path(self, title: str) -> Path:
        """Get full path for a page, rejecting anything outside the root."""
        if not is_valid_title(title):
            raise InvalidTitleError(title)

        path = self.base_path / self._title_to_filename(title)
        if path.resolve().parent != self.base_path.resolve():
            raise InvalidTitleError(title)
        return path

    async def load_page(self, title: str) -> Page:
        """Load a page by title."""
        path = self._get_path(title)
        try:
            body = await run_in_threadpool(path.read_bytes)
        except FileNotFoundError as exc:
            raise PageNotFoundError(title) from exc
        except OSError as exc:
            raise StorageIOError(f"unable to read '{path}': {exc}") from exc

        return Page(title=title, body=body)

    async def save_page(self, title: str, body: bytes) -> Page:
        """Save a page."""
        path = self._get_path(title)
        logger.info("saving page '%s' as file '%s'", title, path)

        try:
            await run_in_threadpool(_write_file, path, body)
        except OSError as exc:
            raise StorageIOError(f"unable to write '{path}': {exc}") from exc

        return Page(title=title, body=body)
