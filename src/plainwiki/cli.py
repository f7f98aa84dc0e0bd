"""Command-line entry point for serving the wiki."""

import logging

import uvicorn

from plainwiki.config import settings
from plainwiki.core.errors import RootDirectoryError
from plainwiki.core.storage import ensure_root

logger = logging.getLogger(__name__)


def run() -> None:
    """Serve the wiki, refusing to start without a usable content root."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        ensure_root(settings.data_dir)
    except RootDirectoryError:
        logger.exception("Cannot use content root '%s'", settings.data_dir)
        raise SystemExit(1)

    uvicorn.run(
        "plainwiki.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
