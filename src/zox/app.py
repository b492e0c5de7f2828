"""Application bootstrap: the composition root.

Creates and wires settings, logging, and the container.
"""

import structlog

from zox.config import HomeDirectoryError, discover_home, get_settings
from zox.container import Container
from zox.container import configure as configure_container
from zox.logging import configure_logging

log = structlog.get_logger()


def bootstrap() -> Container:
    """Create the fully-configured container.

    A missing home directory is tolerated here; it only becomes fatal when
    the history file location depends on it.
    """
    settings = get_settings()
    configure_logging(debug=settings.debug)

    try:
        home = discover_home()
    except HomeDirectoryError as e:
        log.debug("home_directory_unknown", error=str(e))
        home = None

    return configure_container(settings, home)
