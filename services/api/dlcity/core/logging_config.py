from __future__ import annotations

import logging

from dlcity.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Apply the configured log level to the root logger.

    Safe to call more than once; handlers are only installed the first time.
    """
    resolved = (level or settings.log_level or "INFO").upper()
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=resolved, format=LOG_FORMAT)
    root.setLevel(resolved)
    # httpx logs every request at INFO; keep that out of the access log.
    logging.getLogger("httpx").setLevel(max(logging.WARNING, root.level))
