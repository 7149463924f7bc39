import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional


def setup_logging(
    loglevel: int,
    filename: Optional[str] = None,
    max_log_file_size: Optional[int] = None,
) -> None:
    """
    Configures the root logger of the esplora-batch server.

    The server runs in a single process: the application loggers and the aiohttp
    access log share the handler configured here. Fan-out warnings (failed or
    timed out upstream calls) are emitted at WARNING, the default level.

    :param loglevel: Minimum loglevel for emitting messages.
    :param filename: Destination file for the logs, if specified. Defaults to stdout.
    :param max_log_file_size: Maximum size of the log file in bytes. The file is rotated
                              when it reaches this size. Required if filename is specified.
    """

    # Some kwargs fiddling is required because basicConfig does not like it when stream
    # and handlers are specified at the same time.
    kwargs: Dict[str, Any]

    if filename:
        if not max_log_file_size:
            raise ValueError(
                "A maximum log file size must be specified when logging to a file."
            )

        handler = RotatingFileHandler(
            filename, maxBytes=max_log_file_size, backupCount=4
        )
        kwargs = {"handlers": [handler]}
    else:
        kwargs = {"stream": sys.stdout}

    logformat = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    logging.basicConfig(
        **kwargs, level=loglevel, format=logformat, datefmt="%Y-%m-%d %H:%M:%S"
    )
