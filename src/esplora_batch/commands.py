#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Console script of the aggregation API server.

Installing the package provides the `esplora-batch` command.
"""

import logging
import sys
from typing import List

from aiohttp import web

from esplora_batch.api_entrypoint import configure_aiohttp_app
from esplora_batch.cli.args import parse_args
from esplora_batch.config import get_config
from esplora_batch.exceptions import InvalidConfigException
from esplora_batch.toolkit.logging import setup_logging
from esplora_batch.toolkit.monitoring import setup_sentry

LOGGER = logging.getLogger(__name__)


def main(args: List[str]) -> None:
    """Main entry point allowing external calls

    Args:
      args ([str]): command line parameter list
    """

    args = parse_args(args)

    LOGGER.info("Loading configuration")
    config = get_config()

    if args.config_file is not None:
        config.yaml.load(args.config_file)

    # CLI config values override config file values
    if args.loglevel is not None:
        config.logging.level.value = args.loglevel
    if args.host is not None:
        config.web.host.value = args.host
    if args.port is not None:
        config.web.port.value = args.port
    if args.indexer_url is not None:
        config.indexer.url.value = args.indexer_url

    setup_logging(
        config.logging.level.value,
        filename=args.log_file,
        max_log_file_size=config.logging.max_log_file_size.value,
    )
    LOGGER.debug("Config file: %s", args.config_file)

    if not config.indexer.url.value:
        msg = "The indexer URL must be specified."
        LOGGER.error(msg)
        raise InvalidConfigException(msg)

    if (timeout := config.aggregation.timeout.value) is not None and timeout < 0:
        msg = f"Invalid aggregation timeout: {timeout}."
        LOGGER.error(msg)
        raise InvalidConfigException(msg)

    if args.sentry_disabled:
        LOGGER.info("Sentry disabled by CLI arguments")
    else:
        setup_sentry(config)

    app = configure_aiohttp_app(config)
    web.run_app(app, host=config.web.host.value, port=config.web.port.value)


def run():
    """Entry point for console_scripts"""
    try:
        main(sys.argv[1:])
    except InvalidConfigException:
        sys.exit(1)


if __name__ == "__main__":
    run()
