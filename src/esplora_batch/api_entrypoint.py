import logging
from pathlib import Path

from aiohttp import web
from configmanager import Config

from esplora_batch.config import get_config
from esplora_batch.indexer.client import EsploraClient
from esplora_batch.toolkit.logging import setup_logging
from esplora_batch.toolkit.monitoring import setup_sentry
from esplora_batch.web import create_aiohttp_app
from esplora_batch.web.controllers.app_state_getters import (
    APP_STATE_CONFIG,
    APP_STATE_INDEXER_CLIENT,
)

LOGGER = logging.getLogger(__name__)


async def _open_indexer_client(app: web.Application):
    indexer_client: EsploraClient = app[APP_STATE_INDEXER_CLIENT]
    LOGGER.info("Using indexer at %s", indexer_client.base_url)
    await indexer_client.open()


async def _close_indexer_client(app: web.Application):
    indexer_client: EsploraClient = app[APP_STATE_INDEXER_CLIENT]
    await indexer_client.close()


def configure_aiohttp_app(config: Config) -> web.Application:
    app = create_aiohttp_app(client_max_size=config.web.client_max_size.value)

    indexer_client = EsploraClient(
        base_url=config.indexer.url.value, timeout=config.indexer.timeout.value
    )

    app[APP_STATE_CONFIG] = config
    app[APP_STATE_INDEXER_CLIENT] = indexer_client

    # The HTTP session must be created inside the event loop of the server.
    app.on_startup.append(_open_indexer_client)
    app.on_cleanup.append(_close_indexer_client)

    return app


async def create_app() -> web.Application:
    config = get_config()

    config_file = Path.cwd() / "config.yml"
    if config_file.exists():
        config.yaml.load(str(config_file))

    setup_logging(config.logging.level.value)

    if config.sentry.dsn.value:
        setup_sentry(config)

    return configure_aiohttp_app(config=config)


if __name__ == "__main__":
    web.run_app(create_app(), host="127.0.0.1", port=8000)
