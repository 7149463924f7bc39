import os
import sys

import pytest
import pytest_asyncio
from configmanager import Config

import esplora_batch.config
from esplora_batch.web import create_aiohttp_app
from esplora_batch.web.controllers.app_state_getters import (
    APP_STATE_CONFIG,
    APP_STATE_INDEXER_CLIENT,
)

# Add the helpers to the PYTHONPATH.
# Note: mark the "helpers" directory as a source directory to tell PyCharm
# about this trick and avoid IDE errors.
sys.path.append(os.path.join(os.path.dirname(__file__), "helpers"))

from fake_indexer import FakeIndexer  # noqa: E402


@pytest.fixture
def mock_config() -> Config:
    config: Config = Config(esplora_batch.config.get_defaults())

    # Keep test runs short if something hangs.
    config.aggregation.timeout.value = 5
    config.indexer.url.value = "http://127.0.0.1:3000"

    # We set the global variable directly instead of patching it because of an issue
    # with mocker.patch. mocker.patch uses hasattr to determine the properties of
    # the mock, which does not work well with configmanager Config objects.
    esplora_batch.config.app_config = config
    return config


@pytest.fixture
def fake_indexer() -> FakeIndexer:
    return FakeIndexer(tip_height=700_000)


@pytest.fixture
def test_aiohttp_app(mock_config: Config, fake_indexer: FakeIndexer):
    app = create_aiohttp_app()
    app[APP_STATE_CONFIG] = mock_config
    app[APP_STATE_INDEXER_CLIENT] = fake_indexer
    return app


@pytest_asyncio.fixture
async def api_client(aiohttp_client, test_aiohttp_app):
    client = await aiohttp_client(test_aiohttp_app)
    return client
