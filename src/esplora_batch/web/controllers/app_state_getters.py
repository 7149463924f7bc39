"""
Global objects used by API endpoints are stored in the aiohttp app object.
This module provides an abstraction layer over the dictionary keys used to
address these objects.
"""

from typing import cast

from aiohttp import web
from configmanager import Config

from esplora_batch.indexer.client import IndexerClient

APP_STATE_CONFIG = "config"
APP_STATE_INDEXER_CLIENT = "indexer_client"


def get_config_from_request(request: web.Request) -> Config:
    return cast(Config, request.app[APP_STATE_CONFIG])


def get_indexer_client_from_request(request: web.Request) -> IndexerClient:
    return cast(IndexerClient, request.app[APP_STATE_INDEXER_CLIENT])
