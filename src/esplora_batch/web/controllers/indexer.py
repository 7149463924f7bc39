"""
Endpoints forwarded to the indexer as is.
"""

import logging

from aiohttp import web

import esplora_batch.toolkit.json as esplora_json
from esplora_batch.exceptions import IndexerError
from esplora_batch.web.controllers.app_state_getters import (
    get_indexer_client_from_request,
)
from esplora_batch.web.controllers.utils import json_response

LOGGER = logging.getLogger(__name__)


async def fee_estimates(request: web.Request) -> web.Response:
    indexer = get_indexer_client_from_request(request)

    try:
        fees = await indexer.get_fee_estimates()
    except IndexerError as e:
        LOGGER.error("Could not fetch fee estimates: %s", e)
        raise web.HTTPBadGateway(text=str(e))

    return json_response(fees)


async def broadcast_transaction(request: web.Request) -> web.Response:
    """
    Submits a raw transaction to the indexer. The body is the hex-encoded
    transaction, forwarded without modification.
    """

    raw_tx = (await request.text()).strip()
    if not raw_tx:
        raise web.HTTPUnprocessableEntity(text="Transaction must be specified.")

    indexer = get_indexer_client_from_request(request)

    try:
        response_text = await indexer.broadcast_transaction(raw_tx)
    except IndexerError as e:
        LOGGER.error("Could not submit transaction: %s", e)
        # The indexer rejects invalid transactions with a 400 and an explanation.
        if e.status is not None and 400 <= e.status < 500:
            raise web.HTTPUnprocessableEntity(text=str(e))
        raise web.HTTPBadGateway(text=str(e))

    # Esplora returns the transaction ID as plain text. Other responses are
    # passed through as JSON if they can be decoded.
    try:
        return json_response(esplora_json.loads(response_text))
    except esplora_json.DecodeError:
        return json_response(response_text)
