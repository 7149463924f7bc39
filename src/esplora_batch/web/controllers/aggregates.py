"""
Endpoints that aggregate the indexer data of several addresses.

All the endpoints expect a POST request with a {"addresses": [...]} JSON body.
A failure for one address does not fail the request: the address gets an empty
entry in the response. The request fails only if the body is invalid or if the
chain height cannot be fetched.
"""

import logging

from aiohttp import web

from esplora_batch.aggregation import pipeline
from esplora_batch.exceptions import UpstreamUnavailable
from esplora_batch.web.controllers.utils import (
    get_aggregation_context_from_request,
    json_response,
)

LOGGER = logging.getLogger(__name__)


async def combined_utxos(request: web.Request) -> web.Response:
    """UTXOs of each address."""

    context = await get_aggregation_context_from_request(request)
    return json_response(await pipeline.combined_utxos(context))


async def combined_data(request: web.Request) -> web.Response:
    """Transactions of each address, with transaction counts and confirmations."""

    context = await get_aggregation_context_from_request(request)
    try:
        data = await pipeline.combined_data(context)
    except UpstreamUnavailable as e:
        LOGGER.error("Could not aggregate address data: %s", e)
        raise web.HTTPBadGateway(text=str(e))

    return json_response(data)


async def balance_and_transactions(request: web.Request) -> web.Response:
    """Net balance of the addresses and transactions of each address."""

    context = await get_aggregation_context_from_request(request)
    try:
        response = await pipeline.balance_and_transactions(context)
    except UpstreamUnavailable as e:
        LOGGER.error("Could not aggregate balances and transactions: %s", e)
        raise web.HTTPBadGateway(text=str(e))

    return json_response(response)


async def net_balance(request: web.Request) -> web.Response:
    """Sum of the confirmed and unconfirmed balances of the addresses."""

    context = await get_aggregation_context_from_request(request)
    return json_response(await pipeline.net_balance(context))


async def combined_transactions(request: web.Request) -> web.Response:
    context = await get_aggregation_context_from_request(request)
    return json_response(await pipeline.combined_transactions(context))
