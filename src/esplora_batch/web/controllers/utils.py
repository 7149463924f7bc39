from typing import Any

from aiohttp import web
from configmanager import Config
from pydantic import ValidationError

import esplora_batch.toolkit.json as esplora_json
from esplora_batch.aggregation.addresses import AddressSet, deduplicate
from esplora_batch.aggregation.pipeline import AggregationContext
from esplora_batch.exceptions import MalformedRequest
from esplora_batch.schemas.api.aggregates import AddressesRequest
from esplora_batch.web.controllers.app_state_getters import (
    get_config_from_request,
    get_indexer_client_from_request,
)


def json_response(obj: Any, status: int = 200) -> web.Response:
    return web.Response(
        body=esplora_json.dumps(obj), status=status, content_type="application/json"
    )


def parse_addresses(body: bytes, max_addresses: int = 0) -> AddressSet:
    """
    Extracts the deduplicated list of addresses from a request body.

    :param body: Raw request body, expected to be {"addresses": [...]}.
    :param max_addresses: Maximum number of distinct addresses. 0 removes the limit.
    """

    try:
        payload = esplora_json.loads(body)
    except esplora_json.DecodeError as e:
        raise MalformedRequest(f"Request body is not valid JSON: {e}") from e

    try:
        addresses_request = AddressesRequest.model_validate(payload)
    except ValidationError as e:
        raise MalformedRequest(e.json()) from e

    addresses = deduplicate(addresses_request.addresses)
    if max_addresses and len(addresses) > max_addresses:
        raise MalformedRequest(
            f"Too many addresses: {len(addresses)} > {max_addresses}."
        )

    return addresses


async def get_aggregation_context_from_request(
    request: web.Request,
) -> AggregationContext:
    config: Config = get_config_from_request(request)
    body = await request.read()

    try:
        addresses = parse_addresses(
            body, max_addresses=config.aggregation.max_addresses.value
        )
    except MalformedRequest as e:
        raise web.HTTPUnprocessableEntity(text=str(e))

    return AggregationContext.from_config(
        addresses=addresses,
        indexer=get_indexer_client_from_request(request),
        config=config,
    )
