import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol, TypeVar
from urllib.parse import quote

import aiohttp
from pydantic import TypeAdapter, ValidationError
from yarl import URL

from esplora_batch.exceptions import IndexerError
from esplora_batch.schemas.indexer_response import AddressStats, Transaction, Utxo

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

TRANSACTIONS_ADAPTER = TypeAdapter(List[Transaction])
UTXOS_ADAPTER = TypeAdapter(List[Utxo])
STATS_ADAPTER = TypeAdapter(AddressStats)
FEES_ADAPTER = TypeAdapter(Dict[str, Any])


def _path_segment(value: str) -> str:
    # Dots are escaped too, "." and ".." must stay literal segments.
    return quote(value, safe="").replace(".", "%2E")


class IndexerClient(Protocol):
    """
    The operations of the indexer used by the aggregation layer.
    """

    async def get_tip_height(self) -> int: ...

    async def get_address_transactions(self, address: str) -> List[Transaction]: ...

    async def get_address_stats(self, address: str) -> AddressStats: ...

    async def get_address_utxos(self, address: str) -> List[Utxo]: ...

    async def get_fee_estimates(self) -> Dict[str, Any]: ...

    async def broadcast_transaction(self, raw_tx: str) -> str: ...


class EsploraClient:
    """
    Client for the Esplora/electrs REST API.

    Every failure (connection error, timeout, unexpected HTTP status or payload)
    is raised as an IndexerError.
    """

    def __init__(self, base_url: str, timeout: float = 30):
        # Paths are joined to the base URL, which must end with a slash to keep
        # its own path component (ex: https://blockstream.info/api/).
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self.http_session: Optional[aiohttp.ClientSession] = None

    async def open(self):
        self.http_session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        )

    async def close(self):
        if self.http_session:
            await self.http_session.close()
            self.http_session = None

    async def __aenter__(self) -> "EsploraClient":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _url(self, path: str) -> URL:
        # Path segments are already escaped, yarl must not requote or normalize them.
        return URL(self.base_url + path.lstrip("/"), encoded=True)

    async def _request(self, method: str, path: str, **kwargs) -> str:
        if self.http_session is None:
            raise ValueError(
                "HTTP session not opened. Use `async with EsploraClient(...):`."
            )

        url = self._url(path)
        try:
            async with self.http_session.request(method, url, **kwargs) as response:
                text = await response.text()
                if response.status >= 400:
                    raise IndexerError(
                        f"{method} {url} returned {response.status}: {text.strip()}",
                        status=response.status,
                    )
                return text
        except asyncio.TimeoutError as e:
            raise IndexerError(f"{method} {url} timed out") from e
        except aiohttp.ClientError as e:
            raise IndexerError(f"{method} {url} failed: {e}") from e

    async def _get_model(self, path: str, adapter: TypeAdapter[T]) -> T:
        text = await self._request("GET", path)
        try:
            return adapter.validate_json(text)
        except ValidationError as e:
            raise IndexerError(f"Unexpected payload for {path}: {e}") from e

    async def get_tip_height(self) -> int:
        text = await self._request("GET", "blocks/tip/height")
        try:
            return int(text.strip())
        except ValueError as e:
            raise IndexerError(f"Invalid chain height: {text!r}") from e

    async def get_address_transactions(self, address: str) -> List[Transaction]:
        return await self._get_model(
            f"address/{_path_segment(address)}/txs", TRANSACTIONS_ADAPTER
        )

    async def get_address_stats(self, address: str) -> AddressStats:
        return await self._get_model(f"address/{_path_segment(address)}", STATS_ADAPTER)

    async def get_address_utxos(self, address: str) -> List[Utxo]:
        return await self._get_model(
            f"address/{_path_segment(address)}/utxo", UTXOS_ADAPTER
        )

    async def get_fee_estimates(self) -> Dict[str, Any]:
        return await self._get_model("fee-estimates", FEES_ADAPTER)

    async def broadcast_transaction(self, raw_tx: str) -> str:
        LOGGER.info("Broadcasting transaction (%d bytes)", len(raw_tx))
        return (await self._request("POST", "tx", data=raw_tx)).strip()
