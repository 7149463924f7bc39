import asyncio
from collections import Counter
from typing import Any, Dict, List, Optional

from esplora_batch.exceptions import IndexerError
from esplora_batch.schemas.indexer_response import (
    AddressStats,
    Transaction,
    TransactionStatus,
    TxoStats,
    Utxo,
)


def make_transaction(
    txid: str, block_height: Optional[int] = None, fee: int = 141
) -> Transaction:
    return Transaction(
        txid=txid,
        version=2,
        locktime=0,
        vin=[],
        vout=[],
        size=222,
        weight=561,
        fee=fee,
        status=TransactionStatus(
            confirmed=block_height is not None,
            block_height=block_height,
        ),
    )


def make_utxo(txid: str, vout: int, value: int) -> Utxo:
    return Utxo(
        txid=txid,
        vout=vout,
        value=value,
        status=TransactionStatus(confirmed=True, block_height=700_000),
    )


def make_stats(
    address: str,
    balance: int = 0,
    unconfirmed_balance: int = 0,
    tx_count: int = 0,
    mempool_tx_count: int = 0,
) -> AddressStats:
    return AddressStats(
        address=address,
        chain_stats=TxoStats(
            funded_txo_count=1,
            funded_txo_sum=balance + 1_000,
            spent_txo_count=1,
            spent_txo_sum=1_000,
            tx_count=tx_count,
        ),
        mempool_stats=TxoStats(
            funded_txo_sum=unconfirmed_balance,
            tx_count=mempool_tx_count,
        ),
    )


class FakeIndexer:
    """
    In-memory indexer with configurable per-address latencies and failures.
    Records every call it receives.
    """

    def __init__(self, tip_height: int = 700_000):
        self.tip_height = tip_height
        self.transactions: Dict[str, List[Transaction]] = {}
        self.stats: Dict[str, AddressStats] = {}
        self.utxos: Dict[str, List[Utxo]] = {}
        self.fees: Dict[str, Any] = {"1": 20.5, "6": 10.1, "144": 1.0}
        self.broadcasted: List[str] = []

        self.delays: Dict[str, float] = {}
        self.failing_addresses: set = set()
        self.fail_tip_height = False
        self.fail_stats = False
        self.calls: Counter = Counter()

    async def _simulate(self, operation: str, address: Optional[str] = None):
        self.calls[operation] += 1
        if address is not None:
            await asyncio.sleep(self.delays.get(address, 0))
            if address in self.failing_addresses:
                raise IndexerError(f"{operation} failed for {address}", status=500)

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    async def get_tip_height(self) -> int:
        await self._simulate("tip_height")
        if self.fail_tip_height:
            raise IndexerError("tip height unavailable", status=503)
        return self.tip_height

    async def get_address_transactions(self, address: str) -> List[Transaction]:
        await self._simulate("transactions", address)
        return list(self.transactions.get(address, []))

    async def get_address_stats(self, address: str) -> AddressStats:
        await self._simulate("stats", address)
        if self.fail_stats:
            raise IndexerError(f"stats failed for {address}", status=500)
        return self.stats.get(address) or make_stats(address)

    async def get_address_utxos(self, address: str) -> List[Utxo]:
        await self._simulate("utxos", address)
        return list(self.utxos.get(address, []))

    async def get_fee_estimates(self) -> Dict[str, Any]:
        await self._simulate("fees")
        return self.fees

    async def broadcast_transaction(self, raw_tx: str) -> str:
        await self._simulate("broadcast")
        self.broadcasted.append(raw_tx)
        return "a" * 64
