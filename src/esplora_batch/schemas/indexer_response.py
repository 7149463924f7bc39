"""
Schemas for the payloads returned by the Esplora/electrs REST API.

Only the fields used by the aggregation layer are declared. Transactions keep
any other field returned by the indexer so that they can be passed through to
API clients unchanged.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TransactionStatus(BaseModel):
    confirmed: bool
    block_height: Optional[int] = None
    block_hash: Optional[str] = None
    block_time: Optional[int] = None


class Transaction(BaseModel):
    model_config = ConfigDict(extra="allow")

    txid: str
    version: Optional[int] = None
    locktime: Optional[int] = None
    vin: List[Dict[str, Any]] = Field(default_factory=list)
    vout: List[Dict[str, Any]] = Field(default_factory=list)
    size: Optional[int] = None
    weight: Optional[int] = None
    fee: Optional[int] = None
    status: TransactionStatus
    # Not returned by the indexer. Computed against the chain height snapshot
    # of the request that fetched the transaction.
    confirmations: int = 0


class Utxo(BaseModel):
    model_config = ConfigDict(extra="allow")

    txid: str
    vout: int
    value: int
    status: TransactionStatus


class TxoStats(BaseModel):
    funded_txo_count: int = 0
    funded_txo_sum: int = 0
    spent_txo_count: int = 0
    spent_txo_sum: int = 0
    tx_count: int = 0

    @property
    def balance(self) -> int:
        return self.funded_txo_sum - self.spent_txo_sum


class AddressStats(BaseModel):
    address: str
    chain_stats: TxoStats
    mempool_stats: TxoStats

    @property
    def confirmed_balance(self) -> int:
        return self.chain_stats.balance

    @property
    def unconfirmed_balance(self) -> int:
        return self.mempool_stats.balance

    @property
    def confirmed_tx_count(self) -> int:
        return self.chain_stats.tx_count

    @property
    def unconfirmed_tx_count(self) -> int:
        return self.mempool_stats.tx_count
