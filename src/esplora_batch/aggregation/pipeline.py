"""
Request-level aggregation pipelines.

Each API endpoint builds an AggregationContext for the request and passes it
to one of the functions below. The context is the only state shared by the
steps of a request and is discarded with the response.
"""

import asyncio
from dataclasses import dataclass
from typing import List, Optional

from configmanager import Config

from esplora_batch.aggregation.addresses import AddressSet
from esplora_batch.aggregation.aggregators import (
    BalanceAggregator,
    TransactionAggregator,
    UtxoAggregator,
    assemble_balance_transactions,
)
from esplora_batch.aggregation.chain_height import (
    ChainHeightSnapshot,
    snapshot_chain_height,
)
from esplora_batch.indexer.client import IndexerClient
from esplora_batch.schemas.api.aggregates import (
    AddressTransactions,
    AggregateBalance,
    BalanceTransactionsResponse,
    CombinedTransactionsResponse,
)
from esplora_batch.schemas.indexer_response import Utxo


@dataclass(frozen=True)
class AggregationContext:
    addresses: AddressSet
    indexer: IndexerClient
    timeout: Optional[float] = None
    max_concurrency: Optional[int] = None

    @classmethod
    def from_config(
        cls, addresses: AddressSet, indexer: IndexerClient, config: Config
    ) -> "AggregationContext":
        return cls(
            addresses=addresses,
            indexer=indexer,
            timeout=config.aggregation.timeout.value or None,
            max_concurrency=config.aggregation.max_concurrency.value or None,
        )

    def transaction_aggregator(self) -> TransactionAggregator:
        return TransactionAggregator(
            self.indexer, timeout=self.timeout, max_concurrency=self.max_concurrency
        )

    def balance_aggregator(self) -> BalanceAggregator:
        return BalanceAggregator(
            self.indexer, timeout=self.timeout, max_concurrency=self.max_concurrency
        )

    def utxo_aggregator(self) -> UtxoAggregator:
        return UtxoAggregator(
            self.indexer, timeout=self.timeout, max_concurrency=self.max_concurrency
        )


async def _snapshot_if_needed(
    context: AggregationContext,
) -> Optional[ChainHeightSnapshot]:
    # An empty request must not issue any upstream call.
    if not context.addresses:
        return None
    return await snapshot_chain_height(context.indexer)


async def combined_utxos(context: AggregationContext) -> List[List[Utxo]]:
    return await context.utxo_aggregator().aggregate(context.addresses)


async def combined_data(context: AggregationContext) -> List[AddressTransactions]:
    chain_height = await _snapshot_if_needed(context)
    if chain_height is None:
        return []
    return await context.transaction_aggregator().aggregate(
        context.addresses, chain_height
    )


async def net_balance(context: AggregationContext) -> AggregateBalance:
    return await context.balance_aggregator().aggregate(context.addresses)


async def balance_and_transactions(
    context: AggregationContext,
) -> BalanceTransactionsResponse:
    chain_height = await _snapshot_if_needed(context)
    if chain_height is None:
        return assemble_balance_transactions(AggregateBalance(), [])

    balance, transactions = await asyncio.gather(
        context.balance_aggregator().aggregate(context.addresses),
        context.transaction_aggregator().aggregate(context.addresses, chain_height),
    )
    return assemble_balance_transactions(balance, transactions)


async def combined_transactions(
    context: AggregationContext,
) -> CombinedTransactionsResponse:
    txs = await context.transaction_aggregator().combined(context.addresses)
    return CombinedTransactionsResponse(txs=txs)
