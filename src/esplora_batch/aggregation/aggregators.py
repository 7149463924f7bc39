import asyncio
import itertools
import logging
from typing import List, Optional, Sequence, Tuple, TypeVar

from esplora_batch.aggregation.chain_height import ChainHeightSnapshot
from esplora_batch.aggregation.fanout import FanOutResult, Operation, fan_out
from esplora_batch.indexer.client import IndexerClient
from esplora_batch.schemas.api.aggregates import (
    AddressTransactions,
    AggregateBalance,
    BalanceTransactionsResponse,
)
from esplora_batch.schemas.indexer_response import Transaction, Utxo

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class BaseAggregator:
    def __init__(
        self,
        indexer: IndexerClient,
        timeout: Optional[float] = None,
        max_concurrency: Optional[int] = None,
    ):
        self.indexer = indexer
        self.timeout = timeout
        self.max_concurrency = max_concurrency

    async def _fan_out(
        self, addresses: Sequence[str], operation: Operation[T]
    ) -> FanOutResult[T]:
        return await fan_out(
            addresses,
            operation,
            timeout=self.timeout,
            max_concurrency=self.max_concurrency,
        )


class TransactionAggregator(BaseAggregator):
    async def _fetch_address_transactions(
        self, address: str, chain_height: ChainHeightSnapshot
    ) -> AddressTransactions:
        # The transaction list and the transaction counts are independent calls,
        # run side by side for the same address.
        transactions_result, stats_result = await asyncio.gather(
            self.indexer.get_address_transactions(address),
            self.indexer.get_address_stats(address),
            return_exceptions=True,
        )

        if isinstance(transactions_result, BaseException):
            raise transactions_result

        transactions = [
            tx.model_copy(update={"confirmations": chain_height.confirmations(tx)})
            for tx in transactions_result
        ]

        if isinstance(stats_result, BaseException):
            LOGGER.warning(
                "Could not fetch transaction counts for %s: %s", address, stats_result
            )
            confirmed_count, unconfirmed_count = 0, 0
        else:
            confirmed_count = stats_result.confirmed_tx_count
            unconfirmed_count = stats_result.unconfirmed_tx_count

        return AddressTransactions(
            address=address,
            total_transactions=len(transactions),
            confirmed_count=confirmed_count,
            unconfirmed_count=unconfirmed_count,
            transactions=transactions,
        )

    async def aggregate(
        self, addresses: Sequence[str], chain_height: ChainHeightSnapshot
    ) -> List[AddressTransactions]:
        """
        Returns the transactions of each address, with their confirmation counts.
        The output has one entry per address, in the same order. Addresses for which
        the transactions could not be fetched get an entry without transactions.
        """

        async def fetch(address: str) -> AddressTransactions:
            return await self._fetch_address_transactions(address, chain_height)

        fan_out_result = await self._fan_out(addresses, fetch)
        return [
            fan_out_result.get(index, AddressTransactions(address=address))
            for index, address in enumerate(addresses)
        ]

    async def combined(self, addresses: Sequence[str]) -> List[List[Transaction]]:
        fan_out_result = await self._fan_out(
            addresses, self.indexer.get_address_transactions
        )
        return [fan_out_result.get(index, []) for index in range(len(addresses))]


class BalanceAggregator(BaseAggregator):
    async def _fetch_balance(self, address: str) -> Tuple[int, int]:
        stats = await self.indexer.get_address_stats(address)
        return stats.confirmed_balance, stats.unconfirmed_balance

    async def aggregate(self, addresses: Sequence[str]) -> AggregateBalance:
        """
        Sums the confirmed and unconfirmed balances of all the addresses.
        Each task returns its own partial balance; the sum is computed once all
        the tasks are joined. Addresses that could not be fetched count as zero.
        """

        fan_out_result = await self._fan_out(addresses, self._fetch_balance)

        balance = AggregateBalance()
        for partial in fan_out_result.results:
            if partial is None:
                continue
            confirmed, unconfirmed = partial
            balance.balance += confirmed
            balance.unconfirmed_balance += unconfirmed

        return balance


class UtxoAggregator(BaseAggregator):
    async def aggregate(self, addresses: Sequence[str]) -> List[List[Utxo]]:
        """
        Returns the UTXOs of each address, grouped by address in the same order.
        """

        fan_out_result = await self._fan_out(addresses, self.indexer.get_address_utxos)
        return [fan_out_result.get(index, []) for index in range(len(addresses))]

    async def merged(self, addresses: Sequence[str]) -> List[Utxo]:
        return list(itertools.chain.from_iterable(await self.aggregate(addresses)))


def assemble_balance_transactions(
    balance: AggregateBalance, transactions: List[AddressTransactions]
) -> BalanceTransactionsResponse:
    return BalanceTransactionsResponse(balance=balance, transactions=transactions)
