from typing import List

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from esplora_batch.schemas.indexer_response import Transaction


class AddressesRequest(BaseModel):
    addresses: List[StrictStr]


class AddressTransactions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    address: str
    total_transactions: int = Field(default=0, alias="totalTransactions")
    confirmed_count: int = Field(default=0, alias="confirmedCount")
    unconfirmed_count: int = Field(default=0, alias="unconfirmedCount")
    transactions: List[Transaction] = Field(default_factory=list)


class AggregateBalance(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    balance: int = 0
    unconfirmed_balance: int = Field(default=0, alias="unconfirmedBalance")


class BalanceTransactionsResponse(BaseModel):
    balance: AggregateBalance
    transactions: List[AddressTransactions]


class CombinedTransactionsResponse(BaseModel):
    txs: List[List[Transaction]]
