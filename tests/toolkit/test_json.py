import pytest

import esplora_batch.toolkit.json as esplora_json
from esplora_batch.schemas.api.aggregates import AddressTransactions, AggregateBalance


def test_dumps_pydantic_models_with_aliases():
    serialized = esplora_json.dumps(
        {"balance": AggregateBalance(balance=10, unconfirmed_balance=-2)}
    )
    assert esplora_json.loads(serialized) == {
        "balance": {"balance": 10, "unconfirmedBalance": -2}
    }


def test_dumps_list_of_models():
    serialized = esplora_json.dumps([AddressTransactions(address="A")])
    assert esplora_json.loads(serialized)[0]["totalTransactions"] == 0


def test_dumps_sort_keys():
    assert esplora_json.dumps({"b": 1, "a": 2}, sort_keys=True) == b'{"a":2,"b":1}'


def test_loads_invalid_json():
    with pytest.raises(esplora_json.DecodeError):
        esplora_json.loads(b"{not json")
