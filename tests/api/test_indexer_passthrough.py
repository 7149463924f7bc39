import pytest
from fake_indexer import FakeIndexer

from esplora_batch.exceptions import IndexerError


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "POST"])
async def test_fee_estimates(api_client, fake_indexer: FakeIndexer, method: str):
    response = await api_client.request(method, "/fees")
    assert response.status == 200, await response.text()

    assert await response.json() == fake_indexer.fees


@pytest.mark.asyncio
async def test_fee_estimates_unavailable(api_client, fake_indexer: FakeIndexer, mocker):
    mocker.patch.object(
        fake_indexer,
        "get_fee_estimates",
        side_effect=IndexerError("Service Unavailable", status=503),
    )

    response = await api_client.get("/fees")
    assert response.status == 502, await response.text()


@pytest.mark.asyncio
async def test_broadcast_transaction(api_client, fake_indexer: FakeIndexer):
    response = await api_client.post("/tx", data="0200000001abcdef\n")
    assert response.status == 200, await response.text()

    assert await response.json() == "a" * 64
    assert fake_indexer.broadcasted == ["0200000001abcdef"]


@pytest.mark.asyncio
async def test_broadcast_empty_transaction(api_client, fake_indexer: FakeIndexer):
    response = await api_client.post("/tx", data="")
    assert response.status == 422, await response.text()
    assert fake_indexer.broadcasted == []


@pytest.mark.asyncio
@pytest.mark.parametrize("upstream_status,expected_status", [(400, 422), (500, 502)])
async def test_broadcast_transaction_failure(
    api_client, fake_indexer: FakeIndexer, mocker, upstream_status, expected_status
):
    mocker.patch.object(
        fake_indexer,
        "broadcast_transaction",
        side_effect=IndexerError("rejected", status=upstream_status),
    )

    response = await api_client.post("/tx", data="0200000001abcdef")
    assert response.status == expected_status, await response.text()
