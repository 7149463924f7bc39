import pytest
from fake_indexer import FakeIndexer, make_transaction

from esplora_batch.aggregation.chain_height import (
    ChainHeightSnapshot,
    snapshot_chain_height,
)
from esplora_batch.exceptions import UpstreamUnavailable


def test_confirmations_confirmed_transaction():
    snapshot = ChainHeightSnapshot(height=700_000)
    tx = make_transaction("tx1", block_height=699_995)
    assert snapshot.confirmations(tx) == 5


def test_confirmations_unconfirmed_transaction():
    snapshot = ChainHeightSnapshot(height=700_000)
    tx = make_transaction("tx1", block_height=None)
    assert snapshot.confirmations(tx) == 0


def test_confirmations_never_negative():
    snapshot = ChainHeightSnapshot(height=700_000)
    tx = make_transaction("tx1", block_height=700_002)
    assert snapshot.confirmations(tx) == 0


@pytest.mark.asyncio
async def test_snapshot_chain_height(fake_indexer: FakeIndexer):
    fake_indexer.tip_height = 812_345
    snapshot = await snapshot_chain_height(fake_indexer)

    assert snapshot == ChainHeightSnapshot(height=812_345)
    assert fake_indexer.calls["tip_height"] == 1


@pytest.mark.asyncio
async def test_snapshot_chain_height_upstream_failure(fake_indexer: FakeIndexer):
    fake_indexer.fail_tip_height = True

    with pytest.raises(UpstreamUnavailable):
        await snapshot_chain_height(fake_indexer)


@pytest.mark.asyncio
async def test_snapshot_chain_height_unexpected_error(mocker):
    indexer = mocker.AsyncMock()
    indexer.get_tip_height.side_effect = ConnectionResetError("reset by peer")

    with pytest.raises(UpstreamUnavailable):
        await snapshot_chain_height(indexer)
