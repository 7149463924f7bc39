import logging
from dataclasses import dataclass

from esplora_batch.exceptions import UpstreamUnavailable
from esplora_batch.indexer.client import IndexerClient
from esplora_batch.schemas.indexer_response import Transaction

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChainHeightSnapshot:
    """
    Best block height of the indexer, captured once per request.
    All the confirmation counts of a request are computed against the same snapshot.
    """

    height: int

    def confirmations(self, transaction: Transaction) -> int:
        status = transaction.status
        if not status.confirmed or status.block_height is None:
            return 0

        # The indexer may have moved past the snapshot since it was taken.
        return max(self.height - status.block_height, 0)


async def snapshot_chain_height(indexer: IndexerClient) -> ChainHeightSnapshot:
    try:
        height = await indexer.get_tip_height()
    except UpstreamUnavailable:
        LOGGER.error("Could not fetch the current chain height")
        raise
    except Exception as e:
        LOGGER.exception("Unexpected error while fetching the current chain height")
        raise UpstreamUnavailable("Could not fetch the current chain height") from e

    LOGGER.debug("Chain height snapshot: %d", height)
    return ChainHeightSnapshot(height=height)
