from .addresses import Address, AddressSet, deduplicate
from .chain_height import ChainHeightSnapshot, snapshot_chain_height
from .fanout import FanOutResult, fan_out

__all__ = [
    "Address",
    "AddressSet",
    "ChainHeightSnapshot",
    "FanOutResult",
    "deduplicate",
    "fan_out",
    "snapshot_chain_height",
]
