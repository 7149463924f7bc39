from .client import EsploraClient, IndexerClient

__all__ = ["EsploraClient", "IndexerClient"]
