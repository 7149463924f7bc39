import logging

from configmanager import Config


def get_defaults():
    return {
        "logging": {
            # Logging level.
            "level": logging.WARNING,
            # Max log file size, only used when logging to a file.
            "max_log_file_size": 50_000_000,  # 50MB
        },
        "indexer": {
            # Base URL of the Esplora/electrs REST API.
            "url": "https://blockstream.info/api",
            # Timeout of a single HTTP call to the indexer, in seconds.
            "timeout": 30,
        },
        "aggregation": {
            # Maximum time to wait for all the per-address calls of a request, in seconds.
            "timeout": 30,
            # Maximum number of per-address calls running at the same time for one request.
            # 0 removes the limit.
            "max_concurrency": 0,
            # Maximum number of distinct addresses accepted in one request.
            # 0 removes the limit.
            "max_addresses": 0,
        },
        "web": {
            # Interface the API server listens on.
            "host": "127.0.0.1",
            # Port the API server listens on.
            "port": 8000,
            # Maximum size of a request body, in bytes.
            "client_max_size": 1024**2 * 4,
        },
        "sentry": {
            # Sentry DSN.
            "dsn": None,
            # Sentry trace sample rate.
            "traces_sample_rate": None,
        },
    }


app_config = Config(schema=get_defaults())


def get_config() -> Config:
    return app_config
