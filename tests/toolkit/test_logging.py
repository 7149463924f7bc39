import logging
from logging.handlers import RotatingFileHandler

import pytest

from esplora_batch.toolkit.logging import setup_logging


def test_setup_logging_stdout(mocker):
    basic_config = mocker.patch("esplora_batch.toolkit.logging.logging.basicConfig")

    setup_logging(logging.INFO)

    kwargs = basic_config.call_args.kwargs
    assert kwargs["level"] == logging.INFO
    assert "handlers" not in kwargs


def test_setup_logging_rotating_file(mocker, tmp_path):
    basic_config = mocker.patch("esplora_batch.toolkit.logging.logging.basicConfig")

    setup_logging(
        logging.DEBUG, filename=str(tmp_path / "server.log"), max_log_file_size=1024
    )

    [handler] = basic_config.call_args.kwargs["handlers"]
    try:
        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1024
    finally:
        handler.close()


def test_setup_logging_file_requires_max_size(tmp_path):
    with pytest.raises(ValueError):
        setup_logging(logging.INFO, filename=str(tmp_path / "server.log"))
