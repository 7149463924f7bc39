from __future__ import annotations


class EsploraBatchException(Exception): ...


class InvalidConfigException(EsploraBatchException): ...


class MalformedRequest(EsploraBatchException):
    """
    The request body cannot be used: it is not valid JSON, it does not
    contain a list of addresses or the list is empty.
    No upstream call is issued for a malformed request.
    """

    ...


class UpstreamUnavailable(EsploraBatchException):
    """
    A call to the indexer failed or timed out.
    """

    ...


class IndexerError(UpstreamUnavailable):
    """
    Raised by the indexer client for transport errors, unexpected HTTP statuses
    and payloads that do not match the expected schema.
    """

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class FanOutTimeout(EsploraBatchException):
    """
    The per-address operation did not complete before the fan-out deadline.
    """

    ...


class PartialFailure(EsploraBatchException):
    """
    Some, but not all, of the per-address operations of a fan-out failed.
    """

    def __init__(self, failed: int, total: int):
        super().__init__(f"{failed} out of {total} upstream calls failed")
        self.failed = failed
        self.total = total
