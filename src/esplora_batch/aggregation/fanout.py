"""
Concurrent execution of one upstream operation per address.

fan_out() starts one task per address and waits until every task is done or
the deadline elapses. Results are placed by position: slot i always holds the
result for addresses[i], whatever the order in which the upstream calls
complete. Failures are isolated: a failing or late task leaves its slot empty
and is reported in the error list, without affecting the other tasks.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import (
    Awaitable,
    Callable,
    Dict,
    Generic,
    List,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

from esplora_batch.exceptions import FanOutTimeout, PartialFailure
from esplora_batch.toolkit.timer import Timer

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

Operation = Callable[[str], Awaitable[T]]


@dataclass
class FanOutResult(Generic[T]):
    results: List[Optional[T]]
    errors: List[Tuple[int, BaseException]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.results)

    @property
    def failed_indexes(self) -> List[int]:
        return [index for index, _ in self.errors]

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def is_partial(self) -> bool:
        return 0 < len(self.errors) < len(self.results)

    def get(self, index: int, default: T) -> T:
        result = self.results[index]
        return default if result is None else result


async def _limited(semaphore: asyncio.Semaphore, coroutine: Awaitable[T]) -> T:
    async with semaphore:
        return await coroutine


async def fan_out(
    addresses: Sequence[str],
    operation: Operation[T],
    timeout: Optional[float],
    max_concurrency: Optional[int] = None,
) -> FanOutResult[T]:
    """
    Runs `operation` for each address concurrently and joins all the tasks.

    :param addresses: Addresses to process. Position i of the result matches addresses[i].
    :param operation: Coroutine function called once per address.
    :param timeout: Maximum time to wait for all the tasks, in seconds. Tasks still
                    running at the deadline are cancelled and reported as FanOutTimeout.
                    None waits until all the tasks are done.
    :param max_concurrency: Maximum number of operations running at the same time.
                            None or 0 starts all the operations at once.
    """

    nb_addresses = len(addresses)
    results: List[Optional[T]] = [None] * nb_addresses
    if not nb_addresses:
        return FanOutResult(results=results)

    semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    tasks: Dict[asyncio.Task, int] = {}
    for index, address in enumerate(addresses):
        coroutine = operation(address)
        if semaphore is not None:
            coroutine = _limited(semaphore, coroutine)
        tasks[asyncio.create_task(coroutine)] = index

    with Timer() as timer:
        try:
            done, pending = await asyncio.wait(tasks, timeout=timeout)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            raise

    errors: List[Tuple[int, BaseException]] = []

    for task in done:
        index = tasks[task]
        if task.cancelled():
            errors.append((index, asyncio.CancelledError()))
        elif (exception := task.exception()) is not None:
            LOGGER.warning(
                "Upstream call failed for address %s: %s", addresses[index], exception
            )
            errors.append((index, exception))
        else:
            results[index] = task.result()

    for task in pending:
        index = tasks[task]
        # Late results are discarded, the slot stays empty.
        task.cancel()
        LOGGER.warning(
            "Upstream call for address %s did not complete within %s seconds",
            addresses[index],
            timeout,
        )
        errors.append(
            (index, FanOutTimeout(f"No response for {addresses[index]} after {timeout}s"))
        )

    errors.sort(key=lambda error: error[0])

    if errors:
        if len(errors) < nb_addresses:
            LOGGER.warning("%s", PartialFailure(failed=len(errors), total=nb_addresses))
        else:
            LOGGER.warning("All the %d upstream calls failed", nb_addresses)

    LOGGER.debug(
        "Fan-out over %d addresses completed in %.3f seconds",
        nb_addresses,
        timer.elapsed(),
    )
    return FanOutResult(results=results, errors=errors)
