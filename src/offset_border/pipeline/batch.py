"""
Module: pipeline.batch

Purpose:
    Cooperative chunked batch processing. Items are handled in chunks of
    at most ``chunk_size``; between chunks the coroutine yields to the
    event loop so the host stays responsive. A CancellationToken is
    checked at every chunk boundary.

Key Functions:
    - process_in_chunks(): Run a handler over items, chunk by chunk

Key Classes:
    - CancellationToken: Cooperative cancel flag
    - ItemFailure: One item's error
    - BatchReport: Outcome of a batch

Error Policy:
    A handler exception fails only that item. It is logged, recorded in
    the report and the batch carries on.

Dependencies:
    - asyncio (std)

Used By:
    - pipeline.controller: apply and master commands
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

from offset_border.layout.config import DEFAULT_CHUNK_SIZE

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class CancellationToken:
    """
    Cooperative cancel flag shared between a caller and a running batch.

    Example:
        >>> token = CancellationToken()
        >>> token.cancel()
        >>> token.cancelled
        True
    """

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


@dataclass(frozen=True)
class ItemFailure:
    """An item the handler raised on."""

    index: int
    item: Any
    error: BaseException

    @property
    def message(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"


@dataclass
class BatchReport(Generic[R]):
    """
    Outcome of process_in_chunks().

    Attributes:
        results: Handler return values, in item order, for succeeded items
        failures: Items whose handler raised
        skipped: Items the handler declined (returned None)
        chunks: Number of chunks processed
        cancelled: True if the batch stopped at a chunk boundary
        total: Number of items submitted
    """

    results: List[R] = field(default_factory=list)
    failures: List[ItemFailure] = field(default_factory=list)
    skipped: int = 0
    chunks: int = 0
    cancelled: bool = False
    total: int = 0

    @property
    def succeeded(self) -> int:
        return len(self.results)

    @property
    def processed(self) -> int:
        return self.succeeded + len(self.failures) + self.skipped


async def yield_to_host() -> None:
    """Hand control back to the event loop for one iteration."""
    await asyncio.sleep(0)


async def process_in_chunks(
    items: Sequence[T],
    handler: Callable[[T], Optional[R]],
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    cancel_token: Optional[CancellationToken] = None,
    on_chunk: Optional[Callable[[int, int], None]] = None,
) -> BatchReport[R]:
    """
    Run ``handler`` over ``items`` in chunks, yielding between chunks.

    Args:
        items: Items to process, in order
        handler: Called once per item; returning None counts as a skip
        chunk_size: Maximum items handled before yielding (>= 1)
        cancel_token: Checked before every chunk
        on_chunk: Progress callback (processed_so_far, total)

    Returns:
        BatchReport with results, failures and counts

    Raises:
        ValueError: If chunk_size < 1
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1: {chunk_size}")

    report: BatchReport[R] = BatchReport(total=len(items))

    for start in range(0, len(items), chunk_size):
        if cancel_token is not None and cancel_token.cancelled:
            report.cancelled = True
            logger.info(f"Batch cancelled after {report.processed}/{report.total} items")
            break

        if start > 0:
            await yield_to_host()

        for offset, item in enumerate(items[start:start + chunk_size]):
            index = start + offset
            try:
                result = handler(item)
            except Exception as e:
                logger.warning(f"Skipping item {index}: {e}")
                report.failures.append(ItemFailure(index=index, item=item, error=e))
                continue
            if result is None:
                report.skipped += 1
            else:
                report.results.append(result)

        report.chunks += 1
        if on_chunk is not None:
            on_chunk(report.processed, report.total)

    return report
