"""
Module: pipeline

Purpose:
    Command orchestration over a host document, processed in cooperative
    chunks so the host stays responsive on large selections.

Key Functions:
    - run_apply(), run_master(), open_config(), run_command()
    - process_in_chunks(): Chunked batch runner

Key Classes:
    - CommandResult, BatchReport, ItemFailure, CancellationToken
"""

from .batch import (
    BatchReport,
    CancellationToken,
    ItemFailure,
    process_in_chunks,
    yield_to_host,
)
from .controller import (
    APPLY_COMMAND,
    EMPTY_SELECTION_MESSAGE,
    MASTER_COMMAND,
    CommandResult,
    open_config,
    run_apply,
    run_command,
    run_master,
)

__all__ = [
    # Batch
    "BatchReport",
    "CancellationToken",
    "ItemFailure",
    "process_in_chunks",
    "yield_to_host",
    # Commands
    "APPLY_COMMAND",
    "EMPTY_SELECTION_MESSAGE",
    "MASTER_COMMAND",
    "CommandResult",
    "open_config",
    "run_apply",
    "run_command",
    "run_master",
]
