"""
Module: pipeline.controller

Purpose:
    Orchestrate the top-level commands against a host document.
    apply:  Selection -> Border + Group per node
    master: Selection -> Resize -> Border + Group -> Pack -> Page frames
    config: Open a settings session (load/save/cancel messages)

Key Functions:
    - run_apply(): Border every selected node
    - run_master(): Border and pack selected photos onto pages
    - open_config(): Start a configuration session
    - run_command(): Dispatch on a command identifier

Key Classes:
    - CommandResult: Outcome of apply/master

Error Policy:
    Per-item failures (no parent, singular transform, host errors) are
    skipped inside the batch. Nothing crosses the command boundary; the
    run ends with a single summary notification and closes the session.

Dependencies:
    - pipeline.batch: Chunked processing
    - border: add_border_behind, InverseTransformCache
    - layout: pack, resize_to_orientation, MasterConfig
    - settings: BorderSettings, SettingsStore, ConfigSession

Used By:
    - cli: Command line entry point
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Union

from offset_border.border import InverseTransformCache, add_border_behind
from offset_border.core.geometry import node_bounds, union_bounds
from offset_border.core.models import Point
from offset_border.document.scene import SceneDocument, SceneNode
from offset_border.layout import (
    MasterConfig,
    PackableItem,
    PackingResult,
    pack,
    resize_to_orientation,
)
from offset_border.layout.config import DEFAULT_CHUNK_SIZE
from offset_border.settings import BorderSettings, ConfigSession, SettingsStore

from .batch import BatchReport, CancellationToken, ItemFailure, process_in_chunks

logger = logging.getLogger(__name__)

APPLY_COMMAND = "apply"
MASTER_COMMAND = "master"

EMPTY_SELECTION_MESSAGE = "Select one or more layers to add an offset border."


@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of an apply or master run (immutable).

    Attributes:
        command: "apply" or "master"
        total: Selected node count
        groups: Border groups created
        skipped: Nodes without geometry
        failures: Nodes whose processing raised
        pages: Page frames created (master only)
        packing: Packing result (master only)
        cancelled: True if the run stopped at a chunk boundary
        message: Summary notification text
    """

    command: str
    total: int
    groups: tuple[SceneNode, ...] = ()
    skipped: int = 0
    failures: tuple[ItemFailure, ...] = ()
    pages: tuple[SceneNode, ...] = ()
    packing: Optional[PackingResult] = None
    cancelled: bool = False
    message: str = ""

    @property
    def succeeded(self) -> int:
        return len(self.groups)

    @property
    def empty_selection(self) -> bool:
        return self.total == 0


async def run_apply(
    document: SceneDocument,
    settings: BorderSettings,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    cancel_token: Optional[CancellationToken] = None,
) -> CommandResult:
    """
    Draw an offset border behind every selected node and group each pair.

    The new groups become the selection.

    Args:
        document: Host document
        settings: Border settings for this run
        chunk_size: Nodes handled between yields to the host
        cancel_token: Cooperative cancellation

    Returns:
        CommandResult with created groups and counts

    Example:
        >>> result = asyncio.run(run_apply(document, BorderSettings(gap=10)))
        >>> result.message
        'Offset border(s) added and grouped: 2 of 2 layer(s).'
    """
    selection = document.selection
    if not selection:
        return _finish_empty(document, APPLY_COMMAND)

    start_time = time.perf_counter()
    logger.info(f"Adding offset borders to {len(selection)} layer(s), gap={settings.gap}")

    cache = InverseTransformCache()
    report = await process_in_chunks(
        selection,
        lambda node: _border_node(document, node, settings, cache),
        chunk_size=chunk_size,
        cancel_token=cancel_token,
    )
    logger.debug(f"Inverse cache: {cache.misses} inversions, {cache.hits} hits")
    cache.clear()

    groups = tuple(report.results)
    if groups:
        document.selection = list(groups)

    message = _summary("Offset border(s) added and grouped", len(groups), report)
    document.notify(message)
    document.close()

    logger.info(f"Apply finished in {time.perf_counter() - start_time:.2f}s")
    return CommandResult(
        command=APPLY_COMMAND,
        total=len(selection),
        groups=groups,
        skipped=report.skipped,
        failures=tuple(report.failures),
        cancelled=report.cancelled,
        message=message,
    )


async def run_master(
    document: SceneDocument,
    settings: BorderSettings,
    config: Optional[MasterConfig] = None,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    cancel_token: Optional[CancellationToken] = None,
) -> CommandResult:
    """
    Resize, border and pack the selected photos onto page frames.

    Pipeline:
    1. Anchor pages to the right of the selection's bounds
    2. Resize each node to its orientation's target size (optional)
    3. Border + group each node
    4. Pack the groups into pages
    5. Create one frame per page and move each group into its frame

    The page frames become the selection.

    Args:
        document: Host document
        settings: Border settings for this run
        config: Master flow configuration (defaults used if omitted)
        chunk_size: Nodes handled between yields to the host
        cancel_token: Cooperative cancellation

    Returns:
        CommandResult with groups, page frames and the packing result
    """
    config = config or MasterConfig()
    selection = document.selection
    if not selection:
        return _finish_empty(document, MASTER_COMMAND)

    start_time = time.perf_counter()
    anchor = _pages_anchor(selection, config.selection_clearance)
    logger.info(f"Master flow for {len(selection)} layer(s), pages anchored at ({anchor.x}, {anchor.y})")

    cache = InverseTransformCache()

    def _prepare(node: SceneNode) -> Optional[SceneNode]:
        if not node.has_geometry:
            return None
        if config.resize_photos:
            resize_to_orientation(node, config.photo_sizes)
        return add_border_behind(document, node, settings, cache)

    report = await process_in_chunks(
        selection,
        _prepare,
        chunk_size=chunk_size,
        cancel_token=cancel_token,
    )
    cache.clear()

    groups = tuple(report.results)
    failures: List[ItemFailure] = list(report.failures)
    packing: Optional[PackingResult] = None
    frames: tuple[SceneNode, ...] = ()
    placed = 0

    if groups and not report.cancelled:
        items = [PackableItem(key=g.id, width=g.width, height=g.height) for g in groups]
        packing = pack(items, config.packing, anchor)
        frames = tuple(_create_page_frames(document, packing, config.page_name_prefix))

        by_id = {g.id: g for g in groups}
        move_report = await process_in_chunks(
            packing.placements,
            lambda placement: _move_into_page(by_id[placement.key], frames[placement.page_index], placement),
            chunk_size=chunk_size,
            cancel_token=cancel_token,
        )
        placed = move_report.succeeded
        failures.extend(move_report.failures)
        document.selection = list(frames)

    if packing is not None:
        message = (
            f"Packed {placed} bordered layer(s) onto {packing.page_count} page(s)"
            f"{_skip_suffix(len(selection) - placed)}."
        )
    else:
        message = _summary("Offset border(s) added and grouped", len(groups), report)
    document.notify(message)
    document.close()

    logger.info(f"Master flow finished in {time.perf_counter() - start_time:.2f}s")
    return CommandResult(
        command=MASTER_COMMAND,
        total=len(selection),
        groups=groups,
        skipped=report.skipped,
        failures=tuple(failures),
        pages=frames,
        packing=packing,
        cancelled=report.cancelled,
        message=message,
    )


def open_config(document: SceneDocument, store: SettingsStore) -> ConfigSession:
    """Open a settings session and push the current settings to the UI."""
    session = ConfigSession(store, document)
    session.open()
    return session


async def run_command(
    command: Optional[str],
    document: SceneDocument,
    store: SettingsStore,
    *,
    master_config: Optional[MasterConfig] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    cancel_token: Optional[CancellationToken] = None,
) -> Union[CommandResult, ConfigSession]:
    """
    Run the command selected by ``command``.

    "apply" and "master" run a batch with the stored settings; any other
    value opens the configuration session.
    """
    if command == APPLY_COMMAND:
        return await run_apply(
            document, store.load(), chunk_size=chunk_size, cancel_token=cancel_token,
        )
    if command == MASTER_COMMAND:
        return await run_master(
            document, store.load(), master_config, chunk_size=chunk_size, cancel_token=cancel_token,
        )
    return open_config(document, store)


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _border_node(
    document: SceneDocument,
    node: SceneNode,
    settings: BorderSettings,
    cache: InverseTransformCache,
) -> Optional[SceneNode]:
    if not node.has_geometry:
        return None
    return add_border_behind(document, node, settings, cache)


def _finish_empty(document: SceneDocument, command: str) -> CommandResult:
    document.notify(EMPTY_SELECTION_MESSAGE)
    document.close()
    return CommandResult(command=command, total=0, message=EMPTY_SELECTION_MESSAGE)


def _pages_anchor(selection: List[SceneNode], clearance: float) -> Point:
    """Top-right of the selection's bounds, pushed right by ``clearance``."""
    boxes = [node_bounds(n) for n in selection if n.has_geometry]
    if not boxes:
        return Point(0.0, 0.0)
    bounds = union_bounds(boxes)
    return Point(bounds.right + clearance, bounds.y)


def _create_page_frames(
    document: SceneDocument,
    packing: PackingResult,
    prefix: str,
) -> List[SceneNode]:
    frames = []
    for page in packing.pages:
        frame = document.create_frame(page.width, page.height, f"{prefix} {page.index + 1}")
        frame.x = page.absolute_x
        frame.y = page.absolute_y
        frames.append(frame)
    return frames


def _move_into_page(group: SceneNode, frame: SceneNode, placement) -> SceneNode:
    frame.append_child(group)
    group.x = placement.local_x
    group.y = placement.local_y
    return group


def _skip_suffix(count: int) -> str:
    return f" ({count} skipped)" if count > 0 else ""


def _summary(prefix: str, succeeded: int, report: BatchReport) -> str:
    text = f"{prefix}: {succeeded} of {report.total} layer(s)"
    if report.cancelled:
        text += ", cancelled"
    return text + _skip_suffix(report.skipped + len(report.failures)) + "."
