"""
Module: layout

Purpose:
    Page layout for bordered groups.
    Packs items into fixed-size pages and normalizes photo sizes.

Key Functions:
    - pack(): Greedy row-major page packing
    - classify(), target_size(), resize_to_orientation(): Photo sizing

Key Classes:
    - PackingConfig, PhotoSizes, MasterConfig
    - PackableItem, ItemPlacement, PagePlacement, PackingResult
"""

from .config import MasterConfig, PackingConfig, PhotoSizes
from .models import ItemPlacement, PackableItem, PackingResult, PagePlacement
from .packer import pack
from .orientation import Orientation, classify, resize_to_orientation, target_size

__all__ = [
    # Config
    "MasterConfig",
    "PackingConfig",
    "PhotoSizes",
    # Models
    "ItemPlacement",
    "PackableItem",
    "PackingResult",
    "PagePlacement",
    # Functions
    "pack",
    "Orientation",
    "classify",
    "resize_to_orientation",
    "target_size",
]
