"""Preview image selection for parsed messages."""

from protocol_timeline.images.scorer import FanOutPolicy, assign_images, best_preview
from protocol_timeline.images.store import AssetStore, FilesystemAssetStore

__all__ = [
    "AssetStore",
    "FanOutPolicy",
    "FilesystemAssetStore",
    "assign_images",
    "best_preview",
]
