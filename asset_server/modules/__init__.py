"""Feature modules."""

from . import activity, assets, storage

__all__ = [
    "activity",
    "assets",
    "storage",
]
