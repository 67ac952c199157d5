"""Media collaborator backends."""

from devevent.core.media.storage import (
    CloudinaryMediaStorage,
    ImageUpload,
    LocalMediaStorage,
    MediaStorage,
    get_media_storage,
)

__all__ = [
    "ImageUpload",
    "MediaStorage",
    "LocalMediaStorage",
    "CloudinaryMediaStorage",
    "get_media_storage",
]
