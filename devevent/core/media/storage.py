"""Media collaborator: stores image bytes and returns a durable URL."""

from __future__ import annotations

import io
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from flask import current_app
from urllib3.exceptions import HTTPError
from werkzeug.utils import secure_filename

from devevent.errors import MediaUploadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageUpload:
    data: bytes
    filename: str
    content_type: Optional[str] = None

    @property
    def extension(self) -> str:
        _, _, ext = self.filename.rpartition(".")
        return ext.lower() if ext != self.filename else ""


class MediaStorage(ABC):
    """Interface for image hosting backends."""

    @abstractmethod
    def upload(self, image: ImageUpload, folder: str) -> str:
        """Store ``image`` under ``folder`` and return its retrievable URL.

        Raises:
            MediaUploadError: If the backend rejects or fails the upload.
        """
        ...


class LocalMediaStorage(MediaStorage):
    """Writes images below ``root`` and serves them back from ``base_url``."""

    def __init__(self, root: Path, base_url: str = "/uploads") -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def upload(self, image: ImageUpload, folder: str) -> str:
        safe_folder = secure_filename(folder) or "media"
        name = uuid.uuid4().hex
        if image.extension:
            name = f"{name}.{image.extension}"
        target_dir = self.root / safe_folder
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            (target_dir / name).write_bytes(image.data)
        except OSError as exc:
            logger.error("Failed to store image %s in %s: %s", image.filename, target_dir, exc)
            raise MediaUploadError() from exc
        logger.debug("Stored image %s as %s/%s", image.filename, safe_folder, name)
        return f"{self.base_url}/{safe_folder}/{name}"


class CloudinaryMediaStorage(MediaStorage):
    """Uploads through the Cloudinary SDK; returns ``secure_url``.

    Credentials are passed per call so several apps in one process do not
    share the SDK's global configuration.
    """

    def __init__(self, cloud_name: str, api_key: str, api_secret: str, timeout: int = 30) -> None:
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout

    def upload(self, image: ImageUpload, folder: str) -> str:
        try:
            result = cloudinary.uploader.upload(
                io.BytesIO(image.data),
                folder=folder,
                resource_type="image",
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
                timeout=self.timeout,
            )
        except (CloudinaryError, HTTPError, OSError) as exc:
            logger.error("Cloudinary upload failed for %s: %s", image.filename, exc)
            raise MediaUploadError() from exc

        secure_url = result.get("secure_url") if isinstance(result, dict) else None
        if not secure_url:
            logger.error("Cloudinary upload for %s returned no secure_url", image.filename)
            raise MediaUploadError()
        logger.info("Uploaded image %s to Cloudinary folder %s", image.filename, folder)
        return secure_url


def build_media_storage(config: Mapping) -> MediaStorage:
    backend = config.get("MEDIA_BACKEND", "local")
    if backend == "cloudinary":
        return CloudinaryMediaStorage(
            cloud_name=config["CLOUDINARY_CLOUD_NAME"],
            api_key=config["CLOUDINARY_API_KEY"],
            api_secret=config["CLOUDINARY_API_SECRET"],
            timeout=int(config.get("MEDIA_UPLOAD_TIMEOUT_SECONDS", 30)),
        )
    return LocalMediaStorage(Path(config["UPLOAD_FOLDER"]))


def init_media(app) -> None:
    app.extensions["media_storage"] = build_media_storage(app.config)


def get_media_storage() -> MediaStorage:
    return current_app.extensions["media_storage"]
