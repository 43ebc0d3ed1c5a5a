"""Media uploader service for note images."""
import asyncio
import logging
import re
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from urllib.parse import urlparse

import cloudinary
import cloudinary.uploader

from app.config import Settings, settings
from app.core.exceptions import MediaStorageError

logger = logging.getLogger(__name__)

_SAFE_SUFFIX = re.compile(r"^\.[A-Za-z0-9]{1,5}$")


class MediaBackend(str, Enum):
    """Media backend options."""
    LOCAL = "local"
    CLOUDINARY = "cloudinary"


@dataclass
class ImagePayload:
    """Raw image received from a client."""
    filename: str
    content_type: str | None
    data: bytes

    @property
    def is_empty(self) -> bool:
        return len(self.data) == 0


class MediaUploader(ABC):
    """Stores images on a media host and hands back durable URLs."""

    @abstractmethod
    async def upload(self, data: bytes, filename: str) -> str:
        """
        Upload one image.

        Args:
            data: Raw image bytes
            filename: Original client filename

        Returns:
            Public URL of the stored image

        Raises:
            MediaStorageError: If the host rejects or cannot be reached
        """
        pass

    @abstractmethod
    async def delete(self, url: str) -> None:
        """Delete the asset behind ``url``. Raises MediaStorageError on failure."""
        pass

    @abstractmethod
    def extract_public_id(self, url: str) -> str | None:
        """Map a stored URL back to the host's asset identifier."""
        pass


class CloudinaryUploader(MediaUploader):
    """Cloudinary-backed uploader."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str = "notes-app",
    ):
        self.folder = folder.strip("/")
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )

    async def upload(self, data: bytes, filename: str) -> str:
        public_id = f"note_image_{uuid.uuid4()}"
        logger.info("Uploading %s (%d bytes) to Cloudinary", filename, len(data))
        try:
            # The SDK is blocking
            result = await asyncio.to_thread(
                cloudinary.uploader.upload,
                data,
                folder=self.folder,
                public_id=public_id,
                resource_type="image",
                overwrite=True,
                format="jpg",
                quality="auto:good",
                fetch_format="auto",
            )
        except Exception as e:
            raise MediaStorageError(f"Cloudinary upload failed: {e}") from e

        url = result.get("secure_url")
        if not url:
            raise MediaStorageError("Cloudinary upload succeeded but did not return a URL")
        return url

    async def delete(self, url: str) -> None:
        public_id = self.extract_public_id(url)
        if public_id is None:
            raise MediaStorageError(f"Cannot derive a Cloudinary public id from {url}")
        try:
            result = await asyncio.to_thread(cloudinary.uploader.destroy, public_id)
        except Exception as e:
            raise MediaStorageError(f"Cloudinary delete failed: {e}") from e
        if result.get("result") != "ok":
            raise MediaStorageError(f"Cloudinary delete of {public_id} returned {result.get('result')}")

    def extract_public_id(self, url: str) -> str | None:
        # https://res.cloudinary.com/<cloud>/image/upload/v123/notes-app/note_image_<uuid>.jpg
        path = urlparse(url).path
        name = path.rsplit("/", 1)[-1]
        if "." not in name:
            return None
        stem = name[: name.rfind(".")]
        if not stem:
            return None
        return f"{self.folder}/{stem}"


class LocalMediaUploader(MediaUploader):
    """Stores images on local disk, served by the app's ``/static`` mount."""

    def __init__(
        self,
        root: Path,
        base_url: str = "",
        url_prefix: str = "/static/uploads/notes",
    ):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.base_url = base_url.rstrip("/")
        self.url_prefix = "/" + url_prefix.strip("/")

    def _suffix(self, filename: str) -> str:
        suffix = Path(filename or "").suffix.lower()
        return suffix if _SAFE_SUFFIX.match(suffix) else ".jpg"

    async def upload(self, data: bytes, filename: str) -> str:
        name = f"note_image_{uuid.uuid4().hex}{self._suffix(filename)}"
        try:
            with open(self.root / name, "wb") as f:
                f.write(data)
        except OSError as e:
            raise MediaStorageError(f"Failed to write {name}: {e}") from e
        return f"{self.base_url}{self.url_prefix}/{name}"

    async def delete(self, url: str) -> None:
        name = self.extract_public_id(url)
        if name is None:
            raise MediaStorageError(f"{url} is not a locally stored image")
        try:
            (self.root / name).unlink()
        except OSError as e:
            raise MediaStorageError(f"Failed to delete {name}: {e}") from e

    def extract_public_id(self, url: str) -> str | None:
        path = urlparse(url).path
        directory, _, name = path.rpartition("/")
        if directory != self.url_prefix or not name or name in (".", ".."):
            return None
        return name


def create_media_uploader(config: Settings | None = None) -> MediaUploader:
    """Build the uploader selected by ``media_backend``."""
    config = config or settings
    backend = MediaBackend(config.media_backend.lower())
    if backend == MediaBackend.CLOUDINARY:
        return CloudinaryUploader(
            cloud_name=config.cloudinary_cloud_name,
            api_key=config.cloudinary_api_key,
            api_secret=config.cloudinary_api_secret,
            folder=config.cloudinary_folder,
        )
    return LocalMediaUploader(
        root=config.upload_dir / "notes",
        base_url=config.public_base_url,
        url_prefix=f"/static/{config.upload_dir.name}/notes",
    )


# Global instance
_media_uploader: MediaUploader | None = None


def get_media_uploader() -> MediaUploader:
    """Get global media uploader instance."""
    global _media_uploader
    if _media_uploader is None:
        _media_uploader = create_media_uploader()
    return _media_uploader
