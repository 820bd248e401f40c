"""Blob storage for rendered ticket codes.

Only the narrow put/delete surface is used by the ticketing flow; any
backend that can store bytes under a key and hand back a URL fits.
"""

from abc import ABC, abstractmethod
from pathlib import Path
import logging

from storefront.config import get_settings

logger = logging.getLogger(__name__)


class BlobStore(ABC):
    """Interface for blob persistence."""

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store `data` under `key` and return its retrieval URL."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the blob stored under `key`, if any."""
        ...


class LocalBlobStore(BlobStore):
    """Stores blobs on local disk, served from `base_url`."""

    def __init__(self, base_dir: str, base_url: str) -> None:
        self._base_dir = Path(base_dir)
        self._base_url = base_url.rstrip("/")

    def _path(self, key: str) -> Path:
        path = (self._base_dir / key).resolve()
        if self._base_dir.resolve() not in path.parents:
            raise ValueError(f"Invalid blob key: {key}")
        return path

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.debug(f"Stored blob {key} ({content_type}, {len(data)} bytes)")
        return f"{self._base_url}/{key}"

    async def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def get_blob_store() -> BlobStore:
    settings = get_settings()
    return LocalBlobStore(settings.blob_dir, settings.blob_base_url)
