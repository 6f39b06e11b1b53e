"""Objektspeicher im Arbeitsspeicher (Tests, Entwicklung)."""

import logging

from zugferd_de.errors import StorageNotFoundError
from zugferd_de.storage.base import BlobStore
from zugferd_de.storage.keys import extract_key_from_url

logger = logging.getLogger(__name__)


class MemoryBlobStore(BlobStore):
    """Hält Objekte in einem Dict; URLs beginnen mit ``base_url``."""

    def __init__(self, base_url: str = "memory://blobs", path_prefix: str = "") -> None:
        self.base_url = base_url.rstrip("/")
        self.path_prefix = path_prefix
        self.objects: dict[str, tuple[bytes, str]] = {}

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        full_key = self.full_key(key)
        self.objects[full_key] = (bytes(data), content_type)
        logger.debug("Objekt %s gespeichert (%d Bytes)", full_key, len(data))
        return f"{self.base_url}/{full_key}"

    async def get(self, url: str) -> bytes:
        key = extract_key_from_url(url, public_url=self.base_url)
        try:
            return self.objects[key][0]
        except KeyError:
            msg = f"Objekt nicht gefunden: {key}"
            raise StorageNotFoundError(msg) from None

    async def delete(self, key: str) -> None:
        self.objects.pop(self.full_key(key), None)
