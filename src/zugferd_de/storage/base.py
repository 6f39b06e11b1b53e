"""Abstrakte Schnittstelle des Objektspeichers."""

import logging
from abc import ABC, abstractmethod

from zugferd_de.errors import StorageNotFoundError
from zugferd_de.storage.keys import LOGO_CONTENT_TYPES, logo_key, with_prefix

logger = logging.getLogger(__name__)


class BlobStore(ABC):
    """Objektspeicher mit Schlüssel → URL.

    DE: ``put`` und ``delete`` arbeiten mit relativen Schlüsseln, denen das
        Pfadpräfix vorangestellt wird; ``get`` nimmt die von ``put``
        gelieferte URL. Fehler werden als StorageError ausgelöst und nie
        verschluckt. ``delete`` ist idempotent.
    EN: ``put``/``delete`` take relative keys (prefixed by the store);
        ``get`` takes the URL returned by ``put``. Failures raise
        StorageError; ``delete`` is idempotent.
    """

    path_prefix: str = ""

    def full_key(self, key: str) -> str:
        return with_prefix(key, self.path_prefix)

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: str) -> str:
        """Speichert ein Objekt und liefert seine öffentliche URL."""
        ...

    @abstractmethod
    async def get(self, url: str) -> bytes:
        """Liest ein Objekt über seine URL (oder seinen vollen Schlüssel)."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Löscht ein Objekt; fehlende Objekte sind kein Fehler."""
        ...

    async def delete_logo(self, company_id: str | int) -> None:
        """Löscht die PNG- und die JPEG-Variante des Firmenlogos."""
        for content_type in LOGO_CONTENT_TYPES:
            key = logo_key(company_id, content_type)
            try:
                await self.delete(key)
            except StorageNotFoundError:
                logger.debug("Logo %s nicht vorhanden", key)
