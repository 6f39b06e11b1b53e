"""Objektspeicher auf S3 bzw. Cloudflare R2 (boto3).

DE: Die boto3-Aufrufe sind blockierend und laufen per
    ``asyncio.to_thread`` in einem Worker-Thread. ``AccessDenied`` wird zu
    StoragePermissionError, fehlende Objekte zu StorageNotFoundError, alle
    übrigen Fehler zu StorageError. Benötigt das Extra ``s3``.
EN: Blocking boto3 calls run in a worker thread. Errors are translated
    into the StorageError hierarchy. Requires the ``s3`` extra.
"""

import asyncio
import logging

from zugferd_de.conf import get_setting
from zugferd_de.errors import (
    StorageConfigurationError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
)
from zugferd_de.storage.base import BlobStore
from zugferd_de.storage.keys import build_public_url, extract_key_from_url

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}
_PERMISSION_CODES = {"AccessDenied", "403", "Forbidden"}


class S3BlobStore(BlobStore):
    """Objektspeicher für S3-kompatible Dienste."""

    def __init__(
        self,
        *,
        bucket: str,
        access_key: str,
        secret_key: str,
        endpoint: str | None = None,
        region: str = "auto",
        public_url: str | None = None,
        path_prefix: str = "",
        client: object | None = None,
    ) -> None:
        self.bucket = bucket
        self.endpoint = endpoint
        self.region = region
        self.public_url = public_url
        self.path_prefix = path_prefix

        if client is not None:
            self._client = client
            return

        import boto3
        from botocore.config import Config

        if endpoint:
            # R2 ignoriert die Region, das SDK verlangt aber eine gültige
            client_region = "us-east-1" if region in ("", "auto") else region
            config = Config(s3={"addressing_style": "path"})
        else:
            client_region = region
            config = None

        self._client = boto3.client(
            "s3",
            region_name=client_region,
            endpoint_url=endpoint,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            config=config,
        )

    @classmethod
    def from_settings(cls) -> "S3BlobStore":
        """Erzeugt den Speicher aus den ``S3_*``-Einstellungen.

        Raises:
            StorageConfigurationError: Wenn Zugangsschlüssel, Secret oder
                Bucket fehlen.
        """
        access_key = get_setting("S3_ACCESS_KEY")
        secret_key = get_setting("S3_SECRET_KEY")
        bucket = get_setting("S3_BUCKET_NAME")
        for name, value in (
            ("S3_ACCESS_KEY", access_key),
            ("S3_SECRET_KEY", secret_key),
            ("S3_BUCKET_NAME", bucket),
        ):
            if not value:
                msg = (
                    f"Umgebungsvariable ZUGFERD_DE_{name} ist erforderlich. "
                    "Bitte setzen und den Dienst neu starten."
                )
                raise StorageConfigurationError(msg)

        return cls(
            bucket=str(bucket),
            access_key=str(access_key),
            secret_key=str(secret_key),
            endpoint=get_setting("S3_ENDPOINT") or None,
            region=str(get_setting("S3_REGION")),
            public_url=get_setting("S3_PUBLIC_URL") or None,
            path_prefix=str(get_setting("S3_PATH_PREFIX")),
        )

    def public_url_for(self, full_key: str) -> str:
        return build_public_url(
            full_key,
            bucket=self.bucket,
            public_url=self.public_url,
            endpoint=self.endpoint,
            region=self.region,
        )

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        full_key = self.full_key(key)
        await self._call(
            "put_object",
            full_key,
            Bucket=self.bucket,
            Key=full_key,
            Body=data,
            ContentType=content_type or "application/octet-stream",
        )
        logger.info("Upload erfolgreich: Bucket %s, Schlüssel %s", self.bucket, full_key)
        return self.public_url_for(full_key)

    async def get(self, url: str) -> bytes:
        key = extract_key_from_url(url, bucket=self.bucket, public_url=self.public_url)
        response = await self._call("get_object", key, Bucket=self.bucket, Key=key)
        body = response.get("Body")
        if body is None:
            msg = f"Kein Inhalt für {key} geliefert"
            raise StorageError(msg)
        data = await asyncio.to_thread(body.read)
        logger.debug("Download %s: %d Bytes", key, len(data))
        return data

    async def delete(self, key: str) -> None:
        full_key = self.full_key(key)
        await self._call("delete_object", full_key, Bucket=self.bucket, Key=full_key)

    async def _call(self, operation: str, key: str, **params: object) -> dict:
        from botocore.exceptions import BotoCoreError, ClientError

        method = getattr(self._client, operation)
        try:
            return await asyncio.to_thread(method, **params)
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in _PERMISSION_CODES:
                msg = (
                    f"Zugriff verweigert ({operation} {self.bucket}/{key}). "
                    "Schreibrechte des API-Tokens, Bucket-Namen und Zugangsdaten prüfen."
                )
                raise StoragePermissionError(msg) from exc
            if code in _NOT_FOUND_CODES:
                msg = f"Objekt nicht gefunden: {self.bucket}/{key}"
                raise StorageNotFoundError(msg) from exc
            msg = f"{operation} für {self.bucket}/{key} fehlgeschlagen: {code or exc}"
            raise StorageError(msg) from exc
        except BotoCoreError as exc:
            msg = f"{operation} für {self.bucket}/{key} fehlgeschlagen: {exc}"
            raise StorageError(msg) from exc
