"""Laden des Firmenlogos.

DE: Lädt das Logo asynchron per httpx mit begrenzter Wartezeit. Jeder
    Fehler (Zeitüberschreitung, Status ungleich 200, zu groß, unbekanntes
    Format, defekte Bilddaten) führt zu „kein Logo“: die Rechnung wird
    trotzdem vollständig erzeugt.
EN: Fetches the logo with httpx and a bounded timeout. Any failure means
    "no logo"; generation continues.
"""

import logging
from dataclasses import dataclass
from io import BytesIO

import httpx
from reportlab.lib.utils import ImageReader

from zugferd_de.conf import get_setting
from zugferd_de.errors import LogoFetchError

logger = logging.getLogger(__name__)

PNG_MAGIC = b"\x89P"
JPEG_MAGIC = b"\xff\xd8"


@dataclass(frozen=True)
class Logo:
    """Geladenes Logo mit Pixelmaßen."""

    data: bytes
    kind: str
    width: int
    height: int

    def reader(self) -> ImageReader:
        return ImageReader(BytesIO(self.data))


def detect_image_type(data: bytes, content_type: str = "", url: str = "") -> str | None:
    """Erkennt PNG oder JPEG über Content-Type, Dateiendung oder Magic Bytes.

    Returns:
        "png", "jpg" oder None.
    """
    content_type = content_type.lower()
    path = url.lower().split("?", 1)[0]
    if "png" in content_type or path.endswith(".png"):
        return "png"
    if "jpeg" in content_type or "jpg" in content_type or path.endswith((".jpg", ".jpeg")):
        return "jpg"
    if data.startswith(PNG_MAGIC):
        return "png"
    if data.startswith(JPEG_MAGIC):
        return "jpg"
    return None


def load_logo(data: bytes, content_type: str = "", url: str = "") -> Logo:
    """Erkennt und dekodiert Bilddaten.

    Raises:
        LogoFetchError: Wenn das Format unbekannt oder das Bild defekt ist.
    """
    kind = detect_image_type(data, content_type, url)
    if kind is None:
        msg = f"Unbekanntes Bildformat ({content_type or 'ohne Content-Type'})"
        raise LogoFetchError(msg)
    try:
        reader = ImageReader(BytesIO(data))
        width, height = reader.getSize()
        # vollständig dekodieren, abgeschnittene Dateien scheitern erst hier
        reader.getRGBData()
    except Exception as exc:
        msg = f"Bilddaten nicht lesbar: {exc}"
        raise LogoFetchError(msg) from exc
    if width <= 0 or height <= 0:
        msg = f"Ungültige Bildgröße {width}x{height}"
        raise LogoFetchError(msg)
    return Logo(data=data, kind=kind, width=width, height=height)


async def fetch_logo(
    url: str | None,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> Logo | None:
    """Lädt ein Logo; liefert None bei jedem Fehler.

    Args:
        url: HTTP(S)-Adresse des Logos oder None.
        client: Optionaler httpx-Client (z. B. mit MockTransport in Tests).
        timeout: Wartezeit in Sekunden, Standard ``LOGO_TIMEOUT``.
    """
    if not url:
        return None
    if timeout is None:
        timeout = float(get_setting("LOGO_TIMEOUT"))

    try:
        if client is not None:
            return await _download(client, url, timeout)
        async with httpx.AsyncClient(follow_redirects=True) as own_client:
            return await _download(own_client, url, timeout)
    except LogoFetchError as exc:
        logger.warning("Logo %s wird weggelassen: %s", url, exc)
        return None


async def _download(client: httpx.AsyncClient, url: str, timeout: float) -> Logo:
    max_bytes = int(get_setting("LOGO_MAX_BYTES"))
    try:
        async with client.stream("GET", url, timeout=timeout) as response:
            if response.status_code != 200:
                msg = f"HTTP-Status {response.status_code}"
                raise LogoFetchError(msg)
            data = await _read_limited(response, max_bytes)
            content_type = response.headers.get("content-type", "")
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        msg = f"Abruf fehlgeschlagen: {exc!r}"
        raise LogoFetchError(msg) from exc

    return load_logo(data, content_type, url)


async def _read_limited(response: httpx.Response, max_bytes: int) -> bytes:
    """Liest den Antwortkörper und bricht ab, sobald ``max_bytes`` überschritten ist."""
    declared = response.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > max_bytes:
        msg = f"Logo größer als {max_bytes} Bytes"
        raise LogoFetchError(msg)

    data = bytearray()
    async for chunk in response.aiter_bytes():
        data.extend(chunk)
        if len(data) > max_bytes:
            msg = f"Logo größer als {max_bytes} Bytes"
            raise LogoFetchError(msg)
    return bytes(data)
