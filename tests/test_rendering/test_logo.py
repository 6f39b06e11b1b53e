"""Tests des Logo-Abrufs.

DE: Das Netz wird nie berührt: httpx.MockTransport liefert die Antworten.
    Jeder Fehler muss zu „kein Logo“ führen.
EN: Network is never touched; every failure yields "no logo".
"""

import httpx
import pytest

from zugferd_de.errors import LogoFetchError
from zugferd_de.rendering.logo import detect_image_type, fetch_logo, load_logo

LOGO_URL = "https://cdn.example.de/logos/42/logo.png"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestDetectImageType:
    """Tests von detect_image_type()."""

    def test_content_type(self) -> None:
        assert detect_image_type(b"", "image/png") == "png"
        assert detect_image_type(b"", "image/jpeg") == "jpg"

    def test_extension(self) -> None:
        assert detect_image_type(b"", "", "https://x.de/logo.JPG?v=2") == "jpg"
        assert detect_image_type(b"", "", "https://x.de/logo.png") == "png"

    def test_magic_bytes(self, png_bytes: bytes, jpeg_bytes: bytes) -> None:
        assert detect_image_type(png_bytes, "application/octet-stream") == "png"
        assert detect_image_type(jpeg_bytes) == "jpg"

    def test_unknown(self) -> None:
        assert detect_image_type(b"GIF89a", "image/gif", "https://x.de/logo.gif") is None


class TestLoadLogo:
    """Tests von load_logo()."""

    def test_png_size(self, png_bytes: bytes) -> None:
        logo = load_logo(png_bytes, "image/png")
        assert (logo.kind, logo.width, logo.height) == ("png", 300, 100)

    def test_unknown_format(self) -> None:
        with pytest.raises(LogoFetchError, match="Bildformat"):
            load_logo(b"GIF89a")

    def test_corrupt_data(self) -> None:
        with pytest.raises(LogoFetchError, match="nicht lesbar"):
            load_logo(b"\x89PNG kaputt", "image/png")

    def test_truncated_png(self, png_bytes: bytes) -> None:
        """Gültiger Kopf, abgeschnittene Bilddaten."""
        with pytest.raises(LogoFetchError, match="nicht lesbar"):
            load_logo(png_bytes[: len(png_bytes) // 2], "image/png")


class TestFetchLogo:
    """Tests von fetch_logo()."""

    async def test_success(self, png_bytes: bytes) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url == LOGO_URL
            return httpx.Response(200, content=png_bytes, headers={"content-type": "image/png"})

        async with _client(handler) as client:
            logo = await fetch_logo(LOGO_URL, client=client)
        assert logo is not None
        assert logo.kind == "png"

    async def test_no_url(self) -> None:
        assert await fetch_logo(None) is None
        assert await fetch_logo("") is None

    async def test_not_found(self, caplog: pytest.LogCaptureFixture) -> None:
        async with _client(lambda request: httpx.Response(404)) as client:
            assert await fetch_logo(LOGO_URL, client=client) is None
        assert "HTTP-Status 404" in caplog.text

    async def test_unreachable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Host nicht erreichbar", request=request)

        async with _client(handler) as client:
            assert await fetch_logo(LOGO_URL, client=client) is None

    async def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("zu langsam", request=request)

        async with _client(handler) as client:
            assert await fetch_logo(LOGO_URL, client=client, timeout=0.1) is None

    async def test_too_large(self, png_bytes: bytes, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZUGFERD_DE_LOGO_MAX_BYTES", "10")
        async with _client(lambda request: httpx.Response(200, content=png_bytes)) as client:
            assert await fetch_logo(LOGO_URL, client=client) is None

    async def test_not_an_image(self) -> None:
        response = httpx.Response(200, content=b"<html></html>", headers={"content-type": "text/html"})
        async with _client(lambda request: response) as client:
            assert await fetch_logo("https://cdn.example.de/logo", client=client) is None

    async def test_invalid_host(self) -> None:
        """Ein ungültiger Hostname erreicht den Transport nie."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("Transport darf nicht aufgerufen werden")

        async with _client(handler) as client:
            assert await fetch_logo("http://exämple..com/l.png", client=client) is None

    async def test_truncated_image(self, png_bytes: bytes) -> None:
        truncated = png_bytes[: len(png_bytes) // 2]
        response = httpx.Response(200, content=truncated, headers={"content-type": "image/png"})
        async with _client(lambda request: response) as client:
            assert await fetch_logo(LOGO_URL, client=client) is None

    async def test_declared_length_too_large(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZUGFERD_DE_LOGO_MAX_BYTES", "1000")
        response = httpx.Response(
            200, content=b"\x89P", headers={"content-type": "image/png", "content-length": "5000"}
        )
        async with _client(lambda request: response) as client:
            assert await fetch_logo(LOGO_URL, client=client) is None

    async def test_stops_reading_oversized_body(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Ohne Content-Length wird nach Überschreiten der Grenze nicht weitergelesen."""
        monkeypatch.setenv("ZUGFERD_DE_LOGO_MAX_BYTES", "1000")
        sent = []

        async def body():
            for _ in range(100):
                sent.append(512)
                yield b"\x89P" + b"0" * 510

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=body(), headers={"content-type": "image/png"})

        async with _client(handler) as client:
            assert await fetch_logo(LOGO_URL, client=client) is None
        assert len(sent) < 100
        assert "größer als 1000 Bytes" in caplog.text
