"""Schlüssel und URLs im Objektspeicher.

DE: Schlüssel sind nach Zweck getrennt:

    - ``invoices/{user}/{invoice}/{datei}`` für Rechnungs-PDFs
    - ``xrechnung/{user}/{invoice}/xrechnung.xml`` für das XML
    - ``logos/{firma}/logo.{png|jpg}`` für Firmenlogos
    - ``abtretungserklaerungen/{kunde}/{zeitstempel}-{datei}`` für Anhänge

    Ein optionales Präfix (``S3_PATH_PREFIX``) wird vorangestellt.
EN: Keys are namespaced by purpose; an optional path prefix is prepended.
"""

import re
import time
from urllib.parse import urlsplit

_UNSAFE_FILENAME_RE = re.compile(r"[^a-zA-Z0-9.-]")

LOGO_CONTENT_TYPES = ("image/png", "image/jpeg")


def with_prefix(key: str, prefix: str = "") -> str:
    """Stellt das Pfadpräfix voran, falls gesetzt."""
    prefix = prefix.strip("/")
    return f"{prefix}/{key}" if prefix else key


def sanitize_filename(filename: str) -> str:
    """Ersetzt alle Zeichen außer Buchstaben, Ziffern, Punkt und Minus durch „_“."""
    return _UNSAFE_FILENAME_RE.sub("_", filename)


def invoice_pdf_key(user_id: str | int, invoice_id: str | int, filename: str) -> str:
    return f"invoices/{user_id}/{invoice_id}/{filename}"


def xrechnung_key(user_id: str | int, invoice_id: str | int) -> str:
    return f"xrechnung/{user_id}/{invoice_id}/xrechnung.xml"


def logo_key(company_id: str | int, content_type: str) -> str:
    """PNG bleibt PNG, alles andere wird als JPEG abgelegt."""
    extension = "png" if content_type == "image/png" else "jpg"
    return f"logos/{company_id}/logo.{extension}"


def attachment_key(
    customer_id: str | int,
    filename: str,
    timestamp: int | None = None,
) -> str:
    """Schlüssel einer Abtretungserklärung; der Zeitstempel (ms) macht ihn eindeutig."""
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    return f"abtretungserklaerungen/{customer_id}/{timestamp}-{sanitize_filename(filename)}"


def build_public_url(
    key: str,
    *,
    bucket: str,
    public_url: str | None = None,
    endpoint: str | None = None,
    region: str = "auto",
) -> str:
    """Öffentliche URL eines Objekts.

    DE: Reihenfolge: öffentliche Basis-URL (CDN), sonst Endpoint mit
        Bucket im Pfad (z. B. Cloudflare R2), sonst AWS-Virtual-Host.
    EN: Public base URL first, then endpoint with bucket path, then the
        AWS virtual host.
    """
    if public_url:
        return f"{public_url.rstrip('/')}/{key}"
    if endpoint:
        parts = urlsplit(endpoint)
        return f"{parts.scheme}://{parts.netloc}/{bucket}/{key}"
    return f"https://{bucket}.s3.{region}.amazonaws.com/{key}"


def extract_key_from_url(
    url: str,
    *,
    bucket: str | None = None,
    public_url: str | None = None,
) -> str:
    """Schlüssel aus einer Objekt-URL; Werte ohne Schema gelten schon als Schlüssel."""
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return url

    segments = [segment for segment in parts.path.split("/") if segment]

    if public_url and urlsplit(public_url).netloc == parts.netloc:
        base_segments = [s for s in urlsplit(public_url).path.split("/") if s]
        if segments[: len(base_segments)] == base_segments:
            segments = segments[len(base_segments) :]
        return "/".join(segments)

    if bucket and segments and segments[0] == bucket:
        return "/".join(segments[1:])

    return "/".join(segments)
