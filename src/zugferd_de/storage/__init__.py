"""Objektspeicher für Rechnungs-PDFs, XML, Logos und Anhänge.

DE: ``S3BlobStore`` wird nicht automatisch importiert, da boto3 optional
    ist (Extra ``s3``).
EN: ``S3BlobStore`` is not imported here because boto3 is optional.
"""

from zugferd_de.storage.base import BlobStore
from zugferd_de.storage.keys import (
    attachment_key,
    build_public_url,
    extract_key_from_url,
    invoice_pdf_key,
    logo_key,
    xrechnung_key,
)
from zugferd_de.storage.memory import MemoryBlobStore

__all__ = [
    "BlobStore",
    "MemoryBlobStore",
    "attachment_key",
    "build_public_url",
    "extract_key_from_url",
    "invoice_pdf_key",
    "logo_key",
    "xrechnung_key",
]
