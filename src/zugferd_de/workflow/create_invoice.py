"""Anlage einer Rechnung über Datenbank, Dokumenterzeugung und Ablage.

DE: Die Anlage ist nicht atomar: Datenbankzeile, Umsatzbuchung und die
    Dateien im Objektspeicher liegen in verschiedenen Systemen. Jeder
    Schritt läuft deshalb in einem ``Saga`` mit idempotenter Umkehrung.
    Entweder existieren am Ende Zeile, PDF und XML, oder alles wird
    zurückgerollt und ``InvoiceCreationError`` nennt die Ursache.

    Reihenfolge: Prüfen → Zeile anlegen → Umsatz buchen → Dokumente
    erzeugen → PDF ablegen → XML ablegen → URLs speichern → als versendet
    markieren.
EN: Creation spans the database, revenue aggregate and object storage.
    Each step runs inside a saga with an idempotent compensation; either
    row, PDF and XML all exist or everything is rolled back and
    ``InvoiceCreationError`` names the cause.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import NamedTuple, Protocol

import httpx

from zugferd_de.calculations import compute_totals
from zugferd_de.errors import (
    InvoiceCreationError,
    InvoiceValidationError,
    StorageError,
    StoragePermissionError,
)
from zugferd_de.generators.base import GenerationResult
from zugferd_de.generators.pipeline import InvoiceDocumentGenerator
from zugferd_de.models.enums import Language
from zugferd_de.models.invoice import Invoice
from zugferd_de.storage.base import BlobStore
from zugferd_de.storage.keys import invoice_pdf_key, xrechnung_key
from zugferd_de.validators.profiles import validate_invoice
from zugferd_de.workflow.saga import Saga

logger = logging.getLogger(__name__)

STAGE_VALIDATION = "validation"
STAGE_RENDERING = "rendering"
STAGE_STORAGE = "storage"
STAGE_DATABASE = "database"

PDF_CONTENT_TYPE = "application/pdf"
XML_CONTENT_TYPE = "application/xml"


class InvoiceRepository(Protocol):
    """Zugriff auf den Rechnungsdatenspeicher (extern)."""

    async def insert(self, user_id: str, invoice: Invoice) -> str: ...

    async def delete(self, invoice_id: str) -> None: ...

    async def record_revenue(self, invoice_id: str, amount: Decimal) -> None: ...

    async def remove_revenue(self, invoice_id: str) -> None: ...

    async def attach_documents(self, invoice_id: str, pdf_url: str, xml_url: str) -> None: ...

    async def mark_sent(self, invoice_id: str) -> None: ...


class CreatedInvoice(NamedTuple):
    """Ergebnis einer erfolgreichen Anlage."""

    invoice_id: str
    pdf_url: str
    xml_url: str
    result: GenerationResult


class CreateInvoiceWorkflow:
    """Legt eine Rechnung samt PDF und XML an oder rollt vollständig zurück.

    Args:
        repository: Rechnungsdatenspeicher.
        store: Objektspeicher für PDF und XML.
        generator: Erzeuger der Hybridrechnung; bestimmt auch das
            Prüfprofil.
    """

    def __init__(
        self,
        repository: InvoiceRepository,
        store: BlobStore,
        generator: InvoiceDocumentGenerator | None = None,
    ) -> None:
        self.repository = repository
        self.store = store
        self.generator = generator or InvoiceDocumentGenerator()

    async def execute(
        self,
        user_id: str,
        invoice: Invoice,
        *,
        language: Language,
        greeting: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> CreatedInvoice:
        """Führt die Anlage aus.

        Raises:
            InvoiceCreationError: Bei jedem Fehler, nach dem Rollback.
        """
        report = validate_invoice(invoice, strict=self.generator.strict)
        if not report.valid:
            msg = f"Rechnung {invoice.invoice_number} ist ungültig und wurde nicht angelegt"
            raise InvoiceCreationError(msg, stage=STAGE_VALIDATION, errors=report.errors)

        gross_total = compute_totals(invoice).gross_total
        repository = self.repository
        store = self.store
        saga = Saga(f"Rechnung {invoice.invoice_number}")
        stage = STAGE_DATABASE
        invoice_id: str | None = None

        async def delete_row(created_id: str | None) -> None:
            if created_id is not None:
                await repository.delete(created_id)

        async def remove_revenue(_: object) -> None:
            await repository.remove_revenue(invoice_id)

        try:
            invoice_id = await saga.run(
                "insert",
                lambda: repository.insert(user_id, invoice),
                delete_row,
            )
            await saga.run(
                "record_revenue",
                lambda: repository.record_revenue(invoice_id, gross_total),
                remove_revenue,
            )

            stage = STAGE_RENDERING
            result: GenerationResult = await saga.run(
                "generate",
                lambda: self.generator.generate(
                    invoice, language=language, greeting=greeting, client=client
                ),
            )

            stage = STAGE_STORAGE
            pdf_key = invoice_pdf_key(user_id, invoice_id, f"{invoice.invoice_number}.pdf")
            xml_key = xrechnung_key(user_id, invoice_id)
            pdf_url = await saga.run(
                "upload_pdf",
                lambda: store.put(pdf_key, result.pdf_bytes or b"", PDF_CONTENT_TYPE),
                lambda _: store.delete(pdf_key),
            )
            xml_url = await saga.run(
                "upload_xml",
                lambda: store.put(xml_key, result.xml_bytes, XML_CONTENT_TYPE),
                lambda _: store.delete(xml_key),
            )

            stage = STAGE_DATABASE
            await saga.run(
                "attach_documents",
                lambda: repository.attach_documents(invoice_id, pdf_url, xml_url),
            )
            await saga.run("mark_sent", lambda: repository.mark_sent(invoice_id))
        except Exception as exc:
            failed = await saga.compensate()
            error = self._creation_error(invoice, exc, stage, failed)
            logger.info(
                "Rechnung %s zurückgerollt (Phase %s, Schritte %s)",
                invoice.invoice_number,
                error.stage,
                ", ".join(saga.completed_steps) or "-",
            )
            raise error from exc

        logger.info("Rechnung %s angelegt (ID %s)", invoice.invoice_number, invoice_id)
        return CreatedInvoice(invoice_id=invoice_id, pdf_url=pdf_url, xml_url=xml_url, result=result)

    @staticmethod
    def _creation_error(
        invoice: Invoice,
        exc: Exception,
        stage: str,
        failed_compensations: list[str],
    ) -> InvoiceCreationError:
        number = invoice.invoice_number
        errors: list[str] = []
        if isinstance(exc, StoragePermissionError):
            stage = STAGE_STORAGE
            msg = (
                f"Rechnung {number} nicht angelegt: Zugriff auf den Dateispeicher "
                f"verweigert. Bitte Zugangsdaten und Schreibrechte prüfen. ({exc})"
            )
        elif isinstance(exc, StorageError):
            stage = STAGE_STORAGE
            msg = f"Rechnung {number} nicht angelegt: Ablage der Dokumente fehlgeschlagen ({exc})"
        elif isinstance(exc, InvoiceValidationError):
            stage = STAGE_VALIDATION
            errors = exc.errors
            msg = f"Rechnung {number} ist ungültig und wurde nicht angelegt"
        elif stage == STAGE_RENDERING:
            msg = f"Rechnung {number} nicht angelegt: PDF/XML-Erzeugung fehlgeschlagen ({exc})"
        else:
            msg = f"Rechnung {number} nicht angelegt: Datenbankfehler ({exc})"

        if failed_compensations:
            msg += f". Rollback unvollständig: {', '.join(failed_compensations)}"
            errors = [*errors, *(f"Rollback fehlgeschlagen: {name}" for name in failed_compensations)]
        return InvoiceCreationError(msg, stage=stage, errors=errors)
