"""Erzeugung der hybriden Rechnung (PDF/A-3 mit eingebettetem XML).

DE: Ablauf je Rechnung: Prüfen → Anordnen und Zeichnen → Abbilden →
    Serialisieren → Einbetten. Blockierende Prüffehler brechen vor dem
    Rendern mit InvoiceValidationError ab; Warnungen werden mit dem
    Ergebnis zurückgegeben. Der Generator hält keinen Zustand zwischen
    Aufrufen und kann für mehrere Rechnungen parallel genutzt werden.
EN: Per invoice: validate → render → map → serialize → embed. Blocking
    errors abort before rendering; warnings travel on the result.
"""

import logging

import httpx

from zugferd_de.conf import get_setting
from zugferd_de.errors import InvoiceValidationError
from zugferd_de.generators.base import BaseGenerator, GenerationResult
from zugferd_de.generators.cii import CIIGenerator
from zugferd_de.generators.facturx import FacturXAssembler, build_pdf_metadata
from zugferd_de.models.enums import Language
from zugferd_de.models.invoice import Invoice
from zugferd_de.rendering.pdf import render_invoice_pdf
from zugferd_de.validators.profiles import validate_invoice

logger = logging.getLogger(__name__)


class InvoiceDocumentGenerator(BaseGenerator):
    """Generator für ZUGFeRD/XRechnung-Hybridrechnungen.

    DE: Delegiert das XML an den CIIGenerator, das sichtbare PDF an die
        Layout-Engine und die Einbettung an den FacturXAssembler.
    EN: Delegates XML to CIIGenerator, the visual PDF to the layout engine
        and embedding to FacturXAssembler.

    Args:
        profile: "XRECHNUNG" oder "EN16931"; ohne Angabe ``DEFAULT_PROFILE``.
        strict: True prüft mit dem XRechnung-Profil (BR-DE-*).
    """

    def __init__(self, profile: str | None = None, strict: bool = True) -> None:
        super().__init__(profile=profile or str(get_setting("DEFAULT_PROFILE")))
        self.strict = strict
        self._cii_generator = CIIGenerator(profile=self.profile)
        self._assembler = FacturXAssembler(profile=self.profile)

    def generate_xml(self, invoice: Invoice) -> bytes:
        """Erzeugt nur das XML (delegiert an den CIIGenerator)."""
        return self._cii_generator.generate_xml(invoice)

    async def generate(
        self,
        invoice: Invoice,
        *,
        language: Language,
        greeting: str | None = None,
        client: httpx.AsyncClient | None = None,
        **kwargs: object,
    ) -> GenerationResult:
        """Erzeugt die vollständige Hybridrechnung.

        Args:
            invoice: Die Rechnung.
            language: Sprache der Darstellung.
            greeting: Anrede (z. B. aus den Verkäufereinstellungen).
            client: Optionaler httpx-Client für den Logo-Abruf.

        Returns:
            GenerationResult mit PDF, XML, Prüfbericht und Summen.

        Raises:
            InvoiceValidationError: Bei blockierenden Prüffehlern.
        """
        report = validate_invoice(invoice, strict=self.strict)
        if not report.valid:
            msg = f"Rechnung {invoice.invoice_number} ist ungültig: {'; '.join(report.errors)}"
            raise InvoiceValidationError(msg, errors=report.errors)
        for warning in report.warnings:
            logger.debug("Rechnung %s: %s", invoice.invoice_number, warning)

        visual_pdf, layout = await render_invoice_pdf(
            invoice, language, greeting=greeting, client=client
        )
        xml_bytes = self.generate_xml(invoice)
        pdf_bytes = self._assembler.embed(
            visual_pdf,
            xml_bytes,
            metadata=build_pdf_metadata(invoice, language),
            language=language,
        )

        logger.info(
            "Rechnung %s erzeugt (Profil %s, %d Warnungen)",
            invoice.invoice_number,
            self.profile,
            len(report.warnings),
        )
        return GenerationResult(
            xml_bytes=xml_bytes,
            pdf_bytes=pdf_bytes,
            profile=self.profile,
            report=report,
            totals=layout.totals,
        )
