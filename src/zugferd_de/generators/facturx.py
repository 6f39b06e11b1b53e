"""Zusammenführung von sichtbarem PDF und XML zu PDF/A-3.

DE: Bettet das CII-XML mit der Bibliothek factur-x (Akretion) als Anhang
    in das PDF ein, kennzeichnet das Ergebnis als PDF/A-3 und schreibt die
    XMP-Metadaten (Titel, Autor, Betreff, Schlagworte).
EN: Embeds the CII XML into the PDF with the factur-x library, marks the
    result as PDF/A-3 and writes the XMP metadata.
"""

import logging

from facturx import generate_from_binary

from zugferd_de.i18n import get_translations
from zugferd_de.models.enums import DocumentProfile, Language
from zugferd_de.models.invoice import Invoice

logger = logging.getLogger(__name__)

# Profil → Level der Bibliothek factur-x
_PROFILE_MAP = {
    DocumentProfile.XRECHNUNG: "en16931",
    DocumentProfile.EN16931: "en16931",
}


def build_pdf_metadata(invoice: Invoice, language: Language) -> dict[str, str]:
    """Metadaten für die Einbettung: Titel, Autor (Verkäufer), Betreff, Schlagworte."""
    t = get_translations(language)
    number = invoice.invoice_number
    return {
        "title": t.document_title(number),
        "author": invoice.seller.name,
        "subject": f"{t.document_title(number)} {invoice.seller.name}",
        "keywords": f"Rechnung, Invoice, {number}, ZUGFeRD, EN16931",
    }


class FacturXAssembler:
    """Bettet XML in ein sichtbares PDF ein.

    Args:
        profile: "XRECHNUNG" oder "EN16931"; beide nutzen Level en16931.
    """

    def __init__(self, profile: DocumentProfile | str = DocumentProfile.XRECHNUNG) -> None:
        self.profile = str(profile).upper()

    def embed(
        self,
        pdf_bytes: bytes,
        xml_bytes: bytes,
        metadata: dict[str, str] | None = None,
        language: Language | None = None,
    ) -> bytes:
        """Liefert das hybride PDF/A-3.

        Args:
            pdf_bytes: Das sichtbare PDF.
            xml_bytes: Das CII-XML.
            metadata: Titel, Autor, Betreff und Schlagworte.
            language: Sprache des Dokuments für die PDF-Metadaten.

        Raises:
            ValueError: Wenn ``pdf_bytes`` leer ist.
        """
        if not pdf_bytes:
            msg = "pdf_bytes (sichtbares PDF) ist für die Einbettung erforderlich"
            raise ValueError(msg)

        fx_level = _PROFILE_MAP.get(self.profile, "en16931")
        logger.debug("Einbettung Factur-X Level %s (%d Bytes XML)", fx_level, len(xml_bytes))

        return generate_from_binary(
            pdf_bytes,
            xml_bytes,
            flavor="factur-x",
            level=fx_level,
            pdf_metadata=metadata,
            lang=str(language) if language else None,
        )
