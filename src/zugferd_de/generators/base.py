"""Gemeinsame Basis der Rechnungsgeneratoren."""

from abc import ABC, abstractmethod

from zugferd_de.calculations import InvoiceTotals
from zugferd_de.models.enums import DocumentProfile
from zugferd_de.models.invoice import Invoice
from zugferd_de.validators.report import ValidationReport


class GenerationResult:
    """Ergebnis der Erzeugung einer Rechnung.

    DE: Enthält das XML, optional das hybride PDF, den Prüfbericht (mit den
        nicht blockierenden Warnungen) und die berechneten Summen.
    EN: Holds the XML, the optional hybrid PDF, the validation report (with
        its non-blocking warnings) and the computed totals.
    """

    def __init__(
        self,
        xml_bytes: bytes,
        pdf_bytes: bytes | None = None,
        profile: str = "",
        report: ValidationReport | None = None,
        totals: InvoiceTotals | None = None,
    ) -> None:
        self.xml_bytes = xml_bytes
        self.pdf_bytes = pdf_bytes
        self.profile = profile
        self.report = report or ValidationReport()
        self.totals = totals

    @property
    def warnings(self) -> list[str]:
        return self.report.warnings

    def save(self, path: str) -> None:
        """Speichert das PDF (falls vorhanden), sonst das XML."""
        data = self.pdf_bytes if self.pdf_bytes else self.xml_bytes
        with open(path, "wb") as f:
            f.write(data)


class BaseGenerator(ABC):
    """Abstrakte Basisklasse der Generatoren.

    DE: Der reine XML-Generator (CII) und der Hybrid-Generator
        (PDF/A-3 mit eingebettetem XML) erben von dieser Klasse.
    EN: Both the XML-only and the hybrid generator inherit from this class.
    """

    def __init__(self, profile: DocumentProfile | str = DocumentProfile.XRECHNUNG) -> None:
        self.profile = str(profile).upper()

    @abstractmethod
    async def generate(self, invoice: Invoice, **kwargs: object) -> GenerationResult:
        """Erzeugt die Rechnung im Zielformat.

        Args:
            invoice: Die Rechnung.
            **kwargs: Generatorspezifische Optionen.

        Returns:
            GenerationResult mit den erzeugten Daten.
        """
        ...

    @abstractmethod
    def generate_xml(self, invoice: Invoice) -> bytes:
        """Erzeugt nur das XML der Rechnung."""
        ...
