"""Prüfung von Rechnungen und erzeugtem XML.

DE: Einstiegspunkt für die Validierung.
    validate_invoice() prüft das Rechnungsmodell (allgemein oder XRechnung).
    validate_xsd() prüft das erzeugte CII-XML gegen das Schema.
EN: Main entry point for invoice validation.
"""

from zugferd_de.validators.profiles import validate_invoice
from zugferd_de.validators.report import ValidationReport
from zugferd_de.validators.xsd import validate_xsd

__all__ = ["ValidationReport", "validate_invoice", "validate_xsd"]
