"""Prüfprofile für Rechnungen.

DE: Zwei Profile über demselben Rechnungsmodell:

    - allgemein: Feldregeln des Pydantic-Modells (Pflichtfelder, positive
      Mengen, Steuersatz 0 bis 100, Länder- und Währungscode, ISO-Datum,
      mindestens eine Position),
    - streng (XRechnung): zusätzlich BR-DE-1 (Zahlungsanweisung mit IBAN),
      BR-DE-4/BR-DE-9 (Postleitzahlen) als Fehler, BR-DE-2 (Kontakt) und
      die PEPPOL-Regeln für elektronische Adressen als Warnungen.
EN: Two profiles over the same invoice model. The strict profile adds the
    XRechnung BR-DE rules; missing contact and electronic addresses are
    warnings only.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from zugferd_de.models.invoice import Invoice
from zugferd_de.validators.report import ValidationReport

logger = logging.getLogger(__name__)

_IBAN_RE = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z0-9]+$")
_IBAN_MIN_LENGTH = 15
_IBAN_MAX_LENGTH = 34


def validate_invoice(
    data: Invoice | Mapping[str, Any],
    strict: bool = False,
) -> ValidationReport:
    """Prüft eine Rechnung mit dem allgemeinen oder dem strengen Profil.

    DE: Rohdaten werden zuerst in das Modell überführt; Feldfehler erscheinen
        als „pfad: meldung“. Erst eine strukturell gültige Rechnung wird den
        XRechnung-Regeln unterzogen.
    EN: Raw data is parsed into the model first; field errors are reported
        as "path: message". Only a structurally valid invoice is checked
        against the XRechnung rules.

    Args:
        data: Eine Rechnung oder deren Rohdaten.
        strict: True für das XRechnung-Profil.

    Returns:
        ValidationReport mit Fehlern und Warnungen.
    """
    if isinstance(data, Invoice):
        invoice = data
    else:
        try:
            invoice = Invoice.model_validate(data)
        except ValidationError as exc:
            return ValidationReport(errors=_format_errors(exc))

    if not strict:
        return ValidationReport()

    errors, warnings = _check_xrechnung(invoice)
    if errors:
        logger.debug(
            "Rechnung %s nicht XRechnung-konform: %d Fehler",
            invoice.invoice_number,
            len(errors),
        )
    return ValidationReport(errors=errors, warnings=warnings)


def _format_errors(exc: ValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return messages


def _check_iban(iban: str) -> list[str]:
    compact = "".join(iban.split())
    errors = []
    if len(compact) < _IBAN_MIN_LENGTH:
        errors.append("BR-DE-1: IBAN muss mindestens 15 Zeichen haben")
    elif len(compact) > _IBAN_MAX_LENGTH:
        errors.append("BR-DE-1: IBAN darf maximal 34 Zeichen haben")
    if not _IBAN_RE.match(compact):
        errors.append("BR-DE-1: Ungültiges IBAN-Format")
    return errors


def _check_xrechnung(invoice: Invoice) -> tuple[list[str], list[str]]:
    errors: list[str] = []
    warnings: list[str] = []

    # BR-DE-1: Zahlungsanweisung
    bank = invoice.bank_details
    if bank is None or not bank.iban:
        errors.append("BR-DE-1: Zahlungsanweisungen (IBAN) sind für XRechnung erforderlich")
    else:
        errors.extend(_check_iban(bank.iban))
        if not bank.bank_name:
            errors.append("BR-DE-1: Name der Bank ist für XRechnung erforderlich")

    # BR-DE-2: Ansprechpartner
    contact = invoice.seller.contact
    if contact is None or contact.is_empty:
        warnings.append(
            "BR-DE-2: Verkäufer-Kontakt (Name, Telefon oder E-Mail) empfohlen "
            "für vollständige XRechnung-Konformität"
        )

    if not invoice.seller.address.postal_code:
        errors.append("BR-DE-4: Verkäufer-PLZ ist für XRechnung erforderlich")

    if not invoice.customer.address.postal_code:
        errors.append("BR-DE-9: Käufer-PLZ ist für XRechnung erforderlich")

    if contact is None or not contact.email:
        warnings.append(
            "PEPPOL-EN16931-R020: Verkäufer-E-Mail-Adresse empfohlen "
            "für elektronischen Rechnungsaustausch"
        )

    if not invoice.customer.electronic_address:
        warnings.append(
            "PEPPOL-EN16931-R010: Käufer-E-Mail-Adresse empfohlen "
            "für elektronischen Rechnungsaustausch"
        )

    return errors, warnings
