"""Fortlaufende Rechnungsnummern im Format ``YYYY-MM-NNNN``."""

import re
from collections.abc import Iterable
from datetime import date

_SEQUENCE_RE = re.compile(r"^\d{4}-\d{2}-(\d+)$")
_YEAR_RE = re.compile(r"^\d{4}$")
_MONTH_RE = re.compile(r"^\d{2}$")


def _year_month(value: str | date) -> tuple[str, str]:
    if isinstance(value, date):
        return f"{value.year:04d}", f"{value.month:02d}"
    text = value.split("T", 1)[0].strip()
    parts = text.split("-")
    if len(parts) < 2 or not _YEAR_RE.match(parts[0]) or not _MONTH_RE.match(parts[1]):
        msg = f"Ungültiges Datumsformat: {value!r}. Erwartet YYYY-MM-DD"
        raise ValueError(msg)
    return parts[0], parts[1]


def next_invoice_number(invoice_date: str | date, existing_numbers: Iterable[str | None]) -> str:
    """Nächste freie Nummer im Monat des Rechnungsdatums.

    DE: Höchste vorhandene laufende Nummer des Monats plus eins, auf vier
        Stellen aufgefüllt. Nummern in anderem Format oder aus anderen
        Monaten werden ignoriert. Akzeptiert auch ISO-Zeitstempel.
    EN: Highest sequence of the month plus one, zero padded to four
        digits. Other formats and other months are ignored.

    Raises:
        ValueError: Wenn Jahr oder Monat nicht lesbar sind.
    """
    year, month = _year_month(invoice_date)
    prefix = f"{year}-{month}-"

    highest = 0
    for number in existing_numbers:
        if not number or not number.startswith(prefix):
            continue
        match = _SEQUENCE_RE.match(number)
        if match:
            highest = max(highest, int(match.group(1)))

    return f"{prefix}{highest + 1:04d}"


class InvoiceNumberSequence:
    """Nummernkreis über eine Quelle bereits vergebener Nummern.

    DE: ``source`` liefert die vorhandenen Rechnungsnummern, z. B. aus der
        Datenbank. Die Vergabe ist nicht gegen parallele Anlage gesichert;
        das übernimmt die Eindeutigkeit der Spalte im Datenspeicher.
    EN: ``source`` yields existing invoice numbers. Allocation is not
        safe against concurrent creation on its own.
    """

    def __init__(self, source: Iterable[str | None] | None = None) -> None:
        self._issued: list[str] = [n for n in (source or []) if n]

    def next(self, invoice_date: str | date) -> str:
        """Vergibt die nächste Nummer und merkt sie sich."""
        number = next_invoice_number(invoice_date, self._issued)
        self._issued.append(number)
        return number

    def peek(self, invoice_date: str | date) -> str:
        return next_invoice_number(invoice_date, self._issued)
