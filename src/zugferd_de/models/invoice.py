"""Hauptmodelle der Rechnung.

DE: Unveränderliche Pydantic-Modelle für Rechnung und Rechnungspositionen.
    Die Feldregeln bilden das allgemeine Prüfprofil ab. Summen werden nie
    gespeichert, sondern immer aus den Positionen berechnet
    (``zugferd_de.calculations``).
EN: Immutable Pydantic models for the invoice and its line items. Field
    rules implement the general validation profile. Totals are never
    stored, always recomputed from the line items.
"""

import logging
import re
from datetime import date
from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict, Field, field_validator

from zugferd_de.models.party import Customer, Seller
from zugferd_de.models.payment import BankDetails

logger = logging.getLogger(__name__)

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DEFAULT_VAT_RATE = Decimal("19")


class LineItem(BaseModel):
    """Rechnungsposition.

    DE: Freitext, Menge, Einheit, Einzelpreis und optionaler Steuersatz.
        Fehlt der Satz oder ist er nicht lesbar (z. B. NaN), gilt der
        Standardsatz der Rechnung.
    EN: Free text, quantity, unit, unit price and optional VAT rate. A
        missing or unreadable rate falls back to the invoice default.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    description: str = Field(..., min_length=1, description="Beschreibung / Description")
    quantity: Decimal = Field(..., gt=0, description="Menge / Quantity")
    unit: str = Field(
        default="piece",
        min_length=1,
        description="Einheit (Katalogwert oder Freitext) / Unit",
    )
    unit_price: Decimal = Field(..., ge=0, description="Einzelpreis netto / Unit price")
    vat_rate: Decimal | None = Field(
        default=None,
        ge=0,
        le=100,
        description="Steuersatz in % (leer = Standardsatz) / VAT rate in %",
    )

    @field_validator("vat_rate", mode="before")
    @classmethod
    def _coerce_vat_rate(cls, value: object) -> object:
        """Nicht lesbare Steuersätze werden zu „kein Satz“."""
        if value is None or value == "":
            return None
        try:
            rate = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            logger.debug("Steuersatz %r nicht lesbar, Standardsatz gilt", value)
            return None
        if not rate.is_finite():
            logger.debug("Steuersatz %r nicht endlich, Standardsatz gilt", value)
            return None
        return rate

    @property
    def net_amount(self) -> Decimal:
        """Ungerundeter Nettobetrag (Menge × Einzelpreis)."""
        return self.quantity * self.unit_price


class Invoice(BaseModel):
    """Rechnung (Wurzelaggregat).

    DE: Wird einmal aus den Stammdaten aufgebaut und danach nur gelesen:
        einmal vom Renderer, einmal vom XML-Mapper.
    EN: Built once from upstream records, then only read by the renderer
        and the XML mapper.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    # --- Identifikation ---
    invoice_number: str = Field(..., min_length=1, description="Rechnungsnummer")
    invoice_date: date = Field(..., description="Rechnungsdatum / Issue date")
    service_date: date = Field(..., description="Leistungsdatum / Service date")
    currency: str = Field(
        default="EUR",
        min_length=3,
        max_length=3,
        description="Währung ISO 4217 / Currency code",
    )

    # --- Parteien ---
    seller: Seller = Field(..., description="Verkäufer / Seller")
    customer: Customer = Field(..., description="Kunde / Customer")

    # --- Positionen ---
    items: list[LineItem] = Field(
        ...,
        min_length=1,
        description="Rechnungspositionen / Line items",
    )
    default_vat_rate: Decimal = Field(
        default=DEFAULT_VAT_RATE,
        ge=0,
        le=100,
        description="Standardsteuersatz für Positionen ohne Satz / Default VAT rate",
    )

    # --- Texte ---
    note: str | None = Field(default=None, description="Bemerkung / Note")
    intro_text: str | None = Field(default=None, description="Einleitungstext / Intro")
    outro_text: str | None = Field(default=None, description="Schlusstext / Outro")

    # --- Sonstiges ---
    logo_url: str | None = Field(default=None, description="Logo-URL")
    bank_details: BankDetails | None = Field(
        default=None, description="Bankverbindung / Bank details"
    )
    buyer_reference: str | None = Field(
        default=None,
        description="Käuferreferenz BT-10 (leer = Rechnungsnummer) / Buyer reference",
    )

    @field_validator("invoice_date", "service_date", mode="before")
    @classmethod
    def _require_iso_date(cls, value: object) -> object:
        if isinstance(value, str) and not _ISO_DATE_RE.match(value.strip()):
            msg = f"Ungültiges Datumsformat (YYYY-MM-DD): {value!r}"
            raise ValueError(msg)
        if isinstance(value, (int, float)):
            msg = "Datum muss im Format YYYY-MM-DD angegeben werden"
            raise ValueError(msg)
        return value

    @field_validator("logo_url")
    @classmethod
    def _require_http_url(cls, value: str | None) -> str | None:
        if not value:
            return None
        if not value.startswith(("http://", "https://")):
            msg = f"Ungültige Logo-URL: {value!r}"
            raise ValueError(msg)
        return value

    @property
    def effective_buyer_reference(self) -> str:
        """Käuferreferenz (BR-DE-15), sonst die Rechnungsnummer."""
        return self.buyer_reference or self.invoice_number
