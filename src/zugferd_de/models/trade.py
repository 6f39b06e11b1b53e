"""Strukturiertes Handelsdokument nach dem EN16931-Datenmodell.

DE: Zwischenbaum zwischen Rechnung und CII-XML. Der Mapper
    (``zugferd_de.generators.mapper``) erzeugt ihn, der CII-Serializer
    schreibt ihn. Feldnamen folgen den Geschäftsbegriffen (BT/BG) der Norm.
EN: Intermediate tree between the invoice and CII XML, produced by the
    mapper and written by the CII serializer.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from zugferd_de.models.enums import (
    ElectronicAddressScheme,
    InvoiceTypeCode,
    PaymentMeansCode,
    TaxRegistrationScheme,
    UnitOfMeasure,
    VATCategory,
)


class _TradeModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class TradeAddress(_TradeModel):
    """Postanschrift (BG-5 / BG-8)."""

    postcode: str | None = None
    line_one: str
    city: str
    country_code: str


class TradeContact(_TradeModel):
    """Kontakt des Verkäufers (BG-6)."""

    name: str | None = None
    phone: str | None = None
    email: str | None = None


class ElectronicAddress(_TradeModel):
    """Elektronische Adresse (BT-34 / BT-49)."""

    value: str
    scheme: ElectronicAddressScheme = ElectronicAddressScheme.EMAIL


class TaxRegistration(_TradeModel):
    """Steuerregistrierung (BT-31 / BT-32)."""

    identifier: str
    scheme: TaxRegistrationScheme


class TradeParty(_TradeModel):
    """Verkäufer oder Käufer (BG-4 / BG-7)."""

    name: str
    legal_registration: str | None = Field(
        default=None, description="Handelsregisternummer (BT-30)"
    )
    contact: TradeContact | None = None
    address: TradeAddress
    electronic_address: ElectronicAddress | None = None
    tax_registrations: list[TaxRegistration] = Field(default_factory=list)


class VatBreakdown(_TradeModel):
    """Steueraufschlüsselung (BG-23)."""

    calculated_amount: Decimal
    basis_amount: Decimal
    category_code: VATCategory
    rate_applicable_percent: Decimal


class PaymentInstruction(_TradeModel):
    """Zahlungsanweisung (BG-16, BR-DE-1)."""

    type_code: PaymentMeansCode = PaymentMeansCode.SEPA_CREDIT_TRANSFER
    payment_account_identifier: str | None = Field(default=None, description="IBAN (BT-84)")
    bic: str | None = Field(default=None, description="BIC (BT-86)")


class MonetarySummation(_TradeModel):
    """Summen des Dokuments (BG-22)."""

    line_total_amount: Decimal
    tax_basis_total_amount: Decimal
    tax_total_amount: Decimal
    grand_total_amount: Decimal
    due_payable_amount: Decimal


class TradeLine(_TradeModel):
    """Rechnungsposition (BG-25)."""

    identifier: str
    name: str
    net_price: Decimal = Field(..., description="Nettopreis (BT-146)")
    basis_quantity: Decimal = Field(..., description="Basismenge (BT-149)")
    billed_quantity: Decimal = Field(..., description="Menge (BT-129)")
    unit_code: UnitOfMeasure
    category_code: VATCategory
    rate_applicable_percent: Decimal
    line_total_amount: Decimal


class TradeDocument(_TradeModel):
    """Handelsdokument (CrossIndustryInvoice).

    DE: Vollständige Sicht des XML-Dokuments: Kontext, Kopf, Parteien,
        Lieferung, Abrechnung und Positionen.
    EN: Complete view of the XML document.
    """

    business_process: str
    specification_identifier: str
    number: str
    type_code: InvoiceTypeCode = InvoiceTypeCode.INVOICE
    issue_date: date
    notes: list[str] = Field(default_factory=list)
    buyer_reference: str
    seller: TradeParty
    buyer: TradeParty
    delivery_date: date | None = None
    currency: str
    payment_instruction: PaymentInstruction
    vat_breakdown: list[VatBreakdown]
    due_date: date | None = None
    monetary_summation: MonetarySummation
    lines: list[TradeLine]
