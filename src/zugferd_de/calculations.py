"""Steuergruppen, Rundung und Rechnungssummen.

DE: Einzige Stelle, an der Beträge berechnet werden. Renderer und
    XML-Mapper nutzen beide ``compute_totals``, damit Netto, Steuer und
    Brutto in PDF und XML centgenau übereinstimmen.

    Rundung (erst runden, dann summieren):
    1. jeder Positionsbetrag wird kaufmännisch auf Cent gerundet,
    2. die Bemessungsgrundlage eines Steuersatzes ist die Summe seiner
       gerundeten Positionsbeträge,
    3. die Steuer eines Satzes ist Grundlage × Satz / 100, auf Cent gerundet,
    4. Netto- und Steuersumme sind die Summen der Gruppenwerte,
       Brutto = Netto + Steuer.
EN: Single place where amounts are computed. Round-then-sum policy shared
    by the renderer and the XML mapper.
"""

import logging
from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict, Field

from zugferd_de.models.enums import VATCategory
from zugferd_de.models.invoice import Invoice, LineItem

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
_HUNDRED = Decimal("100")


def round_amount(amount: Decimal) -> Decimal:
    """Kaufmännische Rundung auf Cent (ROUND_HALF_UP)."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def effective_vat_rate(item: LineItem, default_rate: Decimal) -> Decimal:
    """Steuersatz der Position, sonst der Standardsatz der Rechnung."""
    if item.vat_rate is not None and item.vat_rate.is_finite():
        return item.vat_rate
    logger.debug("Position %r ohne Steuersatz, nutze %s%%", item.description, default_rate)
    return default_rate


def vat_category_for(rate: Decimal) -> VATCategory:
    """Nullsatz (Z) für genau 0 %, sonst Normalsatz (S)."""
    return VATCategory.ZERO_RATED if rate == 0 else VATCategory.STANDARD


def line_total(item: LineItem) -> Decimal:
    """Gerundeter Nettobetrag einer Position."""
    return round_amount(item.net_amount)


class VatGroup(BaseModel):
    """Steueraufschlüsselung für einen Steuersatz (BG-23)."""

    model_config = ConfigDict(frozen=True)

    rate: Decimal = Field(..., description="Steuersatz in % / VAT rate")
    category: VATCategory = Field(..., description="Steuerkategorie / VAT category")
    basis_amount: Decimal = Field(..., description="Bemessungsgrundlage / Basis amount")
    tax_amount: Decimal = Field(..., description="Steuerbetrag / Tax amount")


class InvoiceTotals(BaseModel):
    """Summen einer Rechnung."""

    model_config = ConfigDict(frozen=True)

    net_total: Decimal
    tax_total: Decimal
    gross_total: Decimal
    vat_groups: list[VatGroup]


def compute_totals(invoice: Invoice) -> InvoiceTotals:
    """Berechnet Steuergruppen (aufsteigend nach Satz) und Summen."""
    bases: dict[Decimal, Decimal] = defaultdict(Decimal)
    for item in invoice.items:
        rate = effective_vat_rate(item, invoice.default_vat_rate)
        # 19 und 19.00 landen in derselben Gruppe
        bases[rate.normalize()] += line_total(item)

    groups = [
        VatGroup(
            rate=rate,
            category=vat_category_for(rate),
            basis_amount=basis,
            tax_amount=round_amount(basis * rate / _HUNDRED),
        )
        for rate, basis in sorted(bases.items())
    ]

    net_total = sum((group.basis_amount for group in groups), Decimal("0.00"))
    tax_total = sum((group.tax_amount for group in groups), Decimal("0.00"))
    return InvoiceTotals(
        net_total=net_total,
        tax_total=tax_total,
        gross_total=net_total + tax_total,
        vat_groups=groups,
    )
