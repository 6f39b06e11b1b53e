"""Abbildung der Rechnung auf das EN16931/XRechnung-Datenmodell.

DE: Reine Transformation Rechnung → TradeDocument, unabhängig von der
    Darstellung. Steuergruppen und Summen stammen aus
    ``calculations.compute_totals``, also aus derselben Rechnung wie im PDF.

    Umgesetzte XRechnung-Regeln:
    - BR-DE-1: Zahlungsanweisung (SEPA-Überweisung, IBAN ohne Leerraum)
    - BR-DE-2: Kontakt des Verkäufers, sofern vorhanden
    - BR-DE-15: Käuferreferenz, sonst die Rechnungsnummer
    - BR-CO-26: Handelsregisternummer und USt-IdNr. werden übernommen,
      soweit vorhanden
EN: Pure transform from invoice to TradeDocument. VAT groups and totals
    come from ``calculations.compute_totals``, exactly like the PDF.
"""

import logging
from datetime import timedelta

from zugferd_de.calculations import compute_totals, effective_vat_rate, line_total, vat_category_for
from zugferd_de.conf import get_setting
from zugferd_de.models.enums import (
    DocumentProfile,
    InvoiceTypeCode,
    PaymentMeansCode,
    TaxRegistrationScheme,
)
from zugferd_de.models.invoice import Invoice
from zugferd_de.models.party import Address, Customer, Seller
from zugferd_de.models.trade import (
    ElectronicAddress,
    MonetarySummation,
    PaymentInstruction,
    TaxRegistration,
    TradeAddress,
    TradeContact,
    TradeDocument,
    TradeLine,
    TradeParty,
    VatBreakdown,
)
from zugferd_de.units import resolve_unit_code

logger = logging.getLogger(__name__)

# PEPPOL-EN16931-R001
BUSINESS_PROCESS = "urn:fdc:peppol.eu:2017:poacc:billing:01:1.0"

# BR-DE-21
SPECIFICATION_IDENTIFIERS = {
    DocumentProfile.XRECHNUNG: (
        "urn:cen.eu:en16931:2017#compliant#urn:xeinkauf.de:kosit:xrechnung_3.0"
    ),
    DocumentProfile.EN16931: "urn:cen.eu:en16931:2017",
}


def normalize_vat_id(vat_id: str, country_code: str) -> str:
    """Setzt das Länderkürzel vor die USt-IdNr., falls es fehlt."""
    if vat_id.startswith(country_code):
        return vat_id
    return f"{country_code}{vat_id}"


class XRechnungMapper:
    """Bildet eine Rechnung auf ein TradeDocument ab.

    Args:
        profile: "XRECHNUNG" oder "EN16931".

    Raises:
        ValueError: Wenn das Profil unbekannt ist.
    """

    def __init__(self, profile: DocumentProfile | str = DocumentProfile.XRECHNUNG) -> None:
        try:
            self.profile = DocumentProfile(str(profile).upper())
        except ValueError:
            msg = (
                f"Profil unbekannt: {profile}. "
                f"Verfügbare Profile: {', '.join(p.value for p in DocumentProfile)}"
            )
            raise ValueError(msg) from None

    def map(self, invoice: Invoice) -> TradeDocument:
        """Erzeugt das strukturierte Dokument der Rechnung."""
        totals = compute_totals(invoice)

        due_date = None
        if totals.gross_total > 0:
            due_date = invoice.invoice_date + timedelta(days=int(get_setting("PAYMENT_DUE_DAYS")))

        return TradeDocument(
            business_process=BUSINESS_PROCESS,
            specification_identifier=SPECIFICATION_IDENTIFIERS[self.profile],
            number=invoice.invoice_number,
            type_code=InvoiceTypeCode.INVOICE,
            issue_date=invoice.invoice_date,
            notes=[invoice.note] if invoice.note else [],
            buyer_reference=invoice.effective_buyer_reference,
            seller=self._map_seller(invoice.seller),
            buyer=self._map_buyer(invoice.customer),
            delivery_date=invoice.service_date,
            currency=invoice.currency,
            payment_instruction=self._map_payment(invoice),
            vat_breakdown=[
                VatBreakdown(
                    calculated_amount=group.tax_amount,
                    basis_amount=group.basis_amount,
                    category_code=group.category,
                    rate_applicable_percent=group.rate,
                )
                for group in totals.vat_groups
            ],
            due_date=due_date,
            monetary_summation=MonetarySummation(
                line_total_amount=totals.net_total,
                tax_basis_total_amount=totals.net_total,
                tax_total_amount=totals.tax_total,
                grand_total_amount=totals.gross_total,
                due_payable_amount=totals.gross_total,
            ),
            lines=self._map_lines(invoice),
        )

    # --- Parteien ---

    def _map_address(self, address: Address) -> TradeAddress:
        return TradeAddress(
            postcode=address.postal_code or None,
            line_one=address.street_line,
            city=address.city,
            country_code=address.country,
        )

    def _map_seller(self, seller: Seller) -> TradeParty:
        country = seller.address.country

        registrations = []
        if seller.vat_id:
            registrations.append(
                TaxRegistration(
                    identifier=normalize_vat_id(seller.vat_id, country),
                    scheme=TaxRegistrationScheme.VAT,
                )
            )
        if seller.tax_number:
            registrations.append(
                TaxRegistration(identifier=seller.tax_number, scheme=TaxRegistrationScheme.LOCAL)
            )
        if not (registrations or seller.register_number):
            logger.debug("Verkäufer %s ohne Register- oder Steuerkennung", seller.name)

        contact = None
        if seller.contact is not None and not seller.contact.is_empty:
            contact = TradeContact(
                name=seller.contact.name,
                phone=seller.contact.phone,
                email=seller.contact.email,
            )

        electronic_address = None
        if seller.contact is not None and seller.contact.email:
            electronic_address = ElectronicAddress(value=seller.contact.email)

        return TradeParty(
            name=seller.name,
            legal_registration=seller.register_number,
            contact=contact,
            address=self._map_address(seller.address),
            electronic_address=electronic_address,
            tax_registrations=registrations,
        )

    def _map_buyer(self, customer: Customer) -> TradeParty:
        email = customer.electronic_address
        return TradeParty(
            name=customer.name,
            address=self._map_address(customer.address),
            electronic_address=ElectronicAddress(value=email) if email else None,
        )

    # --- Zahlung ---

    def _map_payment(self, invoice: Invoice) -> PaymentInstruction:
        bank = invoice.bank_details
        if bank is None:
            return PaymentInstruction(type_code=PaymentMeansCode.SEPA_CREDIT_TRANSFER)
        return PaymentInstruction(
            type_code=PaymentMeansCode.SEPA_CREDIT_TRANSFER,
            payment_account_identifier=bank.compact_iban or None,
            bic=bank.bic or None,
        )

    # --- Positionen ---

    def _map_lines(self, invoice: Invoice) -> list[TradeLine]:
        lines = []
        for index, item in enumerate(invoice.items, start=1):
            rate = effective_vat_rate(item, invoice.default_vat_rate)
            total = line_total(item)
            lines.append(
                TradeLine(
                    identifier=f"LINE-{index}",
                    name=item.description,
                    net_price=total,
                    basis_quantity=item.quantity,
                    billed_quantity=item.quantity,
                    unit_code=resolve_unit_code(item.unit),
                    category_code=vat_category_for(rate),
                    rate_applicable_percent=rate,
                    line_total_amount=total,
                )
            )
        return lines
