"""Generator für reines CII-XML (UN/CEFACT CII D16B).

DE: Schreibt ein TradeDocument als XML im CII-Format, wie es ZUGFeRD und
    XRechnung (CII-Syntax) verwenden. Das Baumgerüst wird mit lxml
    aufgebaut und folgt strikt der vom XSD vorgegebenen Reihenfolge
    (xs:sequence).
EN: Writes a TradeDocument as CII D16B XML with lxml, following the XSD
    element order.
"""

import logging
from datetime import date
from decimal import Decimal

from lxml import etree

from zugferd_de.generators.base import BaseGenerator, GenerationResult
from zugferd_de.generators.mapper import XRechnungMapper
from zugferd_de.models.invoice import Invoice
from zugferd_de.models.trade import (
    MonetarySummation,
    PaymentInstruction,
    TradeAddress,
    TradeDocument,
    TradeLine,
    TradeParty,
    VatBreakdown,
)

logger = logging.getLogger(__name__)

# --- Namespaces CII D16B ---
RSM = "urn:un:unece:uncefact:data:standard:CrossIndustryInvoice:100"
RAM = "urn:un:unece:uncefact:data:standard:ReusableAggregateBusinessInformationEntity:100"
QDT = "urn:un:unece:uncefact:data:standard:QualifiedDataType:100"
UDT = "urn:un:unece:uncefact:data:standard:UnqualifiedDataType:100"

NSMAP = {
    "rsm": RSM,
    "ram": RAM,
    "qdt": QDT,
    "udt": UDT,
}


def _rsm(tag: str) -> str:
    """Qualifizierter Name im Namespace RSM."""
    return f"{{{RSM}}}{tag}"


def _ram(tag: str) -> str:
    """Qualifizierter Name im Namespace RAM."""
    return f"{{{RAM}}}{tag}"


def _udt(tag: str) -> str:
    """Qualifizierter Name im Namespace UDT."""
    return f"{{{UDT}}}{tag}"


def _fmt_amount(amount: Decimal) -> str:
    """Betrag mit 2 Nachkommastellen."""
    return f"{amount:.2f}"


def _fmt_quantity(quantity: Decimal) -> str:
    """Menge ohne Exponentenschreibweise und ohne überflüssige Nullen."""
    return format(quantity.normalize(), "f")


def _fmt_date(d: date) -> str:
    """Datum im CII-Format 102 (YYYYMMDD)."""
    return d.strftime("%Y%m%d")


def _date_element(parent: etree._Element, tag: str, d: date) -> None:
    wrapper = etree.SubElement(parent, _ram(tag))
    dt_str = etree.SubElement(wrapper, _udt("DateTimeString"))
    dt_str.set("format", "102")
    dt_str.text = _fmt_date(d)


class CIIGenerator(BaseGenerator):
    """Generator für Rechnungen im reinen CII-Format.

    DE: Bildet die Rechnung über den XRechnungMapper ab und serialisiert
        das Ergebnis. Das XML ist ohne PDF erhältlich.
    EN: Maps the invoice with XRechnungMapper and serializes the result.
    """

    def __init__(self, profile: str = "XRECHNUNG") -> None:
        super().__init__(profile=profile)
        self.mapper = XRechnungMapper(profile=self.profile)

    async def generate(self, invoice: Invoice, **kwargs: object) -> GenerationResult:
        """Erzeugt eine CII-Rechnung (nur XML)."""
        xml_bytes = self.generate_xml(invoice)
        return GenerationResult(xml_bytes=xml_bytes, profile=self.profile)

    def generate_xml(self, invoice: Invoice) -> bytes:
        """Erzeugt das CII-XML der Rechnung."""
        return self.serialize(self.mapper.map(invoice))

    def serialize(self, document: TradeDocument) -> bytes:
        """Schreibt ein TradeDocument als UTF-8-XML mit Deklaration."""
        root = etree.Element(_rsm("CrossIndustryInvoice"), nsmap=NSMAP)
        self._build_context(root, document)
        self._build_document(root, document)
        self._build_transaction(root, document)
        return etree.tostring(
            root,
            xml_declaration=True,
            encoding="UTF-8",
            pretty_print=True,
        )

    # --- Kopf ---

    def _build_context(self, root: etree._Element, document: TradeDocument) -> None:
        """ExchangedDocumentContext mit Geschäftsprozess und Spezifikation."""
        ctx = etree.SubElement(root, _rsm("ExchangedDocumentContext"))
        process = etree.SubElement(ctx, _ram("BusinessProcessSpecifiedDocumentContextParameter"))
        etree.SubElement(process, _ram("ID")).text = document.business_process
        guideline = etree.SubElement(ctx, _ram("GuidelineSpecifiedDocumentContextParameter"))
        etree.SubElement(guideline, _ram("ID")).text = document.specification_identifier

    def _build_document(self, root: etree._Element, document: TradeDocument) -> None:
        """ExchangedDocument (ID, TypeCode, Datum, Bemerkungen)."""
        doc = etree.SubElement(root, _rsm("ExchangedDocument"))
        etree.SubElement(doc, _ram("ID")).text = document.number
        etree.SubElement(doc, _ram("TypeCode")).text = str(document.type_code)
        _date_element(doc, "IssueDateTime", document.issue_date)
        for note in document.notes:
            note_el = etree.SubElement(doc, _ram("IncludedNote"))
            etree.SubElement(note_el, _ram("Content")).text = note

    def _build_transaction(self, root: etree._Element, document: TradeDocument) -> None:
        """SupplyChainTradeTransaction.

        Reihenfolge laut XSD: Positionen, dann Agreement, Delivery, Settlement.
        """
        transaction = etree.SubElement(root, _rsm("SupplyChainTradeTransaction"))
        for line in document.lines:
            self._build_line_item(transaction, line)
        self._build_trade_agreement(transaction, document)
        self._build_trade_delivery(transaction, document)
        self._build_trade_settlement(transaction, document)

    # --- Positionen ---

    def _build_line_item(self, parent: etree._Element, line: TradeLine) -> None:
        """IncludedSupplyChainTradeLineItem."""
        item = etree.SubElement(parent, _ram("IncludedSupplyChainTradeLineItem"))

        line_doc = etree.SubElement(item, _ram("AssociatedDocumentLineDocument"))
        etree.SubElement(line_doc, _ram("LineID")).text = line.identifier

        product = etree.SubElement(item, _ram("SpecifiedTradeProduct"))
        etree.SubElement(product, _ram("Name")).text = line.name

        agreement = etree.SubElement(item, _ram("SpecifiedLineTradeAgreement"))
        net_price = etree.SubElement(agreement, _ram("NetPriceProductTradePrice"))
        etree.SubElement(net_price, _ram("ChargeAmount")).text = _fmt_amount(line.net_price)
        basis = etree.SubElement(net_price, _ram("BasisQuantity"))
        basis.set("unitCode", str(line.unit_code))
        basis.text = _fmt_quantity(line.basis_quantity)

        delivery = etree.SubElement(item, _ram("SpecifiedLineTradeDelivery"))
        billed_qty = etree.SubElement(delivery, _ram("BilledQuantity"))
        billed_qty.set("unitCode", str(line.unit_code))
        billed_qty.text = _fmt_quantity(line.billed_quantity)

        settlement = etree.SubElement(item, _ram("SpecifiedLineTradeSettlement"))
        tax = etree.SubElement(settlement, _ram("ApplicableTradeTax"))
        etree.SubElement(tax, _ram("TypeCode")).text = "VAT"
        etree.SubElement(tax, _ram("CategoryCode")).text = str(line.category_code)
        etree.SubElement(tax, _ram("RateApplicablePercent")).text = _fmt_amount(
            line.rate_applicable_percent
        )
        summation = etree.SubElement(
            settlement, _ram("SpecifiedTradeSettlementLineMonetarySummation")
        )
        etree.SubElement(summation, _ram("LineTotalAmount")).text = _fmt_amount(
            line.line_total_amount
        )

    # --- Agreement (Verkäufer, Käufer, Referenz) ---

    def _build_trade_agreement(self, parent: etree._Element, document: TradeDocument) -> None:
        """ApplicableHeaderTradeAgreement."""
        agreement = etree.SubElement(parent, _ram("ApplicableHeaderTradeAgreement"))
        etree.SubElement(agreement, _ram("BuyerReference")).text = document.buyer_reference
        self._build_trade_party(agreement, "SellerTradeParty", document.seller)
        self._build_trade_party(agreement, "BuyerTradeParty", document.buyer)

    def _build_trade_party(self, parent: etree._Element, tag: str, party: TradeParty) -> None:
        """SellerTradeParty bzw. BuyerTradeParty."""
        party_el = etree.SubElement(parent, _ram(tag))
        etree.SubElement(party_el, _ram("Name")).text = party.name

        # Handelsregisternummer (BT-30)
        if party.legal_registration:
            legal_org = etree.SubElement(party_el, _ram("SpecifiedLegalOrganization"))
            etree.SubElement(legal_org, _ram("ID")).text = party.legal_registration

        # Kontakt (BR-DE-2)
        if party.contact is not None:
            contact = etree.SubElement(party_el, _ram("DefinedTradeContact"))
            if party.contact.name:
                etree.SubElement(contact, _ram("PersonName")).text = party.contact.name
            if party.contact.phone:
                phone = etree.SubElement(contact, _ram("TelephoneUniversalCommunication"))
                etree.SubElement(phone, _ram("CompleteNumber")).text = party.contact.phone
            if party.contact.email:
                email = etree.SubElement(contact, _ram("EmailURIUniversalCommunication"))
                etree.SubElement(email, _ram("URIID")).text = party.contact.email

        self._build_address(party_el, party.address)

        if party.electronic_address is not None:
            uri = etree.SubElement(party_el, _ram("URIUniversalCommunication"))
            uri_id = etree.SubElement(uri, _ram("URIID"))
            uri_id.set("schemeID", str(party.electronic_address.scheme))
            uri_id.text = party.electronic_address.value

        for registration in party.tax_registrations:
            tax_reg = etree.SubElement(party_el, _ram("SpecifiedTaxRegistration"))
            reg_id = etree.SubElement(tax_reg, _ram("ID"))
            reg_id.set("schemeID", str(registration.scheme))
            reg_id.text = registration.identifier

    def _build_address(self, parent: etree._Element, address: TradeAddress) -> None:
        """PostalTradeAddress (Reihenfolge laut XSD)."""
        addr = etree.SubElement(parent, _ram("PostalTradeAddress"))
        if address.postcode:
            etree.SubElement(addr, _ram("PostcodeCode")).text = address.postcode
        etree.SubElement(addr, _ram("LineOne")).text = address.line_one
        etree.SubElement(addr, _ram("CityName")).text = address.city
        etree.SubElement(addr, _ram("CountryID")).text = address.country_code

    # --- Delivery ---

    def _build_trade_delivery(self, parent: etree._Element, document: TradeDocument) -> None:
        """ApplicableHeaderTradeDelivery mit Leistungsdatum."""
        delivery = etree.SubElement(parent, _ram("ApplicableHeaderTradeDelivery"))
        if document.delivery_date is not None:
            event = etree.SubElement(delivery, _ram("ActualDeliverySupplyChainEvent"))
            _date_element(event, "OccurrenceDateTime", document.delivery_date)

    # --- Settlement (Zahlung, Steuern, Summen) ---

    def _build_trade_settlement(self, parent: etree._Element, document: TradeDocument) -> None:
        """ApplicableHeaderTradeSettlement (Reihenfolge laut XSD)."""
        settlement = etree.SubElement(parent, _ram("ApplicableHeaderTradeSettlement"))
        etree.SubElement(settlement, _ram("InvoiceCurrencyCode")).text = document.currency

        self._build_payment_means(settlement, document.payment_instruction)

        for breakdown in document.vat_breakdown:
            self._build_tax_breakdown(settlement, breakdown)

        if document.due_date is not None:
            terms = etree.SubElement(settlement, _ram("SpecifiedTradePaymentTerms"))
            _date_element(terms, "DueDateDateTime", document.due_date)

        self._build_monetary_summation(settlement, document.monetary_summation, document.currency)

    def _build_payment_means(self, parent: etree._Element, payment: PaymentInstruction) -> None:
        """SpecifiedTradeSettlementPaymentMeans (BR-DE-1)."""
        means = etree.SubElement(parent, _ram("SpecifiedTradeSettlementPaymentMeans"))
        etree.SubElement(means, _ram("TypeCode")).text = str(payment.type_code)

        if payment.payment_account_identifier:
            account = etree.SubElement(means, _ram("PayeePartyCreditorFinancialAccount"))
            etree.SubElement(account, _ram("IBANID")).text = payment.payment_account_identifier

        if payment.bic:
            institution = etree.SubElement(
                means, _ram("PayeeSpecifiedCreditorFinancialInstitution")
            )
            etree.SubElement(institution, _ram("BICID")).text = payment.bic

    def _build_tax_breakdown(self, parent: etree._Element, breakdown: VatBreakdown) -> None:
        """Ein ApplicableTradeTax-Block je Steuersatz."""
        tax = etree.SubElement(parent, _ram("ApplicableTradeTax"))
        etree.SubElement(tax, _ram("CalculatedAmount")).text = _fmt_amount(
            breakdown.calculated_amount
        )
        etree.SubElement(tax, _ram("TypeCode")).text = "VAT"
        etree.SubElement(tax, _ram("BasisAmount")).text = _fmt_amount(breakdown.basis_amount)
        etree.SubElement(tax, _ram("CategoryCode")).text = str(breakdown.category_code)
        etree.SubElement(tax, _ram("RateApplicablePercent")).text = _fmt_amount(
            breakdown.rate_applicable_percent
        )

    def _build_monetary_summation(
        self, parent: etree._Element, summation: MonetarySummation, currency: str
    ) -> None:
        """SpecifiedTradeSettlementHeaderMonetarySummation."""
        element = etree.SubElement(
            parent, _ram("SpecifiedTradeSettlementHeaderMonetarySummation")
        )
        etree.SubElement(element, _ram("LineTotalAmount")).text = _fmt_amount(
            summation.line_total_amount
        )
        etree.SubElement(element, _ram("TaxBasisTotalAmount")).text = _fmt_amount(
            summation.tax_basis_total_amount
        )
        tax_total = etree.SubElement(element, _ram("TaxTotalAmount"))
        tax_total.set("currencyID", currency)
        tax_total.text = _fmt_amount(summation.tax_total_amount)
        etree.SubElement(element, _ram("GrandTotalAmount")).text = _fmt_amount(
            summation.grand_total_amount
        )
        etree.SubElement(element, _ram("DuePayableAmount")).text = _fmt_amount(
            summation.due_payable_amount
        )
