"""Tests der Rechnungsmodelle (allgemeines Prüfprofil auf Feldebene)."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from zugferd_de.models import Address, BankDetails, Contact, Invoice, LineItem, Seller


class TestAddress:
    """Tests von Address."""

    def test_lines(self) -> None:
        address = Address(street="Leopoldstraße", street_number="12", postal_code="80802", city="München")
        assert address.street_line == "Leopoldstraße 12"
        assert address.city_line == "80802 München"
        assert address.country == "DE"

    def test_city_line_without_postal_code(self) -> None:
        address = Address(street="Ringweg", street_number="3", city="Berlin")
        assert address.city_line == "Berlin"

    def test_country_code_length(self) -> None:
        with pytest.raises(ValidationError):
            Address(street="Ringweg", street_number="3", city="Berlin", country="DEU")

    def test_required_fields(self) -> None:
        with pytest.raises(ValidationError):
            Address(street="", street_number="3", city="Berlin")


class TestContactAndSeller:
    """Tests von Contact und Seller."""

    def test_empty_contact(self) -> None:
        assert Contact().is_empty
        assert not Contact(phone="+49 30 1234").is_empty

    def test_footer_email_prefers_company(self, seller: Seller) -> None:
        assert seller.footer_email == "kanzlei@muster-stb.de"

    def test_footer_email_falls_back_to_contact(self, seller: Seller) -> None:
        without_email = seller.model_copy(update={"email": None})
        assert without_email.footer_email == "erika@muster-stb.de"


class TestLineItem:
    """Tests von LineItem."""

    def test_net_amount(self) -> None:
        item = LineItem(description="Beratung", quantity=Decimal("2.5"), unit_price=Decimal("80"))
        assert item.net_amount == Decimal("200.0")

    def test_defaults(self) -> None:
        item = LineItem(description="Beratung", quantity=1, unit_price=1)
        assert item.unit == "piece"
        assert item.vat_rate is None

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_quantity_must_be_positive(self, quantity: int) -> None:
        with pytest.raises(ValidationError):
            LineItem(description="x", quantity=quantity, unit_price=1)

    def test_price_must_not_be_negative(self) -> None:
        with pytest.raises(ValidationError):
            LineItem(description="x", quantity=1, unit_price=-0.01)

    def test_rate_range(self) -> None:
        with pytest.raises(ValidationError):
            LineItem(description="x", quantity=1, unit_price=1, vat_rate=101)

    @pytest.mark.parametrize("raw", ["", "abc", None, float("nan"), "NaN"])
    def test_unreadable_rate_becomes_none(self, raw: object) -> None:
        item = LineItem(description="x", quantity=1, unit_price=1, vat_rate=raw)
        assert item.vat_rate is None

    def test_empty_description(self) -> None:
        with pytest.raises(ValidationError):
            LineItem(description="   ", quantity=1, unit_price=1)


class TestInvoice:
    """Tests von Invoice."""

    def test_parse_raw_data(self, invoice_data: dict) -> None:
        invoice = Invoice.model_validate(invoice_data)
        assert invoice.invoice_date == date(2026, 10, 1)
        assert invoice.currency == "EUR"
        assert invoice.default_vat_rate == Decimal("19")
        assert invoice.items[0].quantity == Decimal("3")

    def test_items_required(self, invoice_data: dict) -> None:
        invoice_data["items"] = []
        with pytest.raises(ValidationError):
            Invoice.model_validate(invoice_data)

    @pytest.mark.parametrize("value", ["01.10.2026", "2026/10/01", "2026-10-1"])
    def test_iso_dates_only(self, invoice_data: dict, value: str) -> None:
        invoice_data["invoice_date"] = value
        with pytest.raises(ValidationError, match="YYYY-MM-DD"):
            Invoice.model_validate(invoice_data)

    def test_currency_length(self, invoice_data: dict) -> None:
        invoice_data["currency"] = "EURO"
        with pytest.raises(ValidationError):
            Invoice.model_validate(invoice_data)

    def test_logo_url_scheme(self, invoice_data: dict) -> None:
        invoice_data["logo_url"] = "ftp://example.de/logo.png"
        with pytest.raises(ValidationError, match="Logo-URL"):
            Invoice.model_validate(invoice_data)

    def test_empty_logo_url_is_none(self, invoice_data: dict) -> None:
        invoice_data["logo_url"] = ""
        assert Invoice.model_validate(invoice_data).logo_url is None

    def test_buyer_reference_fallback(self, consulting_invoice: Invoice) -> None:
        assert consulting_invoice.effective_buyer_reference == "2026-09-0001"
        with_reference = consulting_invoice.model_copy(update={"buyer_reference": "04011000-12345-34"})
        assert with_reference.effective_buyer_reference == "04011000-12345-34"

    def test_is_immutable(self, consulting_invoice: Invoice) -> None:
        with pytest.raises(ValidationError):
            consulting_invoice.invoice_number = "anders"  # type: ignore[misc]


class TestBankDetails:
    """Tests von BankDetails."""

    def test_compact_iban(self, bank_details: BankDetails) -> None:
        assert bank_details.compact_iban == "DE89370400440532013000"
