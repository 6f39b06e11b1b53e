"""Tests der Übergangslösung für Käufer-E-Mails aus Freitextzeilen."""

import pytest

from zugferd_de.compat import legacy_email_from_info_lines
from zugferd_de.models import Address, Customer

ADDRESS = Address(street="Ringweg", street_number="3", postal_code="12345", city="Berlin")


class TestLegacyEmail:
    """Tests von legacy_email_from_info_lines()."""

    def test_first_line_with_at_sign(self) -> None:
        with pytest.warns(DeprecationWarning):
            email = legacy_email_from_info_lines(["Kundennr. 42", " kunde@example.de ", "x@y.z"])
        assert email == "kunde@example.de"

    def test_no_match(self) -> None:
        assert legacy_email_from_info_lines(["Kundennr. 42"]) is None
        assert legacy_email_from_info_lines(None) is None


class TestCustomerElectronicAddress:
    """Tests von Customer.electronic_address."""

    def test_typed_field_wins(self) -> None:
        customer = Customer(
            name="Beispiel AG",
            address=ADDRESS,
            email="rechnung@beispiel.de",
            additional_info=["alt@beispiel.de"],
        )
        assert customer.electronic_address == "rechnung@beispiel.de"

    def test_legacy_fallback(self) -> None:
        customer = Customer(name="Beispiel AG", address=ADDRESS, additional_info=["alt@beispiel.de"])
        with pytest.warns(DeprecationWarning):
            assert customer.electronic_address == "alt@beispiel.de"

    def test_none(self) -> None:
        customer = Customer(name="Beispiel AG", address=ADDRESS)
        assert customer.electronic_address is None
