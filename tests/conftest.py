"""Gemeinsame Fixtures: Rechnungen, Parteien und Testbilder."""

from datetime import date
from decimal import Decimal
from io import BytesIO

import pytest
from PIL import Image

from zugferd_de.models import (
    Address,
    BankDetails,
    Contact,
    Customer,
    Invoice,
    LineItem,
    Seller,
)


@pytest.fixture
def seller() -> Seller:
    """Verkäufer mit vollständigen Angaben für Fußzeile und XRechnung."""
    return Seller(
        name="Muster Steuerberatung GmbH",
        sub_headline="Steuerberatungsgesellschaft",
        address=Address(
            street="Leopoldstraße",
            street_number="12",
            postal_code="80802",
            city="München",
            country="DE",
        ),
        phone="+49 89 123456",
        email="kanzlei@muster-stb.de",
        tax_number="143/123/45678",
        vat_id="DE123456789",
        contact=Contact(name="Erika Muster", phone="+49 89 123457", email="erika@muster-stb.de"),
        court="Amtsgericht München",
        register_number="HRB 123456",
        managing_director="Erika Muster",
    )


@pytest.fixture
def customer() -> Customer:
    return Customer(
        name="Beispiel AG",
        address=Address(
            street="Hauptstraße",
            street_number="5",
            postal_code="10115",
            city="Berlin",
            country="DE",
        ),
        email="buchhaltung@beispiel.de",
    )


@pytest.fixture
def bank_details() -> BankDetails:
    return BankDetails(
        iban="DE89 3704 0044 0532 0130 00",
        bank_name="Commerzbank",
        bic="COBADEFFXXX",
    )


@pytest.fixture
def consulting_invoice(seller: Seller, customer: Customer, bank_details: BankDetails) -> Invoice:
    """10 Stunden Beratung à 47,00 € zu 19 %: 470,00 / 89,30 / 559,30."""
    return Invoice(
        invoice_number="2026-09-0001",
        invoice_date=date(2026, 9, 15),
        service_date=date(2026, 9, 10),
        currency="EUR",
        seller=seller,
        customer=customer,
        items=[
            LineItem(
                description="Consulting",
                quantity=Decimal("10"),
                unit="hour",
                unit_price=Decimal("47.00"),
                vat_rate=Decimal("19"),
            ),
        ],
        bank_details=bank_details,
    )


@pytest.fixture
def multi_rate_invoice(seller: Seller, customer: Customer, bank_details: BankDetails) -> Invoice:
    """Positionen zu 19 % (netto 100) und 7 % (netto 50)."""
    return Invoice(
        invoice_number="2026-09-0002",
        invoice_date=date(2026, 9, 16),
        service_date=date(2026, 9, 16),
        seller=seller,
        customer=customer,
        items=[
            LineItem(
                description="Beratung",
                quantity=Decimal("2"),
                unit="hour",
                unit_price=Decimal("50.00"),
                vat_rate=Decimal("19"),
            ),
            LineItem(
                description="Fachbuch",
                quantity=Decimal("1"),
                unit="piece",
                unit_price=Decimal("50.00"),
                vat_rate=Decimal("7"),
            ),
        ],
        bank_details=bank_details,
    )


@pytest.fixture
def minimal_invoice() -> Invoice:
    """Allgemein gültige Rechnung ohne PLZ, Bank und Kontakt."""
    return Invoice(
        invoice_number="2026-09-0003",
        invoice_date=date(2026, 9, 20),
        service_date=date(2026, 9, 20),
        seller=Seller(
            name="Kleinbetrieb Schmidt",
            address=Address(street="Dorfstraße", street_number="1", city="Hintertupfing"),
        ),
        customer=Customer(
            name="Max Mustermann",
            address=Address(street="Ringweg", street_number="3", city="Vordertupfing"),
        ),
        items=[
            LineItem(description="Reparatur", quantity=Decimal("1"), unit_price=Decimal("80.00")),
        ],
    )


@pytest.fixture
def invoice_data() -> dict:
    """Rohdaten einer Rechnung, wie sie aus JSON kommen."""
    return {
        "invoice_number": "2026-10-0001",
        "invoice_date": "2026-10-01",
        "service_date": "2026-09-30",
        "seller": {
            "name": "Muster Steuerberatung GmbH",
            "address": {
                "street": "Leopoldstraße",
                "street_number": "12",
                "postal_code": "80802",
                "city": "München",
            },
            "contact": {"name": "Erika Muster", "email": "erika@muster-stb.de"},
        },
        "customer": {
            "name": "Beispiel AG",
            "address": {
                "street": "Hauptstraße",
                "street_number": "5",
                "postal_code": "10115",
                "city": "Berlin",
            },
            "email": "buchhaltung@beispiel.de",
        },
        "items": [
            {"description": "Beratung", "quantity": "3", "unit": "hour", "unit_price": "90.00"},
        ],
        "bank_details": {"iban": "DE89370400440532013000", "bank_name": "Commerzbank"},
    }


def _image_bytes(fmt: str, size: tuple[int, int]) -> bytes:
    buf = BytesIO()
    Image.new("RGB", size, (200, 30, 30)).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    """PNG 300×100 Pixel."""
    return _image_bytes("PNG", (300, 100))


@pytest.fixture
def jpeg_bytes() -> bytes:
    """JPEG 40×80 Pixel."""
    return _image_bytes("JPEG", (40, 80))
