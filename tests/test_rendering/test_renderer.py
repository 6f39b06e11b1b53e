"""Tests der Layout-Engine.

DE: Geprüft wird die Anzeigeliste: welche Texte wo stehen, in welcher
    Reihenfolge und mit welchen Beträgen.
EN: Asserts on the display list: which texts appear where and in which
    order.
"""

from decimal import Decimal

import pytest

from zugferd_de.errors import RenderError
from zugferd_de.models import Address, Customer, Invoice, LineItem
from zugferd_de.models.enums import Language
from zugferd_de.rendering.layout import LIGHT_GRAY, PageLayout
from zugferd_de.rendering.logo import load_logo
from zugferd_de.rendering.renderer import (
    CONTENT_BOTTOM,
    FOOTER_LINE_HEIGHT,
    FOOTER_SIZE,
    FOOTER_TEXT_WIDTH,
    FOOTER_Y,
    InvoiceRenderer,
    LEFT,
    RIGHT,
    RIGHT_COLUMN_X,
)
from zugferd_de.rendering.text import FONT_BOLD, text_width


def _row(page: PageLayout, text: str) -> list[str]:
    run = page.find(text)
    assert run is not None, f"{text!r} fehlt in {page.texts()}"
    return page.row_at(run.y)


def _meta_row(page: PageLayout, label: str) -> list[str]:
    """Zeile der rechten Metadatenspalte ohne die Empfängeradresse."""
    run = page.find(label)
    assert run is not None, f"{label!r} fehlt in {page.texts()}"
    return [
        other.text
        for other in sorted(page.text_runs, key=lambda other: other.x)
        if abs(other.y - run.y) < 0.01 and other.x >= RIGHT_COLUMN_X
    ]


class TestTotalsBlock:
    """Tests des Summenblocks."""

    def test_single_rate_english(self, consulting_invoice: Invoice) -> None:
        page = InvoiceRenderer(Language.EN).render(consulting_invoice)
        assert _row(page, "Net total") == ["Net total", "€470.00"]
        assert _row(page, "VAT 19%") == ["VAT 19%", "€89.30"]
        assert _row(page, "Total amount") == ["Total amount", "€559.30"]
        assert page.find("Total amount").font == FONT_BOLD

    def test_single_rate_german(self, consulting_invoice: Invoice) -> None:
        page = InvoiceRenderer(Language.DE).render(consulting_invoice)
        assert _row(page, "Gesamtbetrag netto") == ["Gesamtbetrag netto", "470,00 €"]
        assert _row(page, "Umsatzsteuer 19%") == ["Umsatzsteuer 19%", "89,30 €"]
        assert _row(page, "Gesamtbetrag brutto") == ["Gesamtbetrag brutto", "559,30 €"]

    def test_multi_rate_sorted_ascending(self, multi_rate_invoice: Invoice) -> None:
        page = InvoiceRenderer(Language.EN).render(multi_rate_invoice)
        assert _row(page, "VAT 7%") == ["VAT 7%", "€3.50"]
        assert _row(page, "VAT 19%") == ["VAT 19%", "€19.00"]
        assert _row(page, "Total amount") == ["Total amount", "€172.50"]
        assert page.find("VAT 7%").y > page.find("VAT 19%").y > page.find("Total amount").y

    def test_totals_on_layout(self, multi_rate_invoice: Invoice) -> None:
        page = InvoiceRenderer(Language.DE).render(multi_rate_invoice)
        assert page.totals.gross_total == Decimal("172.50")

    def test_separator_above_gross(self, consulting_invoice: Invoice) -> None:
        page = InvoiceRenderer(Language.EN).render(consulting_invoice)
        gross_y = page.find("Total amount").y
        vat_y = page.find("VAT 19%").y
        assert any(vat_y > rule.y > gross_y and rule.x2 == RIGHT for rule in page.rules)


class TestItemsTable:
    """Tests der Positionstabelle."""

    def test_header_and_row(self, consulting_invoice: Invoice) -> None:
        page = InvoiceRenderer(Language.EN).render(consulting_invoice)
        assert _row(page, "Description") == ["Description", "Qty", "Unit", "Unit Price", "Total"]
        assert _row(page, "Consulting") == ["Consulting", "10.00", "Hour", "€47.00", "€470.00"]

    def test_german_units_and_numbers(self, consulting_invoice: Invoice) -> None:
        page = InvoiceRenderer(Language.DE).render(consulting_invoice)
        assert _row(page, "Consulting") == ["Consulting", "10,00", "Stunde", "47,00 €", "470,00 €"]

    def test_free_text_unit(self, consulting_invoice: Invoice) -> None:
        item = LineItem(description="Pauschale", quantity=1, unit="Pauschal", unit_price=100)
        invoice = consulting_invoice.model_copy(update={"items": [item]})
        page = InvoiceRenderer(Language.DE).render(invoice)
        assert "Pauschal" in _row(page, "Pauschale")

    def test_wrapped_description(self, consulting_invoice: Invoice) -> None:
        """Folgezeilen verschieben die nächste Position nach unten."""
        long_text = " ".join(["Jahresabschluss"] * 12)
        items = [
            LineItem(description=long_text, quantity=1, unit_price=100),
            LineItem(description="Nachtrag", quantity=1, unit_price=10),
        ]
        invoice = consulting_invoice.model_copy(update={"items": items})
        page = InvoiceRenderer(Language.DE).render(invoice)

        description_runs = [run for run in page.text_runs if run.text.startswith("Jahresabschluss")]
        assert len(description_runs) > 1
        first, last = description_runs[0], description_runs[-1]
        # Beträge stehen auf der ersten Zeile der Beschreibung
        assert "100,00 €" in page.row_at(first.y)
        assert page.row_at(last.y) == [last.text]
        assert page.find("Nachtrag").y == pytest.approx(last.y - 20)


class TestAddressAndMeta:
    """Tests der Adress- und Metadatenblöcke."""

    def test_customer_block(self, consulting_invoice: Invoice) -> None:
        page = InvoiceRenderer(Language.DE).render(consulting_invoice)
        name = page.find("Beispiel AG")
        assert name.font == FONT_BOLD
        assert name.x == LEFT
        assert page.find("Hauptstraße 5").y < name.y
        assert page.find("10115 Berlin") is not None
        # Inland: Ländername nur in der Fußzeile des Verkäufers
        assert all(run.y <= FOOTER_Y for run in page.text_runs if run.text == "Deutschland")

    def test_foreign_country_and_insurance_number(self, consulting_invoice: Invoice) -> None:
        customer = Customer(
            name="Wiener Kunde GmbH",
            address=Address(street="Ring", street_number="1", postal_code="1010", city="Wien", country="AT"),
            insurance_number="VN-4711",
        )
        invoice = consulting_invoice.model_copy(update={"customer": customer})
        page = InvoiceRenderer(Language.DE).render(invoice)
        assert page.find("Österreich") is not None
        assert page.find("Versicherungsnummer: VN-4711") is not None

    def test_meta_rows(self, consulting_invoice: Invoice) -> None:
        page = InvoiceRenderer(Language.DE).render(consulting_invoice)
        assert _meta_row(page, "RECHNUNGS-NR.") == ["RECHNUNGS-NR.", "2026-09-0001"]
        assert _meta_row(page, "LIEFERDATUM") == ["LIEFERDATUM", "10.09.2026"]
        assert _meta_row(page, "IHR ANSPRECHPARTNER") == ["IHR ANSPRECHPARTNER", "Erika Muster"]
        assert page.find("REFERENZ") is None

    def test_buyer_reference_row(self, consulting_invoice: Invoice) -> None:
        invoice = consulting_invoice.model_copy(update={"buyer_reference": "04011000-1234-56"})
        page = InvoiceRenderer(Language.EN).render(invoice)
        assert _meta_row(page, "REFERENCE") == ["REFERENCE", "04011000-1234-56"]
        assert _meta_row(page, "INVOICE DATE") == ["INVOICE DATE", "09/15/2026"]


class TestHeaderAndTitle:
    """Tests von Absenderzeile, Logo und Überschrift."""

    def test_sender_line(self, consulting_invoice: Invoice) -> None:
        page = InvoiceRenderer(Language.DE).render(consulting_invoice)
        sender = page.text_runs[0]
        assert sender.text.startswith("Muster Steuerberatung GmbH - ")
        assert sender.size == 8

    def test_title_with_date(self, consulting_invoice: Invoice) -> None:
        page = InvoiceRenderer(Language.DE).render(consulting_invoice)
        title = page.find("Rechnung Nr. 2026-09-0001")
        assert title.font == FONT_BOLD
        date_y = title.y + 2
        assert page.row_at(date_y) == ["15.09.2026"]
        date_run = next(run for run in page.text_runs if run.y == date_y)
        assert date_run.x + text_width("15.09.2026") == pytest.approx(RIGHT)

    def test_logo_is_scaled(self, consulting_invoice: Invoice, png_bytes: bytes) -> None:
        logo = load_logo(png_bytes, "image/png")
        page = InvoiceRenderer(Language.DE).render(consulting_invoice, logo=logo)
        (image,) = page.images
        assert (image.width, image.height) == (150, 50)
        assert image.x + image.width == pytest.approx(RIGHT)

    def test_small_logo_keeps_size(self, consulting_invoice: Invoice, jpeg_bytes: bytes) -> None:
        page = InvoiceRenderer(Language.DE).render(consulting_invoice, logo=load_logo(jpeg_bytes))
        (image,) = page.images
        assert image.width == pytest.approx(25)
        assert image.height == pytest.approx(50)

    def test_without_logo(self, consulting_invoice: Invoice) -> None:
        assert InvoiceRenderer(Language.DE).render(consulting_invoice).images == []


class TestBodyTexts:
    """Tests von Anrede, Einleitung und Schlusstext."""

    def test_default_greeting(self, consulting_invoice: Invoice) -> None:
        page = InvoiceRenderer(Language.EN).render(consulting_invoice)
        assert page.find("Dear Sir or Madam,") is not None

    def test_custom_greeting(self, consulting_invoice: Invoice) -> None:
        page = InvoiceRenderer(Language.DE, greeting="Liebe Frau Beispiel,").render(consulting_invoice)
        assert page.find("Liebe Frau Beispiel,") is not None
        assert page.find("Sehr geehrte Damen und Herren,") is None

    def test_outro_keeps_line_breaks(self, consulting_invoice: Invoice) -> None:
        invoice = consulting_invoice.model_copy(
            update={"outro_text": "Zahlbar ohne Abzug.\nVielen Dank für Ihren Auftrag."}
        )
        page = InvoiceRenderer(Language.DE).render(invoice)
        first = page.find("Zahlbar ohne Abzug.")
        second = page.find("Vielen Dank für Ihren Auftrag.")
        assert first.y > second.y
        assert first.y < page.find("Gesamtbetrag brutto").y

    def test_intro_before_table(self, consulting_invoice: Invoice) -> None:
        invoice = consulting_invoice.model_copy(update={"intro_text": "für unsere Leistungen berechnen wir:"})
        page = InvoiceRenderer(Language.DE).render(invoice)
        assert page.find("für unsere Leistungen berechnen wir:").y > page.find("Beschreibung").y


class TestFooter:
    """Tests der vierspaltigen Fußzeile."""

    def test_separator_and_page_number(self, consulting_invoice: Invoice) -> None:
        page = InvoiceRenderer(Language.DE).render(consulting_invoice)
        assert any(rule.gray == LIGHT_GRAY and rule.y > FOOTER_Y for rule in page.rules)
        number = page.find("1/1")
        assert number.x + text_width("1/1", size=8) == pytest.approx(RIGHT)

    def test_address_column(self, consulting_invoice: Invoice) -> None:
        page = InvoiceRenderer(Language.DE).render(consulting_invoice)
        name = page.find("Muster Steuerberatung GmbH")
        assert (name.x, name.y) == (LEFT, FOOTER_Y)
        assert page.find("Steuerberatungsgesellschaft").y == FOOTER_Y - FOOTER_LINE_HEIGHT

    @pytest.mark.parametrize(
        ("label", "value"),
        [
            ("TEL.", "+49 89 123456"),
            ("AMTSGERICHT", "Amtsgericht München"),
            ("IBAN", "DE89 3704 0044 0532 0130 00"),
            ("BIC", "COBADEFFXXX"),
        ],
    )
    def test_fit_or_wrap(self, consulting_invoice: Invoice, label: str, value: str) -> None:
        """Beschriftung und Wert einzeilig, wenn beides passt, sonst zweizeilig."""
        page = InvoiceRenderer(Language.DE).render(consulting_invoice)
        label_run = page.find(label)
        value_run = page.find(value)
        fits = (
            text_width(f"{label} ", size=FOOTER_SIZE) + text_width(value, size=FOOTER_SIZE)
            <= FOOTER_TEXT_WIDTH
        )
        if fits:
            assert value_run.y == label_run.y
            assert value_run.x > label_run.x
        else:
            assert value_run.y == label_run.y - FOOTER_LINE_HEIGHT
            assert value_run.x == label_run.x

    def test_no_bank_column_without_bank(self, consulting_invoice: Invoice) -> None:
        invoice = consulting_invoice.model_copy(update={"bank_details": None})
        page = InvoiceRenderer(Language.DE).render(invoice)
        assert page.find("IBAN") is None


class TestRenderErrors:
    """Nur fehlende Positionen oder Verkäufername brechen ab."""

    def test_no_items(self, consulting_invoice: Invoice) -> None:
        invoice = consulting_invoice.model_copy(update={"items": []})
        with pytest.raises(RenderError, match="keine Positionen"):
            InvoiceRenderer(Language.DE).render(invoice)

    def test_no_seller_name(self, consulting_invoice: Invoice) -> None:
        seller = consulting_invoice.seller.model_copy(update={"name": ""})
        invoice = consulting_invoice.model_copy(update={"seller": seller})
        with pytest.raises(RenderError, match="Verkäufernamen"):
            InvoiceRenderer(Language.DE).render(invoice)

    def test_minimal_invoice_renders(self, minimal_invoice: Invoice) -> None:
        page = InvoiceRenderer(Language.DE).render(minimal_invoice)
        assert _row(page, "Gesamtbetrag brutto") == ["Gesamtbetrag brutto", "95,20 €"]


class TestPageSpace:
    """Inhalt reicht nie in die Fußzeile; was nicht passt, bricht ab."""

    def test_too_many_items(self, consulting_invoice: Invoice) -> None:
        invoice = consulting_invoice.model_copy(update={"items": consulting_invoice.items * 30})
        with pytest.raises(RenderError, match="passt nicht auf eine Seite"):
            InvoiceRenderer(Language.DE).render(invoice)

    def test_long_outro(self, consulting_invoice: Invoice) -> None:
        outro = "\n".join(f"Hinweis {number}" for number in range(60))
        invoice = consulting_invoice.model_copy(update={"outro_text": outro})
        with pytest.raises(RenderError, match="passt nicht auf eine Seite"):
            InvoiceRenderer(Language.EN).render(invoice)

    def test_fullest_page_stays_above_footer(self, consulting_invoice: Invoice) -> None:
        """Die meisten noch passenden Positionen enden oberhalb der Fußzeilenlinie."""
        page = None
        count = 0
        while True:
            items = consulting_invoice.items * (count + 1)
            try:
                page = InvoiceRenderer(Language.DE).render(
                    consulting_invoice.model_copy(update={"items": items})
                )
            except RenderError:
                break
            count += 1

        assert count > 5
        assert len([run for run in page.text_runs if run.text == "Consulting"]) == count
        assert not [run for run in page.text_runs if FOOTER_Y < run.y < CONTENT_BOTTOM]
