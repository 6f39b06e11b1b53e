"""Layout-Engine für die Rechnungsseite.

DE: Ordnet eine Rechnung in einem Durchgang von oben nach unten auf einer
    A4-Seite an. Jeder Abschnitt erhält die aktuelle Cursorposition ``y``
    und liefert die neue zurück:

    1. Absenderzeile und Logo
    2. Empfängeradresse (links) und Metadaten (rechts)
    3. Überschrift mit Datum
    4. Anrede und Einleitungstext
    5. Positionstabelle
    6. Summenblock je Steuersatz
    7. Schlusstext
    8. Vierspaltige Fußzeile und Seitenzahl

    Fehlende optionale Angaben lassen das jeweilige Element weg. Nur eine
    Rechnung ohne Positionen oder ohne Verkäufernamen löst RenderError aus,
    ebenso Inhalt, der über die Fußzeilenlinie hinausreichen würde: die
    Rechnung ist einseitig und wird nie stillschweigend abgeschnitten.
EN: Lays out an invoice top to bottom on one A4 page in a single pass.
    Missing optional data omits the element; missing items or seller name
    raise RenderError, and so does content reaching into the footer.
"""

import logging
from decimal import Decimal

from zugferd_de.calculations import InvoiceTotals, compute_totals, line_total
from zugferd_de.errors import RenderError
from zugferd_de.i18n import (
    country_name,
    format_currency,
    format_date,
    format_quantity,
    get_translations,
)
from zugferd_de.models.enums import Language
from zugferd_de.models.invoice import Invoice
from zugferd_de.rendering.layout import (
    CONTENT_WIDTH,
    GRAY,
    LIGHT_GRAY,
    MARGIN,
    PAGE_HEIGHT,
    PAGE_WIDTH,
    PageLayout,
)
from zugferd_de.rendering.logo import Logo
from zugferd_de.rendering.text import FONT_BOLD, FONT_REGULAR, sanitize_text, text_width, wrap_text
from zugferd_de.units import unit_label

logger = logging.getLogger(__name__)

LEFT = MARGIN
RIGHT = PAGE_WIDTH - MARGIN
RIGHT_COLUMN_X = PAGE_WIDTH / 2 + 10

BODY_SIZE = 10
BODY_LINE_HEIGHT = 14

# Logo
LOGO_MAX_WIDTH = 150
LOGO_MAX_HEIGHT = 50

# Metadaten rechts
META_SIZE = 8
META_LINE_HEIGHT = 16

# Überschrift
HEADLINE_SIZE = 14
HEADLINE_DATE_SIZE = 10

# Positionstabelle
COL_QUANTITY = LEFT + CONTENT_WIDTH * 0.50
COL_UNIT = LEFT + CONTENT_WIDTH * 0.62
COL_UNIT_PRICE = LEFT + CONTENT_WIDTH * 0.74
QUANTITY_RIGHT = COL_QUANTITY + 40
UNIT_PRICE_RIGHT = COL_UNIT_PRICE + 55
DESCRIPTION_WIDTH = CONTENT_WIDTH * 0.45
TABLE_HEADER_SIZE = 9
ITEM_SPACING = 20

# Summenblock
TOTALS_LABEL_X = RIGHT - 180
TOTALS_LINE_HEIGHT = 16

# Fußzeile
FOOTER_Y = MARGIN + 60
FOOTER_SIZE = 8
FOOTER_LINE_HEIGHT = 11
FOOTER_COLUMN_WIDTH = CONTENT_WIDTH / 4
FOOTER_TEXT_WIDTH = FOOTER_COLUMN_WIDTH - 5

PAGE_NUMBER = "1/1"

# Unterste Grundlinie für Inhalt oberhalb der Fußzeilenlinie
CONTENT_BOTTOM = FOOTER_Y + 30


class InvoiceRenderer:
    """Erzeugt die Anzeigeliste einer Rechnung.

    DE: Zustandslos bis auf Sprache und Anrede; eine Instanz kann beliebig
        viele Rechnungen nacheinander oder parallel anordnen.
    EN: Stateless apart from language and greeting.

    Args:
        language: Sprache der Beschriftungen (explizit, kein Standard).
        greeting: Anrede; ohne Angabe die Standardanrede der Sprache.
    """

    def __init__(self, language: Language, greeting: str | None = None) -> None:
        self.language = Language(language)
        self.t = get_translations(self.language)
        self.greeting = greeting or self.t.default_greeting

    def render(self, invoice: Invoice, logo: Logo | None = None) -> PageLayout:
        """Ordnet die Rechnung an.

        Raises:
            RenderError: Ohne Positionen, ohne Verkäufernamen oder wenn der
                Inhalt nicht auf die Seite passt.
        """
        if not invoice.items:
            msg = f"Rechnung {invoice.invoice_number} hat keine Positionen"
            raise RenderError(msg)
        if not invoice.seller.name:
            msg = f"Rechnung {invoice.invoice_number} hat keinen Verkäufernamen"
            raise RenderError(msg)

        totals = compute_totals(invoice)
        page = PageLayout(
            title=self.t.document_title(invoice.invoice_number),
            author=invoice.seller.name,
            totals=totals,
        )

        y = PAGE_HEIGHT - MARGIN
        y = self._render_header(page, invoice, logo, y)
        y = self._render_address_block(page, invoice, y)
        y = self._render_title(page, invoice, y)
        y = self._render_body(page, invoice, y)
        y = self._render_items(page, invoice, y)
        y = self._render_totals(page, invoice, totals, y)
        self._render_outro(page, invoice, y)
        self._render_footer(page, invoice)
        page.text_right(PAGE_NUMBER, RIGHT, MARGIN, size=8, gray=GRAY)
        return page

    def _money(self, amount: Decimal, invoice: Invoice) -> str:
        return format_currency(amount, self.language, invoice.currency)

    # --- 1. Absender und Logo ---

    def _render_header(
        self, page: PageLayout, invoice: Invoice, logo: Logo | None, y: float
    ) -> float:
        address = invoice.seller.address
        sender = " - ".join(
            part
            for part in (invoice.seller.name, address.street_line, address.city_line)
            if part
        )
        page.text(sender, LEFT, y, size=8, gray=GRAY, max_width=RIGHT_COLUMN_X - LEFT)

        logo_height = 0.0
        if logo is None and invoice.logo_url:
            logger.debug("Rechnung %s ohne Logo angeordnet", invoice.invoice_number)
        if logo is not None:
            scale = min(LOGO_MAX_WIDTH / logo.width, LOGO_MAX_HEIGHT / logo.height, 1)
            width = logo.width * scale
            logo_height = logo.height * scale
            page.image(logo.reader(), RIGHT - width, y - logo_height + 10, width, logo_height)

        return y - (max(logo_height, 20) + 30)

    # --- 2. Adresse und Metadaten ---

    def _render_address_block(self, page: PageLayout, invoice: Invoice, y: float) -> float:
        customer = invoice.customer
        address = customer.address
        top = y

        page.text(customer.name, LEFT, y, font=FONT_BOLD)
        y -= BODY_LINE_HEIGHT
        page.text(address.street_line, LEFT, y)
        y -= BODY_LINE_HEIGHT
        page.text(address.city_line, LEFT, y)
        y -= BODY_LINE_HEIGHT
        if address.country and address.country != "DE":
            page.text(country_name(address.country, self.language), LEFT, y)
            y -= BODY_LINE_HEIGHT
        if customer.insurance_number:
            page.text(f"{self.t.insurance_number} {customer.insurance_number}", LEFT, y, size=9)
            y -= BODY_LINE_HEIGHT

        contact_name = invoice.seller.contact.name if invoice.seller.contact else None
        rows = [
            (self.t.meta_invoice_number, invoice.invoice_number),
            (self.t.meta_invoice_date, format_date(invoice.invoice_date, self.language)),
            (self.t.meta_reference, invoice.buyer_reference),
            (self.t.meta_service_date, format_date(invoice.service_date, self.language)),
            (self.t.meta_contact_person, contact_name),
        ]
        meta_y = top
        for label, value in rows:
            if not value:
                continue
            page.text(label, RIGHT_COLUMN_X, meta_y, size=META_SIZE, gray=GRAY)
            page.text_right(value, RIGHT, meta_y, size=META_SIZE)
            meta_y -= META_LINE_HEIGHT

        return min(y, meta_y) - 45

    # --- 3. Überschrift ---

    def _render_title(self, page: PageLayout, invoice: Invoice, y: float) -> float:
        page.text(
            self.t.title(invoice.invoice_number),
            LEFT,
            y,
            font=FONT_BOLD,
            size=HEADLINE_SIZE,
        )
        # Datum optisch mittig zur größeren Überschrift
        page.text_right(
            format_date(invoice.invoice_date, self.language),
            RIGHT,
            y + (HEADLINE_SIZE - HEADLINE_DATE_SIZE) / 2,
            size=HEADLINE_DATE_SIZE,
        )
        return y - 30

    # --- 4. Anrede und Einleitung ---

    def _render_body(self, page: PageLayout, invoice: Invoice, y: float) -> float:
        page.text(self.greeting, LEFT, y)
        y -= 20
        for line in wrap_text(invoice.intro_text or "", CONTENT_WIDTH, FONT_REGULAR, BODY_SIZE):
            page.text(line, LEFT, y)
            y -= BODY_LINE_HEIGHT
        return y - 20

    # --- 5. Positionen ---

    def _render_items(self, page: PageLayout, invoice: Invoice, y: float) -> float:
        header = {"font": FONT_BOLD, "size": TABLE_HEADER_SIZE}
        page.text(self.t.description, LEFT, y, **header)
        page.text_right(self.t.quantity, QUANTITY_RIGHT, y, **header)
        page.text(self.t.unit, COL_UNIT, y, **header)
        page.text_right(self.t.unit_price, UNIT_PRICE_RIGHT, y, **header)
        page.text_right(self.t.total, RIGHT, y, **header)

        y -= 5
        page.rule(LEFT, RIGHT, y)
        y -= 18

        for item in invoice.items:
            lines = wrap_text(item.description, DESCRIPTION_WIDTH, FONT_REGULAR, BODY_SIZE)
            self._require_space(invoice, y - max(len(lines) - 1, 0) * BODY_LINE_HEIGHT)
            if lines:
                page.text(lines[0], LEFT, y)
            page.text_right(format_quantity(item.quantity, self.language), QUANTITY_RIGHT, y)
            page.text(unit_label(item.unit, self.language), COL_UNIT, y)
            page.text_right(self._money(item.unit_price, invoice), UNIT_PRICE_RIGHT, y)
            page.text_right(self._money(line_total(item), invoice), RIGHT, y)
            for line in lines[1:]:
                y -= BODY_LINE_HEIGHT
                page.text(line, LEFT, y)
            y -= ITEM_SPACING

        return y

    # --- 6. Summen ---

    def _render_totals(
        self, page: PageLayout, invoice: Invoice, totals: InvoiceTotals, y: float
    ) -> float:
        y -= 10
        # Netto, je Steuersatz eine Zeile, Linie, Brutto
        self._require_space(invoice, y - TOTALS_LINE_HEIGHT * (1 + len(totals.vat_groups)) - 14)
        page.text(self.t.net_total, TOTALS_LABEL_X, y)
        page.text_right(self._money(totals.net_total, invoice), RIGHT, y)
        y -= TOTALS_LINE_HEIGHT

        for group in totals.vat_groups:
            page.text(self.t.vat_line(group.rate), TOTALS_LABEL_X, y)
            page.text_right(self._money(group.tax_amount, invoice), RIGHT, y)
            y -= TOTALS_LINE_HEIGHT

        y -= 2
        page.rule(TOTALS_LABEL_X, RIGHT, y)
        y -= 12

        page.text(self.t.gross_amount, TOTALS_LABEL_X, y, font=FONT_BOLD)
        page.text_right(self._money(totals.gross_total, invoice), RIGHT, y, font=FONT_BOLD)
        return y - 40

    # --- 7. Schlusstext ---

    def _render_outro(self, page: PageLayout, invoice: Invoice, y: float) -> float:
        if not invoice.outro_text:
            return y
        for paragraph in invoice.outro_text.split("\n"):
            for line in wrap_text(paragraph, CONTENT_WIDTH, FONT_REGULAR, BODY_SIZE):
                self._require_space(invoice, y)
                page.text(line, LEFT, y)
                y -= BODY_LINE_HEIGHT
        return y

    def _require_space(self, invoice: Invoice, lowest_y: float) -> None:
        """Bricht ab, wenn eine Grundlinie in die Fußzeile reichen würde."""
        if lowest_y < CONTENT_BOTTOM:
            msg = (
                f"Rechnung {invoice.invoice_number} passt nicht auf eine Seite: "
                f"Inhalt reicht bis y={lowest_y:.1f}, Fußzeile beginnt bei y={CONTENT_BOTTOM}"
            )
            raise RenderError(msg)

    # --- 8. Fußzeile ---

    def _render_footer(self, page: PageLayout, invoice: Invoice) -> None:
        seller = invoice.seller
        columns = [LEFT + FOOTER_COLUMN_WIDTH * index for index in range(4)]

        page.rule(LEFT, RIGHT, FOOTER_Y + 20, gray=LIGHT_GRAY)

        # Spalte 1: Anschrift ohne Beschriftungen
        y = FOOTER_Y
        page.text(seller.name, columns[0], y, size=FOOTER_SIZE)
        y -= FOOTER_LINE_HEIGHT
        for line in wrap_text(seller.sub_headline or "", FOOTER_TEXT_WIDTH, FONT_REGULAR, FOOTER_SIZE):
            page.text(line, columns[0], y, size=FOOTER_SIZE)
            y -= FOOTER_LINE_HEIGHT
        page.text(seller.address.street_line, columns[0], y, size=FOOTER_SIZE)
        y -= FOOTER_LINE_HEIGHT
        page.text(seller.address.city_line, columns[0], y, size=FOOTER_SIZE)
        if seller.address.country:
            y -= FOOTER_LINE_HEIGHT
            page.text(country_name(seller.address.country, self.language), columns[0], y, size=FOOTER_SIZE)

        # Spalte 2: Kontakt
        self._render_footer_column(
            page,
            columns[1],
            [
                (self.t.footer_phone, seller.phone),
                (self.t.footer_email, seller.footer_email),
            ],
        )

        # Spalte 3: Rechtliches
        self._render_footer_column(
            page,
            columns[2],
            [
                (self.t.footer_court, seller.court),
                (self.t.footer_register_number, seller.register_number),
                (self.t.footer_vat_id, seller.vat_id),
                (self.t.footer_tax_number, seller.tax_number),
                (self.t.footer_managing_director, seller.managing_director),
            ],
        )

        # Spalte 4: Bank
        bank = invoice.bank_details
        if bank is not None:
            self._render_footer_column(
                page,
                columns[3],
                [
                    (self.t.footer_bank, bank.bank_name),
                    (self.t.footer_iban, bank.iban),
                    (self.t.footer_bic, bank.bic),
                ],
            )

    def _render_footer_column(
        self, page: PageLayout, x: float, rows: list[tuple[str, str | None]]
    ) -> None:
        y = FOOTER_Y
        for label, value in rows:
            if value:
                y = self._render_footer_row(page, label, value, x, y)

    def _render_footer_row(
        self, page: PageLayout, label: str, value: str, x: float, y: float
    ) -> float:
        """Beschriftung und Wert in einer Zeile, wenn beides passt, sonst zweizeilig."""
        value = sanitize_text(value)
        label_width = text_width(f"{label} ", FONT_REGULAR, FOOTER_SIZE)
        value_width = text_width(value, FONT_REGULAR, FOOTER_SIZE)

        page.text(label, x, y, size=FOOTER_SIZE, gray=GRAY)
        if label_width + value_width <= FOOTER_TEXT_WIDTH:
            page.text(value, x + label_width, y, size=FOOTER_SIZE)
        else:
            y -= FOOTER_LINE_HEIGHT
            page.text(value, x, y, size=FOOTER_SIZE)
        return y - FOOTER_LINE_HEIGHT
