"""Übersetzungen und länderspezifische Formatierung.

DE: Beschriftungen der Rechnung (Deutsch/Englisch), E-Mail-Vorlagen und
    reine Formatierungsfunktionen für Datum, Betrag, Menge und Ländernamen.
    Die Sprache ist immer ein expliziter Parameter. Keine dieser Funktionen
    löst eine Ausnahme aus: ungültige Eingaben werden bestmöglich dargestellt.
EN: Invoice labels (German/English), email templates and pure formatting
    helpers. Language is always explicit; none of these functions raise.
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict

from zugferd_de.models.enums import Language

_CENT = Decimal("0.01")

_CURRENCY_SYMBOLS: dict[str, str] = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
}

_COUNTRY_NAMES: dict[str, dict[Language, str]] = {
    "DE": {Language.DE: "Deutschland", Language.EN: "Germany"},
    "AT": {Language.DE: "Österreich", Language.EN: "Austria"},
    "CH": {Language.DE: "Schweiz", Language.EN: "Switzerland"},
    "FR": {Language.DE: "Frankreich", Language.EN: "France"},
    "IT": {Language.DE: "Italien", Language.EN: "Italy"},
    "NL": {Language.DE: "Niederlande", Language.EN: "Netherlands"},
    "BE": {Language.DE: "Belgien", Language.EN: "Belgium"},
    "PL": {Language.DE: "Polen", Language.EN: "Poland"},
    "CZ": {Language.DE: "Tschechien", Language.EN: "Czech Republic"},
    "GB": {Language.DE: "Großbritannien", Language.EN: "United Kingdom"},
    "US": {Language.DE: "USA", Language.EN: "United States"},
}


class Translations(BaseModel):
    """Beschriftungen einer Sprache.

    DE: Feste Menge an Texten für Dokument, Tabelle, Summenblock, Fußzeile
        und E-Mail. Parametrisierte Texte sind Methoden.
    EN: Fixed set of labels; parametrised texts are methods.
    """

    model_config = ConfigDict(frozen=True)

    language: Language

    # Dokument
    invoice: str
    document_name: str
    invoice_number: str
    invoice_date: str
    service_date: str
    due_date: str
    title_template: str
    default_greeting: str
    insurance_number: str

    # Metadatenblock (rechte Spalte)
    meta_invoice_number: str
    meta_invoice_date: str
    meta_reference: str
    meta_service_date: str
    meta_contact_person: str

    # Tabellenkopf
    description: str
    quantity: str
    unit: str
    unit_price: str
    price: str
    total: str

    # Summen
    subtotal: str
    net_amount: str
    net_total: str
    vat_label: str
    vat_line_template: str
    vat_template: str
    gross_amount: str
    total_amount: str

    # Bankverbindung / Kontakt
    bank_details: str
    bank_name: str
    iban: str
    bic: str
    account_holder: str
    phone: str
    email: str
    tax_number: str
    vat_id: str

    # Fußzeile
    footer_phone: str
    footer_email: str
    footer_court: str
    footer_register_number: str
    footer_vat_id: str
    footer_tax_number: str
    footer_managing_director: str
    footer_bank: str
    footer_iban: str
    footer_bic: str

    # E-Mail
    email_subject_template: str
    email_greeting: str
    email_body_template: str
    email_closing: str
    email_questions_available: str

    def title(self, invoice_number: str) -> str:
        """Überschrift „Rechnung Nr. X“ / "Invoice No. X"."""
        return self.title_template.format(number=invoice_number)

    def document_title(self, invoice_number: str) -> str:
        """Titel für die PDF-Metadaten, z. B. „Rechnung 2024-01-0001“."""
        return f"{self.document_name} {invoice_number}"

    def vat(self, rate: Decimal | int | float) -> str:
        """„MwSt. (19%)“ / "VAT (19%)"."""
        return self.vat_template.format(rate=format_rate(rate, self.language))

    def vat_line(self, rate: Decimal | int | float) -> str:
        """Beschriftung einer Steuerzeile im Summenblock."""
        return self.vat_line_template.format(rate=format_rate(rate, self.language))

    def email_subject(self, invoice_number: str) -> str:
        return self.email_subject_template.format(invoice_number=invoice_number)

    def email_body(self, invoice_number: str, total_amount: str) -> str:
        return self.email_body_template.format(
            invoice_number=invoice_number, total_amount=total_amount
        )


_GERMAN = Translations(
    language=Language.DE,
    invoice="RECHNUNG",
    document_name="Rechnung",
    invoice_number="Rechnungsnummer",
    invoice_date="Rechnungsdatum",
    service_date="Leistungsdatum",
    due_date="Fälligkeitsdatum",
    title_template="Rechnung Nr. {number}",
    default_greeting="Sehr geehrte Damen und Herren,",
    insurance_number="Versicherungsnummer:",
    meta_invoice_number="RECHNUNGS-NR.",
    meta_invoice_date="RECHNUNGSDATUM",
    meta_reference="REFERENZ",
    meta_service_date="LIEFERDATUM",
    meta_contact_person="IHR ANSPRECHPARTNER",
    description="Beschreibung",
    quantity="Menge",
    unit="Einheit",
    unit_price="Einzelpreis",
    price="Preis",
    total="Gesamtpreis",
    subtotal="Zwischensumme",
    net_amount="Nettobetrag",
    net_total="Gesamtbetrag netto",
    vat_label="MwSt.",
    vat_line_template="Umsatzsteuer {rate}%",
    vat_template="MwSt. ({rate}%)",
    gross_amount="Gesamtbetrag brutto",
    total_amount="Gesamtbetrag",
    bank_details="Bankverbindung",
    bank_name="Bank",
    iban="IBAN",
    bic="BIC / SWIFT",
    account_holder="Kontoinhaber",
    phone="Tel.",
    email="E-Mail",
    tax_number="Steuernummer",
    vat_id="USt-IdNr.",
    footer_phone="TEL.",
    footer_email="E-MAIL",
    footer_court="AMTSGERICHT",
    footer_register_number="HR-NR.",
    footer_vat_id="UST.-ID",
    footer_tax_number="STEUER-NR.",
    footer_managing_director="GESCHÄFTSF.",
    footer_bank="BANK",
    footer_iban="IBAN",
    footer_bic="BIC",
    email_subject_template="Rechnung {invoice_number}",
    email_greeting="Sehr geehrte Damen und Herren,",
    email_body_template="anbei erhalten Sie Rechnung {invoice_number} über {total_amount}.",
    email_closing="Mit freundlichen Grüßen",
    email_questions_available="Bei Fragen stehen wir Ihnen gerne zur Verfügung.",
)

_ENGLISH = Translations(
    language=Language.EN,
    invoice="INVOICE",
    document_name="Invoice",
    invoice_number="Invoice Number",
    invoice_date="Invoice Date",
    service_date="Service Date",
    due_date="Due Date",
    title_template="Invoice No. {number}",
    default_greeting="Dear Sir or Madam,",
    insurance_number="Insurance Number:",
    meta_invoice_number="INVOICE NO.",
    meta_invoice_date="INVOICE DATE",
    meta_reference="REFERENCE",
    meta_service_date="DELIVERY DATE",
    meta_contact_person="YOUR CONTACT",
    description="Description",
    quantity="Qty",
    unit="Unit",
    unit_price="Unit Price",
    price="Price",
    total="Total",
    subtotal="Subtotal",
    net_amount="Net Amount",
    net_total="Net total",
    vat_label="VAT",
    vat_line_template="VAT {rate}%",
    vat_template="VAT ({rate}%)",
    gross_amount="Total amount",
    total_amount="Total Amount",
    bank_details="Bank Details",
    bank_name="Bank",
    iban="IBAN",
    bic="BIC / SWIFT",
    account_holder="Account Holder",
    phone="Phone",
    email="Email",
    tax_number="Tax Number",
    vat_id="VAT ID",
    footer_phone="PHONE",
    footer_email="EMAIL",
    footer_court="COURT",
    footer_register_number="REG. NO.",
    footer_vat_id="VAT ID",
    footer_tax_number="TAX NO.",
    footer_managing_director="MANAGING DIR.",
    footer_bank="BANK",
    footer_iban="IBAN",
    footer_bic="BIC",
    email_subject_template="Invoice {invoice_number}",
    email_greeting="Dear Sir or Madam,",
    email_body_template="please find attached invoice {invoice_number} for {total_amount}.",
    email_closing="Best regards",
    email_questions_available="If you have any questions, please feel free to contact us.",
)

_TRANSLATIONS: dict[Language, Translations] = {
    Language.DE: _GERMAN,
    Language.EN: _ENGLISH,
}


def get_translations(language: Language) -> Translations:
    """Beschriftungstabelle einer Sprache."""
    return _TRANSLATIONS[Language(language)]


# --- Formatierung ---


def _to_decimal(value: object) -> Decimal:
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return Decimal("0")
    if not result.is_finite():
        return Decimal("0")
    return result


def _localize_number(text: str, language: Language) -> str:
    """Tauscht Dezimal- und Tausendertrennzeichen für Deutsch."""
    if language != Language.DE:
        return text
    return text.replace(",", "\x00").replace(".", ",").replace("\x00", ".")


def _format_two_decimals(value: object, language: Language) -> str:
    amount = _to_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)
    return _localize_number(f"{amount:,.2f}", language)


def format_date(value: str | date, language: Language) -> str:
    """Formatiert ein ISO-Datum: TT.MM.JJJJ (de) bzw. MM/TT/JJJJ (en).

    DE: Ungültige Zeichenketten werden am Bindestrich zerlegt und neu
        zusammengesetzt; ohne drei Teile wird der Rohtext geliefert.
    EN: Malformed strings are split on "-" and reassembled best-effort.
    """
    text = value.isoformat() if isinstance(value, date) else str(value or "")
    text = text.split("T", 1)[0].strip()
    parts = text.split("-")
    if len(parts) != 3:
        return text
    year, month, day = parts
    if language == Language.EN:
        return f"{month}/{day}/{year}"
    return f"{day}.{month}.{year}"


def format_currency(
    amount: Decimal | int | float,
    language: Language,
    currency: str = "EUR",
) -> str:
    """Formatiert einen Betrag: „1.234,56 €“ (de) bzw. "€1,234.56" (en)."""
    symbol = _CURRENCY_SYMBOLS.get((currency or "").upper(), currency)
    number = _format_two_decimals(amount, language)
    if language == Language.EN:
        return f"{symbol}{number}"
    return f"{number} {symbol}"


def format_quantity(amount: Decimal | int | float, language: Language) -> str:
    """Formatiert eine Menge mit zwei Nachkommastellen."""
    return _format_two_decimals(amount, language)


def format_rate(rate: Decimal | int | float, language: Language) -> str:
    """Steuersatz ohne überflüssige Nachkommastellen (19, 7,5 bzw. 7.5)."""
    value = _to_decimal(rate).normalize()
    if value == value.to_integral_value():
        return format(value.to_integral_value(), "f")
    return _localize_number(format(value, "f"), language)


def country_name(country_code: str, language: Language) -> str:
    """Ländername zum ISO-Code, unbekannte Codes unverändert."""
    names = _COUNTRY_NAMES.get(country_code)
    if not names:
        return country_code
    return names[Language(language)]


# --- E-Mail-Vorlagen ---


def default_email_subject(language: Language) -> str:
    """Betreffvorlage mit Platzhalter ``{invoice_number}``."""
    return get_translations(language).email_subject("{invoice_number}")


def default_email_body(language: Language) -> str:
    """Textvorlage mit Platzhaltern ``{invoice_number}`` und ``{total_amount}``."""
    t = get_translations(language)
    return (
        f"{t.email_greeting}\n\n"
        f"{t.email_body('{invoice_number}', '{total_amount}')}\n\n"
        f"{t.email_questions_available}\n\n"
        f"{t.email_closing}"
    )


def render_email_template(template: str, invoice_number: str, total_amount: str) -> str:
    """Ersetzt die Platzhalter einer (ggf. vom Nutzer geänderten) Vorlage.

    DE: Einfache Textersetzung statt ``str.format``, damit geschweifte
        Klammern in Nutzertexten keine Fehler auslösen.
    EN: Plain replacement so user-supplied braces never raise.
    """
    return template.replace("{invoice_number}", invoice_number).replace(
        "{total_amount}", total_amount
    )
