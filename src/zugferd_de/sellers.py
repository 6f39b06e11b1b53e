"""Verkäuferdaten aus den gespeicherten Einstellungen.

DE: Die gespeicherten Verkäufereinstellungen haben Vorrang. Fehlen sie
    ganz, gelten die ``SELLER_*``-Einstellungen aus ``zugferd_de.conf``.
    Die Bankverbindung braucht IBAN und Bankname, sonst gilt der
    Fallback. Die Anrede fällt auf die Standardanrede der Sprache zurück.
EN: Stored seller settings take precedence; without them the ``SELLER_*``
    settings from ``zugferd_de.conf`` apply. Bank details need both IBAN
    and bank name. The greeting falls back to the language default.
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Protocol

from pydantic import BaseModel, ConfigDict, Field

from zugferd_de.conf import get_setting
from zugferd_de.i18n import get_translations
from zugferd_de.models.enums import Language
from zugferd_de.models.party import Address, Contact, Seller
from zugferd_de.models.payment import BankDetails

logger = logging.getLogger(__name__)

DEFAULT_SELLER_NAME = "Ihr Unternehmen"


class SellerSettings(BaseModel):
    """Gespeicherte Konfiguration des Verkäufers.

    DE: Alle Felder sind optional; leere Felder werden wie fehlende
        behandelt.
    EN: All fields are optional; empty values count as missing.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str | None = None
    sub_headline: str | None = None
    street: str | None = None
    street_number: str | None = None
    postal_code: str | None = None
    city: str | None = None
    country: str | None = None
    phone: str | None = None
    email: str | None = None
    tax_number: str | None = None
    vat_id: str | None = None
    contact_name: str | None = None
    contact_phone: str | None = None
    contact_email: str | None = None
    court: str | None = None
    register_number: str | None = None
    managing_director: str | None = None
    iban: str | None = None
    bank_name: str | None = None
    bic: str | None = None
    logo_url: str | None = None
    invoice_greeting: str | None = Field(
        default=None, description="Anrede auf der Rechnung / Invoice greeting"
    )


class SellerSettingsProvider(Protocol):
    """Liefert die gespeicherten Einstellungen oder ``None``."""

    async def get(self) -> SellerSettings | None: ...


class SellerContext(NamedTuple):
    """Alles, was die Rechnung vom Verkäufer braucht."""

    seller: Seller
    bank_details: BankDetails | None
    logo_url: str | None
    greeting: str


def _fallback_settings() -> SellerSettings:
    return SellerSettings(
        name=get_setting("SELLER_NAME"),
        street=get_setting("SELLER_STREET"),
        street_number=get_setting("SELLER_STREET_NUMBER"),
        postal_code=get_setting("SELLER_POSTAL_CODE"),
        city=get_setting("SELLER_CITY"),
        country=get_setting("SELLER_COUNTRY"),
        phone=get_setting("SELLER_PHONE"),
        email=get_setting("SELLER_EMAIL"),
        tax_number=get_setting("SELLER_TAX_NUMBER"),
        vat_id=get_setting("SELLER_VAT_ID"),
        contact_name=get_setting("SELLER_CONTACT_NAME"),
        contact_phone=get_setting("SELLER_CONTACT_PHONE"),
        contact_email=get_setting("SELLER_CONTACT_EMAIL"),
        court=get_setting("SELLER_COURT"),
        register_number=get_setting("SELLER_REGISTER_NUMBER"),
        managing_director=get_setting("SELLER_MANAGING_DIRECTOR"),
    )


def build_seller(settings: SellerSettings | None) -> Seller:
    """Baut den Verkäufer aus den Einstellungen oder dem Fallback.

    Raises:
        pydantic.ValidationError: Wenn die Anschrift unvollständig ist.
    """
    if settings is None:
        logger.debug("Keine Verkäufereinstellungen, nutze SELLER_*-Fallback")
        settings = _fallback_settings()

    contact = None
    if settings.contact_name or settings.contact_phone or settings.contact_email:
        contact = Contact(
            name=settings.contact_name or None,
            phone=settings.contact_phone or None,
            email=settings.contact_email or None,
        )

    return Seller(
        name=settings.name or DEFAULT_SELLER_NAME,
        sub_headline=settings.sub_headline or None,
        address=Address(
            street=settings.street or "",
            street_number=settings.street_number or "",
            postal_code=settings.postal_code or "",
            city=settings.city or "",
            country=settings.country or "DE",
        ),
        phone=settings.phone or None,
        email=settings.email or None,
        tax_number=settings.tax_number or None,
        vat_id=settings.vat_id or None,
        contact=contact,
        court=settings.court or None,
        register_number=settings.register_number or None,
        managing_director=settings.managing_director or None,
    )


def build_bank_details(settings: SellerSettings | None) -> BankDetails | None:
    """Bankverbindung aus den Einstellungen, sonst aus ``SELLER_IBAN`` & Co."""
    if settings is not None and settings.iban and settings.bank_name:
        return BankDetails(iban=settings.iban, bank_name=settings.bank_name, bic=settings.bic or None)

    iban = get_setting("SELLER_IBAN")
    bank_name = get_setting("SELLER_BANK_NAME")
    if not iban or not bank_name:
        return None
    return BankDetails(iban=str(iban), bank_name=str(bank_name), bic=get_setting("SELLER_BIC") or None)


def resolve_logo_url(settings: SellerSettings | None) -> str | None:
    if settings is not None and settings.logo_url:
        return settings.logo_url
    return get_setting("SELLER_LOGO_URL") or None


def resolve_greeting(settings: SellerSettings | None, language: Language) -> str:
    """Konfigurierte Anrede, sonst die Standardanrede der Sprache."""
    if settings is not None and settings.invoice_greeting:
        return settings.invoice_greeting
    return get_translations(language).default_greeting


async def load_seller_context(
    provider: SellerSettingsProvider,
    language: Language,
) -> SellerContext:
    """Liest die Einstellungen einmal und löst alle Verkäuferangaben auf."""
    settings = await provider.get()
    return SellerContext(
        seller=build_seller(settings),
        bank_details=build_bank_details(settings),
        logo_url=resolve_logo_url(settings),
        greeting=resolve_greeting(settings, language),
    )
