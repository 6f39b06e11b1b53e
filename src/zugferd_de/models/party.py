"""Modelle für Parteien (Verkäufer, Kunde), Adressen und Kontakte.

DE: Beteiligte einer Rechnung mit den Pflichtangaben des allgemeinen
    Prüfprofils. Die XRechnung-Pflichten (PLZ, Kontakt) prüft das strenge
    Profil in ``zugferd_de.validators``.
EN: Parties of an invoice with the general profile's required fields.
    XRechnung obligations are checked by the strict profile.
"""

from pydantic import BaseModel, ConfigDict, Field

from zugferd_de.compat import legacy_email_from_info_lines


class Address(BaseModel):
    """Postanschrift.

    DE: Die Postleitzahl ist im allgemeinen Profil optional und im strengen
        Profil Pflicht (BR-DE-4 / BR-DE-9).
    EN: Postal code is optional in the general profile, mandatory in the
        strict profile.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    street: str = Field(..., min_length=1, description="Straße / Street")
    street_number: str = Field(..., min_length=1, description="Hausnummer / Street number")
    postal_code: str = Field(default="", description="Postleitzahl / Postal code")
    city: str = Field(..., min_length=1, description="Ort / City")
    country: str = Field(
        default="DE",
        min_length=2,
        max_length=2,
        description="Ländercode ISO 3166-1 alpha-2 / Country code",
    )

    @property
    def street_line(self) -> str:
        """„Musterstraße 12“."""
        return f"{self.street} {self.street_number}".strip()

    @property
    def city_line(self) -> str:
        """„80331 München“."""
        return f"{self.postal_code} {self.city}".strip()


class Contact(BaseModel):
    """Ansprechpartner des Verkäufers (BG-6, BR-DE-2)."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str | None = Field(default=None, description="Name / Contact name")
    phone: str | None = Field(default=None, description="Telefon / Phone")
    email: str | None = Field(default=None, description="E-Mail / Email")

    @property
    def is_empty(self) -> bool:
        return not (self.name or self.phone or self.email)


class Seller(BaseModel):
    """Verkäufer (Rechnungssteller).

    DE: Enthält neben der Anschrift die Angaben für die vierspaltige
        Fußzeile: Kontakt, Registergericht, Handelsregisternummer,
        Geschäftsführung und Steuerkennungen.
    EN: Besides the address, carries the data for the four-column footer.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, description="Firmenname / Legal name")
    sub_headline: str | None = Field(
        default=None,
        description="Unterzeile, z. B. „Steuerberatungsgesellschaft“ / Sub-headline",
    )
    address: Address = Field(..., description="Anschrift / Address")
    phone: str | None = Field(default=None, description="Telefon / Phone")
    email: str | None = Field(default=None, description="E-Mail / Email")
    tax_number: str | None = Field(default=None, description="Steuernummer / Tax number")
    vat_id: str | None = Field(default=None, description="USt-IdNr. / VAT identifier")
    contact: Contact | None = Field(default=None, description="Ansprechpartner / Contact")
    court: str | None = Field(
        default=None, description="Registergericht, z. B. „Amtsgericht München“ / Court"
    )
    register_number: str | None = Field(
        default=None, description="Handelsregisternummer, z. B. „HRB 123456“"
    )
    managing_director: str | None = Field(
        default=None, description="Geschäftsführung / Managing director"
    )

    @property
    def footer_email(self) -> str | None:
        """E-Mail für die Fußzeile: Firmenadresse, sonst Kontaktadresse."""
        if self.email:
            return self.email
        return self.contact.email if self.contact else None


class Customer(BaseModel):
    """Kunde (Rechnungsempfänger).

    DE: ``email`` ist die elektronische Adresse des Käufers. Ältere
        Datensätze führen sie nur in ``additional_info``; siehe
        ``electronic_address``.
    EN: ``email`` is the buyer's electronic address. Legacy records only
        carry it inside ``additional_info``.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, description="Name / Customer name")
    address: Address = Field(..., description="Anschrift / Address")
    phone: str | None = Field(default=None, description="Telefon / Phone")
    email: str | None = Field(default=None, description="E-Mail / Email")
    insurance_number: str | None = Field(
        default=None, description="Versicherungs- bzw. Referenznummer / Insurance number"
    )
    additional_info: list[str] = Field(
        default_factory=list,
        description="Freitextzeilen / Free-text info lines",
    )

    @property
    def electronic_address(self) -> str | None:
        """Elektronische Adresse: typisiertes Feld, sonst Altbestand."""
        if self.email:
            return self.email
        return legacy_email_from_info_lines(self.additional_info)
