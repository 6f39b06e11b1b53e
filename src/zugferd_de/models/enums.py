"""Aufzählungen für die deutsche E-Rechnung.

DE: Codes und Kategorien gemäß EN16931, XRechnung und UN/ECE Rec. 20.
EN: Codes and categories conforming to EN16931, XRechnung and UN/ECE Rec. 20.
"""

from enum import StrEnum


class Language(StrEnum):
    """Sprache der Rechnungsdarstellung.

    DE: Deutsch ist die Inlandssprache, Englisch die Alternativsprache.
    EN: German is the domestic language, English the alternate one.
    """

    DE = "de"
    """Deutsch / German"""

    EN = "en"
    """Englisch / English"""


class DocumentProfile(StrEnum):
    """Profil des strukturierten Rechnungsdokuments."""

    XRECHNUNG = "XRECHNUNG"
    """XRechnung 3.0 (CIUS von EN16931)"""

    EN16931 = "EN16931"
    """Factur-X / ZUGFeRD EN16931 (Comfort)"""


class InvoiceTypeCode(StrEnum):
    """Code des Rechnungstyps (UNTDID 1001)."""

    INVOICE = "380"
    """Handelsrechnung / Commercial invoice"""


class VATCategory(StrEnum):
    """Umsatzsteuerkategorie (UNTDID 5305).

    DE: Ein Satz von genau 0 gilt als Nullsatz, jeder andere als Normalsatz.
        Steuerbefreiungen werden in diesem System nicht unterschieden.
    EN: A rate of exactly 0 is zero rated, any other rate is standard rated.
    """

    STANDARD = "S"
    """Normalsatz / Standard rate"""

    ZERO_RATED = "Z"
    """Nullsatz / Zero rated"""


class PaymentMeansCode(StrEnum):
    """Code des Zahlungsmittels (UNTDID 4461)."""

    SEPA_CREDIT_TRANSFER = "58"
    """SEPA-Überweisung / SEPA credit transfer"""


class UnitOfMeasure(StrEnum):
    """Mengeneinheit (UN/ECE Rec. 20).

    DE: Die im Einheitenkatalog verwendeten Codes.
    EN: Codes used by the unit catalog.
    """

    HOUR = "HUR"
    """Stunde / Hour"""

    DAY = "DAY"
    """Tag / Day"""

    PIECE = "C62"
    """Stück / One (piece)"""

    KILOMETRE = "KMT"
    """Kilometer / Kilometre"""

    KILOGRAM = "KGM"
    """Kilogramm / Kilogram"""

    MONTH = "MON"
    """Monat / Month"""

    METRE = "MTR"
    """Meter / Metre"""

    LITRE = "LTR"
    """Liter / Litre"""

    GRAM = "GRM"
    """Gramm / Gram"""


class ElectronicAddressScheme(StrEnum):
    """Schema der elektronischen Adresse (EAS-Codeliste)."""

    EMAIL = "EM"
    """E-Mail-Adresse / Email address"""


class TaxRegistrationScheme(StrEnum):
    """Schema der Steuerregistrierung."""

    VAT = "VA"
    """Umsatzsteuer-Identifikationsnummer / VAT identifier"""

    LOCAL = "FC"
    """Steuernummer / Local tax number"""
