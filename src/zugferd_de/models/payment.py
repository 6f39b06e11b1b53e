"""Modell für die Bankverbindung (Zahlungsanweisung BG-16).

DE: IBAN, Bankname und optional BIC des Zahlungsempfängers. Das strenge
    Profil prüft zusätzlich das IBAN-Format (BR-DE-1 / BR-DE-19).
EN: Payee IBAN, bank name and optional BIC.
"""

from pydantic import BaseModel, ConfigDict, Field


class BankDetails(BaseModel):
    """Bankverbindung."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    iban: str = Field(..., min_length=1, description="IBAN")
    bank_name: str = Field(..., min_length=1, description="Bankname / Bank name")
    bic: str | None = Field(default=None, description="BIC/SWIFT")

    @property
    def compact_iban(self) -> str:
        """IBAN ohne Leerraum."""
        return "".join(self.iban.split())
