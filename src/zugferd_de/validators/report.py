"""Prüfbericht der Validierungsprofile."""

from pydantic import BaseModel, Field, computed_field


class ValidationReport(BaseModel):
    """Ergebnis einer Prüfung.

    DE: ``errors`` sind blockierend, ``warnings`` nur Hinweise. ``valid`` ist
        genau dann wahr, wenn keine Fehler vorliegen; Warnungen ändern daran
        nichts.
    EN: ``errors`` are blocking, ``warnings`` advisory. ``valid`` is true
        iff there are no errors.
    """

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def valid(self) -> bool:
        return not self.errors
