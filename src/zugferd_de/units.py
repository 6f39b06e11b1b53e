"""Einheitenkatalog mit deutschen/englischen Bezeichnungen und Rec.-20-Codes.

DE: Abbildung zwischen internen Einheitenwerten, Anzeigenamen und den
    UN/ECE-Codes des strukturierten Rechnungsformats. Unbekannte Einheiten
    führen nie zu einem Fehler.
EN: Mapping between internal unit values, labels and UN/ECE codes.
    Unknown units never fail.
"""

from typing import NamedTuple

from zugferd_de.models.enums import Language, UnitOfMeasure


class Unit(NamedTuple):
    """Eintrag des Einheitenkatalogs."""

    value: str
    label_de: str
    label_en: str
    code: UnitOfMeasure


UNITS: tuple[Unit, ...] = (
    Unit("hour", "Stunde", "Hour", UnitOfMeasure.HOUR),
    Unit("day", "Tag", "Day", UnitOfMeasure.DAY),
    Unit("piece", "Stück", "Piece", UnitOfMeasure.PIECE),
    Unit("km", "Kilometer", "Kilometre", UnitOfMeasure.KILOMETRE),
    Unit("kg", "Kilogramm", "Kilogram", UnitOfMeasure.KILOGRAM),
    Unit("month", "Monat", "Month", UnitOfMeasure.MONTH),
    Unit("meter", "Meter", "Metre", UnitOfMeasure.METRE),
    Unit("liter", "Liter", "Litre", UnitOfMeasure.LITRE),
    Unit("gram", "Gramm", "Gram", UnitOfMeasure.GRAM),
)

DEFAULT_UNIT_CODE = UnitOfMeasure.PIECE

_BY_VALUE: dict[str, Unit] = {unit.value: unit for unit in UNITS}
_BY_LABEL: dict[str, Unit] = {unit.label_de.lower(): unit for unit in UNITS}

# Altbestand aus freien Eingaben
_LEGACY_ALIASES: dict[str, UnitOfMeasure] = {
    "hours": UnitOfMeasure.HOUR,
    "h": UnitOfMeasure.HOUR,
    "stunden": UnitOfMeasure.HOUR,
    "stunde": UnitOfMeasure.HOUR,
    "days": UnitOfMeasure.DAY,
    "tage": UnitOfMeasure.DAY,
    "pcs": UnitOfMeasure.PIECE,
    "pieces": UnitOfMeasure.PIECE,
    "stk": UnitOfMeasure.PIECE,
    "kilometer": UnitOfMeasure.KILOMETRE,
    "kilogram": UnitOfMeasure.KILOGRAM,
    "m": UnitOfMeasure.METRE,
    "g": UnitOfMeasure.GRAM,
}


def unit_label(value: str, language: Language) -> str:
    """Anzeigename einer Einheit, sonst der Rohwert."""
    unit = _BY_VALUE.get(value)
    if unit is None:
        return value
    return unit.label_en if language == Language.EN else unit.label_de


def unit_code(value: str) -> UnitOfMeasure:
    """Rec.-20-Code eines Katalogwerts, sonst Stück (C62)."""
    unit = _BY_VALUE.get(value)
    return unit.code if unit else DEFAULT_UNIT_CODE


def resolve_unit_code(free_text: str) -> UnitOfMeasure:
    """Ordnet eine frei eingegebene Einheit einem Rec.-20-Code zu.

    DE: Groß-/Kleinschreibung und Leerraum werden ignoriert. Geprüft werden
        nacheinander Katalogwert, deutsche Bezeichnung und Altbestand;
        ohne Treffer gilt Stück (C62).
    EN: Case and surrounding whitespace are ignored. Checks catalog value,
        German label and legacy aliases in that order; falls back to C62.
    """
    normalized = (free_text or "").strip().lower()

    by_value = _BY_VALUE.get(normalized)
    if by_value:
        return by_value.code

    by_label = _BY_LABEL.get(normalized)
    if by_label:
        return by_label.code

    return _LEGACY_ALIASES.get(normalized, DEFAULT_UNIT_CODE)
