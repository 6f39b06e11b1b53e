"""Hierarchie der Ausnahmen für Rechnungserzeugung und Ablage.

DE: Typisierte Ausnahmen für blockierende Prüffehler, fehlende Pflichtdaten
    beim Rendern, Fehler externer Ressourcen (Logo, Objektspeicher) und
    fehlgeschlagene Rechnungsanlage nach Rollback.
EN: Typed exceptions for blocking validation errors, missing required data
    at render time, external resource failures and failed invoice creation.
"""


class ZugferdError(Exception):
    """Basisklasse aller Ausnahmen von zugferd-de.

    DE: Elternklasse aller Fehler der Rechnungserzeugung.
    EN: Base class for all zugferd-de exceptions.
    """


class InvoiceValidationError(ZugferdError):
    """Rechnung verletzt blockierende Prüfregeln.

    DE: Wird vor dem Rendern ausgelöst; enthält die Liste der Fehlermeldungen
        des aktiven Prüfprofils.
    EN: Raised before rendering; carries the active profile's error messages.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors: list[str] = errors or []


class RenderError(ZugferdError):
    """Pflichtdaten fehlen beim Rendern (keine Positionen, kein Verkäufername)."""


class LogoFetchError(ZugferdError):
    """Logo konnte nicht geladen oder erkannt werden.

    DE: Wird intern vom Logo-Download ausgelöst und immer zu „kein Logo“
        aufgelöst.
    EN: Raised internally by the logo download, always recovered as "no logo".
    """


class StorageError(ZugferdError):
    """Fehler beim Zugriff auf den Objektspeicher."""


class StoragePermissionError(StorageError):
    """Zugriff auf den Objektspeicher verweigert (AccessDenied)."""


class StorageNotFoundError(StorageError):
    """Objekt im Objektspeicher nicht gefunden."""


class StorageConfigurationError(StorageError):
    """Objektspeicher ist unvollständig konfiguriert."""


class InvoiceCreationError(ZugferdError):
    """Rechnungsanlage fehlgeschlagen, bereits erfolgte Schritte zurückgerollt.

    DE: ``stage`` benennt die Ursache: "validation", "rendering", "storage"
        oder "database".
    EN: ``stage`` names the failing step.
    """

    def __init__(
        self,
        message: str,
        stage: str,
        errors: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.stage = stage
        self.errors: list[str] = errors or []
