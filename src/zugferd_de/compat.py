"""Kompatibilität mit Altdatensätzen.

DE: Ältere Kundendatensätze speichern die E-Mail-Adresse des Käufers als
    Freitextzeile. Diese Suche ist veraltet und nur noch Übergang, bis alle
    Datensätze ``Customer.email`` befüllen.
EN: Legacy customer records keep the buyer email as a free-text line.
    Deprecated; only used until every record fills ``Customer.email``.
"""

import logging
import warnings
from collections.abc import Iterable

logger = logging.getLogger(__name__)


def legacy_email_from_info_lines(lines: Iterable[str] | None) -> str | None:
    """Erste Freitextzeile, die ein „@“ enthält, sonst None."""
    for line in lines or ():
        if "@" in line:
            warnings.warn(
                "Käufer-E-Mail aus Freitextzeilen ist veraltet, "
                "bitte Customer.email setzen",
                DeprecationWarning,
                stacklevel=3,
            )
            logger.debug("Käufer-E-Mail aus Freitextzeile übernommen")
            return line.strip()
    return None
