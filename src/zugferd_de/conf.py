"""Konfiguration über Umgebungsvariablen.

DE: Zugriff auf die Einstellungen von zugferd-de. Jede Einstellung kann über
    die Umgebungsvariable ``ZUGFERD_DE_<NAME>`` überschrieben werden,
    sonst gilt der Standardwert aus DEFAULTS.
EN: Settings access. Each setting can be overridden through the
    ``ZUGFERD_DE_<NAME>`` environment variable, otherwise DEFAULTS applies.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

ENV_PREFIX = "ZUGFERD_DE_"

DEFAULTS: dict[str, object] = {
    # Dokumenterzeugung
    "LOGO_TIMEOUT": 5.0,
    "LOGO_MAX_BYTES": 5 * 1024 * 1024,
    "PAYMENT_DUE_DAYS": 14,
    "DEFAULT_PROFILE": "XRECHNUNG",
    "PRODUCER": "zugferd-de",
    # Objektspeicher (S3 / Cloudflare R2)
    "S3_ENDPOINT": None,
    "S3_REGION": "auto",
    "S3_ACCESS_KEY": None,
    "S3_SECRET_KEY": None,
    "S3_BUCKET_NAME": None,
    "S3_PUBLIC_URL": None,
    "S3_PATH_PREFIX": "",
    # Verkäufer-Fallback, wenn keine gespeicherten Einstellungen existieren
    "SELLER_NAME": "Ihr Unternehmen",
    "SELLER_STREET": "",
    "SELLER_STREET_NUMBER": "",
    "SELLER_POSTAL_CODE": "",
    "SELLER_CITY": "",
    "SELLER_COUNTRY": "DE",
    "SELLER_PHONE": None,
    "SELLER_EMAIL": None,
    "SELLER_TAX_NUMBER": None,
    "SELLER_VAT_ID": None,
    "SELLER_CONTACT_NAME": None,
    "SELLER_CONTACT_PHONE": None,
    "SELLER_CONTACT_EMAIL": None,
    "SELLER_COURT": None,
    "SELLER_REGISTER_NUMBER": None,
    "SELLER_MANAGING_DIRECTOR": None,
    "SELLER_IBAN": None,
    "SELLER_BANK_NAME": None,
    "SELLER_BIC": None,
    "SELLER_LOGO_URL": None,
}


def get_setting(name: str) -> object:
    """Liefert den Wert einer Einstellung.

    DE: Sucht zuerst ``ZUGFERD_DE_<name>`` in der Umgebung, dann den
        Standardwert. Numerische Standardwerte bestimmen den Zieltyp.
    EN: Looks up ``ZUGFERD_DE_<name>`` in the environment, then the default.

    Raises:
        KeyError: Wenn die Einstellung unbekannt ist.
    """
    if name not in DEFAULTS:
        msg = f"Unbekannte Einstellung: {name}"
        raise KeyError(msg)

    default = DEFAULTS[name]
    raw = os.environ.get(f"{ENV_PREFIX}{name}")
    if raw is None or raw == "":
        return default

    if isinstance(default, bool):
        return raw.strip().lower() in {"1", "true", "yes", "on"}
    if isinstance(default, int):
        try:
            return int(raw)
        except ValueError:
            logger.warning("Ungültiger Wert für %s: %r, nutze %r", name, raw, default)
            return default
    if isinstance(default, float):
        try:
            return float(raw)
        except ValueError:
            logger.warning("Ungültiger Wert für %s: %r, nutze %r", name, raw, default)
            return default
    return raw
