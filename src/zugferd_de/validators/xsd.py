"""XSD-Prüfung des erzeugten CII-XML.

DE: Prüft das XML gegen das Factur-X-EN16931-Schema aus dem Paket facturx.
    Anders als ``facturx.xml_check_xsd()`` werden ALLE Fehler geliefert,
    nicht nur der erste. XRechnung-CII nutzt dieselbe Struktur wie
    EN16931, daher teilen sich beide Profile ein Schema.
EN: Validates the XML against the Factur-X EN16931 schema bundled with
    facturx and returns every error. XRechnung CII shares the EN16931
    structure.
"""

import importlib.resources

from lxml import etree

from zugferd_de.models.enums import DocumentProfile

# Profil → Pfad des XSD im Paket facturx
_PROFILE_TO_XSD = {
    DocumentProfile.XRECHNUNG: "xsd/facturx-en16931/Factur-X_1.08_EN16931.xsd",
    DocumentProfile.EN16931: "xsd/facturx-en16931/Factur-X_1.08_EN16931.xsd",
}


def validate_xsd(
    xml_bytes: bytes,
    profile: DocumentProfile | str = DocumentProfile.EN16931,
) -> list[str]:
    """Prüft ein Rechnungs-XML gegen das passende XSD.

    Args:
        xml_bytes: Der XML-Inhalt.
        profile: "XRECHNUNG" oder "EN16931".

    Returns:
        Liste der Fehlermeldungen (leer, wenn gültig).

    Raises:
        ValueError: Wenn das Profil unbekannt ist.
    """
    try:
        resolved = DocumentProfile(str(profile).upper())
    except ValueError:
        msg = (
            f"Profil unbekannt: {profile!r}. "
            f"Verfügbare Profile: {', '.join(p.value for p in DocumentProfile)}"
        )
        raise ValueError(msg) from None

    try:
        xml_doc = etree.fromstring(xml_bytes)
    except etree.XMLSyntaxError as exc:
        return [f"XML-Syntaxfehler: {exc}"]

    schema = _load_xsd(_PROFILE_TO_XSD[resolved])
    if schema.validate(xml_doc):
        return []

    return [f"Zeile {error.line}: {error.message}" for error in schema.error_log]


def _load_xsd(xsd_relative_path: str) -> etree.XMLSchema:
    """Lädt ein XSD aus den Dateien des Pakets facturx.

    Jeder Aufruf liefert ein neues XMLSchema mit eigenem ``error_log``.
    """
    xsd_source = importlib.resources.files("facturx").joinpath(xsd_relative_path)
    with importlib.resources.as_file(xsd_source) as xsd_path:
        xsd_doc = etree.parse(str(xsd_path))
    return etree.XMLSchema(xsd_doc)
