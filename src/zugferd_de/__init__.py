"""Erzeugung hybrider ZUGFeRD/XRechnung-Rechnungen.

DE: PDF-Layout, CII-XML (EN16931/XRechnung), PDF/A-3-Einbettung und
    Prüfung der BR-DE-Geschäftsregeln.
EN: PDF layout, CII XML (EN16931/XRechnung), PDF/A-3 embedding and
    BR-DE business rule checks.
"""

__version__ = "0.1.0"
