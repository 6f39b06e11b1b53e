"""Generatoren für XRechnung-XML und ZUGFeRD-Hybridrechnungen."""

from zugferd_de.generators.base import BaseGenerator, GenerationResult
from zugferd_de.generators.cii import CIIGenerator
from zugferd_de.generators.facturx import FacturXAssembler
from zugferd_de.generators.mapper import XRechnungMapper
from zugferd_de.generators.pipeline import InvoiceDocumentGenerator

__all__ = [
    "BaseGenerator",
    "CIIGenerator",
    "FacturXAssembler",
    "GenerationResult",
    "InvoiceDocumentGenerator",
    "XRechnungMapper",
]
