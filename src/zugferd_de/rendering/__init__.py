"""Sichtbare Rechnung: Layout-Engine, Logo-Abruf und PDF-Ausgabe."""

from zugferd_de.rendering.layout import PageLayout
from zugferd_de.rendering.pdf import draw_layout, render_invoice_pdf
from zugferd_de.rendering.renderer import InvoiceRenderer

__all__ = ["InvoiceRenderer", "PageLayout", "draw_layout", "render_invoice_pdf"]
