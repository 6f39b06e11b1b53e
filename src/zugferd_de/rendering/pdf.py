"""PDF-Ausgabe der Anzeigeliste mit reportlab.

DE: Zeichnet eine PageLayout-Liste auf eine reportlab-Canvas und setzt die
    Dokumentmetadaten (Titel, Autor, Creator, Producer). Erstell- und
    Änderungszeitpunkt setzt reportlab selbst.
EN: Replays a PageLayout onto a reportlab canvas and sets the document
    metadata.
"""

import logging
from io import BytesIO

import httpx
from reportlab.pdfgen.canvas import Canvas

from zugferd_de.conf import get_setting
from zugferd_de.models.enums import Language
from zugferd_de.models.invoice import Invoice
from zugferd_de.rendering.layout import ImagePlacement, PageLayout, Rule, TextRun
from zugferd_de.rendering.logo import fetch_logo
from zugferd_de.rendering.renderer import InvoiceRenderer

logger = logging.getLogger(__name__)


def draw_layout(layout: PageLayout, *, creator: str | None = None) -> bytes:
    """Erzeugt die PDF-Bytes einer angeordneten Seite."""
    producer = str(get_setting("PRODUCER"))
    buf = BytesIO()
    c = Canvas(buf, pagesize=(layout.width, layout.height))
    c.setTitle(layout.title)
    c.setAuthor(layout.author)
    c.setCreator(creator or producer)
    c.setProducer(producer)

    for op in layout.ops:
        if isinstance(op, TextRun):
            c.setFont(op.font, op.size)
            c.setFillGray(op.gray)
            c.drawString(op.x, op.y, op.text)
        elif isinstance(op, Rule):
            c.setStrokeGray(op.gray)
            c.setLineWidth(op.thickness)
            c.line(op.x1, op.y, op.x2, op.y)
        elif isinstance(op, ImagePlacement):
            c.drawImage(op.image, op.x, op.y, width=op.width, height=op.height, mask="auto")

    c.showPage()
    c.save()
    return buf.getvalue()


async def render_invoice_pdf(
    invoice: Invoice,
    language: Language,
    *,
    greeting: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> tuple[bytes, PageLayout]:
    """Lädt das Logo, ordnet die Seite an und erzeugt das sichtbare PDF.

    DE: Der Logo-Abruf ist der einzige Wartepunkt; fehlt das Logo, wird die
        Seite ohne Bild angeordnet.
    EN: The logo fetch is the only suspension point; without a logo the page
        is laid out without an image.

    Returns:
        (PDF-Bytes, Anzeigeliste)
    """
    logo = await fetch_logo(invoice.logo_url, client=client)
    layout = InvoiceRenderer(language, greeting=greeting).render(invoice, logo=logo)
    pdf_bytes = draw_layout(layout)
    logger.debug("PDF für Rechnung %s gezeichnet (%d Bytes)", invoice.invoice_number, len(pdf_bytes))
    return pdf_bytes, layout
