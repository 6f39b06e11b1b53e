"""Textmessung, Kürzung und Zeilenumbruch.

DE: Alle Breiten werden mit den Metriken der Standardschriften von
    reportlab gemessen, damit Umbrüche im Layout und im PDF identisch sind.
EN: Widths are measured with reportlab's standard font metrics so line
    breaks in the layout and in the PDF are identical.
"""

import re

from reportlab.pdfbase.pdfmetrics import stringWidth

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

_WHITESPACE_RE = re.compile(r"\s+")

ELLIPSIS = "..."


def sanitize_text(text: str | None) -> str:
    """Ersetzt Zeilenumbrüche und mehrfachen Leerraum durch ein Leerzeichen."""
    return _WHITESPACE_RE.sub(" ", text or "").strip()


def text_width(text: str, font: str = FONT_REGULAR, size: float = 10) -> float:
    """Breite eines Textes in Punkt."""
    return stringWidth(text, font, size)


def truncate_text(
    text: str,
    max_width: float,
    font: str = FONT_REGULAR,
    size: float = 10,
) -> str:
    """Kürzt einen einzeiligen Text mit „...“, bis er passt.

    DE: Pro Schritt fallen vier Zeichen weg und „...“ wird angehängt; bei
        drei Zeichen wird abgebrochen, auch wenn der Text noch zu breit ist.
    EN: Each step drops four characters and appends "..."; stops at three
        characters even if the text is still too wide.
    """
    while text_width(text, font, size) > max_width and len(text) > 3:
        text = text[:-4] + ELLIPSIS
    return text


def wrap_text(
    text: str,
    max_width: float,
    font: str = FONT_REGULAR,
    size: float = 10,
) -> list[str]:
    """Greedy-Zeilenumbruch an Leerzeichen.

    DE: Wörter werden gesammelt, solange die Zeile in ``max_width`` passt.
        Ein einzelnes Wort, das breiter ist als die Grenze, steht ungeteilt
        auf einer eigenen Zeile. Leerer Text ergibt keine Zeilen.
    EN: Words accumulate while the line fits. A single word wider than the
        limit is emitted whole. Empty text yields no lines.
    """
    lines: list[str] = []
    current = ""
    for word in sanitize_text(text).split(" "):
        if not word:
            continue
        candidate = f"{current} {word}" if current else word
        if current and text_width(candidate, font, size) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines
