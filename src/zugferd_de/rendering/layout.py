"""Anzeigeliste einer Rechnungsseite.

DE: Der Renderer beschreibt die Seite als Folge von Zeichenoperationen
    (Text, Linie, Bild) mit absoluten Koordinaten in Punkt, Ursprung unten
    links. Das PDF-Backend zeichnet diese Liste nur noch ab; Tests prüfen
    Positionen und Texte direkt an der Liste.
EN: The renderer describes the page as a list of drawing operations with
    absolute coordinates (points, origin bottom left). The PDF backend only
    replays the list; tests inspect it directly.
"""

from dataclasses import dataclass, field

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader

from zugferd_de.calculations import InvoiceTotals
from zugferd_de.rendering.text import FONT_REGULAR, sanitize_text, text_width, truncate_text

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 50
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN

# Graustufen, 0 = schwarz
BLACK = 0.0
GRAY = 0.5
LIGHT_GRAY = 0.7


@dataclass(frozen=True)
class TextRun:
    """Einzeiliger Text, linksbündig ab ``x`` auf der Grundlinie ``y``."""

    text: str
    x: float
    y: float
    font: str = FONT_REGULAR
    size: float = 10
    gray: float = BLACK


@dataclass(frozen=True)
class Rule:
    """Horizontale Linie."""

    x1: float
    x2: float
    y: float
    thickness: float = 0.5
    gray: float = BLACK


@dataclass(frozen=True)
class ImagePlacement:
    """Bild mit Zielrechteck (untere linke Ecke, Breite, Höhe)."""

    image: ImageReader
    x: float
    y: float
    width: float
    height: float


@dataclass
class PageLayout:
    """Eine Seite als Anzeigeliste plus Metadaten für das PDF."""

    title: str
    author: str
    totals: InvoiceTotals
    width: float = PAGE_WIDTH
    height: float = PAGE_HEIGHT
    ops: list[TextRun | Rule | ImagePlacement] = field(default_factory=list)

    def text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        font: str = FONT_REGULAR,
        size: float = 10,
        gray: float = BLACK,
        max_width: float | None = None,
    ) -> TextRun:
        """Fügt einen bereinigten, ggf. gekürzten Text hinzu."""
        value = sanitize_text(text)
        if max_width is not None:
            value = truncate_text(value, max_width, font, size)
        run = TextRun(value, x, y, font, size, gray)
        self.ops.append(run)
        return run

    def text_right(
        self,
        text: str,
        right_x: float,
        y: float,
        *,
        font: str = FONT_REGULAR,
        size: float = 10,
        gray: float = BLACK,
    ) -> TextRun:
        """Fügt einen rechtsbündig an ``right_x`` endenden Text hinzu."""
        width = text_width(sanitize_text(text), font, size)
        return self.text(text, right_x - width, y, font=font, size=size, gray=gray)

    def rule(
        self,
        x1: float,
        x2: float,
        y: float,
        *,
        thickness: float = 0.5,
        gray: float = BLACK,
    ) -> None:
        self.ops.append(Rule(x1, x2, y, thickness, gray))

    def image(self, image: ImageReader, x: float, y: float, width: float, height: float) -> None:
        self.ops.append(ImagePlacement(image, x, y, width, height))

    # --- Abfragen ---

    @property
    def text_runs(self) -> list[TextRun]:
        return [op for op in self.ops if isinstance(op, TextRun)]

    @property
    def rules(self) -> list[Rule]:
        return [op for op in self.ops if isinstance(op, Rule)]

    @property
    def images(self) -> list[ImagePlacement]:
        return [op for op in self.ops if isinstance(op, ImagePlacement)]

    def texts(self) -> list[str]:
        """Alle Texte in Zeichenreihenfolge."""
        return [run.text for run in self.text_runs]

    def find(self, text: str) -> TextRun | None:
        """Erster Text, der genau ``text`` lautet."""
        return next((run for run in self.text_runs if run.text == text), None)

    def row_at(self, y: float) -> list[str]:
        """Texte auf der Grundlinie ``y``, von links nach rechts."""
        runs = [run for run in self.text_runs if abs(run.y - y) < 0.01]
        return [run.text for run in sorted(runs, key=lambda run: run.x)]
