"""Tests der Anzeigeliste."""

from decimal import Decimal

import pytest

from zugferd_de.calculations import InvoiceTotals
from zugferd_de.rendering.layout import PAGE_HEIGHT, PAGE_WIDTH, PageLayout, Rule, TextRun
from zugferd_de.rendering.text import text_width


@pytest.fixture
def page() -> PageLayout:
    totals = InvoiceTotals(
        net_total=Decimal("0"), tax_total=Decimal("0"), gross_total=Decimal("0"), vat_groups=[]
    )
    return PageLayout(title="Rechnung 1", author="Muster GmbH", totals=totals)


class TestPageLayout:
    """Tests von PageLayout."""

    def test_a4(self, page: PageLayout) -> None:
        assert page.width == pytest.approx(595.28, abs=0.01)
        assert page.height == pytest.approx(841.89, abs=0.01)
        assert (PAGE_WIDTH, PAGE_HEIGHT) == (page.width, page.height)

    def test_text_is_sanitized(self, page: PageLayout) -> None:
        run = page.text("Zeile\neins", 10, 20)
        assert run == TextRun("Zeile eins", 10, 20)

    def test_text_max_width(self, page: PageLayout) -> None:
        run = page.text("Ein sehr langer Absender mit vielen Angaben", 0, 0, max_width=80)
        assert run.text.endswith("...")

    def test_text_right(self, page: PageLayout) -> None:
        run = page.text_right("559,30 €", 500, 100)
        assert run.x + text_width("559,30 €") == pytest.approx(500)

    def test_queries(self, page: PageLayout) -> None:
        page.text("rechts", 200, 50)
        page.text("links", 10, 50)
        page.text("unten", 10, 30)
        page.rule(10, 300, 40)
        assert page.rules == [Rule(10, 300, 40)]
        assert page.texts() == ["rechts", "links", "unten"]
        assert page.row_at(50) == ["links", "rechts"]
        assert page.find("unten").y == 30
        assert page.find("fehlt") is None
        assert page.images == []
