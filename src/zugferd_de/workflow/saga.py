"""Kompensierende Transaktion über Datenbank und Objektspeicher.

DE: Ein ``Saga`` führt Schritte nacheinander aus und merkt sich jeden
    begonnenen Schritt samt Kompensation. Schlägt ein Schritt fehl, werden
    die Kompensationen in umgekehrter Reihenfolge ausgeführt, der
    fehlgeschlagene Schritt eingeschlossen (mit Ergebnis ``None``).
    Kompensationen müssen idempotent sein. Eine fehlschlagende
    Kompensation wird protokolliert, der Rollback läuft weiter.
EN: A saga runs steps in order and records each started step with its
    compensation. On failure compensations run in reverse order, the
    failing step included (with result ``None``). Compensations must be
    idempotent; a failing compensation is logged and rollback continues.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, NamedTuple

logger = logging.getLogger(__name__)

Action = Callable[[], Awaitable[Any]]
Compensation = Callable[[Any], Awaitable[None]]


class SagaStep(NamedTuple):
    """Begonnener Schritt mit Ergebnis und Kompensation."""

    name: str
    result: Any
    compensation: Compensation | None
    completed: bool


class Saga:
    """Geordnete Liste ausgeführter Schritte und ihrer Umkehrungen."""

    def __init__(self, name: str = "saga") -> None:
        self.name = name
        self.steps: list[SagaStep] = []
        self.compensated = False

    @property
    def completed_steps(self) -> list[str]:
        return [step.name for step in self.steps if step.completed]

    async def run(
        self,
        name: str,
        action: Action,
        compensation: Compensation | None = None,
    ) -> Any:
        """Führt einen Schritt aus und registriert seine Kompensation.

        DE: Schlägt die Aktion fehl, wird der Schritt trotzdem mit Ergebnis
            ``None`` vermerkt, damit seine Kompensation teilweise erfolgte
            Nebenwirkungen aufräumen kann. Die Ausnahme wird weitergereicht.
        EN: On failure the step is still recorded with result ``None`` so
            its compensation can clean up partial effects. The exception
            propagates.
        """
        if self.compensated:
            msg = f"{self.name}: bereits zurückgerollt, Schritt {name} abgelehnt"
            raise RuntimeError(msg)
        try:
            result = await action()
        except Exception:
            self.steps.append(SagaStep(name, None, compensation, completed=False))
            raise
        self.steps.append(SagaStep(name, result, compensation, completed=True))
        return result

    async def compensate(self) -> list[str]:
        """Rollt alle Schritte in umgekehrter Reihenfolge zurück.

        Returns:
            Namen der Schritte, deren Kompensation fehlgeschlagen ist.
        """
        failed: list[str] = []
        for step in reversed(self.steps):
            if step.compensation is None:
                continue
            try:
                await step.compensation(step.result)
            except Exception:
                logger.warning(
                    "%s: Kompensation von %s fehlgeschlagen",
                    self.name,
                    step.name,
                    exc_info=True,
                )
                failed.append(step.name)
        self.compensated = True
        return failed
