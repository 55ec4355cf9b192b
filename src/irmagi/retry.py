"""Einmalige Wiederholung einer Geräteoperation nach Neuverbindung."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from .const import RETRY_COOLDOWN_S
from .errors import LinkUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    value: T | None = None
    error: Exception | None = None
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def with_retry(
    operation: Callable[[], T],
    reconnect: Callable[[], None],
    cooldown: float = RETRY_COOLDOWN_S,
    sleep: Callable[[float], None] = time.sleep,
) -> Result[T]:
    """Führt ``operation`` aus; bei einem Fehler genau ein zweiter Versuch.

    Zwischen den Versuchen wird ``cooldown`` Sekunden gewartet und
    ``reconnect`` aufgerufen. Schlägt auch der zweite Versuch fehl, enthält
    das Ergebnis dessen Fehler. `LinkUnavailable` wird nie wiederholt.
    """

    try:
        return Result(value=operation())
    except LinkUnavailable as e:
        return Result(error=e)
    except Exception as e:
        logger.warning("Operation fehlgeschlagen (%s), neuer Versuch in %.1f s", e, cooldown)

    sleep(cooldown)
    try:
        reconnect()
    except Exception as e:
        logger.error("Neuverbindung fehlgeschlagen: %s", e)
        return Result(error=e)

    try:
        return Result(value=operation(), attempts=2)
    except Exception as e:
        return Result(error=e, attempts=2)
