from __future__ import annotations

import logging
import time
from typing import Callable, TypeVar

from .const import READ_TIMEOUT_S, RETRY_COOLDOWN_S
from .driver import CaptureResult, IrMagician
from .link import DeviceLink
from .retry import Result, with_retry
from .types import Waveform

logger = logging.getLogger(__name__)

T = TypeVar("T")

Opener = Callable[[str, float], DeviceLink]


class Session:
    """Besitzt Verbindung und Treiber für genau ein Gerät.

    Alle Operationen laufen über `with_retry`; nur hier wird neu verbunden.
    Die Verbindung wird erst beim ersten Befehl geöffnet.
    """

    def __init__(
        self,
        path: str,
        timeout: float = READ_TIMEOUT_S,
        opener: Opener = DeviceLink.open,
        cooldown: float = RETRY_COOLDOWN_S,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.path = path
        self.timeout = timeout
        self._opener = opener
        self._cooldown = cooldown
        self._sleep = sleep
        self._driver: IrMagician | None = None

    @property
    def driver(self) -> IrMagician:
        if self._driver is None:
            self._driver = IrMagician(self._opener(self.path, self.timeout))
        return self._driver

    def reconnect(self) -> None:
        logger.info("Verbinde neu mit %s", self.path)
        self.close()
        self._driver = IrMagician(self._opener(self.path, self.timeout))

    def close(self) -> None:
        if self._driver is not None:
            self._driver.link.close()
            self._driver = None

    def run(self, op: Callable[[IrMagician], T]) -> Result[T]:
        # Treiber bei jedem Versuch neu holen, nach reconnect() ist der alte tot.
        return with_retry(
            lambda: op(self.driver),
            self.reconnect,
            cooldown=self._cooldown,
            sleep=self._sleep,
        )

    def capture(self) -> CaptureResult:
        return self.run(lambda d: d.capture()).unwrap()

    def dump(self) -> Waveform:
        return self.run(lambda d: d.dump()).unwrap()

    def play(self) -> None:
        self.run(lambda d: d.play()).unwrap()

    def record(self, waveform: Waveform) -> None:
        self.run(lambda d: d.record(waveform)).unwrap()

    def reset(self, n: int = 0) -> None:
        self.run(lambda d: d.reset(n)).unwrap()

    def __enter__(self) -> Session:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
