from __future__ import annotations

import logging

import serial
from serial.tools import list_ports

from .const import BAUDRATE, READ_TIMEOUT_S
from .errors import LinkError, LinkTimeout, LinkUnavailable

logger = logging.getLogger(__name__)

LINE_TERMINATOR = b"\n"


def available_ports() -> list[str]:
    return [p.device for p in list_ports.comports()]


class DeviceLink:
    """Serielle Verbindung zum IrMagician mit Zeilen- und Byte-Primitiven.

    Nicht threadsicher: es darf immer nur ein Befehl gleichzeitig unterwegs sein.
    """

    def __init__(self, port: serial.Serial, path: str = "") -> None:
        self.port = port
        self.path = path or getattr(port, "port", "") or ""

    @classmethod
    def open(cls, path: str, timeout: float = READ_TIMEOUT_S) -> DeviceLink:
        """Öffnet ``path`` mit 9600-8-N-1 und verwirft das Startbanner."""

        try:
            port = serial.Serial(
                path,
                baudrate=BAUDRATE,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=timeout,
            )
        except (serial.SerialException, OSError) as e:
            raise LinkUnavailable(f"Kann {path} nicht öffnen: {e}") from e

        logger.info("Verbunden mit %s", path)
        link = cls(port, path)
        link.skip_banner()
        return link

    def skip_banner(self) -> None:
        """Eine Zeile (das Banner nach dem Einschalten) lesen, ohne zu warten."""

        before = self.port.timeout
        self.port.timeout = 0
        try:
            banner = self.port.readline()
        except serial.SerialException as e:
            raise LinkError(f"Lesen fehlgeschlagen: {e}") from e
        finally:
            self.port.timeout = before
        if banner:
            logger.debug("Banner verworfen: %r", banner)

    def write_line(self, text: str) -> None:
        logger.debug("> %s", text)
        try:
            self.port.write(text.encode("ascii") + LINE_TERMINATOR)
            self.port.flush()
        except serial.SerialException as e:
            raise LinkError(f"Schreiben fehlgeschlagen: {e}") from e

    def read_line(self) -> str:
        """Liest eine Zeile ohne Zeilenende; ``LinkTimeout`` wenn sie unvollständig bleibt."""

        try:
            raw = self.port.readline()
        except serial.SerialException as e:
            raise LinkError(f"Lesen fehlgeschlagen: {e}") from e

        text = raw.decode("ascii", errors="replace").rstrip("\r\n")
        if not raw.endswith(LINE_TERMINATOR):
            raise LinkTimeout(f"Timeout: keine vollständige Antwort (bisher {text!r})", text)
        logger.debug("< %s", text)
        return text

    def read_bytes(self, n: int) -> bytes:
        try:
            data = self.port.read(n)
        except serial.SerialException as e:
            raise LinkError(f"Lesen fehlgeschlagen: {e}") from e

        if len(data) < n:
            text = data.decode("ascii", errors="replace")
            raise LinkTimeout(f"Timeout: {n} Bytes erwartet, {len(data)} bekommen", text)
        return data

    def close(self) -> None:
        try:
            self.port.close()
        except serial.SerialException as e:
            logger.warning("Fehler beim Schließen von %s: %s", self.path, e)

    def __enter__(self) -> DeviceLink:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
