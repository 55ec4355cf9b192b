"""Die fünf Geräteoperationen des IrMagician als Befehl/Antwort-Folgen."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .codec import (
    command,
    parse_byte,
    parse_decimal,
    parse_hex,
    record_blocks,
    record_header,
)
from .const import REG_SCALE, REG_SIZE
from .errors import LinkTimeout, ProtocolMismatch
from .link import DeviceLink
from .types import Waveform, block_sizes

logger = logging.getLogger(__name__)

CAPTURE_PATTERN = re.compile(r"\.{3} (\d+)")


@dataclass(frozen=True, slots=True)
class CaptureResult:
    ok: bool
    size: int = 0
    message: str = ""


class IrMagician:
    """Protokolltreiber über einer offenen `DeviceLink`.

    Der Treiber öffnet die Verbindung nie selbst neu; das erledigt
    `irmagi.session.Session` im Fehlerfall.
    """

    def __init__(self, link: DeviceLink) -> None:
        self.link = link

    def _query(self, line: str) -> str:
        self.link.write_line(line)
        return self.link.read_line()

    def reset(self, n: int = 0) -> None:
        response = self._query(command("r", n))
        if response.strip() != "OK":
            raise ProtocolMismatch(f"Reset nicht bestätigt: {response!r}", response)

    def capture(self) -> CaptureResult:
        """Startet die Aufnahme; jetzt die Fernbedienung auf das Gerät richten.

        Eine fehlende oder unerwartete Antwort ist kein Fehler im Sinne einer
        Exception, sondern ein `CaptureResult` mit ``ok=False`` und dem rohen
        Antworttext.
        """

        self.link.write_line("c")
        try:
            response = self.link.read_line()
        except LinkTimeout as e:
            logger.debug("Keine Antwort auf Capture: %s", e)
            return CaptureResult(ok=False, message=e.partial)

        m = CAPTURE_PATTERN.search(response)
        if m is None:
            return CaptureResult(ok=False, message=response)
        return CaptureResult(ok=True, size=int(m.group(1)))

    def play(self) -> None:
        self._query("p")

    def dump(self) -> Waveform:
        """Liest Skalierung und Pufferinhalt Byte für Byte aus dem Gerät."""

        scale = parse_decimal(self._query(command("i", REG_SCALE)))
        size = parse_hex(self._query(command("i", REG_SIZE)))
        logger.debug("Dump: scale=%d size=%d", scale, size)

        data: list[list[int]] = []
        for b, block_size in enumerate(block_sizes(size)):
            self.link.write_line(command("b", b))
            block: list[int] = []
            for offset in range(block_size):
                self.link.write_line(command("d", offset))
                block.append(parse_byte(self.link.read_bytes(2)))
                self.link.read_bytes(1)  # Trennzeichen
            data.append(block)

        return Waveform(scale=scale, data=data)

    def record(self, waveform: Waveform) -> None:
        """Schreibt ``waveform`` in den Gerätepuffer (danach kann `play` senden)."""

        header = record_header(waveform)
        for line in header:
            self.link.write_line(line)
        # Das Gerät bestätigt nur die Größe/Skalierung, nicht die einzelnen Bytes.
        self.link.read_line()

        for line in record_blocks(waveform):
            self.link.write_line(line)
        logger.debug("Record: %d Bytes in %d Blöcken", waveform.total_size, len(waveform.data))
