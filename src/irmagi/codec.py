"""Übersetzung zwischen dem Block/Offset-Speicher des IrMagician und `Waveform`.

Der Gerätespeicher ist in Blöcke à 64 Byte aufgeteilt. Beim Auslesen meldet
das Gerät die Gesamtgröße (hex, Register 1); daraus ergibt sich die Anzahl der
Blöcke als ``size // 64 + 1``. Ist die Größe ein Vielfaches von 64, entsteht
dadurch ein leerer letzter Block. Der wird trotzdem mit ``b,<n>`` angewählt,
aber weder gelesen noch beschrieben.

Größen und Register 1 sind Hex-Text, Register 6 und alle Indizes Dezimaltext.
Bytes kommen in ``d``-Antworten als zwei Hex-Zeichen plus ein Füllzeichen und
gehen in ``w``-Befehlen als Dezimalzahl raus.
"""

from __future__ import annotations

import re

from .errors import ProtocolMismatch
from .types import Waveform

DECIMAL = re.compile(r"[0-9]+")
HEX = re.compile(r"[0-9A-Fa-f]+")


def parse_decimal(text: str) -> int:
    value = text.strip()
    if not DECIMAL.fullmatch(value):
        raise ProtocolMismatch(f"Dezimalwert erwartet, bekommen: {text!r}", text)
    return int(value, 10)


def parse_hex(text: str) -> int:
    value = text.strip()
    if not HEX.fullmatch(value):
        raise ProtocolMismatch(f"Hexwert erwartet, bekommen: {text!r}", text)
    return int(value, 16)


def parse_byte(raw: bytes) -> int:
    """Genau zwei Hex-Zeichen aus einer ``d``-Antwort in einen Bytewert wandeln."""

    text = raw.decode("ascii", errors="replace")
    if len(raw) != 2 or not HEX.fullmatch(text):
        raise ProtocolMismatch(f"Zwei Hex-Zeichen erwartet, bekommen: {text!r}", text)
    return int(text, 16)


def command(op: str, *args: int) -> str:
    return ",".join([op, *(f"{a:d}" for a in args)])


def record_header(waveform: Waveform) -> list[str]:
    return [command("n", waveform.total_size), command("k", waveform.scale)]


def record_blocks(waveform: Waveform) -> list[str]:
    """Alle Schreibbefehle, je Block zuerst die Blockauswahl."""

    lines: list[str] = []
    for i, block in enumerate(waveform.data):
        lines.append(command("b", i))
        lines.extend(command("w", j, value) for j, value in enumerate(block))
    return lines
