from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .const import BLOCK_SIZE, MAX_BYTE


def block_count(size: int) -> int:
    return size // BLOCK_SIZE + 1


def block_sizes(size: int) -> list[int]:
    """Länge jedes Blocks für eine Gesamtgröße: volle Blöcke, dann der Rest (evtl. 0)."""

    if size < 0:
        raise ValueError(f"Negative Puffergröße: {size}")

    blocks = block_count(size)
    return [size % BLOCK_SIZE if b == blocks - 1 else BLOCK_SIZE for b in range(blocks)]


@dataclass(frozen=True, slots=True)
class Waveform:
    """Ein aufgezeichnetes IR-Signal: Skalierung plus Datenblöcke à 64 Byte.

    Die Blockaufteilung muss der des Geräts entsprechen, sonst landen die
    Bytes beim Schreiben an falschen Offsets: alle Blöcke voll, der letzte
    mit ``total_size % 64`` Bytes (bei einem Vielfachen von 64 also leer).
    """

    scale: int
    data: tuple[tuple[int, ...], ...]

    def __post_init__(self) -> None:
        blocks = tuple(tuple(block) for block in self.data)
        object.__setattr__(self, "data", blocks)

        if isinstance(self.scale, bool) or not isinstance(self.scale, int) or self.scale < 0:
            raise ValueError(f"Ungültige Skalierung: {self.scale!r}")

        for i, block in enumerate(blocks):
            if len(block) > BLOCK_SIZE:
                raise ValueError(
                    f"Block {i} hat {len(block)} Bytes (maximal {BLOCK_SIZE})"
                )
            for value in block:
                if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_BYTE:
                    raise ValueError(f"Ungültiger Bytewert in Block {i}: {value!r}")

        sizes = [len(block) for block in blocks]
        expected = block_sizes(sum(sizes))
        if sizes != expected:
            raise ValueError(
                f"Ungültige Blockaufteilung {sizes}, erwartet {expected}"
            )

    @property
    def total_size(self) -> int:
        return sum(len(block) for block in self.data)

    def flat(self) -> list[int]:
        return [value for block in self.data for value in block]

    def to_dict(self) -> dict[str, Any]:
        return {"scale": self.scale, "data": [list(block) for block in self.data]}

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> Waveform:
        try:
            return cls(scale=obj["scale"], data=obj["data"])
        except (KeyError, TypeError) as e:
            raise ValueError(f"Kein gültiges Waveform-Objekt: {e}") from e
