from __future__ import annotations

import csv
from pathlib import Path

from .types import Waveform


def write_csv(path: Path, wf: Waveform) -> None:
    """Schreibt index, block, offset, value als CSV. Datei darf nicht existieren."""

    if path.exists():
        raise FileExistsError(f"CSV-Datei existiert bereits: {path}")

    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["index", "block", "offset", "value"])
        i = 0
        for b, block in enumerate(wf.data):
            for offset, value in enumerate(block):
                w.writerow([i, b, offset, value])
                i += 1
