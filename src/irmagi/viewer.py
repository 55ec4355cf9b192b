from __future__ import annotations

import matplotlib.pyplot as plt

from .const import MAX_BYTE
from .types import Waveform


def summary(wf: Waveform) -> str:
    values = wf.flat()
    if not values:
        return f"N=0  blocks={len(wf.data)}  scale={wf.scale}"
    return (
        f"N={len(values)}  blocks={len(wf.data)}  scale={wf.scale}  "
        f"min={min(values)}  max={max(values)}  unique={len(set(values))}"
    )


class Viewer:
    VIEW_BOTH = 1
    VIEW_DATA = 2
    VIEW_HIST = 3

    def __init__(self, wf: Waveform, title: str = "") -> None:
        self.wf = wf
        self.values = wf.flat()
        self.title = title
        self.view = self.VIEW_BOTH

        self.fig = plt.figure()
        self.fig.canvas.mpl_connect("key_press_event", self.on_key)

        # Beide Achsen existieren immer, je nach Ansicht versteckt/verschoben
        self.ax_data = self.fig.add_axes([0.08, 0.55, 0.90, 0.37])
        self.ax_hist = self.fig.add_axes([0.08, 0.10, 0.90, 0.37])

        self._draw_data()
        self._draw_hist()

        self.set_view(self.VIEW_BOTH)

    def on_key(self, event) -> None:
        k = (event.key or "").lower()

        if k in ("n", "right"):
            self.set_view(1 + (self.view % 3))
        elif k in ("p", "left"):
            self.set_view(3 if self.view == 1 else (self.view - 1))
        elif k in ("1", "kp1"):
            self.set_view(self.VIEW_BOTH)
        elif k in ("2", "kp2"):
            self.set_view(self.VIEW_DATA)
        elif k in ("3", "kp3"):
            self.set_view(self.VIEW_HIST)
        elif k in ("q", "escape"):
            plt.close(self.fig)

    def set_view(self, v: int) -> None:
        self.view = v

        if v == self.VIEW_BOTH:
            self.ax_data.set_visible(True)
            self.ax_hist.set_visible(True)
            self.ax_data.set_position([0.08, 0.55, 0.90, 0.37])
            self.ax_hist.set_position([0.08, 0.10, 0.90, 0.37])
            label = "Ansicht 1/3: Daten + Histogramm  (1/2/3, n/p, q)"
        elif v == self.VIEW_DATA:
            self.ax_data.set_visible(True)
            self.ax_hist.set_visible(False)
            self.ax_data.set_position([0.08, 0.10, 0.90, 0.82])
            label = "Ansicht 2/3: Daten  (1/2/3, n/p, q)"
        else:
            self.ax_hist.set_visible(True)
            self.ax_data.set_visible(False)
            self.ax_hist.set_position([0.08, 0.10, 0.90, 0.82])
            label = "Ansicht 3/3: Histogramm  (1/2/3, n/p, q)"

        self.fig.suptitle(f"{self.title}: {label}" if self.title else label)
        self.fig.canvas.draw()

    def _draw_data(self) -> None:
        ax = self.ax_data
        ax.clear()
        ax.step(range(len(self.values)), self.values, where="mid")
        edge = 0
        for block in self.wf.data[:-1]:
            edge += len(block)
            ax.axvline(edge - 0.5, color="grey", linestyle=":", linewidth=0.8)
        ax.set_title("Pufferinhalt (gepunktet: Blockgrenzen)")
        ax.set_xlabel("Byte-Index")
        ax.set_ylabel("Wert")
        ax.set_ylim(0, MAX_BYTE + 1)
        ax.text(
            0.98,
            0.95,
            f"scale = {self.wf.scale}\nN = {len(self.values)}",
            transform=ax.transAxes,
            ha="right",
            va="top",
        )

    def _draw_hist(self) -> None:
        ax = self.ax_hist
        ax.clear()
        ax.hist(self.values, bins=range(0, MAX_BYTE + 2, 4))
        ax.set_xlabel("Wert")
        ax.set_ylabel("Anzahl pro Bin")
        ax.set_title("Histogramm der Bytewerte")
