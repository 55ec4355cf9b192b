from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import time
from pathlib import Path
from typing import Callable

from .const import ENV_PORT, PLAY_GAP_S, READ_TIMEOUT_S
from .errors import IrMagiError
from .io import write_csv
from .link import available_ports
from .profiles import Profiles
from .session import Session

DEVICE_COMMANDS = {"dump", "capture", "record", "play", "reset"}


def _print_ports() -> None:
    ports = available_ports()
    if not ports:
        print("Keine seriellen Ports gefunden.")
        return
    for p in ports:
        print(p)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="irmagi",
        description=(
            "Steuert einen IrMagician über die serielle Schnittstelle: "
            "IR-Signale aufnehmen, als Profil speichern und wieder senden."
        ),
    )

    p.add_argument(
        "--list-ports",
        action="store_true",
        help="Verfügbare seriellen Ports auflisten und beenden.",
    )
    p.add_argument(
        "--port",
        default=os.environ.get(ENV_PORT),
        help=f"Gerätepfad, z.B. /dev/ttyACM0 (Default: ${ENV_PORT}).",
    )
    p.add_argument("--timeout", type=float, default=READ_TIMEOUT_S, help="Read-Timeout in Sekunden.")
    p.add_argument(
        "--profiles-dir",
        type=Path,
        help="Verzeichnis der Profile (Default: $IRMAGI_HOME oder ~/.irmagi).",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Mehr Ausgaben (Debug).")

    sub = p.add_subparsers(dest="command", metavar="COMMAND")

    sub.add_parser("list", help="Gespeicherte Profile auflisten.")
    sp = sub.add_parser("dump", help="Pufferinhalt auslesen (als JSON oder in ein Profil).")
    sp.add_argument("name", nargs="?")
    sp = sub.add_parser("capture", help="Signal aufnehmen, optional direkt als Profil speichern.")
    sp.add_argument("name", nargs="?")
    sp = sub.add_parser("record", help="Profil in den Gerätepuffer schreiben.")
    sp.add_argument("name")
    sp = sub.add_parser(
        "play",
        help="Puffer senden, optional vorher ein Profil schreiben (mehrere: a,b,c).",
    )
    sp.add_argument("name", nargs="?")
    sub.add_parser("reset", help="Gerät zurücksetzen.")

    sp = sub.add_parser("show", help="Profil als Plot anzeigen.")
    sp.add_argument("name")
    sp.add_argument("--png", metavar="DATEI", help="Optional: Plot als PNG speichern.")
    sp.add_argument(
        "--no-show",
        action="store_true",
        help="Kein Plot-Fenster öffnen (praktisch für automatisierte Runs).",
    )
    sp = sub.add_parser("export", help="Profil als CSV speichern (index,block,offset,value).")
    sp.add_argument("name")
    sp.add_argument("csv", metavar="DATEI", help="Ziel-Datei, darf nicht existieren.")

    return p.parse_args(argv)


class App:
    """Führt die Unterbefehle gegen Profile und (bei Bedarf) das Gerät aus."""

    def __init__(
        self,
        profiles: Profiles,
        session: Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.profiles = profiles
        self.session = session
        self._sleep = sleep

    @property
    def device(self) -> Session:
        if self.session is None:
            raise RuntimeError("Kein Gerät konfiguriert")
        return self.session

    def list(self) -> None:
        for name in self.profiles.names():
            print(name)

    def dump(self, name: str | None) -> None:
        wf = self.device.dump()
        if name:
            path = self.profiles.write(name, wf)
            print(f"Dumped: {path}")
        else:
            print(json.dumps(wf.to_dict(), indent=2))

    def capture(self, name: str | None) -> int:
        self.reset()
        print("Please IR me")
        result = self.device.capture()
        if not result.ok:
            print(f"Fail: {result.message}", file=sys.stderr)
            return 1
        print(f"OK: {result.size} bytes")
        if name:
            self.dump(name)
        return 0

    def record(self, name: str) -> None:
        self.reset()
        wf = self.profiles.read(name)
        self.device.record(wf)

    def play(self, name: str | None) -> None:
        names = [n for n in (name or "").split(",") if n]
        if not names:
            self.device.play()
            return

        for i, n in enumerate(names):
            if i:
                self._sleep(PLAY_GAP_S)
            self.record(n)
            self.device.play()

    def reset(self) -> None:
        self.device.reset()

    def show(self, name: str, png: str | None, no_show: bool) -> None:
        from .viewer import Viewer, summary

        wf = self.profiles.read(name)
        print(summary(wf))
        viewer = Viewer(wf, title=name)

        import matplotlib.pyplot as plt

        if png:
            Path(png).parent.mkdir(parents=True, exist_ok=True)
            viewer.fig.savefig(png, dpi=150)
            print(f"Wrote PNG: {png}")

        if no_show:
            plt.close(viewer.fig)
            return

        plt.show()

    def export(self, name: str, csv_path: str) -> None:
        wf = self.profiles.read(name)
        write_csv(Path(csv_path), wf)
        print(f"Wrote CSV: {csv_path} (N={wf.total_size})")

    def run(self, args: argparse.Namespace) -> int:
        cmd = args.command
        if cmd == "list":
            self.list()
        elif cmd == "dump":
            self.dump(args.name)
        elif cmd == "capture":
            return self.capture(args.name)
        elif cmd == "record":
            self.record(args.name)
        elif cmd == "play":
            self.play(args.name)
        elif cmd == "reset":
            self.reset()
        elif cmd == "show":
            self.show(args.name, args.png, args.no_show)
        elif cmd == "export":
            self.export(args.name, args.csv)
        return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_ports:
        _print_ports()
        return

    if not args.command:
        print("ERROR: kein Befehl angegeben. Tipp: irmagi --help", file=sys.stderr)
        sys.exit(2)

    session: Session | None = None
    if args.command in DEVICE_COMMANDS:
        if not args.port:
            print(f"ERROR: --port ist erforderlich für {args.command!r}.", file=sys.stderr)
            ports = available_ports()
            if ports:
                print("Verfügbare Ports:", file=sys.stderr)
                for p in ports:
                    print(f"  {p}", file=sys.stderr)
            print("Tipp: irmagi --list-ports", file=sys.stderr)
            sys.exit(2)
        session = Session(args.port, timeout=args.timeout)

    app = App(Profiles(args.profiles_dir), session)
    try:
        code = app.run(args)
    except (IrMagiError, ValueError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(2)
    finally:
        if session is not None:
            session.close()

    if code:
        sys.exit(code)
