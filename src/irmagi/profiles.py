from __future__ import annotations

import json
import os
from pathlib import Path

from .const import DEFAULT_PROFILES_DIR, ENV_HOME
from .errors import ProfileNotFound
from .types import Waveform


def default_profiles_dir() -> Path:
    env = os.environ.get(ENV_HOME)
    return Path(env).expanduser() if env else DEFAULT_PROFILES_DIR


class Profiles:
    """Gespeicherte Signale, eine JSON-Datei pro Name."""

    def __init__(self, directory: Path | None = None) -> None:
        self.directory = directory if directory is not None else default_profiles_dir()

    def path_for(self, name: str) -> Path:
        if not name or "/" in name or "\\" in name or name.startswith("."):
            raise ValueError(f"Ungültiger Profilname: {name!r}")
        return self.directory / f"{name}.json"

    def names(self) -> list[str]:
        if not self.directory.is_dir():
            return []
        return sorted(p.stem for p in self.directory.iterdir() if p.is_file())

    def read(self, name: str) -> Waveform:
        path = self.path_for(name)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ProfileNotFound(f"Profil nicht gefunden: {name} ({path})") from None
        return Waveform.from_dict(json.loads(text))

    def write(self, name: str, wf: Waveform) -> Path:
        path = self.path_for(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(wf.to_dict(), indent=2) + "\n", encoding="utf-8")
        return path
