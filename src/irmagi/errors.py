from __future__ import annotations


class IrMagiError(Exception):
    """Basisklasse aller Fehler beim Umgang mit dem IrMagician."""


class LinkError(IrMagiError):
    """Serielle Ein-/Ausgabe auf einer offenen Verbindung ist fehlgeschlagen."""


class LinkTimeout(LinkError):
    """Innerhalb des Read-Timeouts kam keine vollständige Antwort."""

    def __init__(self, message: str, partial: str = "") -> None:
        super().__init__(message)
        self.partial = partial


class LinkUnavailable(LinkError):
    """Das Gerät lässt sich gar nicht öffnen (z.B. abgesteckt).

    Ein erneuter Verbindungsversuch hilft hier nicht, deshalb wird dieser
    Fehler nie wiederholt.
    """


class ProtocolMismatch(IrMagiError):
    """Die Antwort passt nicht zum gesendeten Befehl."""

    def __init__(self, message: str, response: str) -> None:
        super().__init__(message)
        self.response = response


class ProfileNotFound(IrMagiError):
    pass
