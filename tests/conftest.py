"""Fakes für serielle Schnittstelle und IrMagician."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest

from irmagi.link import DeviceLink


class FakeDevice:
    """Minimaler IrMagician-Emulator: beantwortet Befehle wie das echte Gerät."""

    def __init__(self, scale: int = 10, memory: list[list[int]] | None = None) -> None:
        self.scale = scale
        self.blocks: dict[int, dict[int, int]] = {}
        self.size = 0
        self.current = 0
        self.capture_reply = "... 0"
        self.reset_reply = "OK"
        self.commands: list[str] = []
        for b, block in enumerate(memory or []):
            self.blocks[b] = dict(enumerate(block))
            self.size += len(block)

    def handle(self, line: str) -> bytes:
        self.commands.append(line)
        op, *args = line.split(",")
        nums = [int(a) for a in args]

        if op == "c":
            return f"{self.capture_reply}\r\n".encode()
        if op == "i":
            value = self.scale if nums[0] == 6 else self.size
            return (f"{value}\r\n" if nums[0] == 6 else f"{value:X}\r\n").encode()
        if op == "b":
            self.current = nums[0]
            return b""
        if op == "d":
            value = self.blocks.get(self.current, {}).get(nums[0], 0)
            return f"{value:02X} ".encode()
        if op == "w":
            self.blocks.setdefault(self.current, {})[nums[0]] = nums[1]
            return b""
        if op == "n":
            self.size = nums[0]
            return b""
        if op == "k":
            self.scale = nums[0]
            return b"OK\r\n"
        if op == "p":
            return b"OK\r\n"
        if op == "r":
            return f"{self.reset_reply}\r\n".encode()
        return b"?\r\n"


class FakeSerial:
    """Ersatz für ``serial.Serial``; leitet geschriebene Zeilen an ein `FakeDevice`."""

    def __init__(self, incoming: bytes = b"", device: FakeDevice | None = None) -> None:
        self.timeout: float | None = 5.0
        self.rx = bytearray(incoming)
        self.written = bytearray()
        self.device = device
        self.closed = False
        self.readline_timeouts: list[float | None] = []
        self._pending = b""

    @property
    def lines(self) -> list[str]:
        return [line for line in self.written.decode("ascii").split("\n") if line]

    def write(self, data: bytes) -> int:
        self.written += data
        self._pending += data
        while b"\n" in self._pending:
            line, self._pending = self._pending.split(b"\n", 1)
            if self.device is not None:
                self.rx += self.device.handle(line.decode("ascii"))
        return len(data)

    def flush(self) -> None:
        pass

    def readline(self) -> bytes:
        self.readline_timeouts.append(self.timeout)
        idx = self.rx.find(b"\n")
        end = len(self.rx) if idx == -1 else idx + 1
        data = bytes(self.rx[:end])
        del self.rx[:end]
        return data

    def read(self, n: int = 1) -> bytes:
        data = bytes(self.rx[:n])
        del self.rx[:n]
        return data

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def device() -> FakeDevice:
    return FakeDevice()


@pytest.fixture
def port(device: FakeDevice) -> FakeSerial:
    return FakeSerial(device=device)


@pytest.fixture
def link(port: FakeSerial) -> DeviceLink:
    return DeviceLink(port, "/dev/fake")
