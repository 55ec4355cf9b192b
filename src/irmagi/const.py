from __future__ import annotations

from pathlib import Path

# Serielle Schnittstelle: 9600-8-N-1
BAUDRATE = 9600
READ_TIMEOUT_S = 5.0

# Speicheraufteilung im IrMagician
BLOCK_SIZE = 64
MAX_BYTE = 0xFF

# Register für den "i"-Befehl
REG_SIZE = 1
REG_SCALE = 6

RETRY_COOLDOWN_S = 1.0

# Pause zwischen mehreren Profilen bei "play a,b,c"
PLAY_GAP_S = 2.0

ENV_PORT = "IRMAGI_PORT"
ENV_HOME = "IRMAGI_HOME"
DEFAULT_PROFILES_DIR = Path.home() / ".irmagi"
