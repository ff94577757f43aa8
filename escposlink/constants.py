"""Protocol constants and engine defaults.

The byte values mirror the ESC/POS status command catalog so that the
transport engine can inject its own status polls without depending on
the full command encoder.
"""

# Control characters
GS: int = 0x1D

# GS r n: transmit status
REQUEST_STATUS: int = 0x72
# GS a n: enable/disable automatic status back (ASB)
AUTOMATIC_STATUS_BACK: int = 0x61
# GS j n: enable/disable automatic ink status back
AUTOMATIC_INK_STATUS_BACK: int = 0x6A

# Subtypes for REQUEST_STATUS
PAPER_STATUS: int = 0x31
DRAWER_STATUS: int = 0x32
INK_STATUS: int = 0x34
SERIAL_NUMBER: int = 0x35

ASB_ENABLE: int = 0xFF
ASB_DISABLE: int = 0x00

POLL_COMMAND: bytes = bytes((GS, REQUEST_STATUS, PAPER_STATUS))

STATUS_FRAME_SIZE: int = 4
EMPTY_STATUS_BYTES: bytes = bytes(STATUS_FRAME_SIZE)

# Engine defaults (milliseconds / bytes)
TICK_MS: int = 100
POLL_INTERVAL_MS: int = 500 - TICK_MS + 1
INACTIVITY_TIMEOUT_MS: int = 2000
MAX_BYTES_PER_WRITE: int = 15000
FLUSH_THRESHOLD: int = 200
READ_BUFFER_SIZE: int = 4096
SHUTDOWN_POLL_MS: int = 100
