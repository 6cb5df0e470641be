"""Object Identifiers — 24-character hex ids shaped like document-store ObjectIds.

Layout (12 bytes): 4-byte big-endian Unix seconds, 5 random bytes fixed per
process, 3-byte big-endian counter starting at a random value.
"""

import itertools
import os
import threading
import time

_PROCESS_UNIQUE = os.urandom(5)
_counter = itertools.count(int.from_bytes(os.urandom(3), "big"))
_lock = threading.Lock()


def new_object_id(timestamp: float | None = None) -> str:
    """Return a new lowercase 24-character hexadecimal identifier."""
    seconds = int(time.time() if timestamp is None else timestamp)
    with _lock:
        count = next(_counter) % 0x1000000
    raw = (
        (seconds & 0xFFFFFFFF).to_bytes(4, "big")
        + _PROCESS_UNIQUE
        + count.to_bytes(3, "big")
    )
    return raw.hex()
