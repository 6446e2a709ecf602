import itertools
import os
import re
import time
from collections.abc import Iterable

_ID_RE = re.compile(r"[0-9a-fA-F]{24}")

_PROCESS_UNIQUE = os.urandom(5)
_counter = itertools.count(int.from_bytes(os.urandom(3), "big") >> 1)


def new_id() -> str:
    """Return a fresh 24-hex-character record identifier.

    Layout is a 4-byte timestamp, 5 random bytes fixed per process and a
    3-byte counter, so identifiers minted by one process sort in creation order.
    Across processes the order is only by second: two processes writing within
    the same second, or a restart inside one second, interleave by their random
    bytes instead.
    """
    ts = int(time.time()).to_bytes(4, "big")
    count = (next(_counter) % 0x1000000).to_bytes(3, "big")
    return (ts + _PROCESS_UNIQUE + count).hex()


def normalize_id(value: str) -> str | None:
    if not isinstance(value, str) or not _ID_RE.fullmatch(value):
        return None
    return value.lower()


def is_valid_id(value: str) -> bool:
    return normalize_id(value) is not None


def valid_ids(values: Iterable[str]) -> list[str]:
    """Drop malformed identifiers, keeping the rest normalized and in order."""
    out = []
    seen = set()
    for value in values:
        normalized = normalize_id(value)
        if normalized is not None and normalized not in seen:
            seen.add(normalized)
            out.append(normalized)
    return out
