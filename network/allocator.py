# network/allocator.py
from __future__ import annotations


def allocate_static_address(current: str, offset: int = 10) -> str:
    """
    Return `current` with `offset` added to its last octet.

    No wrap-around or range check: a last octet of 246 or more produces a
    component above 255. Callers that care run validators.validate_ip on
    the result.
    """
    parts = current.split(".")
    base = ".".join(parts[:3])
    return f"{base}.{int(parts[3]) + offset}"
