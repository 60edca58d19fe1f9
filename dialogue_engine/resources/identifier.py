"""
Stable identifiers for articy objects.

articy ids are strings such as "0x0100000000000A2F". They are reduced
to a 64-bit integer with an unkeyed blake2b digest so the value is the
same in every process (the builtin str hash is salted per run).
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field

# Speaker reference used by articy for fragments without a speaker
NOBODY = "0x0000000000000000"


def hash_id(source: str) -> int:
    """Hash an articy id string to an unsigned 64-bit integer."""
    digest = hashlib.blake2b(source.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")


@dataclass(frozen=True)
class ArticyId:
    """
    Opaque node identifier.

    Equality and hashing use only the 64-bit value; the source string is
    kept for diagnostics.
    """
    value: int
    source: str = field(default="", compare=False)

    @classmethod
    def from_string(cls, source: str) -> ArticyId:
        return cls(hash_id(source), source)

    def __str__(self) -> str:
        return self.source or f"#{self.value:016x}"
