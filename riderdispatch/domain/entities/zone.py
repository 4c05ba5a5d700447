"""Zone entity — a named delivery locality riders are affiliated with."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Zone:
    id: str
    name: str
    is_active: bool = True
