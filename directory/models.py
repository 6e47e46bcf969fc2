"""
Purpose: Domain models for the health unit directory.
What it does:
- Defines the HealthUnit record as it comes back from the upstream directory.
- Defines ResultSet, the municipality -> units mapping of one query.

Rule: No HTTP calls here. Models and wire parsing only.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

# municipality name -> units in upstream order
ResultSet = Dict[str, Tuple["HealthUnit", ...]]


@dataclass(frozen=True)
class HealthUnit:
    """
    A single facility returned by the directory.
    Identity is the opaque upstream `id` (also used as the maps place id).
    """
    id: str
    display_name: Optional[str] = None
    formatted_address: Optional[str] = None
    phone_number: Optional[str] = None

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]) -> HealthUnit:
        # upstream sends displayName as {"text": ...}
        display_name = payload.get("displayName")
        if isinstance(display_name, Mapping):
            display_name = display_name.get("text")

        return cls(
            id=str(payload["id"]),
            display_name=display_name or None,
            formatted_address=payload.get("formattedAddress") or None,
            phone_number=payload.get("nationalPhoneNumber") or payload.get("phoneNumber") or None,
        )


def parse_result_set(payload: Mapping[str, Any]) -> ResultSet:
    """
    Build a fresh ResultSet from the upstream JSON body.
    Non-list values are treated as empty municipalities.
    """
    result: ResultSet = {}
    for municipality, units in payload.items():
        if not isinstance(units, list):
            result[municipality] = ()
            continue
        result[municipality] = tuple(HealthUnit.from_wire(unit) for unit in units)
    return result


def count_units(result_set: Mapping[str, Any]) -> int:
    """Sum of per-municipality lengths (works on raw JSON and on a ResultSet)."""
    return sum(
        len(units) for units in result_set.values() if isinstance(units, (list, tuple))
    )
