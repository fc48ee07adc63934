"""Supported jurisdictions.

One national jurisdiction (New Zealand) and the eight Australian states and
territories. The enumeration is closed: any other code is rejected.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from anz_schedule.exceptions import UnknownRegionError


class Region(str, Enum):
    """Region codes accepted by every query."""
    NZ = "NZ"
    VIC = "VIC"
    NSW = "NSW"
    QLD = "QLD"
    WA = "WA"
    SA = "SA"
    TAS = "TAS"
    NT = "NT"
    ACT = "ACT"


VALID_REGIONS: tuple[Region, ...] = tuple(Region)

REGION_NAMES: dict[Region, str] = {
    Region.NZ: "New Zealand",
    Region.VIC: "Victoria",
    Region.NSW: "New South Wales",
    Region.QLD: "Queensland",
    Region.WA: "Western Australia",
    Region.SA: "South Australia",
    Region.TAS: "Tasmania",
    Region.NT: "Northern Territory",
    Region.ACT: "Australian Capital Territory",
}


def parse_region(code: Union[str, Region]) -> Region:
    """Return the Region for an exact region code.

    Codes are case-sensitive ("nsw" is rejected), matching the tool schema.

    Raises:
        UnknownRegionError: If the code is not one of the nine regions.
    """
    if isinstance(code, Region):
        return code
    try:
        return Region(code)
    except ValueError:
        raise UnknownRegionError(
            f"Unknown region {code!r}. "
            f"Valid regions: {', '.join(r.value for r in VALID_REGIONS)}."
        ) from None
