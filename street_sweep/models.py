from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

LEFT = "left"
RIGHT = "right"

Point = Tuple[float, float]


@dataclass(frozen=True)
class Address:
    number: int
    lon: float
    lat: float
    street_name: str = ""
    street_type: str = ""
    cnn: Optional[str] = None
    label: str = ""

    @property
    def coords(self) -> List[float]:
        return [self.lon, self.lat]


@dataclass(frozen=True)
class BlockFaceRecord:
    cnn: Optional[str] = None
    corridor: Optional[str] = None
    limits: Optional[str] = None
    side: Optional[str] = None
    weekday: Optional[str] = None
    from_hour: Optional[str] = None
    to_hour: Optional[str] = None
    weeks: Tuple[bool, bool, bool, bool, bool] = (False, False, False, False, False)
    line: Optional[Tuple[Point, ...]] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "BlockFaceRecord":
        """把数据集原始行（cnnrightleft、week1..week5、line.coordinates）转换为记录。"""
        line = None
        geom = row.get("line")
        if isinstance(geom, dict) and geom.get("coordinates"):
            line = tuple((float(p[0]), float(p[1])) for p in geom["coordinates"])
        weeks = tuple(str(row.get(f"week{i}", "")).strip() == "1" for i in range(1, 6))
        return cls(
            cnn=_opt_str(row.get("cnn")),
            corridor=_opt_str(row.get("corridor")),
            limits=_opt_str(row.get("limits")),
            side=_opt_str(row.get("cnnrightleft")),
            weekday=_opt_str(row.get("weekday")),
            from_hour=_opt_str(row.get("fromhour")),
            to_hour=_opt_str(row.get("tohour")),
            weeks=weeks,
            line=line,
            extra=dict(row),
        )


@dataclass
class ParsedLimits:
    start_str: str = ""
    end_str: str = ""
    start: Optional[int] = None
    end: Optional[int] = None
    valid: bool = False

    @property
    def numeric(self) -> bool:
        return (
            self.start is not None
            and self.end is not None
            and self.start > 0
            and self.end > 0
        )


@dataclass
class EnrichedRecord:
    record: BlockFaceRecord
    limits: ParsedLimits
    side: Optional[str]
    in_range: bool
    side_matches: bool
    side_compatible: bool
    block_distance: float = math.inf
    has_geometry: bool = False
    cross_street_in_range: bool = False


@dataclass
class MatchResult:
    address: Address
    schedules: List[Dict[str, Any]]
    tier: Optional[str] = None

    @property
    def addr_coords(self) -> List[float]:
        return self.address.coords

    def to_response(self) -> Dict[str, Any]:
        return {
            "address": self.address.label,
            "schedules": self.schedules,
            "addrCoords": self.addr_coords,
        }


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None
