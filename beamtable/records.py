"""
Beam Records and Table Schema
A BeamRecord is one finished row of the beam table. The table layout is a
fixed, ordered list of named columns; each column knows how to pull and format
its value from a record.
"""

from dataclasses import dataclass, asdict
from typing import List, Dict, Callable, Optional, Any

from .spans import Span
from .units import mm_to_m
from .zones import ZoneAssignment, Face, Zone


@dataclass(frozen=True)
class BeamRecord:
    """One beam's tabulated data. Sizes in mm, distances already in meters."""
    mark: str = ""
    width: float = 0.0
    depth: float = 0.0
    level: str = ""
    span: Optional[Span] = None

    left_bottom: str = ""
    mid_bottom: str = ""
    right_bottom: str = ""
    left_top: str = ""
    mid_top: str = ""
    right_top: str = ""

    left_stirrup_dia: str = ""
    left_stirrup_space: str = ""
    mid_stirrup_dia: str = ""
    mid_stirrup_space: str = ""
    right_stirrup_dia: str = ""
    right_stirrup_space: str = ""

    left_at_dist: str = ""
    right_at_dist: str = ""

    shear_legs: str = "2"

    @classmethod
    def build(
        cls,
        mark: str,
        width: float,
        depth: float,
        level: str,
        span: Optional[Span],
        assignment: Optional[ZoneAssignment] = None,
        left_top: Optional[str] = None,
        right_top: Optional[str] = None,
        shear_legs: str = "2"
    ) -> "BeamRecord":
        """
        Freeze a record from a finished zone assignment.

        left_top/right_top override the assignment's top end fields once
        boundary-shared bars have been merged in.
        """
        a = assignment or ZoneAssignment()
        stirrups = {zone: a.stirrups.get(zone, ("", "")) for zone in Zone}

        return cls(
            mark=mark,
            width=width,
            depth=depth,
            level=level,
            span=span,
            left_bottom=a.bar_text(Face.BOTTOM, Zone.LEFT),
            mid_bottom=a.bar_text(Face.BOTTOM, Zone.MID),
            right_bottom=a.bar_text(Face.BOTTOM, Zone.RIGHT),
            left_top=left_top if left_top is not None else a.bar_text(Face.TOP, Zone.LEFT),
            mid_top=a.bar_text(Face.TOP, Zone.MID),
            right_top=right_top if right_top is not None else a.bar_text(Face.TOP, Zone.RIGHT),
            left_stirrup_dia=stirrups[Zone.LEFT][0],
            left_stirrup_space=stirrups[Zone.LEFT][1],
            mid_stirrup_dia=stirrups[Zone.MID][0],
            mid_stirrup_space=stirrups[Zone.MID][1],
            right_stirrup_dia=stirrups[Zone.RIGHT][0],
            right_stirrup_space=stirrups[Zone.RIGHT][1],
            left_at_dist=a.dimensions.get(Zone.LEFT, ""),
            right_at_dist=a.dimensions.get(Zone.RIGHT, ""),
            shear_legs=shear_legs
        )

    def to_row(self, columns: List["Column"] = None) -> Dict[str, str]:
        """Ordered column name -> cell text."""
        return {col.name: col.value(self) for col in (columns or BEAM_TABLE_COLUMNS)}

    def to_dict(self) -> Dict[str, Any]:
        """Raw values for JSON export."""
        data = asdict(self)
        data['span'] = None if self.span is None else {
            'min_x': self.span.min_x,
            'max_x': self.span.max_x,
            'center_y': self.span.center_y,
            'source': self.span.source
        }
        return data


@dataclass(frozen=True)
class Column:
    """One table column."""
    name: str
    header: str
    group: str
    unit: str = ""
    formatter: Callable[[BeamRecord], str] = lambda r: ""
    width: float = 25

    def value(self, record: BeamRecord) -> str:
        return self.formatter(record)


def _attr(name: str) -> Callable[[BeamRecord], str]:
    return lambda r: getattr(r, name)


def _blank(r: BeamRecord) -> str:
    return ""


# Table groups, in order
GROUP_DETAILS = "Beam Details"
GROUP_BOTTOM = "Bottom"
GROUP_TOP = "Top"
GROUP_STIRRUPS = "Stirrups"

BEAM_TABLE_COLUMNS: List[Column] = [
    Column("BeamId", "BeamId", GROUP_DETAILS, "", _attr("mark"), 18),
    Column("Width", "Width", GROUP_DETAILS, "m", lambda r: mm_to_m(r.width, 2), 15),
    Column("Depth", "Depth", GROUP_DETAILS, "m", lambda r: mm_to_m(r.depth, 2), 15),
    Column("Level", "Level", GROUP_DETAILS, "", _attr("level"), 18),

    Column("Left_bottom", "Left_bottom", GROUP_BOTTOM, "", _attr("left_bottom")),
    Column("BottomLeftAtDist", "Bottom left at(dist)", GROUP_BOTTOM, "m", _blank),
    Column("Mid_bottom", "Mid_bottom", GROUP_BOTTOM, "", _attr("mid_bottom")),
    Column("CurtailAtDist", "Curtail at(dist)", GROUP_BOTTOM, "m", _blank),
    Column("Right_bottom", "Right_Bottom", GROUP_BOTTOM, "", _attr("right_bottom")),
    Column("BottomRightAtDist", "Bottom right at(dist)", GROUP_BOTTOM, "m", _blank),
    Column("BentUp", "bent up", GROUP_BOTTOM, "", _blank, 20),

    Column("Left_top", "Left_top", GROUP_TOP, "", _attr("left_top")),
    Column("LeftAtDist", "Left at(dist)", GROUP_TOP, "m", _attr("left_at_dist")),
    Column("Mid_top", "Mid_top", GROUP_TOP, "", _attr("mid_top")),
    Column("Right_top", "Right_top", GROUP_TOP, "", _attr("right_top")),
    Column("RightAtDist", "Right at(dist)", GROUP_TOP, "m", _attr("right_at_dist")),

    Column("SFR", "SFR", GROUP_STIRRUPS, "", _blank, 15),
    Column("ShearLegs", "Shear Stirrups Leg", GROUP_STIRRUPS, "", _attr("shear_legs"), 20),
    Column("LeftStirrupDia", "Shear Stirrups dia(L)", GROUP_STIRRUPS, "mm", _attr("left_stirrup_dia")),
    Column("LeftStirrupSpace", "Left Space Stirrups", GROUP_STIRRUPS, "mm", _attr("left_stirrup_space")),
    Column("MidStirrupDia", "Shear Stirrups dia(M)", GROUP_STIRRUPS, "mm", _attr("mid_stirrup_dia")),
    Column("MidStirrupSpace", "Mid Space Stirrups", GROUP_STIRRUPS, "mm", _attr("mid_stirrup_space")),
    Column("RightStirrupDia", "Shear Stirrups dia(R)", GROUP_STIRRUPS, "mm", _attr("right_stirrup_dia")),
    Column("RightStirrupSpace", "Right Space Stirrups", GROUP_STIRRUPS, "mm", _attr("right_stirrup_space")),
]


def column_groups(columns: List[Column] = None) -> List[Dict[str, Any]]:
    """Consecutive runs of columns sharing a group: [{'group', 'start', 'end'}] (0-based, inclusive)."""
    columns = columns or BEAM_TABLE_COLUMNS
    groups = []
    for idx, col in enumerate(columns):
        if groups and groups[-1]['group'] == col.group:
            groups[-1]['end'] = idx
        else:
            groups.append({'group': col.group, 'start': idx, 'end': idx})
    return groups
