"""
Beam ID Parser
Reads the beam mark and section size out of a B_NO label, e.g.

    "B1 300 x 600"  -> ("B1", 300, 600)
    "B12 230X450"   -> ("B12", 230, 450)
    "RB3 (230x380)" -> ("RB3", 230, 380)
"""

import re
from dataclasses import dataclass

from .units import parse_number

SIZE_PATTERN = re.compile(r'(\d+)[xX](\d+)')


@dataclass(frozen=True)
class BeamId:
    """Parsed beam label."""
    mark: str
    width: float = 0.0  # mm
    depth: float = 0.0  # mm


def parse_beam_id(text: str) -> BeamId:
    """
    Parse a beam ID label.

    A standalone "x" between two tokens gives width and depth directly.
    Otherwise the tokens are glued together and the first "<w>x<d>" run is
    used, since callouts often drop the spaces around the multiplier. The
    mark is left out of the glued text unless that finds nothing.
    Unparseable sizes come back as 0.
    """
    raw_tokens = (text or "").split()
    if not raw_tokens:
        return BeamId(mark="")

    mark = raw_tokens[0]
    tokens = [t.replace("X", "x") for t in raw_tokens]

    if "x" in tokens:
        idx = tokens.index("x")
        if 0 < idx < len(tokens) - 1:
            return BeamId(
                mark=mark,
                width=parse_number(tokens[idx - 1]),
                depth=parse_number(tokens[idx + 1])
            )

    # Skip the mark first so "B1 300x600" does not read as 1300x600
    match = (SIZE_PATTERN.search("".join(tokens[1:])) or
             SIZE_PATTERN.search("".join(tokens)))
    if match:
        return BeamId(
            mark=mark,
            width=parse_number(match.group(1)),
            depth=parse_number(match.group(2))
        )

    return BeamId(mark=mark)
